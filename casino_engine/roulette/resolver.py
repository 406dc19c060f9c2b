"""Settles a bet ledger against the pocket the ball landed in."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

from .layout import BetCategory, covered_pockets
from .ledger import BetLedger
from .wheel import Pocket, WheelConfig


@dataclass(frozen=True)
class BetResult:
    category: BetCategory
    key: Optional[str]
    amount: float
    won: bool
    payout: float  # stake plus winnings; zero on a loss

    @property
    def net(self) -> float:
        return self.payout - self.amount


@dataclass(frozen=True)
class Resolution:
    pocket: Pocket
    total_wagered: float
    total_winnings: float
    net_result: float
    results: List[BetResult] = field(default_factory=list)

    @property
    def winning_bets(self) -> List[BetResult]:
        return [r for r in self.results if r.won]


def resolve(pocket: Pocket | int | str, ledger: BetLedger, wheel: WheelConfig) -> Resolution:
    """Settle every bet in ``ledger`` against the winning pocket.

    A winning bet returns ``amount * (ratio + 1)``, stake included, so the net
    result subtracts the full amount wagered.
    """
    pocket = Pocket.parse(pocket)
    if pocket not in wheel:
        raise ValueError(f"Pocket {pocket} is not on the {wheel.name} wheel")
    results = []
    for category, key, amount in ledger.items():
        won = pocket in covered_pockets(category, key, wheel)
        payout = amount * (category.payout + 1) if won else 0
        results.append(BetResult(category, key, amount, won, payout))
    total_wagered = ledger.total_wagered()
    total_winnings = sum(r.payout for r in results)
    return Resolution(
        pocket=pocket,
        total_wagered=total_wagered,
        total_winnings=total_winnings,
        net_result=total_winnings - total_wagered,
        results=results,
    )


__all__ = ["BetResult", "Resolution", "resolve"]
