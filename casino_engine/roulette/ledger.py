"""Placed-bet bookkeeping for one roulette round.

The ledger is a sparse store: whole-category bets (colour, parity, range,
first four, top line) hold one ``ScalarBet`` amount and every other category
holds a ``KeyedBet`` mapping of bet key to amount. Removing a keyed bet down
to zero deletes the key. The ledger has no notion of bankroll or layout
validity; ``RouletteSession`` checks both before calling in.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Tuple, Union

from .layout import BetCategory
from .wheel import Pocket


@dataclass
class ScalarBet:
    amount: float = 0

    @property
    def total(self) -> float:
        return self.amount


@dataclass
class KeyedBet:
    amounts: Dict[str, float] = field(default_factory=dict)

    @property
    def total(self) -> float:
        return sum(self.amounts.values())


Bet = Union[ScalarBet, KeyedBet]


def _empty_bet(category: BetCategory) -> Bet:
    return ScalarBet() if category.is_scalar else KeyedBet()


class BetLedger:
    def __init__(self) -> None:
        self._bets: Dict[BetCategory, Bet] = {c: _empty_bet(c) for c in BetCategory}

    def bet(self, category: BetCategory | str) -> Bet:
        return self._bets[BetCategory(category)]

    def place_bet(self, category: BetCategory | str, key, amount: float) -> bool:
        """Add ``amount`` to a bet. Returns ``False`` for a non-positive amount."""
        if amount <= 0:
            return False
        bet = self.bet(category)
        if isinstance(bet, ScalarBet):
            bet.amount += amount
        else:
            key = str(key)
            bet.amounts[key] = bet.amounts.get(key, 0) + amount
        return True

    def remove_bet(self, category: BetCategory | str, key, amount: float) -> bool:
        """Take up to ``amount`` off a bet, flooring at zero."""
        if amount <= 0:
            return False
        bet = self.bet(category)
        if isinstance(bet, ScalarBet):
            if not bet.amount:
                return False
            bet.amount = max(0, bet.amount - amount)
            return True
        key = str(key)
        if not bet.amounts.get(key):
            return False
        remaining = max(0, bet.amounts[key] - amount)
        if remaining == 0:
            del bet.amounts[key]
        else:
            bet.amounts[key] = remaining
        return True

    def clear_bet(self, category: BetCategory | str, key=None) -> None:
        bet = self.bet(category)
        if isinstance(bet, ScalarBet):
            bet.amount = 0
        elif key is not None:
            bet.amounts.pop(str(key), None)

    def clear_all(self) -> None:
        self._bets = {c: _empty_bet(c) for c in BetCategory}

    def amount(self, category: BetCategory | str, key=None) -> float:
        bet = self.bet(category)
        if isinstance(bet, ScalarBet):
            return bet.amount
        return bet.amounts.get(str(key), 0)

    def total_wagered(self) -> float:
        return sum(bet.total for bet in self._bets.values())

    def has_bets(self) -> bool:
        return self.total_wagered() > 0

    def items(self) -> Iterator[Tuple[BetCategory, Optional[str], float]]:
        """Every live bet as ``(category, key, amount)``; scalar bets have key ``None``."""
        for category, bet in self._bets.items():
            if isinstance(bet, ScalarBet):
                if bet.amount > 0:
                    yield category, None, bet.amount
            else:
                for key, amount in bet.amounts.items():
                    yield category, key, amount

    def bet_counts(self) -> Dict[str, int]:
        counts = {}
        for category, bet in self._bets.items():
            if isinstance(bet, ScalarBet):
                counts[category.value] = 1 if bet.amount > 0 else 0
            else:
                counts[category.value] = len(bet.amounts)
        return counts

    def straight_numbers(self) -> List[Pocket]:
        bet = self._bets[BetCategory.STRAIGHT]
        return [Pocket.parse(key) for key in bet.amounts]

    def validate(self, min_bet: float, max_bet: float) -> List[str]:
        """All table-limit violations; an empty list means every bet is in range."""
        errors = []
        for category, key, amount in self.items():
            label = category.value if key is None else f"{category.value} on {key}"
            if amount < min_bet:
                errors.append(f"{label}: below minimum bet")
            if amount > max_bet:
                errors.append(f"{label}: exceeds maximum bet")
        return errors

    def copy(self) -> "BetLedger":
        return BetLedger.from_dict(self.to_dict())

    def to_dict(self) -> Dict[str, object]:
        data: Dict[str, object] = {}
        for category, bet in self._bets.items():
            if isinstance(bet, ScalarBet):
                data[category.value] = bet.amount
            else:
                data[category.value] = dict(bet.amounts)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, object]) -> "BetLedger":
        ledger = cls()
        for name, value in data.items():
            category = BetCategory(name)
            if category.is_scalar:
                ledger._bets[category] = ScalarBet(value or 0)
            else:
                amounts = {str(k): v for k, v in (value or {}).items() if v > 0}
                ledger._bets[category] = KeyedBet(amounts)
        return ledger

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BetLedger):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"BetLedger(total_wagered={self.total_wagered()})"


__all__ = ["ScalarBet", "KeyedBet", "Bet", "BetLedger"]
