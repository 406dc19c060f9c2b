"""Blackjack hand evaluation with soft-ace handling."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

from .cards import Rank


class Outcome(enum.Enum):
    WIN = "win"
    LOSE = "lose"
    PUSH = "push"
    BLACKJACK = "blackjack"
    BUST = "bust"
    DEALER_BUST = "dealer_bust"
    SURRENDER = "surrender"

    @property
    def is_player_win(self) -> bool:
        return self in (Outcome.WIN, Outcome.BLACKJACK, Outcome.DEALER_BUST)


@dataclass(frozen=True)
class HandValue:
    total: int = 0
    is_soft: bool = False
    is_bust: bool = False
    is_blackjack: bool = False
    is_pair: bool = False

    def describe(self) -> str:
        if self.total == 0:
            return "-"
        if self.is_blackjack:
            return "BJ"
        if self.is_bust:
            return f"{self.total} BUST"
        return f"soft {self.total}" if self.is_soft else str(self.total)


def evaluate(ranks: Iterable[Rank | str]) -> HandValue:
    """Evaluate a hand, counting aces as 11 until that would bust."""
    cards = [Rank.parse(rank) for rank in ranks]
    total = sum(card.points for card in cards)
    soft_aces = sum(1 for card in cards if card.is_ace)
    while total > 21 and soft_aces:
        total -= 10
        soft_aces -= 1
    is_bust = total > 21
    return HandValue(
        total=total,
        is_soft=soft_aces > 0 and not is_bust,
        is_bust=is_bust,
        is_blackjack=len(cards) == 2 and total == 21,
        is_pair=len(cards) == 2 and cards[0].points == cards[1].points,
    )


def pair_rank(ranks: Iterable[Rank | str]) -> Optional[str]:
    """Return the strategy-table label of a two-card pair, or ``None``."""
    cards = [Rank.parse(rank) for rank in ranks]
    if len(cards) != 2 or cards[0].points != cards[1].points:
        return None
    if cards[0].is_ace:
        return "A"
    if cards[0].is_ten:
        return "10"
    return cards[0].value


def compare(player: HandValue, dealer: HandValue) -> Outcome:
    """Settle a finished player hand against the finished dealer hand."""
    if player.is_bust:
        return Outcome.BUST
    if player.is_blackjack:
        return Outcome.PUSH if dealer.is_blackjack else Outcome.BLACKJACK
    if dealer.is_blackjack:
        return Outcome.LOSE
    if dealer.is_bust:
        return Outcome.DEALER_BUST
    if player.total > dealer.total:
        return Outcome.WIN
    if player.total < dealer.total:
        return Outcome.LOSE
    return Outcome.PUSH


__all__ = ["Outcome", "HandValue", "evaluate", "pair_rank", "compare"]
