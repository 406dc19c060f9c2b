"""Baccarat shoe counting for the main bets and the Dragon 7 / Panda 8 side bets.

All three count systems read the same 8-deck shoe, so a single
``ShoeTracker`` keeps depletion per rank (tens are not grouped) and each
system's running count is recomputed from the per-rank tallies.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional, Sequence

from ..blackjack.cards import RANKS, Rank
from ..blackjack.counting import ShoeTracker
from ..errors import ConfigurationError, InvalidUndoError

LOGGER = logging.getLogger(__name__)

TOTAL_DECKS = 8


def _tag_table(tags: Sequence[int]) -> Dict[Rank, int]:
    return dict(zip(RANKS, tags))


# Tags in rank order A, 2-10, J, Q, K
MAIN_BET_TAGS = _tag_table([1, 1, 1, 1, -1, -1, -1, -1, 0, 0, 0, 0, 0])
DRAGON7_TAGS = _tag_table([0, 0, 0, -1, -1, -1, -1, 2, 2, 0, 0, 0, 0])
PANDA8_TAGS = _tag_table([1, 1, 1, -2, -2, -2, -1, -1, -2, 1, 1, 1, 1])

COUNT_SYSTEMS: Dict[str, Dict[Rank, int]] = {
    "main": MAIN_BET_TAGS,
    "dragon7": DRAGON7_TAGS,
    "panda8": PANDA8_TAGS,
}

BACCARAT_VALUES = _tag_table([1, 2, 3, 4, 5, 6, 7, 8, 9, 0, 0, 0, 0])

# Probability of a tie on each total, 8 decks
EGALITE_BASE_PROB = {
    0: 0.00575,
    1: 0.00376,
    2: 0.00355,
    3: 0.00432,
    4: 0.00712,
    5: 0.00816,
    6: 0.01836,
    7: 0.02082,
    8: 0.01018,
    9: 0.00986,
}

DEFAULT_EGALITE_PAYOUTS = {
    0: 150,
    1: 215,
    2: 225,
    3: 200,
    4: 120,
    5: 110,
    6: 45,
    7: 45,
    8: 80,
    9: 80,
}


def hand_total(cards: Sequence[Rank | str]) -> int:
    """Baccarat point total (last digit of the card sum)."""
    return sum(BACCARAT_VALUES[Rank.parse(card)] for card in cards) % 10


def egalite_ev(probability: float, payout: float) -> float:
    """Expected value per unit staked on a bet paying ``payout`` to 1."""
    return probability * (payout + 1) - 1


@dataclass(frozen=True)
class EgaliteLine:
    tie: int
    probability: float
    payout: int
    ev: float


class BaccaratCounter:
    def __init__(self, payouts: Optional[Mapping[int, int]] = None) -> None:
        self.tracker = ShoeTracker(TOTAL_DECKS, tags=MAIN_BET_TAGS, group_tens=False)
        self.history: List[Rank] = []
        self.egalite_payouts: Dict[int, int] = dict(DEFAULT_EGALITE_PAYOUTS)
        for tie, payout in (payouts or {}).items():
            self.set_egalite_payout(tie, payout)

    # Shoe --------------------------------------------------------------
    def deal_card(self, rank: Rank | str) -> Dict[str, int]:
        rank = Rank.parse(rank)
        self.tracker.deal_card(rank)
        self.history.append(rank)
        return self.running_counts()

    def undo_last_card(self) -> Dict[str, int]:
        if not self.history:
            raise InvalidUndoError("Nothing to undo")
        rank = self.history.pop()
        self.tracker.undo_card(rank)
        return self.running_counts()

    def new_shoe(self) -> None:
        self.tracker.reset()
        self.history.clear()
        LOGGER.info("New %d-deck baccarat shoe", TOTAL_DECKS)

    @property
    def cards_dealt(self) -> int:
        return self.tracker.cards_dealt

    def remaining_by_rank(self) -> Dict[Rank, int]:
        return self.tracker.remaining_by_rank()

    # Counts ------------------------------------------------------------
    def running_counts(self) -> Dict[str, int]:
        return {name: self.tracker.running_for(tags) for name, tags in COUNT_SYSTEMS.items()}

    def true_counts(self) -> Dict[str, float]:
        return {
            name: self.tracker.true_count(running)
            for name, running in self.running_counts().items()
        }

    # Egalite -----------------------------------------------------------
    def set_egalite_payout(self, tie: int, payout: int) -> None:
        if tie not in EGALITE_BASE_PROB:
            raise ConfigurationError(f"Egalite ties run 0-9, not {tie!r}")
        if int(payout) < 1:
            raise ConfigurationError("Egalite payouts must be at least 1 to 1")
        self.egalite_payouts[tie] = int(payout)

    def egalite_probability(self, tie: int) -> float:
        # TODO: weight by the remaining per-rank counts once a tie-total model exists
        return EGALITE_BASE_PROB[tie]

    def egalite_ev(self, tie: int) -> float:
        return egalite_ev(self.egalite_probability(tie), self.egalite_payouts[tie])

    def egalite_table(self) -> List[EgaliteLine]:
        return [
            EgaliteLine(
                tie=tie,
                probability=self.egalite_probability(tie),
                payout=self.egalite_payouts[tie],
                ev=self.egalite_ev(tie),
            )
            for tie in sorted(EGALITE_BASE_PROB)
        ]

    def positive_egalite_bets(self) -> List[EgaliteLine]:
        return [line for line in self.egalite_table() if line.ev > 0]


__all__ = [
    "TOTAL_DECKS",
    "MAIN_BET_TAGS",
    "DRAGON7_TAGS",
    "PANDA8_TAGS",
    "COUNT_SYSTEMS",
    "BACCARAT_VALUES",
    "EGALITE_BASE_PROB",
    "DEFAULT_EGALITE_PAYOUTS",
    "hand_total",
    "egalite_ev",
    "EgaliteLine",
    "BaccaratCounter",
]
