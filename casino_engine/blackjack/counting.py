"""Shoe depletion and running/true count tracking."""
from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Mapping

from ..errors import ConfigurationError, DepletedRankError, InvalidUndoError
from .cards import (
    CARDS_PER_DECK,
    HI_LO_TAGS,
    RANKS,
    SUITS_PER_RANK,
    TEN_GROUP,
    TRUE_COUNT_DECK_FLOOR,
    CountState,
    Rank,
)

LOGGER = logging.getLogger(__name__)


@dataclass
class ShoeTracker:
    """Tracks cards dealt per rank and the tag-weighted running count.

    With ``group_tens`` the 10, J, Q and K share one depletion bucket of
    ``num_decks * 16`` cards, which is how the shoe trainer takes input.
    """

    num_decks: int
    tags: Mapping[Rank, int] = field(default_factory=lambda: dict(HI_LO_TAGS))
    group_tens: bool = True
    running_count: int = field(init=False, default=0)
    cards_dealt: int = field(init=False, default=0)

    def __post_init__(self) -> None:
        if self.num_decks <= 0:
            raise ConfigurationError("num_decks must be positive")
        self.total_cards = self.num_decks * CARDS_PER_DECK
        self.dealt_by_rank: Counter[Rank] = Counter()
        self.reset()

    def reset(self) -> None:
        self.running_count = 0
        self.cards_dealt = 0
        self.dealt_by_rank = Counter({rank: 0 for rank in RANKS})

    # Depletion -------------------------------------------------------------
    def _bucket(self, rank: Rank) -> tuple:
        if self.group_tens and rank.is_ten:
            return tuple(TEN_GROUP)
        return (rank,)

    def capacity(self, rank: Rank | str) -> int:
        rank = Rank.parse(rank)
        return self.num_decks * SUITS_PER_RANK * len(self._bucket(rank))

    def dealt(self, rank: Rank | str) -> int:
        rank = Rank.parse(rank)
        return sum(self.dealt_by_rank[member] for member in self._bucket(rank))

    def remaining(self, rank: Rank | str) -> int:
        return self.capacity(rank) - self.dealt(rank)

    def remaining_by_rank(self) -> Dict[Rank, int]:
        return {rank: self.remaining(rank) for rank in RANKS}

    # Mutation --------------------------------------------------------------
    def deal_card(self, rank: Rank | str) -> CountState:
        rank = Rank.parse(rank)
        if self.remaining(rank) <= 0:
            LOGGER.warning("Rejected deal of depleted rank %s", rank)
            raise DepletedRankError(rank, self.capacity(rank))
        self.dealt_by_rank[rank] += 1
        self.cards_dealt += 1
        self.running_count += self.tags[rank]
        return self.count_state()

    def undo_card(self, rank: Rank | str) -> CountState:
        rank = Rank.parse(rank)
        if self.cards_dealt <= 0:
            raise InvalidUndoError("No cards have been dealt from this shoe")
        if self.dealt_by_rank[rank] <= 0:
            raise InvalidUndoError(f"No {rank} has been dealt; cannot undo it")
        self.dealt_by_rank[rank] -= 1
        self.cards_dealt -= 1
        self.running_count -= self.tags[rank]
        return self.count_state()

    # Derived values --------------------------------------------------------
    def count_state(self) -> CountState:
        return CountState(running=self.running_count, cards_dealt=self.cards_dealt)

    def running_for(self, tags: Mapping[Rank, int]) -> int:
        """Running count of the dealt cards under another tag table."""
        return sum(tags[rank] * count for rank, count in self.dealt_by_rank.items())

    def decks_remaining(self) -> float:
        return (self.total_cards - self.cards_dealt) / CARDS_PER_DECK

    def true_count(self, running: int | None = None) -> float:
        running = self.running_count if running is None else running
        return running / max(self.decks_remaining(), TRUE_COUNT_DECK_FLOOR)

    def penetration(self) -> float:
        return self.cards_dealt / self.total_cards


__all__ = ["ShoeTracker"]
