"""Card ranks, Hi-Lo tags and count snapshots."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, Mapping

CARDS_PER_DECK = 52
SUITS_PER_RANK = 4
TRUE_COUNT_DECK_FLOOR = 0.5


class Rank(str, enum.Enum):
    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    def __str__(self) -> str:
        return self.value

    @property
    def is_ace(self) -> bool:
        return self is Rank.ACE

    @property
    def is_ten(self) -> bool:
        return self in TEN_GROUP

    @property
    def points(self) -> int:
        """Blackjack value with the ace counted high."""
        if self is Rank.ACE:
            return 11
        if self.is_ten:
            return 10
        return int(self.value)

    @property
    def hilo(self) -> int:
        return HI_LO_TAGS[self]

    @classmethod
    def parse(cls, label: "str | int | Rank") -> "Rank":
        if isinstance(label, Rank):
            return label
        if isinstance(label, int):
            if label == 1 or label == 11:
                return cls.ACE
            if 2 <= label <= 10:
                return cls(str(label))
            raise ValueError(f"Unknown card value {label!r}")
        normalized = str(label).strip().upper()
        normalized = _ALIASES.get(normalized, normalized)
        try:
            return cls(normalized)
        except ValueError:
            raise ValueError(f"Unknown card rank {label!r}") from None


TEN_GROUP = frozenset({Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING})
RANKS = tuple(Rank)

_ALIASES = {"T": "10", "ACE": "A", "JACK": "J", "QUEEN": "Q", "KING": "K", "1": "A"}

HI_LO_TAGS: Dict[Rank, int] = {
    rank: (1 if rank.value in {"2", "3", "4", "5", "6"} else 0) for rank in Rank
}
for _rank in (Rank.TEN, Rank.JACK, Rank.QUEEN, Rank.KING, Rank.ACE):
    HI_LO_TAGS[_rank] = -1


def tag_sum(ranks, tags: Mapping[Rank, int] = HI_LO_TAGS) -> int:
    return sum(tags[Rank.parse(rank)] for rank in ranks)


@dataclass(frozen=True)
class CountState:
    """Immutable snapshot of the running count."""

    running: int = 0
    cards_dealt: int = 0

    def decks_remaining(self, num_decks: int) -> float:
        total_cards = num_decks * CARDS_PER_DECK
        return (total_cards - self.cards_dealt) / CARDS_PER_DECK

    def true_count(self, num_decks: int) -> float:
        return self.running / max(TRUE_COUNT_DECK_FLOOR, self.decks_remaining(num_decks))

    def penetration(self, num_decks: int) -> float:
        total_cards = num_decks * CARDS_PER_DECK
        return 0.0 if total_cards == 0 else self.cards_dealt / total_cards


__all__ = [
    "CARDS_PER_DECK",
    "SUITS_PER_RANK",
    "TRUE_COUNT_DECK_FLOOR",
    "Rank",
    "RANKS",
    "TEN_GROUP",
    "HI_LO_TAGS",
    "tag_sum",
    "CountState",
]
