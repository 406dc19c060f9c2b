"""Roulette pockets and the physical wheel layouts."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Optional, Tuple

RED_NUMBERS = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})
BLACK_NUMBERS = frozenset(set(range(1, 37)) - RED_NUMBERS)


# Payout ratios, X to 1
PAYOUTS: Dict[str, int] = {
    "straight": 35,
    "split": 17,
    "street": 11,
    "corner": 8,
    "firstFour": 8,
    "topLine": 6,
    "line": 5,
    "column": 2,
    "dozen": 2,
    "evenMoney": 1,
}


class Pocket(str, enum.Enum):
    """Every physical pocket. ``DOUBLE_ZERO`` only exists on the American wheel."""

    ZERO = "0"
    DOUBLE_ZERO = "00"
    ONE = "1"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    ELEVEN = "11"
    TWELVE = "12"
    THIRTEEN = "13"
    FOURTEEN = "14"
    FIFTEEN = "15"
    SIXTEEN = "16"
    SEVENTEEN = "17"
    EIGHTEEN = "18"
    NINETEEN = "19"
    TWENTY = "20"
    TWENTY_ONE = "21"
    TWENTY_TWO = "22"
    TWENTY_THREE = "23"
    TWENTY_FOUR = "24"
    TWENTY_FIVE = "25"
    TWENTY_SIX = "26"
    TWENTY_SEVEN = "27"
    TWENTY_EIGHT = "28"
    TWENTY_NINE = "29"
    THIRTY = "30"
    THIRTY_ONE = "31"
    THIRTY_TWO = "32"
    THIRTY_THREE = "33"
    THIRTY_FOUR = "34"
    THIRTY_FIVE = "35"
    THIRTY_SIX = "36"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return self.value

    @property
    def number(self) -> Optional[int]:
        """Numeric value on the layout; ``None`` for the double zero."""
        if self is Pocket.DOUBLE_ZERO:
            return None
        return int(self.value)

    @property
    def is_zero(self) -> bool:
        return self in (Pocket.ZERO, Pocket.DOUBLE_ZERO)

    @property
    def color(self) -> str:
        if self.is_zero:
            return "green"
        return "red" if self.number in RED_NUMBERS else "black"

    @property
    def layout_order(self) -> int:
        """Sort key: 0, 00, then 1-36."""
        if self is Pocket.ZERO:
            return 0
        if self is Pocket.DOUBLE_ZERO:
            return 1
        return int(self.value) + 1

    @classmethod
    def parse(cls, label: "Pocket | int | str") -> "Pocket":
        if isinstance(label, Pocket):
            return label
        if isinstance(label, int):
            text = str(label)
        else:
            text = str(label).strip()
            if text.isdigit() and text != "00":
                text = str(int(text))
        try:
            return cls(text)
        except ValueError:
            raise ValueError(f"Unknown roulette pocket {label!r}") from None


def pocket_for(number: int) -> Pocket:
    return Pocket(str(number))


class Variant(enum.Enum):
    EUROPEAN = "european"
    AMERICAN = "american"


@dataclass(frozen=True)
class WheelConfig:
    variant: Variant
    name: str
    sequence: Tuple[Pocket, ...]
    house_edge: float
    _index: Dict[Pocket, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(set(self.sequence)) != len(self.sequence):
            raise ValueError(f"{self.name} wheel lists a pocket twice")
        object.__setattr__(
            self, "_index", {pocket: i for i, pocket in enumerate(self.sequence)}
        )

    @property
    def total_pockets(self) -> int:
        return len(self.sequence)

    @property
    def zeros(self) -> FrozenSet[Pocket]:
        return frozenset(p for p in self.sequence if p.is_zero)

    @property
    def degrees_per_pocket(self) -> float:
        return 360.0 / len(self.sequence)

    def __contains__(self, pocket: object) -> bool:
        try:
            return Pocket.parse(pocket) in self._index
        except ValueError:
            return False

    def pocket_index(self, pocket: Pocket | int | str) -> int:
        pocket = Pocket.parse(pocket)
        if pocket not in self._index:
            raise ValueError(f"Pocket {pocket} is not on the {self.name} wheel")
        return self._index[pocket]

    def pocket_angle(self, pocket: Pocket | int | str) -> float:
        return self.pocket_index(pocket) * self.degrees_per_pocket

    def neighbours(self, pocket: Pocket | int | str, count: int = 2) -> List[Pocket]:
        """The pocket and ``count`` physical neighbours on each side, in wheel order."""
        index = self.pocket_index(pocket)
        total = len(self.sequence)
        return [self.sequence[(index + offset) % total] for offset in range(-count, count + 1)]


def _sequence(labels) -> Tuple[Pocket, ...]:
    return tuple(Pocket.parse(label) for label in labels)


EUROPEAN_WHEEL = WheelConfig(
    variant=Variant.EUROPEAN,
    name="European",
    sequence=_sequence(
        [
            0, 32, 15, 19, 4, 21, 2, 25, 17, 34, 6, 27, 13, 36, 11, 30, 8, 23, 10,
            5, 24, 16, 33, 1, 20, 14, 31, 9, 22, 18, 29, 7, 28, 12, 35, 3, 26,
        ]
    ),
    house_edge=1 / 37,
)

AMERICAN_WHEEL = WheelConfig(
    variant=Variant.AMERICAN,
    name="American",
    sequence=_sequence(
        [
            0, 28, 9, 26, 30, 11, 7, 20, 32, 17, 5, 22, 34, 15, 3, 24, 36, 13, 1,
            "00", 27, 10, 25, 29, 12, 8, 19, 31, 18, 6, 21, 33, 16, 4, 23, 35, 14, 2,
        ]
    ),
    house_edge=2 / 38,
)

WHEELS = {Variant.EUROPEAN: EUROPEAN_WHEEL, Variant.AMERICAN: AMERICAN_WHEEL}


def wheel_for(variant: Variant | str) -> WheelConfig:
    return WHEELS[Variant(variant)]


VOISINS = frozenset(
    pocket_for(n) for n in (22, 18, 29, 7, 28, 12, 35, 3, 26, 0, 32, 15, 19, 4, 21, 2, 25)
)
TIERS = frozenset(pocket_for(n) for n in (27, 13, 36, 11, 30, 8, 23, 10, 5, 24, 16, 33))
ORPHELINS = frozenset(pocket_for(n) for n in (17, 34, 6, 1, 20, 14, 31, 9))


def sector_of(pocket: Pocket | int | str) -> Optional[str]:
    """European racetrack sector containing the pocket."""
    pocket = Pocket.parse(pocket)
    if pocket in VOISINS:
        return "voisins"
    if pocket in TIERS:
        return "tiers"
    if pocket in ORPHELINS:
        return "orphelins"
    return None


__all__ = [
    "PAYOUTS",
    "RED_NUMBERS",
    "BLACK_NUMBERS",
    "Pocket",
    "pocket_for",
    "Variant",
    "WheelConfig",
    "EUROPEAN_WHEEL",
    "AMERICAN_WHEEL",
    "WHEELS",
    "wheel_for",
    "VOISINS",
    "TIERS",
    "ORPHELINS",
    "sector_of",
]
