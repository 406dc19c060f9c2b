"""Betting layout: bet categories, the numbers each bet covers and bet keys."""

from __future__ import annotations

import enum
from typing import Dict, FrozenSet, Iterable, List, Tuple

from ..errors import InvalidBetError
from .wheel import (
    BLACK_NUMBERS,
    PAYOUTS,
    RED_NUMBERS,
    Pocket,
    Variant,
    WheelConfig,
    pocket_for,
)


class BetCategory(str, enum.Enum):
    STRAIGHT = "straight"
    SPLIT = "split"
    STREET = "street"
    CORNER = "corner"
    LINE = "line"
    COLUMN = "column"
    DOZEN = "dozen"
    RED = "red"
    BLACK = "black"
    EVEN = "even"
    ODD = "odd"
    LOW = "low"
    HIGH = "high"
    FIRST_FOUR = "firstFour"
    TOP_LINE = "topLine"

    def __str__(self) -> str:
        return self.value

    @property
    def is_scalar(self) -> bool:
        """Whole-category bets hold a single amount instead of per-key amounts."""
        return self in SCALAR_CATEGORIES

    @property
    def is_even_money(self) -> bool:
        return self in EVEN_MONEY_CATEGORIES

    @property
    def payout(self) -> int:
        if self.is_even_money:
            return PAYOUTS["evenMoney"]
        return PAYOUTS[self.value]


EVEN_MONEY_CATEGORIES = frozenset(
    {
        BetCategory.RED,
        BetCategory.BLACK,
        BetCategory.EVEN,
        BetCategory.ODD,
        BetCategory.LOW,
        BetCategory.HIGH,
    }
)
SCALAR_CATEGORIES = EVEN_MONEY_CATEGORIES | {BetCategory.FIRST_FOUR, BetCategory.TOP_LINE}

# Pockets per keyed inside bet
INSIDE_BET_SIZES: Dict[BetCategory, int] = {
    BetCategory.STRAIGHT: 1,
    BetCategory.SPLIT: 2,
    BetCategory.STREET: 3,
    BetCategory.CORNER: 4,
    BetCategory.LINE: 6,
}


def _pockets(numbers: Iterable[int | str]) -> FrozenSet[Pocket]:
    return frozenset(Pocket.parse(n) for n in numbers)


NUMBERS = _pockets(range(1, 37))
RED = frozenset(pocket_for(n) for n in RED_NUMBERS)
BLACK = frozenset(pocket_for(n) for n in BLACK_NUMBERS)
EVEN = frozenset(pocket for pocket in NUMBERS if pocket.number % 2 == 0)
ODD = NUMBERS - EVEN
LOW = _pockets(range(1, 19))
HIGH = _pockets(range(19, 37))
FIRST_FOUR = _pockets([0, 1, 2, 3])
TOP_LINE = _pockets([0, "00", 1, 2, 3])

COLUMNS: Dict[int, FrozenSet[Pocket]] = {
    column: _pockets(range(column, 37, 3)) for column in (1, 2, 3)
}
DOZENS: Dict[int, FrozenSet[Pocket]] = {
    dozen: _pockets(range(12 * (dozen - 1) + 1, 12 * dozen + 1)) for dozen in (1, 2, 3)
}

STREETS: List[FrozenSet[Pocket]] = [
    _pockets([3 * i + 1, 3 * i + 2, 3 * i + 3]) for i in range(12)
]
LINES: List[FrozenSet[Pocket]] = [
    _pockets(range(3 * i + 1, 3 * i + 7)) for i in range(11)
]
CORNERS: List[FrozenSet[Pocket]] = [
    _pockets([base, base + 1, base + 3, base + 4])
    for base in (3 * col + row + 1 for col in range(11) for row in range(2))
]
SPLITS: List[FrozenSet[Pocket]] = [
    _pockets([(col - 1) * 3 + row, col * 3 + row]) for col in range(1, 12) for row in (1, 2, 3)
] + [
    _pockets([base + offset, base + offset + 1])
    for base in range(1, 37, 3)
    for offset in (0, 1)
]

ZERO_SPLITS: Dict[Variant, List[FrozenSet[Pocket]]] = {
    Variant.EUROPEAN: [_pockets(pair) for pair in ((0, 1), (0, 2), (0, 3))],
    Variant.AMERICAN: [
        _pockets(pair) for pair in ((0, 1), (0, 2), ("00", 2), ("00", 3), (0, "00"))
    ],
}
ZERO_STREETS: Dict[Variant, List[FrozenSet[Pocket]]] = {
    Variant.EUROPEAN: [_pockets(trio) for trio in ((0, 1, 2), (0, 2, 3))],
    Variant.AMERICAN: [_pockets(trio) for trio in ((0, 1, 2), (0, "00", 2), ("00", 2, 3))],
}

_SCALAR_COVERAGE: Dict[BetCategory, FrozenSet[Pocket]] = {
    BetCategory.RED: RED,
    BetCategory.BLACK: BLACK,
    BetCategory.EVEN: EVEN,
    BetCategory.ODD: ODD,
    BetCategory.LOW: LOW,
    BetCategory.HIGH: HIGH,
    BetCategory.FIRST_FOUR: FIRST_FOUR,
    BetCategory.TOP_LINE: TOP_LINE,
}
_SCALAR_VARIANT = {
    BetCategory.FIRST_FOUR: Variant.EUROPEAN,
    BetCategory.TOP_LINE: Variant.AMERICAN,
}


def bet_key(*pockets: Pocket | int | str) -> str:
    """Canonical key for an inside bet, e.g. ``"17"``, ``"17-20"`` or ``"0-2-3"``."""
    parsed = sorted({Pocket.parse(p) for p in pockets}, key=lambda p: p.layout_order)
    return "-".join(p.label for p in parsed)


def parse_key(key: str | int) -> Tuple[Pocket, ...]:
    try:
        return tuple(Pocket.parse(part) for part in str(key).split("-"))
    except ValueError:
        raise InvalidBetError(f"Malformed bet key {key!r}") from None


def normalize_key(category: BetCategory | str, key) -> str | None:
    """Canonical form of ``key`` for ``category``; ``None`` for scalar bets."""
    category = BetCategory(category)
    if category.is_scalar:
        return None
    if key is None:
        raise InvalidBetError(f"A {category.value} bet needs a key")
    if category in (BetCategory.COLUMN, BetCategory.DOZEN):
        try:
            index = int(key)
        except (TypeError, ValueError):
            raise InvalidBetError(f"Malformed {category.value} key {key!r}") from None
        if index not in (1, 2, 3):
            raise InvalidBetError(f"{category.value} key must be 1, 2 or 3, not {key!r}")
        return str(index)
    if isinstance(key, (list, tuple, set, frozenset)):
        pockets = tuple(Pocket.parse(p) for p in key)
    else:
        pockets = parse_key(key)
    if len(set(pockets)) != INSIDE_BET_SIZES[category]:
        raise InvalidBetError(
            f"A {category.value} bet covers {INSIDE_BET_SIZES[category]} pockets, got {key!r}"
        )
    return bet_key(*pockets)


def covered_pockets(
    category: BetCategory | str, key: str | int | None, wheel: WheelConfig
) -> FrozenSet[Pocket]:
    """Pockets that win for a bet. Keys are trusted to be sensible combinations."""
    category = BetCategory(category)
    if category.is_scalar:
        required = _SCALAR_VARIANT.get(category)
        if required is not None and wheel.variant is not required:
            raise InvalidBetError(f"{category.value} is not offered on the {wheel.name} wheel")
        return _SCALAR_COVERAGE[category]
    if category is BetCategory.COLUMN:
        return COLUMNS[int(normalize_key(category, key))]
    if category is BetCategory.DOZEN:
        return DOZENS[int(normalize_key(category, key))]
    pockets = frozenset(parse_key(normalize_key(category, key)))
    missing = [p for p in pockets if p not in wheel]
    if missing:
        raise InvalidBetError(
            f"Pocket {missing[0]} is not on the {wheel.name} wheel"
        )
    return pockets


def valid_combinations(category: BetCategory, wheel: WheelConfig) -> List[FrozenSet[Pocket]]:
    if category is BetCategory.SPLIT:
        return SPLITS + ZERO_SPLITS[wheel.variant]
    if category is BetCategory.STREET:
        return STREETS + ZERO_STREETS[wheel.variant]
    if category is BetCategory.CORNER:
        return list(CORNERS)
    if category is BetCategory.LINE:
        return list(LINES)
    return [frozenset({p}) for p in wheel.sequence]


def is_valid_bet(category: BetCategory | str, key, wheel: WheelConfig) -> bool:
    """Whether ``key`` is a real spot on the layout for ``category``."""
    try:
        category = BetCategory(category)
        covered = covered_pockets(category, key, wheel)
    except (InvalidBetError, ValueError):
        return False
    if category.is_scalar or category in (BetCategory.COLUMN, BetCategory.DOZEN):
        return True
    return covered in valid_combinations(category, wheel)


__all__ = [
    "BetCategory",
    "EVEN_MONEY_CATEGORIES",
    "SCALAR_CATEGORIES",
    "INSIDE_BET_SIZES",
    "NUMBERS",
    "RED",
    "BLACK",
    "EVEN",
    "ODD",
    "LOW",
    "HIGH",
    "FIRST_FOUR",
    "TOP_LINE",
    "COLUMNS",
    "DOZENS",
    "STREETS",
    "LINES",
    "CORNERS",
    "SPLITS",
    "ZERO_SPLITS",
    "ZERO_STREETS",
    "bet_key",
    "parse_key",
    "normalize_key",
    "covered_pockets",
    "valid_combinations",
    "is_valid_bet",
]
