"""Racetrack bets: French call bets and neighbour bets.

Each helper returns the chip placements the bet expands into as
``(category, key, units)`` tuples; the session multiplies units by the chip
value and places them on the ordinary layout.
"""

from __future__ import annotations

import enum
from typing import List, Tuple

from ..errors import InvalidBetError
from .layout import BetCategory, bet_key
from .wheel import Pocket, WheelConfig

MIN_NEIGHBOURS = 2
MAX_NEIGHBOURS = 7
DEFAULT_NEIGHBOURS = 2

Placement = Tuple[BetCategory, str, int]


class CallBet(enum.Enum):
    VOISINS = "voisins"
    TIERS = "tiers"
    ORPHELINS = "orphelins"
    JEU_ZERO = "jeu_zero"


def _splits(*pairs) -> List[Placement]:
    return [(BetCategory.SPLIT, bet_key(*pair), 1) for pair in pairs]


CALL_BETS = {
    CallBet.VOISINS: [
        (BetCategory.STREET, bet_key(0, 2, 3), 2),
        *_splits((4, 7), (12, 15), (18, 21), (19, 22), (32, 35)),
        (BetCategory.CORNER, bet_key(25, 26, 28, 29), 2),
    ],
    CallBet.TIERS: _splits((5, 8), (10, 11), (13, 16), (23, 24), (27, 30), (33, 36)),
    CallBet.ORPHELINS: [
        (BetCategory.STRAIGHT, bet_key(1), 1),
        *_splits((6, 9), (14, 17), (17, 20), (31, 34)),
    ],
    CallBet.JEU_ZERO: [
        *_splits((12, 15), (0, 3), (32, 35)),
        (BetCategory.STRAIGHT, bet_key(26), 1),
    ],
}


def call_bet_placements(call: CallBet | str) -> List[Placement]:
    return list(CALL_BETS[CallBet(call)])


def call_bet_units(call: CallBet | str) -> int:
    return sum(units for _, _, units in CALL_BETS[CallBet(call)])


def neighbour_placements(
    pocket: Pocket | int | str, wheel: WheelConfig, neighbours: int = DEFAULT_NEIGHBOURS
) -> List[Placement]:
    """One straight-up chip on ``pocket`` and ``neighbours`` pockets either side of it."""
    if not MIN_NEIGHBOURS <= neighbours <= MAX_NEIGHBOURS:
        raise InvalidBetError(
            f"Neighbour range must be {MIN_NEIGHBOURS}-{MAX_NEIGHBOURS}, not {neighbours}"
        )
    try:
        pockets = wheel.neighbours(pocket, neighbours)
    except ValueError as exc:
        raise InvalidBetError(str(exc)) from None
    return [(BetCategory.STRAIGHT, bet_key(p), 1) for p in pockets]


__all__ = [
    "MIN_NEIGHBOURS",
    "MAX_NEIGHBOURS",
    "DEFAULT_NEIGHBOURS",
    "Placement",
    "CallBet",
    "CALL_BETS",
    "call_bet_placements",
    "call_bet_units",
    "neighbour_placements",
]
