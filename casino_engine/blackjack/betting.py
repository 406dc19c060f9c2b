"""Count-driven bet sizing advice."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict

BASE_HOUSE_EDGE = 0.005
EDGE_PER_TRUE_COUNT = 0.005
MAX_BANKROLL_FRACTION = 0.05

# (minimum true count, units) checked from the top down
BET_RAMP = ((4, 8), (3, 6), (2, 4), (1, 2))


def player_edge(true_count: float) -> float:
    """Approximate player edge; negative values are a house edge."""
    return -BASE_HOUSE_EDGE + true_count * EDGE_PER_TRUE_COUNT


def bet_units(true_count: float) -> int:
    for threshold, units in BET_RAMP:
        if true_count >= threshold:
            return units
    return 1


@dataclass(frozen=True)
class BetAdvice:
    units: int
    amount: float
    edge: float
    true_count: float

    def to_dict(self) -> Dict[str, float]:
        return {
            "units": self.units,
            "amount": self.amount,
            "edge": self.edge,
            "true_count": self.true_count,
        }


def recommended_bet(
    true_count: float, min_bet: float, max_bet: float, bankroll: float
) -> BetAdvice:
    units = bet_units(true_count)
    amount = min(min_bet * units, max_bet, bankroll * MAX_BANKROLL_FRACTION)
    return BetAdvice(
        units=units,
        amount=float(round(max(amount, 0.0))),
        edge=player_edge(true_count),
        true_count=true_count,
    )


def buyin_recommendations(max_bet: float) -> Dict[str, int]:
    return {
        "conservative": int(round(max_bet * 100)),
        "standard": int(round(max_bet * 50)),
        "aggressive": int(round(max_bet * 25)),
    }


__all__ = [
    "BASE_HOUSE_EDGE",
    "EDGE_PER_TRUE_COUNT",
    "BET_RAMP",
    "BetAdvice",
    "player_edge",
    "bet_units",
    "recommended_bet",
    "buyin_recommendations",
]
