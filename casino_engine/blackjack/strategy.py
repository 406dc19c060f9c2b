"""Deterministic basic-strategy tables used for advisory recommendations."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Sequence

from .cards import Rank
from .hand import evaluate, pair_rank

ActionName = Literal["hit", "stand", "double", "split", "surrender"]


@dataclass(frozen=True)
class BasicStrategyDecision:
    action: ActionName
    rationale: str


SURRENDER_RULES = {
    16: {9, 10, 11},
    15: {10},
}


def _hard_total_action(total: int, dealer: int, can_double: bool) -> ActionName:
    if total <= 8:
        return "hit"
    if total == 9:
        return "double" if can_double and 3 <= dealer <= 6 else "hit"
    if total == 10:
        return "double" if can_double and 2 <= dealer <= 9 else "hit"
    if total == 11:
        return "double" if can_double and dealer <= 10 else "hit"
    if total == 12:
        return "stand" if 4 <= dealer <= 6 else "hit"
    if 13 <= total <= 16:
        return "stand" if 2 <= dealer <= 6 else "hit"
    return "stand"


def _soft_total_action(total: int, dealer: int, can_double: bool) -> ActionName:
    if total <= 12:
        return "hit"
    if total <= 14:
        return "double" if can_double and dealer in {5, 6} else "hit"
    if total <= 16:
        return "double" if can_double and 4 <= dealer <= 6 else "hit"
    if total == 17:
        return "double" if can_double and 3 <= dealer <= 6 else "hit"
    if total == 18:
        if 2 <= dealer <= 6:
            return "double" if can_double else "stand"
        if dealer in {7, 8}:
            return "stand"
        return "hit"
    return "stand"


PAIR_RULES = {
    "A": {"split": set(range(2, 12))},
    "10": {"stand": set(range(2, 12))},
    "9": {"split": {2, 3, 4, 5, 6, 8, 9}, "stand": {7, 10, 11}},
    "8": {"split": set(range(2, 12))},
    "7": {"split": {2, 3, 4, 5, 6, 7}},
    "6": {"split": {2, 3, 4, 5, 6}},
    "5": {"double": {2, 3, 4, 5, 6, 7, 8, 9}},
    "4": {"split": {5, 6}},
    "3": {"split": {2, 3, 4, 5, 6, 7}},
    "2": {"split": {2, 3, 4, 5, 6, 7}},
}


def basic_strategy(
    total: int,
    is_soft: bool,
    pair: str | None,
    dealer_upcard: int,
    can_double: bool,
    can_split: bool,
    allow_surrender: bool,
) -> BasicStrategyDecision:
    """Return the suggested action under standard S17 multi-deck rules.

    ``dealer_upcard`` is the upcard's blackjack value with the ace as 11.
    """

    if allow_surrender and not is_soft and pair is None:
        surrender_dealers = SURRENDER_RULES.get(total)
        if surrender_dealers and dealer_upcard in surrender_dealers:
            return BasicStrategyDecision("surrender", "Hard total surrender rule")

    if pair is not None:
        rules = PAIR_RULES.get(pair, {})
        if can_split and dealer_upcard in rules.get("split", ()):
            return BasicStrategyDecision("split", "Pair splitting table")
        if dealer_upcard in rules.get("double", ()):
            if can_double:
                return BasicStrategyDecision("double", "Treat pair of fives as double")
            return BasicStrategyDecision("hit", "Pair double fallback")
        if dealer_upcard in rules.get("stand", ()):
            return BasicStrategyDecision("stand", "Pair standing table")

    if is_soft:
        action = _soft_total_action(total, dealer_upcard, can_double)
        rationale = "Soft total table"
    else:
        action = _hard_total_action(total, dealer_upcard, can_double)
        rationale = "Hard total table"

    return BasicStrategyDecision(action, rationale)


def recommend(
    cards: Sequence[Rank | str],
    dealer_upcard: Rank | str,
    can_double: bool = True,
    can_split: bool = False,
    allow_surrender: bool = False,
) -> BasicStrategyDecision:
    """Basic-strategy advice for a hand given as ranks."""
    value = evaluate(cards)
    if value.is_bust:
        return BasicStrategyDecision("stand", "Hand is bust")
    first_two = len(cards) == 2
    return basic_strategy(
        value.total,
        value.is_soft,
        pair_rank(cards),
        Rank.parse(dealer_upcard).points,
        can_double and first_two,
        can_split and first_two,
        allow_surrender and first_two,
    )


__all__ = ["ActionName", "BasicStrategyDecision", "basic_strategy", "recommend"]
