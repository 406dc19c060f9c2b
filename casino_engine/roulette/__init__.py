"""Roulette wheels, betting layout, bet settlement and spin statistics."""

from .calls import CallBet, call_bet_placements, neighbour_placements
from .layout import BetCategory, bet_key, covered_pockets, is_valid_bet
from .ledger import BetLedger, KeyedBet, ScalarBet
from .outcome import SpinOutcome, spin
from .resolver import BetResult, Resolution, resolve
from .stats import SpinHistory, iter_simulated_spins, simulate_spins
from .table import RouletteConfig, RoulettePhase, RouletteSession, SpinResult
from .wheel import AMERICAN_WHEEL, EUROPEAN_WHEEL, PAYOUTS, Pocket, Variant, WheelConfig, wheel_for

__all__ = [
    "CallBet",
    "call_bet_placements",
    "neighbour_placements",
    "BetCategory",
    "bet_key",
    "covered_pockets",
    "is_valid_bet",
    "BetLedger",
    "KeyedBet",
    "ScalarBet",
    "SpinOutcome",
    "spin",
    "BetResult",
    "Resolution",
    "resolve",
    "SpinHistory",
    "iter_simulated_spins",
    "simulate_spins",
    "RouletteConfig",
    "RoulettePhase",
    "RouletteSession",
    "SpinResult",
    "AMERICAN_WHEEL",
    "EUROPEAN_WHEEL",
    "PAYOUTS",
    "Pocket",
    "Variant",
    "WheelConfig",
    "wheel_for",
]
