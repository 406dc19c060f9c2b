"""Roulette table session: bankroll, betting round, spin and settlement."""

from __future__ import annotations

import dataclasses
import enum
import logging
import random
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

from ..errors import (
    ConfigurationError,
    InsufficientBankrollError,
    InvalidActionError,
    InvalidBetError,
)
from .calls import DEFAULT_NEIGHBOURS, CallBet, Placement, call_bet_placements, neighbour_placements
from .layout import BetCategory, is_valid_bet, normalize_key
from .ledger import BetLedger
from .outcome import SpinOutcome, spin
from .resolver import Resolution, resolve
from .stats import SIMULATION_CHUNK, SpinHistory, simulate_spins
from .wheel import Pocket, Variant, WheelConfig, wheel_for

LOGGER = logging.getLogger(__name__)


@dataclass
class RouletteConfig:
    variant: Variant = Variant.EUROPEAN
    initial_stack: float = 1000.0
    min_bet: float = 1.0
    max_bet: float = 500.0

    def __post_init__(self) -> None:
        self.variant = Variant(self.variant)
        if self.initial_stack <= 0:
            raise ConfigurationError("initial_stack must be positive")
        if self.min_bet <= 0 or self.max_bet < self.min_bet:
            raise ConfigurationError("Bet limits must satisfy 0 < min_bet <= max_bet")

    @property
    def wheel(self) -> WheelConfig:
        return wheel_for(self.variant)

    def to_dict(self) -> Dict[str, object]:
        data = dataclasses.asdict(self)
        data["variant"] = self.variant.value
        return data


class RoulettePhase(enum.Enum):
    SETUP = "setup"
    BETTING = "betting"
    SPINNING = "spinning"
    RESULT = "result"
    GAME_OVER = "game_over"


@dataclass(frozen=True)
class SpinResult:
    outcome: SpinOutcome
    resolution: Resolution
    bankroll: float

    @property
    def pocket(self) -> Pocket:
        return self.outcome.pocket


class RouletteSession:
    """One player at one wheel.

    The winning pocket is drawn and settled inside a single ``spin()`` call,
    so ``SPINNING`` is never observable from outside.
    """

    def __init__(
        self, config: Optional[RouletteConfig] = None, rng: Optional[random.Random] = None
    ) -> None:
        self.config = config or RouletteConfig()
        self.rng = rng
        self.wheel = self.config.wheel
        self.ledger = BetLedger()
        self.history = SpinHistory(self.wheel)
        self.bankroll = float(self.config.initial_stack)
        self.last_bets: Optional[BetLedger] = None
        self._placements: List[List[Placement]] = []
        self.phase = RoulettePhase.SETUP

    # ------------------------------------------------------------------
    # Game lifecycle
    # ------------------------------------------------------------------
    def start(self, config: Optional[RouletteConfig] = None) -> None:
        """Begin a fresh game, optionally at a different table."""
        if config is not None:
            self.config = config
            self.wheel = config.wheel
        self.ledger.clear_all()
        self.history = SpinHistory(self.wheel)
        self.bankroll = float(self.config.initial_stack)
        self.last_bets = None
        self._placements.clear()
        self.phase = RoulettePhase.BETTING
        LOGGER.info("%s roulette game started with %g", self.wheel.name, self.bankroll)

    def new_round(self, same_bets: bool = False) -> RoulettePhase:
        if self.phase is RoulettePhase.GAME_OVER:
            raise InvalidActionError("The bankroll is exhausted; start a new game")
        if self.phase is RoulettePhase.SETUP:
            raise InvalidActionError("The game has not started")
        self.clear_bets()
        self.phase = RoulettePhase.BETTING
        if same_bets and self.last_bets is not None:
            try:
                self.repeat_last_bets()
            except InsufficientBankrollError:
                self.clear_bets()
        return self.phase

    @property
    def is_bankrupt(self) -> bool:
        return self.bankroll <= 0

    # ------------------------------------------------------------------
    # Betting
    # ------------------------------------------------------------------
    def _require_betting(self) -> None:
        if self.phase is not RoulettePhase.BETTING:
            raise InvalidActionError(f"Bets cannot change during {self.phase.value}")

    def _check_bankroll(self, additional: float) -> None:
        required = self.ledger.total_wagered() + additional
        if required > self.bankroll:
            LOGGER.warning("Wager of %g exceeds bankroll of %g", required, self.bankroll)
            raise InsufficientBankrollError(required, self.bankroll)

    def _normalize(self, category: BetCategory | str, key) -> tuple:
        try:
            category = BetCategory(category)
        except ValueError:
            raise InvalidBetError(f"Unknown bet category {category!r}") from None
        key = normalize_key(category, key)
        if not is_valid_bet(category, key, self.wheel):
            LOGGER.warning("Rejected %s bet on %s", category.value, key)
            spot = category.value if key is None else f"{category.value} {key}"
            raise InvalidBetError(f"{spot} is not a bet on the {self.wheel.name} layout")
        return category, key

    def _place_group(self, placements: Sequence[Placement], chip_value: float) -> None:
        if chip_value <= 0:
            raise InvalidBetError("Chip value must be positive")
        self._require_betting()
        self._check_bankroll(chip_value * sum(units for _, _, units in placements))
        placed = []
        for category, key, units in placements:
            self.ledger.place_bet(category, key, chip_value * units)
            placed.append((category, key, chip_value * units))
        self._placements.append(placed)

    def place_bet(self, category: BetCategory | str, key, amount: float) -> float:
        """Place ``amount`` on one layout spot and return the spot's new total."""
        if amount <= 0:
            raise InvalidBetError("Bet amount must be positive")
        category, key = self._normalize(category, key)
        self._place_group([(category, key, 1)], amount)
        return self.ledger.amount(category, key)

    def remove_bet(self, category: BetCategory | str, key, amount: float) -> bool:
        self._require_betting()
        category, key = self._normalize(category, key)
        return self.ledger.remove_bet(category, key, amount)

    def undo_last_bet(self) -> bool:
        """Take back the most recent placement; call bets come off as a group."""
        self._require_betting()
        if not self._placements:
            return False
        for category, key, amount in self._placements.pop():
            self.ledger.remove_bet(category, key, amount)
        return True

    def clear_bets(self) -> None:
        self.ledger.clear_all()
        self._placements.clear()

    def total_wagered(self) -> float:
        return self.ledger.total_wagered()

    def validate_bets(self) -> List[str]:
        return self.ledger.validate(self.config.min_bet, self.config.max_bet)

    def place_call_bet(self, call: CallBet | str, chip_value: float) -> float:
        if self.wheel.variant is not Variant.EUROPEAN:
            raise InvalidBetError("Call bets are only offered on the European wheel")
        placements = call_bet_placements(call)
        self._place_group(placements, chip_value)
        LOGGER.debug("Placed %s at %g per unit", CallBet(call).value, chip_value)
        return self.ledger.total_wagered()

    def place_neighbour_bet(
        self, pocket: Pocket | int | str, chip_value: float, neighbours: int = DEFAULT_NEIGHBOURS
    ) -> float:
        self._place_group(neighbour_placements(pocket, self.wheel, neighbours), chip_value)
        return self.ledger.total_wagered()

    def repeat_last_bets(self) -> bool:
        """Replace the current bets with the previous spin's bets if affordable."""
        self._require_betting()
        if self.last_bets is None:
            return False
        total = self.last_bets.total_wagered()
        if total > self.bankroll:
            LOGGER.warning("Cannot afford to repeat bets of %g", total)
            raise InsufficientBankrollError(total, self.bankroll)
        self.ledger = self.last_bets.copy()
        self._placements = [list(self.ledger.items())]
        return True

    # ------------------------------------------------------------------
    # Spinning
    # ------------------------------------------------------------------
    def resolve(self, pocket: Pocket | int | str) -> Resolution:
        """Settle the current bets against ``pocket`` without changing any state."""
        return resolve(pocket, self.ledger, self.wheel)

    def spin(self) -> SpinResult:
        self._require_betting()
        if not self.ledger.has_bets():
            raise InvalidActionError("Place a bet before spinning")
        errors = self.validate_bets()
        if errors:
            LOGGER.warning("Spin rejected: %s", "; ".join(errors))
            raise InvalidBetError("; ".join(errors))
        self.last_bets = self.ledger.copy()
        self.phase = RoulettePhase.SPINNING
        outcome = spin(self.wheel.sequence, self.rng)
        resolution = self.resolve(outcome.pocket)
        self.history.record(outcome.pocket, resolution.total_wagered, resolution.total_winnings)
        self.bankroll += resolution.net_result
        self.clear_bets()
        self.phase = RoulettePhase.GAME_OVER if self.is_bankrupt else RoulettePhase.RESULT
        LOGGER.info(
            "Spin %s: wagered %g, returned %g, bankroll %g",
            outcome.pocket,
            resolution.total_wagered,
            resolution.total_winnings,
            self.bankroll,
        )
        return SpinResult(outcome=outcome, resolution=resolution, bankroll=self.bankroll)

    def simulate(self, count: int, chunk_size: int = SIMULATION_CHUNK) -> int:
        """Add ``count`` unwagered spins to the history; the bankroll is untouched."""
        self._require_betting()
        return simulate_spins(self.history, count, chunk_size, self.rng)


__all__ = ["RouletteConfig", "RoulettePhase", "SpinResult", "RouletteSession"]
