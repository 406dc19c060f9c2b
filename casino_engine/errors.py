"""Exception taxonomy shared by the blackjack, roulette and baccarat engines."""

from __future__ import annotations


class CasinoEngineError(Exception):
    """Base class for every recoverable engine error."""


class ConfigurationError(CasinoEngineError, ValueError):
    """Raised when a config dataclass holds values the engine cannot use."""


class DepletedRankError(CasinoEngineError):
    """A card was dealt for a rank that has no cards left in the shoe."""

    def __init__(self, rank: object, capacity: int) -> None:
        super().__init__(f"No {rank} cards remain (shoe holds {capacity})")
        self.rank = rank
        self.capacity = capacity


class InvalidUndoError(CasinoEngineError):
    """Undo was requested with nothing to undo."""


class InvalidActionError(CasinoEngineError):
    """A player or dealer action is not legal in the current state."""


class InvalidBetError(CasinoEngineError, ValueError):
    """Bet amount or bet key is malformed."""


class InsufficientBankrollError(CasinoEngineError):
    """The bankroll cannot cover the requested wager."""

    def __init__(self, required: float, available: float) -> None:
        super().__init__(
            f"Wager of {required:g} exceeds available bankroll of {available:g}"
        )
        self.required = required
        self.available = available


__all__ = [
    "CasinoEngineError",
    "ConfigurationError",
    "DepletedRankError",
    "InvalidUndoError",
    "InvalidActionError",
    "InvalidBetError",
    "InsufficientBankrollError",
]
