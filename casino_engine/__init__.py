"""Card-counting and roulette trainer engines."""

from .baccarat import BaccaratCounter
from .blackjack import BlackjackConfig, BlackjackSession, ShoeTracker
from .errors import (
    CasinoEngineError,
    ConfigurationError,
    DepletedRankError,
    InsufficientBankrollError,
    InvalidActionError,
    InvalidBetError,
    InvalidUndoError,
)
from .roulette import RouletteConfig, RouletteSession

__version__ = "0.1.0"

__all__ = [
    "BaccaratCounter",
    "BlackjackConfig",
    "BlackjackSession",
    "ShoeTracker",
    "CasinoEngineError",
    "ConfigurationError",
    "DepletedRankError",
    "InsufficientBankrollError",
    "InvalidActionError",
    "InvalidBetError",
    "InvalidUndoError",
    "RouletteConfig",
    "RouletteSession",
]
