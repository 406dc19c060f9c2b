"""Blackjack shoe tracking, hand evaluation and deal sequencing."""

from .cards import HI_LO_TAGS, CountState, Rank
from .counting import ShoeTracker
from .game import Action, BlackjackConfig, BlackjackSession, DealerRule, DealResult
from .hand import HandValue, Outcome, evaluate
from .practice import CountChallenge
from .sequencer import DealerStyle, DealSequencer, DealTarget, Phase
from .table import Seat, SeatStatus, Table

__all__ = [
    "HI_LO_TAGS",
    "CountState",
    "Rank",
    "ShoeTracker",
    "Action",
    "BlackjackConfig",
    "BlackjackSession",
    "DealerRule",
    "DealResult",
    "HandValue",
    "Outcome",
    "evaluate",
    "CountChallenge",
    "DealerStyle",
    "DealSequencer",
    "DealTarget",
    "Phase",
    "Seat",
    "SeatStatus",
    "Table",
]
