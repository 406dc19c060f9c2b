"""Finite-state machine that orders card delivery around the table.

A round moves through ``DEALING -> PLAYER_TURN -> DEALER_TURN -> RESOLUTION``.
``DEALING`` walks ordered steps: one card to every active seat, a card to the
dealer (the hole card in the American style, the upcard otherwise), a second
card to every seat and, American style only, the dealer upcard. Seats receive
their initial cards in ascending index order and act in descending order.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple


class Phase(enum.Enum):
    WAITING = "waiting"
    DEALING = "dealing"
    PLAYER_TURN = "player_turn"
    DEALER_TURN = "dealer_turn"
    RESOLUTION = "resolution"


class DealStep(enum.Enum):
    SEATS_FIRST = "seats_first"
    DEALER_FIRST = "dealer_first"
    SEATS_SECOND = "seats_second"
    DEALER_SECOND = "dealer_second"

    @property
    def is_dealer(self) -> bool:
        return self in (DealStep.DEALER_FIRST, DealStep.DEALER_SECOND)


class DealerStyle(enum.Enum):
    AMERICAN = "american"
    EUROPEAN = "european"

    @property
    def deal_steps(self) -> Tuple[DealStep, ...]:
        if self is DealerStyle.AMERICAN:
            return tuple(DealStep)
        return (DealStep.SEATS_FIRST, DealStep.DEALER_FIRST, DealStep.SEATS_SECOND)


@dataclass(frozen=True)
class DealTarget:
    """Where the next card goes: a seat index, or the dealer when ``None``."""

    seat_index: Optional[int] = None
    hole: bool = False

    @property
    def is_dealer(self) -> bool:
        return self.seat_index is None

    def describe(self) -> str:
        if self.seat_index is not None:
            return f"Seat {self.seat_index + 1}"
        return "Dealer (hole)" if self.hole else "Dealer"


@dataclass
class DealSequencer:
    style: DealerStyle = DealerStyle.AMERICAN
    phase: Phase = Phase.WAITING
    active_seat_indices: List[int] = field(default_factory=list)
    deal_step_index: int = 0
    deal_index: int = 0
    turn_order: List[int] = field(default_factory=list)
    current_player_index: int = 0

    def reset(self) -> None:
        self.phase = Phase.WAITING
        self.active_seat_indices = []
        self.deal_step_index = 0
        self.deal_index = 0
        self.turn_order = []
        self.current_player_index = 0

    def start_round(self, active_indices: Sequence[int]) -> None:
        self.reset()
        self.active_seat_indices = sorted(active_indices)
        self.phase = Phase.DEALING
        self._skip_empty_steps()

    # Dealing ---------------------------------------------------------------
    @property
    def deal_step(self) -> Optional[DealStep]:
        steps = self.style.deal_steps
        if self.phase is not Phase.DEALING or self.deal_step_index >= len(steps):
            return None
        return steps[self.deal_step_index]

    def _step_length(self, step: DealStep) -> int:
        return 1 if step.is_dealer else len(self.active_seat_indices)

    def _skip_empty_steps(self) -> None:
        steps = self.style.deal_steps
        while self.phase is Phase.DEALING:
            if self.deal_step_index >= len(steps):
                self.begin_player_turn()
                return
            if self.deal_index < self._step_length(steps[self.deal_step_index]):
                return
            self.deal_step_index += 1
            self.deal_index = 0

    def target(self) -> Optional[DealTarget]:
        if self.phase is Phase.DEALING:
            step = self.deal_step
            if step is DealStep.DEALER_FIRST:
                return DealTarget(None, hole=self.style is DealerStyle.AMERICAN)
            if step is DealStep.DEALER_SECOND:
                return DealTarget(None)
            return DealTarget(self.active_seat_indices[self.deal_index])
        if self.phase is Phase.PLAYER_TURN:
            return DealTarget(self.current_seat)
        if self.phase is Phase.DEALER_TURN:
            return DealTarget(None)
        return None

    def advance(self) -> Phase:
        """Move past the card just dealt during ``DEALING``."""
        if self.phase is not Phase.DEALING:
            raise RuntimeError(f"advance() is only valid while dealing, not {self.phase.value}")
        self.deal_index += 1
        self._skip_empty_steps()
        return self.phase

    def initial_card_count(self) -> int:
        return sum(self._step_length(step) for step in self.style.deal_steps)

    # Player and dealer turns -----------------------------------------------
    def begin_player_turn(self) -> None:
        self.phase = Phase.PLAYER_TURN
        self.turn_order = sorted(self.active_seat_indices, reverse=True)
        self.current_player_index = 0
        if not self.turn_order:
            self.phase = Phase.DEALER_TURN

    @property
    def current_seat(self) -> Optional[int]:
        if self.phase is not Phase.PLAYER_TURN:
            return None
        if self.current_player_index >= len(self.turn_order):
            return None
        return self.turn_order[self.current_player_index]

    def next_seat(self) -> Optional[int]:
        if self.phase is not Phase.PLAYER_TURN:
            raise RuntimeError("next_seat() is only valid during the player turn")
        self.current_player_index += 1
        if self.current_player_index >= len(self.turn_order):
            self.phase = Phase.DEALER_TURN
        return self.current_seat

    def finish(self) -> None:
        self.phase = Phase.RESOLUTION

    def clone(self) -> "DealSequencer":
        return DealSequencer(
            style=self.style,
            phase=self.phase,
            active_seat_indices=list(self.active_seat_indices),
            deal_step_index=self.deal_step_index,
            deal_index=self.deal_index,
            turn_order=list(self.turn_order),
            current_player_index=self.current_player_index,
        )


__all__ = ["Phase", "DealStep", "DealerStyle", "DealTarget", "DealSequencer"]
