"""Blackjack shoe-tracking session: the state object behind every trainer mode."""

from __future__ import annotations

import dataclasses
import enum
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from ..errors import (
    ConfigurationError,
    InsufficientBankrollError,
    InvalidActionError,
    InvalidBetError,
    InvalidUndoError,
)
from .betting import BetAdvice, recommended_bet
from .cards import HI_LO_TAGS, CountState, Rank
from .counting import ShoeTracker
from .hand import HandValue, Outcome, compare
from .sequencer import DealerStyle, DealSequencer, DealTarget, Phase
from .strategy import BasicStrategyDecision, recommend
from .table import Seat, SeatStatus, Table

LOGGER = logging.getLogger(__name__)

NATURAL_PAYOUT = 1.5


class Action(enum.Enum):
    HIT = "hit"
    STAND = "stand"
    DOUBLE = "double"
    SPLIT = "split"


class DealerRule(enum.Enum):
    S17 = "S17"
    H17 = "H17"


@dataclass
class BlackjackConfig:
    decks: int = 6
    dealer_style: DealerStyle = DealerStyle.AMERICAN
    dealer_rule: DealerRule = DealerRule.S17
    surrender_allowed: bool = True
    min_bet: float = 25.0
    max_bet: float = 300.0
    bankroll: float = 1600.0
    num_seats: int = 7
    # OCCUPIED seats stand on their own when basic strategy says stand
    auto_play_occupied: bool = False

    def __post_init__(self) -> None:
        self.dealer_style = DealerStyle(self.dealer_style)
        self.dealer_rule = DealerRule(self.dealer_rule)
        if self.decks <= 0:
            raise ConfigurationError("decks must be positive")
        if self.num_seats <= 0:
            raise ConfigurationError("num_seats must be positive")
        if self.min_bet <= 0 or self.max_bet < self.min_bet:
            raise ConfigurationError("Bet limits must satisfy 0 < min_bet <= max_bet")
        if self.bankroll < 0:
            raise ConfigurationError("bankroll cannot be negative")

    def to_dict(self) -> Dict[str, object]:
        data = dataclasses.asdict(self)
        data["dealer_style"] = self.dealer_style.value
        data["dealer_rule"] = self.dealer_rule.value
        return data


@dataclass(frozen=True)
class DealRecord:
    """One dealt card plus everything needed to take it back."""

    rank: Rank
    target: DealTarget
    table: Table
    sequencer: DealSequencer
    bankroll: float
    hands_recorded: int


@dataclass(frozen=True)
class DealResult:
    count: CountState
    true_count: float
    hand: HandValue
    target: DealTarget
    phase: Phase


@dataclass
class HandRecord:
    round_number: int
    seat_number: int
    cards: List[str]
    dealer_cards: List[str]
    outcome: str
    bet: float
    doubled: bool
    profit: float
    running_count: int
    true_count: float

    def to_dict(self) -> Dict[str, object]:
        return dataclasses.asdict(self)


class BlackjackSession:
    """Shoe, table and round sequencing for a single game.

    Every mutating call is atomic: a dealt card updates the count, the target
    hand and the sequencer together, and ``undo_last_card`` restores all three.
    """

    def __init__(
        self,
        config: Optional[BlackjackConfig] = None,
        statuses: Optional[Sequence[SeatStatus | str]] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self.config = config or BlackjackConfig()
        self.clock = clock or datetime.now
        self.tracker = ShoeTracker(self.config.decks)
        self.table = Table.create(self.config.num_seats, statuses)
        self.sequencer = DealSequencer(self.config.dealer_style)
        self.history: List[DealRecord] = []
        self.shoe_log: List[Rank] = []
        self.hands: List[HandRecord] = []
        self.starting_bankroll = float(self.config.bankroll)
        self.bankroll = float(self.config.bankroll)
        self.round_number = 0
        self.started_at = self.clock()

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------
    @property
    def phase(self) -> Phase:
        return self.sequencer.phase

    @property
    def count_state(self) -> CountState:
        return self.tracker.count_state()

    @property
    def running_count(self) -> int:
        return self.tracker.running_count

    @property
    def true_count(self) -> float:
        return self.tracker.true_count()

    @property
    def committed_bankroll(self) -> float:
        return sum(self._stake(seat) for seat in self.table.mine_seats())

    def next_target(self) -> Optional[DealTarget]:
        return self.sequencer.target()

    # ------------------------------------------------------------------
    # Rounds and shoes
    # ------------------------------------------------------------------
    def start_new_round(self) -> Phase:
        self.table.clear_hands()
        self.history.clear()
        self.round_number += 1
        self.sequencer.start_round(self.table.active_indices())
        LOGGER.debug(
            "Round %d started with seats %s",
            self.round_number,
            [i + 1 for i in self.sequencer.active_seat_indices],
        )
        if self.sequencer.phase is not Phase.DEALING:
            self._advance_turn()
        return self.sequencer.phase

    def start_new_shoe(self) -> None:
        self.tracker.reset()
        self.table.clear_hands()
        self.sequencer.reset()
        self.history.clear()
        self.shoe_log.clear()
        LOGGER.info("New %d-deck shoe", self.config.decks)

    # ------------------------------------------------------------------
    # Dealing
    # ------------------------------------------------------------------
    def deal_card(self, rank: Rank | str) -> DealResult:
        rank = Rank.parse(rank)
        target = self.sequencer.target()
        if target is None:
            raise InvalidActionError(
                f"No card can be dealt during {self.sequencer.phase.value}"
            )
        record = DealRecord(
            rank=rank,
            target=target,
            table=self.table.clone(),
            sequencer=self.sequencer.clone(),
            bankroll=self.bankroll,
            hands_recorded=len(self.hands),
        )
        self.tracker.deal_card(rank)
        self.history.append(record)
        self.shoe_log.append(rank)

        phase = self.sequencer.phase
        if phase is Phase.DEALING:
            self._place_initial_card(rank, target)
            if self.sequencer.advance() is not Phase.DEALING:
                self._advance_turn()
        elif phase is Phase.PLAYER_TURN:
            self._deal_to_player(rank, target.seat_index)
        else:
            self._deal_to_dealer(rank)

        LOGGER.debug(
            "Dealt %s to %s (RC %+d, phase %s)",
            rank,
            target.describe(),
            self.tracker.running_count,
            self.sequencer.phase.value,
        )
        return self._result(target)

    def undo_last_card(self) -> DealResult:
        if not self.history:
            raise InvalidUndoError("Nothing to undo")
        record = self.history[-1]
        self.tracker.undo_card(record.rank)
        self.history.pop()
        self.shoe_log.pop()
        self.table = record.table
        self.sequencer = record.sequencer
        self.bankroll = record.bankroll
        del self.hands[record.hands_recorded :]
        LOGGER.debug("Undid %s from %s", record.rank, record.target.describe())
        return self._result(record.target)

    def _place_initial_card(self, rank: Rank, target: DealTarget) -> None:
        if target.seat_index is not None:
            self.table.seats[target.seat_index].cards.append(rank)
        elif target.hole:
            self.table.dealer.hole_card = rank
        else:
            self.table.dealer.cards.append(rank)

    def _deal_to_player(self, rank: Rank, seat_index: int) -> None:
        seat = self.table.seats[seat_index]
        seat.cards.append(rank)
        value = seat.hand
        if value.is_bust:
            seat.is_busted = True
            seat.last_action = "bust"
        elif seat.is_doubling or value.total == 21:
            seat.is_standing = True
        self._advance_turn()

    def _deal_to_dealer(self, rank: Rank) -> None:
        self.table.dealer.cards.append(rank)
        if self.table.dealer.full_hand.is_bust:
            LOGGER.debug("Dealer busts")
            self._resolve_round()

    def _result(self, target: DealTarget) -> DealResult:
        if target.seat_index is not None:
            hand = self.table.seats[target.seat_index].hand
        else:
            hand = self.table.dealer.full_hand
        return DealResult(
            count=self.tracker.count_state(),
            true_count=self.tracker.true_count(),
            hand=hand,
            target=target,
            phase=self.sequencer.phase,
        )

    # ------------------------------------------------------------------
    # Player turn
    # ------------------------------------------------------------------
    def _advance_turn(self) -> None:
        while self.sequencer.phase is Phase.PLAYER_TURN:
            index = self.sequencer.current_seat
            seat = self.table.seats[index]
            if not seat.is_finished and seat.hand.total == 21:
                seat.is_standing = True
            if not seat.is_finished and self._auto_plays(seat):
                self._play_occupied_seat(seat)
            if not seat.is_finished:
                return
            self.sequencer.next_seat()
        if self.sequencer.phase is Phase.DEALER_TURN:
            self.table.dealer.reveal_hole_card()
            LOGGER.debug("Dealer turn; dealer shows %s", self.table.dealer.visible_hand.describe())

    def _auto_plays(self, seat: Seat) -> bool:
        return (
            self.config.auto_play_occupied
            and seat.status is SeatStatus.OCCUPIED
            and self.table.dealer.upcard is not None
        )

    def _play_occupied_seat(self, seat: Seat) -> None:
        """Stand the seat on a basic-strategy stand; anything else waits for a card.

        Doubles and splits are played as plain hits, so the seat is asked
        again after every card it receives.
        """
        decision = recommend(
            seat.cards,
            self.table.dealer.upcard,
            can_double=len(seat.cards) == 2,
        )
        if decision.action == "stand":
            seat.is_standing = True
            seat.last_action = "stand"
        else:
            seat.last_action = "double" if decision.action == "double" else "hit"
        LOGGER.debug("Seat %d auto-plays %s", seat.number, seat.last_action)

    def _acting_seat(self, seat_index: int) -> Seat:
        if self.sequencer.phase is not Phase.PLAYER_TURN:
            raise InvalidActionError(
                f"Player actions are not allowed during {self.sequencer.phase.value}"
            )
        if not 0 <= seat_index < len(self.table.seats):
            raise InvalidActionError(f"There is no seat {seat_index + 1}")
        seat = self.table.seats[seat_index]
        if seat.is_finished:
            raise InvalidActionError(f"Seat {seat.number} has already finished")
        if seat_index != self.sequencer.current_seat:
            raise InvalidActionError(f"It is not seat {seat.number}'s turn")
        if seat.is_doubling:
            raise InvalidActionError(
                f"Seat {seat.number} has doubled and must take its one card"
            )
        return seat

    def player_action(self, seat_index: int, action: Action | str) -> Phase:
        action = Action(action)
        if action is Action.SPLIT:
            raise InvalidActionError("Splitting is not implemented")
        seat = self._acting_seat(seat_index)
        if action is Action.DOUBLE:
            if len(seat.cards) != 2:
                raise InvalidActionError("Double is only allowed on the first two cards")
            if seat.status is SeatStatus.MINE and seat.bet > 0:
                required = self.committed_bankroll + seat.bet
                if required > self.bankroll:
                    raise InsufficientBankrollError(required, self.bankroll)
            seat.is_doubling = True
        elif action is Action.STAND:
            seat.is_standing = True
        seat.last_action = action.value
        if action is Action.STAND:
            self._advance_turn()
        return self.sequencer.phase

    def surrender(self, seat_index: int) -> Phase:
        if not self.config.surrender_allowed:
            raise InvalidActionError("Surrender is not offered at this table")
        seat = self._acting_seat(seat_index)
        if len(seat.cards) != 2:
            raise InvalidActionError("Surrender is only allowed on the first two cards")
        seat.is_surrendered = True
        seat.is_standing = True
        seat.last_action = "surrender"
        self._advance_turn()
        return self.sequencer.phase

    # ------------------------------------------------------------------
    # Dealer turn and settlement
    # ------------------------------------------------------------------
    def dealer_done(self) -> List[Outcome]:
        if self.sequencer.phase is not Phase.DEALER_TURN:
            raise InvalidActionError(
                f"The dealer cannot finish during {self.sequencer.phase.value}"
            )
        return self._resolve_round()

    def dealer_should_hit(self) -> bool:
        """Advisory only: what the configured S17/H17 rule says the dealer does."""
        value = self.table.dealer.full_hand
        if value.total < 17:
            return True
        return (
            value.total == 17
            and value.is_soft
            and self.config.dealer_rule is DealerRule.H17
        )

    @staticmethod
    def _stake(seat: Seat) -> float:
        return seat.bet * 2 if seat.is_doubling else seat.bet

    def _profit(self, seat: Seat, outcome: Outcome) -> float:
        stake = self._stake(seat)
        if outcome is Outcome.BLACKJACK:
            return seat.bet * NATURAL_PAYOUT
        if outcome in (Outcome.WIN, Outcome.DEALER_BUST):
            return stake
        if outcome is Outcome.PUSH:
            return 0.0
        if outcome is Outcome.SURRENDER:
            return -0.5 * seat.bet
        return -stake

    def _resolve_round(self) -> List[Outcome]:
        self.table.dealer.reveal_hole_card()
        self.sequencer.finish()
        dealer = self.table.dealer
        dealer_value = dealer.full_hand
        outcomes: List[Outcome] = []
        for index in self.sequencer.active_seat_indices:
            seat = self.table.seats[index]
            if seat.is_surrendered:
                outcome = Outcome.SURRENDER
            else:
                outcome = compare(seat.hand, dealer_value)
            seat.outcome = outcome
            outcomes.append(outcome)
            if seat.status is SeatStatus.MINE and seat.bet > 0:
                profit = self._profit(seat, outcome)
                self.bankroll += profit
                self.hands.append(
                    HandRecord(
                        round_number=self.round_number,
                        seat_number=seat.number,
                        cards=[str(card) for card in seat.cards],
                        dealer_cards=[str(card) for card in dealer.cards],
                        outcome=outcome.value,
                        bet=self._stake(seat),
                        doubled=seat.is_doubling,
                        profit=profit,
                        running_count=self.tracker.running_count,
                        true_count=round(self.tracker.true_count(), 2),
                    )
                )
        LOGGER.info(
            "Round %d resolved: dealer %s, outcomes %s",
            self.round_number,
            dealer_value.describe(),
            [o.value for o in outcomes],
        )
        return outcomes

    # ------------------------------------------------------------------
    # Bets and advice
    # ------------------------------------------------------------------
    def place_seat_bet(self, seat_index: int, amount: float) -> float:
        if not 0 <= seat_index < len(self.table.seats):
            raise InvalidBetError(f"There is no seat {seat_index + 1}")
        seat = self.table.seats[seat_index]
        if seat.status is not SeatStatus.MINE:
            raise InvalidBetError(f"Seat {seat.number} is not yours")
        if amount <= 0:
            raise InvalidBetError("Bet amount must be positive")
        if not self.config.min_bet <= amount <= self.config.max_bet:
            raise InvalidBetError(
                f"Bet must be between {self.config.min_bet:g} and {self.config.max_bet:g}"
            )
        between_rounds = self.sequencer.phase in (Phase.WAITING, Phase.RESOLUTION)
        if not between_rounds and not (
            self.sequencer.phase is Phase.DEALING and not self.history
        ):
            raise InvalidActionError("Bets can only change between rounds")
        required = self.committed_bankroll - self._stake(seat) + amount
        if required > self.bankroll:
            LOGGER.warning("Bet of %s on seat %d exceeds bankroll", amount, seat.number)
            raise InsufficientBankrollError(required, self.bankroll)
        seat.bet = float(amount)
        return seat.bet

    def recommendation(self, seat_index: int) -> BasicStrategyDecision:
        seat = self.table.seats[seat_index]
        upcard = self.table.dealer.upcard
        if upcard is None or not seat.cards:
            raise InvalidActionError("Advice needs the dealer upcard and a player hand")
        return recommend(
            seat.cards,
            upcard,
            can_double=len(seat.cards) == 2,
            can_split=False,
            allow_surrender=self.config.surrender_allowed,
        )

    def bet_advice(self) -> BetAdvice:
        return recommended_bet(
            self.tracker.true_count(),
            self.config.min_bet,
            self.config.max_bet,
            self.bankroll,
        )

    def count_series(self) -> np.ndarray:
        """Running count after each card of the current shoe."""
        tags = np.array([HI_LO_TAGS[rank] for rank in self.shoe_log], dtype=np.int64)
        return np.cumsum(tags)

    # ------------------------------------------------------------------
    # Session summary
    # ------------------------------------------------------------------
    def summary(self, now: Optional[datetime] = None) -> Dict[str, object]:
        now = now or self.clock()
        return {
            "metadata": {
                "date": now.isoformat(),
                "duration": (now - self.started_at).total_seconds(),
                "config": self.config.to_dict(),
            },
            "financial": {
                "startingBankroll": self.starting_bankroll,
                "endingBankroll": self.bankroll,
                "profitLoss": self.bankroll - self.starting_bankroll,
            },
            "counting": {
                "cardsDealt": self.tracker.cards_dealt,
                "finalRunningCount": self.tracker.running_count,
            },
            "hands": [record.to_dict() for record in self.hands],
        }


__all__ = [
    "Action",
    "DealerRule",
    "BlackjackConfig",
    "DealRecord",
    "DealResult",
    "HandRecord",
    "BlackjackSession",
]
