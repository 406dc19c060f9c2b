"""Seats, dealer hand and the table that owns them."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from ..errors import ConfigurationError
from .cards import Rank
from .hand import HandValue, Outcome, evaluate

MAX_MINE_SEATS = 3


class SeatStatus(enum.Enum):
    EMPTY = "empty"
    OCCUPIED = "occupied"
    MINE = "mine"


@dataclass
class Seat:
    index: int
    status: SeatStatus = SeatStatus.EMPTY
    cards: List[Rank] = field(default_factory=list)
    is_standing: bool = False
    is_busted: bool = False
    is_doubling: bool = False
    is_surrendered: bool = False
    bet: float = 0.0
    last_action: Optional[str] = None
    outcome: Optional[Outcome] = None

    @property
    def number(self) -> int:
        return self.index + 1

    @property
    def is_active(self) -> bool:
        return self.status is not SeatStatus.EMPTY

    @property
    def hand(self) -> HandValue:
        return evaluate(self.cards)

    @property
    def is_finished(self) -> bool:
        return self.is_standing or self.is_busted

    def clear_hand(self) -> None:
        self.cards = []
        self.is_standing = False
        self.is_busted = False
        self.is_doubling = False
        self.is_surrendered = False
        self.last_action = None
        self.outcome = None

    def clone(self) -> "Seat":
        return Seat(
            index=self.index,
            status=self.status,
            cards=list(self.cards),
            is_standing=self.is_standing,
            is_busted=self.is_busted,
            is_doubling=self.is_doubling,
            is_surrendered=self.is_surrendered,
            bet=self.bet,
            last_action=self.last_action,
            outcome=self.outcome,
        )


@dataclass
class DealerHand:
    cards: List[Rank] = field(default_factory=list)
    hole_card: Optional[Rank] = None
    hole_revealed: bool = False

    @property
    def visible_hand(self) -> HandValue:
        return evaluate(self.cards)

    @property
    def full_hand(self) -> HandValue:
        cards = list(self.cards)
        if self.hole_card is not None:
            cards.insert(0, self.hole_card)
        return evaluate(cards)

    @property
    def upcard(self) -> Optional[Rank]:
        position = 1 if self.hole_revealed else 0
        return self.cards[position] if len(self.cards) > position else None

    def reveal_hole_card(self) -> None:
        if self.hole_card is not None:
            self.cards.insert(0, self.hole_card)
            self.hole_card = None
            self.hole_revealed = True

    def clone(self) -> "DealerHand":
        return DealerHand(
            cards=list(self.cards),
            hole_card=self.hole_card,
            hole_revealed=self.hole_revealed,
        )


@dataclass
class Table:
    seats: List[Seat]
    dealer: DealerHand = field(default_factory=DealerHand)

    @classmethod
    def create(
        cls, num_seats: int, statuses: Optional[Sequence[SeatStatus | str]] = None
    ) -> "Table":
        if num_seats <= 0:
            raise ConfigurationError("A table needs at least one seat")
        statuses = list(statuses or [])
        if len(statuses) > num_seats:
            raise ConfigurationError("More seat statuses than seats")
        statuses += [SeatStatus.EMPTY] * (num_seats - len(statuses))
        seats = [Seat(index=i, status=SeatStatus(s)) for i, s in enumerate(statuses)]
        if sum(1 for s in seats if s.status is SeatStatus.MINE) > MAX_MINE_SEATS:
            raise ConfigurationError(f"At most {MAX_MINE_SEATS} seats can be yours")
        return cls(seats=seats)

    def active_indices(self) -> List[int]:
        return [seat.index for seat in self.seats if seat.is_active]

    def mine_seats(self) -> List[Seat]:
        return [seat for seat in self.seats if seat.status is SeatStatus.MINE]

    def cycle_seat_status(self, index: int) -> SeatStatus:
        """Toggle empty -> occupied -> mine -> empty."""
        seat = self.seats[index]
        if seat.status is SeatStatus.EMPTY:
            seat.status = SeatStatus.OCCUPIED
        elif seat.status is SeatStatus.OCCUPIED:
            if len(self.mine_seats()) < MAX_MINE_SEATS:
                seat.status = SeatStatus.MINE
            else:
                seat.status = SeatStatus.EMPTY
        else:
            seat.status = SeatStatus.EMPTY
            seat.bet = 0.0
        return seat.status

    def clear_hands(self) -> None:
        for seat in self.seats:
            seat.clear_hand()
        self.dealer = DealerHand()

    def clone(self) -> "Table":
        return Table(
            seats=[seat.clone() for seat in self.seats], dealer=self.dealer.clone()
        )


__all__ = ["MAX_MINE_SEATS", "SeatStatus", "Seat", "DealerHand", "Table"]
