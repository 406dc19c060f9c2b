import pytest

from casino_engine.blackjack.cards import Rank
from casino_engine.blackjack.table import DealerHand, SeatStatus, Table
from casino_engine.errors import ConfigurationError


def test_create_pads_statuses_with_empty_seats():
    table = Table.create(5, ["occupied", "mine"])
    assert [seat.status for seat in table.seats] == [
        SeatStatus.OCCUPIED,
        SeatStatus.MINE,
        SeatStatus.EMPTY,
        SeatStatus.EMPTY,
        SeatStatus.EMPTY,
    ]
    assert table.active_indices() == [0, 1]
    assert [seat.number for seat in table.mine_seats()] == [2]


def test_create_validation():
    with pytest.raises(ConfigurationError):
        Table.create(0)
    with pytest.raises(ConfigurationError):
        Table.create(2, ["mine", "mine", "mine"])
    with pytest.raises(ConfigurationError):
        Table.create(5, ["mine"] * 4)


def test_cycle_seat_status_caps_mine_seats():
    table = Table.create(5, ["mine", "mine", "mine", "empty", "empty"])
    assert table.cycle_seat_status(3) is SeatStatus.OCCUPIED
    # a fourth seat cannot become "mine" and falls back to empty
    assert table.cycle_seat_status(3) is SeatStatus.EMPTY

    table.seats[0].bet = 50.0
    assert table.cycle_seat_status(0) is SeatStatus.EMPTY
    assert table.seats[0].bet == 0.0
    assert table.cycle_seat_status(4) is SeatStatus.OCCUPIED
    assert table.cycle_seat_status(4) is SeatStatus.MINE


def test_dealer_hole_card_reveal():
    dealer = DealerHand()
    dealer.hole_card = Rank.TEN
    dealer.cards.append(Rank.SIX)
    assert dealer.upcard is Rank.SIX
    assert dealer.visible_hand.total == 6
    assert dealer.full_hand.total == 16

    dealer.reveal_hole_card()
    assert dealer.hole_card is None
    assert dealer.cards == [Rank.TEN, Rank.SIX]
    assert dealer.upcard is Rank.SIX
    assert dealer.visible_hand.total == 16


def test_clear_hands_keeps_bets():
    table = Table.create(3, ["mine"])
    seat = table.seats[0]
    seat.bet = 25.0
    seat.cards = [Rank.TEN, Rank.NINE]
    seat.is_standing = True
    table.dealer.cards.append(Rank.ACE)

    snapshot = table.clone()
    table.clear_hands()

    assert seat.cards == []
    assert not seat.is_finished
    assert seat.bet == 25.0
    assert table.dealer.cards == []
    assert snapshot.seats[0].cards == [Rank.TEN, Rank.NINE]
    assert snapshot.dealer.cards == [Rank.ACE]
