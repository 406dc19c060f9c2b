from datetime import datetime

import numpy as np
import pytest

from casino_engine.blackjack.cards import CountState, Rank
from casino_engine.blackjack.game import BlackjackConfig, BlackjackSession
from casino_engine.blackjack.hand import Outcome
from casino_engine.blackjack.sequencer import DealerStyle, DealTarget, Phase
from casino_engine.errors import (
    ConfigurationError,
    InsufficientBankrollError,
    InvalidActionError,
    InvalidBetError,
    InvalidUndoError,
)

START = datetime(2024, 1, 1, 12, 0, 0)


def make_session(statuses=("mine", "occupied"), **overrides) -> BlackjackSession:
    config = BlackjackConfig(**overrides)
    return BlackjackSession(config, statuses=list(statuses), clock=lambda: START)


def deal(session: BlackjackSession, cards: str):
    result = None
    for rank in cards.split():
        result = session.deal_card(rank)
    return result


def test_full_round_player_wins():
    session = make_session()
    session.place_seat_bet(0, 50)
    assert session.start_new_round() is Phase.DEALING
    assert session.next_target() == DealTarget(0)

    # seat 1, seat 2, hole, seat 1, seat 2, upcard
    result = deal(session, "10 9 10 9 7 7")
    assert result.phase is Phase.PLAYER_TURN
    assert result.target == DealTarget(None)
    assert session.sequencer.current_seat == 1
    assert session.table.dealer.upcard is Rank.SEVEN
    assert session.recommendation(1).action == "hit"

    session.player_action(1, "stand")
    assert session.sequencer.current_seat == 0
    assert session.player_action(0, "stand") is Phase.DEALER_TURN
    assert session.table.dealer.cards == [Rank.TEN, Rank.SEVEN]
    assert not session.dealer_should_hit()

    outcomes = session.dealer_done()
    assert outcomes == [Outcome.WIN, Outcome.LOSE]
    assert session.phase is Phase.RESOLUTION
    assert np.isclose(session.bankroll, 1650.0)
    assert len(session.hands) == 1
    assert session.hands[0].outcome == "win"
    assert session.hands[0].seat_number == 1


def test_natural_pays_three_to_two_and_auto_stands():
    session = make_session()
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "A 9 9 K 7 8")
    assert session.table.seats[0].hand.is_blackjack
    assert session.sequencer.current_seat == 1

    assert session.player_action(1, "stand") is Phase.DEALER_TURN
    assert session.table.seats[0].is_standing
    session.dealer_done()
    assert session.table.seats[0].outcome is Outcome.BLACKJACK
    assert np.isclose(session.bankroll, 1675.0)


def test_dealer_bust_resolves_round_and_undo_reverses_it():
    session = make_session()
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "10 10 10 8 7 6")
    session.player_action(1, "stand")
    session.player_action(0, "stand")
    assert session.dealer_should_hit()

    result = session.deal_card("K")
    assert result.hand.is_bust
    assert session.phase is Phase.RESOLUTION
    assert session.table.seats[0].outcome is Outcome.DEALER_BUST
    assert np.isclose(session.bankroll, 1650.0)
    with pytest.raises(InvalidActionError):
        session.deal_card("2")

    session.undo_last_card()
    assert session.phase is Phase.DEALER_TURN
    assert np.isclose(session.bankroll, 1600.0)
    assert session.hands == []
    assert session.table.dealer.full_hand.total == 16


def test_double_takes_one_card_and_doubles_stake():
    session = make_session(statuses=["mine"])
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "6 10 5 6")
    assert session.recommendation(0).action == "double"

    session.player_action(0, "double")
    assert np.isclose(session.committed_bankroll, 100.0)
    result = session.deal_card("9")
    assert result.hand.total == 20
    assert session.phase is Phase.DEALER_TURN

    session.deal_card("2")
    session.dealer_done()
    assert np.isclose(session.bankroll, 1700.0)
    assert session.hands[0].doubled
    assert np.isclose(session.hands[0].bet, 100.0)


def test_doubled_seat_must_take_its_card():
    session = make_session(statuses=["mine"])
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "6 10 5 6")
    session.player_action(0, "double")

    for action in ("stand", "hit", "double"):
        with pytest.raises(InvalidActionError):
            session.player_action(0, action)
    with pytest.raises(InvalidActionError):
        session.surrender(0)
    assert session.phase is Phase.PLAYER_TURN

    session.deal_card("K")
    assert session.table.seats[0].cards == [Rank.SIX, Rank.FIVE, Rank.KING]
    assert session.phase is Phase.DEALER_TURN
    session.deal_card("K")
    assert session.phase is Phase.RESOLUTION
    assert np.isclose(session.bankroll, 1700.0)


def test_occupied_seats_play_basic_strategy_when_enabled():
    session = make_session(
        statuses=("occupied", "mine", "occupied"), auto_play_occupied=True
    )
    session.start_new_round()
    # seats 1-3, hole, seats 1-3, upcard 2
    deal(session, "10 10 10 9 8 6 2 2")

    # seat 3 holds 12 against a 2 and waits for a hit
    assert session.sequencer.current_seat == 2
    assert session.table.seats[2].last_action == "hit"
    session.deal_card("5")
    assert session.table.seats[2].is_standing

    # the player's own seat is never auto-played
    assert session.sequencer.current_seat == 1
    assert not session.table.seats[1].is_standing
    assert session.player_action(1, "stand") is Phase.DEALER_TURN
    assert session.table.seats[0].last_action == "stand"

    manual = make_session(statuses=("occupied", "mine", "occupied"))
    manual.start_new_round()
    deal(manual, "10 10 10 9 8 6 2 2")
    assert manual.sequencer.current_seat == 2
    assert manual.table.seats[2].last_action is None


def test_bust_moves_to_next_seat():
    session = make_session()
    session.start_new_round()
    deal(session, "10 10 10 8 6 5")
    assert session.sequencer.current_seat == 1
    session.player_action(1, "hit")
    result = session.deal_card("K")
    assert result.hand.is_bust
    assert session.table.seats[1].is_busted
    assert session.sequencer.current_seat == 0


def test_surrender_loses_half_the_bet():
    session = make_session(statuses=["mine"])
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "10 9 6 10")
    assert session.surrender(0) is Phase.DEALER_TURN
    session.dealer_done()
    assert session.table.seats[0].outcome is Outcome.SURRENDER
    assert np.isclose(session.bankroll, 1575.0)

    no_surrender = make_session(statuses=["mine"], surrender_allowed=False)
    no_surrender.start_new_round()
    deal(no_surrender, "10 9 6 10")
    with pytest.raises(InvalidActionError):
        no_surrender.surrender(0)


def test_invalid_actions():
    session = make_session()
    with pytest.raises(InvalidActionError):
        session.deal_card("5")
    with pytest.raises(InvalidActionError):
        session.player_action(0, "stand")

    session.start_new_round()
    deal(session, "2 10 10 3 7 7")
    with pytest.raises(InvalidActionError):
        session.player_action(0, "stand")  # seat 2 acts first
    with pytest.raises(InvalidActionError):
        session.player_action(1, "split")
    with pytest.raises(InvalidActionError):
        session.dealer_done()

    session.player_action(1, "stand")
    session.player_action(0, "hit")
    session.deal_card("4")
    with pytest.raises(InvalidActionError):
        session.player_action(0, "double")
    with pytest.raises(ValueError):
        session.player_action(0, "insure")


def test_undo_round_trip_restores_count_and_hands():
    session = make_session()
    session.start_new_round()
    deal(session, "5 K 9")
    count_before = session.count_state
    table_before = session.table.clone()
    target_before = session.next_target()

    deal(session, "A 2 3 4")
    for _ in range(4):
        session.undo_last_card()

    assert session.count_state == count_before
    assert session.table == table_before
    assert session.next_target() == target_before
    assert session.tracker.remaining("A") == 24


def test_undo_with_empty_history():
    session = make_session()
    with pytest.raises(InvalidUndoError):
        session.undo_last_card()
    session.start_new_round()
    deal(session, "5")
    session.start_new_round()
    with pytest.raises(InvalidUndoError):
        session.undo_last_card()
    assert session.running_count == 1


def test_new_shoe_resets_count_but_keeps_bankroll():
    session = make_session()
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "2 3 4")
    session.start_new_shoe()
    assert session.count_state == CountState()
    assert session.phase is Phase.WAITING
    assert session.table.seats[0].bet == 50
    assert session.count_series().size == 0


def test_european_round_needs_seven_cards():
    session = make_session(
        statuses=["mine", "occupied", "occupied"], dealer_style=DealerStyle.EUROPEAN
    )
    session.start_new_round()
    assert session.sequencer.initial_card_count() == 7
    deal(session, "2 3 4 9 5 6 7")
    assert session.phase is Phase.PLAYER_TURN
    assert session.table.dealer.cards == [Rank.NINE]
    assert session.table.dealer.hole_card is None


def test_seat_bets_are_validated():
    session = make_session(bankroll=100)
    with pytest.raises(InvalidBetError):
        session.place_seat_bet(1, 50)  # occupied, not mine
    with pytest.raises(InvalidBetError):
        session.place_seat_bet(0, 10)  # below the table minimum
    with pytest.raises(InvalidBetError):
        session.place_seat_bet(9, 50)
    with pytest.raises(InsufficientBankrollError):
        session.place_seat_bet(0, 200)
    assert session.place_seat_bet(0, 100) == 100.0

    session.start_new_round()
    session.deal_card("5")
    with pytest.raises(InvalidActionError):
        session.place_seat_bet(0, 50)


def test_config_validation():
    with pytest.raises(ConfigurationError):
        BlackjackConfig(decks=0)
    with pytest.raises(ConfigurationError):
        BlackjackConfig(min_bet=50, max_bet=25)
    with pytest.raises(ValueError):
        BlackjackConfig(dealer_rule="H18")


def test_bet_advice_and_count_series():
    session = make_session()
    advice = session.bet_advice()
    assert advice.units == 1
    assert np.isclose(advice.amount, 25.0)

    session.start_new_round()
    deal(session, "2 3 K 5")
    assert list(session.count_series()) == [1, 2, 1, 2]


def test_summary_shape():
    session = make_session()
    session.place_seat_bet(0, 50)
    session.start_new_round()
    deal(session, "10 9 10 9 7 7")
    session.player_action(1, "stand")
    session.player_action(0, "stand")
    session.dealer_done()

    summary = session.summary(now=datetime(2024, 1, 1, 12, 30, 0))
    assert set(summary) == {"metadata", "financial", "counting", "hands"}
    assert summary["metadata"]["duration"] == 1800
    assert summary["metadata"]["config"]["dealer_style"] == "american"
    assert summary["financial"] == {
        "startingBankroll": 1600.0,
        "endingBankroll": 1650.0,
        "profitLoss": 50.0,
    }
    assert summary["counting"] == {"cardsDealt": 6, "finalRunningCount": -2}
    assert summary["hands"][0]["profit"] == 50.0
