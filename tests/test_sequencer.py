import pytest

from casino_engine.blackjack.sequencer import (
    DealerStyle,
    DealSequencer,
    DealStep,
    DealTarget,
    Phase,
)


def deal_order(sequencer: DealSequencer):
    targets = []
    while sequencer.phase is Phase.DEALING:
        targets.append(sequencer.target())
        sequencer.advance()
    return targets


def test_american_deal_order_for_three_seats():
    sequencer = DealSequencer(DealerStyle.AMERICAN)
    sequencer.start_round([4, 0, 2])
    assert sequencer.initial_card_count() == 8
    assert sequencer.deal_step is DealStep.SEATS_FIRST

    targets = deal_order(sequencer)

    assert targets == [
        DealTarget(0),
        DealTarget(2),
        DealTarget(4),
        DealTarget(None, hole=True),
        DealTarget(0),
        DealTarget(2),
        DealTarget(4),
        DealTarget(None),
    ]
    assert sequencer.phase is Phase.PLAYER_TURN


def test_european_style_has_no_hole_card():
    sequencer = DealSequencer(DealerStyle.EUROPEAN)
    sequencer.start_round([1, 3, 5])
    assert sequencer.initial_card_count() == 7

    targets = deal_order(sequencer)

    assert len(targets) == 7
    assert targets[3] == DealTarget(None, hole=False)
    assert not any(t.hole for t in targets)
    assert [t.seat_index for t in targets if not t.is_dealer] == [1, 3, 5, 1, 3, 5]


def test_seats_act_in_descending_order():
    sequencer = DealSequencer()
    sequencer.start_round([0, 2, 4])
    deal_order(sequencer)

    assert sequencer.turn_order == [4, 2, 0]
    seen = [sequencer.current_seat]
    while sequencer.next_seat() is not None:
        seen.append(sequencer.current_seat)
    assert seen == [4, 2, 0]
    assert sequencer.phase is Phase.DEALER_TURN
    assert sequencer.target() == DealTarget(None)


def test_round_without_seats_goes_straight_to_dealer():
    sequencer = DealSequencer()
    sequencer.start_round([])
    assert sequencer.phase is Phase.DEALING
    assert sequencer.target() == DealTarget(None, hole=True)
    sequencer.advance()
    assert sequencer.target() == DealTarget(None)
    sequencer.advance()
    assert sequencer.phase is Phase.DEALER_TURN


def test_advance_outside_dealing_is_rejected():
    sequencer = DealSequencer()
    with pytest.raises(RuntimeError):
        sequencer.advance()
    assert sequencer.target() is None


def test_clone_is_independent():
    sequencer = DealSequencer()
    sequencer.start_round([0, 1])
    copy = sequencer.clone()
    sequencer.advance()
    assert copy.deal_index == 0
    assert sequencer.deal_index == 1
    sequencer.finish()
    assert copy.phase is Phase.DEALING
    assert sequencer.phase is Phase.RESOLUTION


def test_target_descriptions():
    assert DealTarget(2).describe() == "Seat 3"
    assert DealTarget(None, hole=True).describe() == "Dealer (hole)"
    assert DealTarget(None).describe() == "Dealer"
