from casino_engine.roulette.layout import BetCategory
from casino_engine.roulette.ledger import BetLedger, KeyedBet, ScalarBet
from casino_engine.roulette.wheel import Pocket


def make_ledger() -> BetLedger:
    ledger = BetLedger()
    ledger.place_bet("straight", "17", 10)
    ledger.place_bet("straight", "00", 5)
    ledger.place_bet("split", "17-20", 20)
    ledger.place_bet("red", None, 50)
    return ledger


def test_place_bet_accumulates():
    ledger = make_ledger()
    assert ledger.place_bet("straight", "17", 15)
    assert ledger.amount("straight", "17") == 25
    assert ledger.place_bet("red", "whatever", 10)
    assert ledger.amount("red") == 60
    assert ledger.total_wagered() == 25 + 5 + 20 + 60
    assert isinstance(ledger.bet("red"), ScalarBet)
    assert isinstance(ledger.bet(BetCategory.SPLIT), KeyedBet)


def test_non_positive_amount_is_a_silent_no_op():
    ledger = BetLedger()
    assert not ledger.place_bet("straight", "17", 0)
    assert not ledger.place_bet("red", None, -5)
    assert not ledger.has_bets()
    assert ledger.total_wagered() == 0


def test_remove_bet_clamps_and_prunes():
    ledger = make_ledger()
    assert ledger.remove_bet("straight", "17", 4)
    assert ledger.amount("straight", "17") == 6
    assert ledger.remove_bet("straight", "17", 100)
    assert "17" not in ledger.bet("straight").amounts
    assert not ledger.remove_bet("straight", "17", 1)
    assert ledger.remove_bet("red", None, 80)
    assert ledger.amount("red") == 0
    assert not ledger.remove_bet("red", None, 5)
    assert not ledger.remove_bet("black", None, 5)
    assert ledger.amount("black") == 0


def test_clear_and_counts():
    ledger = make_ledger()
    counts = ledger.bet_counts()
    assert counts["straight"] == 2
    assert counts["red"] == 1
    assert counts["black"] == 0
    assert set(ledger.straight_numbers()) == {Pocket.SEVENTEEN, Pocket.DOUBLE_ZERO}

    ledger.clear_bet("straight", "00")
    ledger.clear_bet("red")
    assert ledger.total_wagered() == 30
    ledger.clear_all()
    assert not ledger.has_bets()


def test_items_lists_live_bets_only():
    ledger = make_ledger()
    ledger.remove_bet("red", None, 50)
    assert sorted(ledger.items(), key=lambda item: item[2]) == [
        (BetCategory.STRAIGHT, "00", 5),
        (BetCategory.STRAIGHT, "17", 10),
        (BetCategory.SPLIT, "17-20", 20),
    ]


def test_validate_reports_every_violation():
    ledger = make_ledger()
    ledger.place_bet("dozen", "1", 600)
    errors = ledger.validate(min_bet=10, max_bet=500)
    assert errors == [
        "straight on 00: below minimum bet",
        "dozen on 1: exceeds maximum bet",
    ]
    assert make_ledger().validate(1, 500) == []


def test_dict_round_trip_and_copy():
    ledger = make_ledger()
    data = ledger.to_dict()
    assert data["straight"] == {"17": 10, "00": 5}
    assert data["red"] == 50
    assert data["firstFour"] == 0
    assert data["corner"] == {}

    restored = BetLedger.from_dict(data)
    assert restored == ledger

    copy = ledger.copy()
    copy.place_bet("straight", "17", 1)
    assert ledger.amount("straight", "17") == 10
