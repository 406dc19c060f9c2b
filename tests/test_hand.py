import pytest

from casino_engine.blackjack.cards import HI_LO_TAGS, Rank, tag_sum
from casino_engine.blackjack.hand import Outcome, compare, evaluate, pair_rank


def test_pair_of_aces_is_soft_twelve():
    value = evaluate(["A", "A"])
    assert value.total == 12
    assert value.is_soft
    assert value.is_pair
    assert not value.is_bust
    assert not value.is_blackjack


def test_ace_forced_low_makes_hard_total():
    value = evaluate(["A", "K", "5"])
    assert value.total == 16
    assert not value.is_soft


def test_three_tens_bust():
    value = evaluate(["K", "Q", "2"])
    assert value.total == 22
    assert value.is_bust
    assert not value.is_soft


def test_empty_hand():
    value = evaluate([])
    assert value.total == 0
    assert not value.is_bust
    assert not value.is_blackjack
    assert value.describe() == "-"


def test_blackjack_needs_exactly_two_cards():
    assert evaluate(["A", "J"]).is_blackjack
    assert not evaluate(["7", "7", "7"]).is_blackjack
    assert evaluate(["7", "7", "7"]).total == 21


def test_ten_group_cards_pair_with_each_other():
    assert evaluate(["10", "K"]).is_pair
    assert evaluate(["J", "Q"]).is_pair
    assert pair_rank(["J", "Q"]) == "10"
    assert pair_rank(["A", "A"]) == "A"
    assert pair_rank(["8", "8"]) == "8"
    assert pair_rank(["8", "9"]) is None
    assert not evaluate(["9", "10"]).is_pair


def test_soft_hand_description():
    assert evaluate(["A", "6"]).describe() == "soft 17"
    assert evaluate(["A", "K"]).describe() == "BJ"
    assert evaluate(["K", "Q", "5"]).describe() == "25 BUST"


def test_rank_parsing_aliases():
    assert Rank.parse("t") is Rank.TEN
    assert Rank.parse("ace") is Rank.ACE
    assert Rank.parse(7) is Rank.SEVEN
    assert Rank.parse(1) is Rank.ACE
    assert Rank.parse(" q ") is Rank.QUEEN
    with pytest.raises(ValueError):
        Rank.parse("Z")
    with pytest.raises(ValueError):
        Rank.parse(12)


def test_hi_lo_tags():
    assert [HI_LO_TAGS[Rank.parse(r)] for r in ["2", "6", "7", "9", "10", "K", "A"]] == [
        1,
        1,
        0,
        0,
        -1,
        -1,
        -1,
    ]
    assert sum(HI_LO_TAGS.values()) * 4 == 0
    assert tag_sum(["2", "3", "K"]) == 1


def test_compare_outcomes():
    assert compare(evaluate(["K", "Q", "5"]), evaluate(["K", "Q", "5"])) is Outcome.BUST
    assert compare(evaluate(["A", "K"]), evaluate(["10", "9"])) is Outcome.BLACKJACK
    assert compare(evaluate(["A", "K"]), evaluate(["A", "Q"])) is Outcome.PUSH
    assert compare(evaluate(["10", "9", "2"]), evaluate(["A", "Q"])) is Outcome.LOSE
    assert compare(evaluate(["10", "7"]), evaluate(["10", "6", "9"])) is Outcome.DEALER_BUST
    assert compare(evaluate(["10", "9"]), evaluate(["10", "8"])) is Outcome.WIN
    assert compare(evaluate(["10", "8"]), evaluate(["10", "9"])) is Outcome.LOSE
    assert compare(evaluate(["10", "8"]), evaluate(["9", "9"])) is Outcome.PUSH
    assert Outcome.DEALER_BUST.is_player_win
    assert not Outcome.PUSH.is_player_win
