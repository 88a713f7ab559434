"""
Tests for the heuristic computer player.
"""

import pytest
from wushik_engine.bots import BotAction, HeuristicBot, decide_ai_move
from wushik_engine.bots.heuristic import (
    choose_lead, find_power_hands, find_straights, find_triple_doubles
)
from wushik_engine.constants import Difficulty, GamePhase
from wushik_engine.models import Card, GameState, PlayedHand, Player
from wushik_engine.validate import classify_hand


class FixedRandom:
    """Random source that always rolls the same number."""

    def __init__(self, value):
        self.value = value

    def random(self):
        return self.value


def card(rank, suit="clubs", deck=0):
    return Card(id=f"{deck}-{suit}-{rank}", suit=suit, rank=rank)


def ranks(action):
    return [c.rank for c in action.cards]


def player_with(*cards):
    return Player(id="bot", name="Bot", hand=list(cards), is_ai=True)


def on_table(*cards):
    return PlayedHand(cards=list(cards), kind=classify_hand(list(cards)),
                      player_id="other", player_name="Other")


# ---------------------------------------------------------------- leading

def test_easy_leads_lowest_single():
    """Test that easy leads its lowest single even when holding a pair."""
    bot = player_with(card("9"), card("9", "hearts"), card("4"))
    action = decide_ai_move(bot, None, Difficulty.EASY)
    assert action.type == "play"
    assert ranks(action) == ["4"]


def test_medium_leads_lowest_pair():
    """Test that medium leads a pair when it holds one."""
    bot = player_with(card("4"), card("9"), card("9", "hearts"), card("9", "spades"))
    assert ranks(decide_ai_move(bot, None, Difficulty.MEDIUM)) == ["9", "9"]


def test_medium_falls_back_to_single():
    """Test that medium leads the lowest single without a pair."""
    bot = player_with(card("6"), card("4"))
    assert ranks(decide_ai_move(bot, None, Difficulty.MEDIUM)) == ["4"]


def test_hard_prefers_triple_then_pair_then_single():
    """Test hard lead preference: triple, then pair, then single."""
    with_triple = player_with(card("4"), card("4", "hearts"),
                              card("9"), card("9", "hearts"), card("9", "spades"))
    assert ranks(decide_ai_move(with_triple, None, Difficulty.HARD)) == ["9", "9", "9"]

    with_pair = player_with(card("4"), card("4", "hearts"), card("9"))
    assert ranks(decide_ai_move(with_pair, None, Difficulty.HARD)) == ["4", "4"]

    singles_only = player_with(card("9"), card("4", "hearts"))
    assert ranks(decide_ai_move(singles_only, None, Difficulty.HARD)) == ["4"]


def test_choose_lead_returns_cards():
    """Test that choose_lead hands back the cards to play."""
    cards = choose_lead(player_with(card("6"), card("6", "hearts")), Difficulty.MEDIUM)
    assert [c.id for c in cards] == ["0-clubs-6", "0-hearts-6"]


def test_leader_never_passes():
    """Test that no tier passes when it has to lead."""
    bot = player_with(card("2"))
    for difficulty in Difficulty:
        assert decide_ai_move(bot, None, difficulty, FixedRandom(0.99)).type == "play"


# ---------------------------------------------------------------- responding

def test_easy_answers_with_strongest():
    """Test that easy wastes its strongest qualifying card."""
    bot = player_with(card("6"), card("8"), card("J"))
    action = decide_ai_move(bot, on_table(card("5", "hearts")), Difficulty.EASY)
    assert ranks(action) == ["J"]


def test_medium_takes_middle_candidate():
    """Test that medium plays the middle qualifying candidate."""
    bot = player_with(card("6"), card("8"), card("J"))
    action = decide_ai_move(bot, on_table(card("5", "hearts")), Difficulty.MEDIUM, FixedRandom(0.5))
    assert ranks(action) == ["8"]


def test_medium_sometimes_passes():
    """Test that medium passes when the roll misses."""
    bot = player_with(card("6"), card("8"), card("J"))
    action = decide_ai_move(bot, on_table(card("5", "hearts")), Difficulty.MEDIUM, FixedRandom(0.8))
    assert action.type == "pass"


def test_hard_spends_least():
    """Test that hard answers with the weakest qualifying card."""
    bot = player_with(card("6"), card("8"), card("J"))
    action = decide_ai_move(bot, on_table(card("5", "hearts")), Difficulty.HARD, FixedRandom(0.99))
    assert ranks(action) == ["6"]


def test_hard_conserves_high_cards_on_small_tricks():
    """Test that hard mostly keeps high cards back on small tricks."""
    bot = player_with(card("J"), card("3"), card("4"), card("6"), card("7"), card("8"))
    table = on_table(card("9", "hearts"))

    assert decide_ai_move(bot, table, Difficulty.HARD, FixedRandom(0.5)).type == "pass"
    assert ranks(decide_ai_move(bot, table, Difficulty.HARD, FixedRandom(0.1))) == ["J"]


def test_hard_spends_high_cards_when_hand_is_small():
    """Test that hard plays high cards freely with few cards left."""
    bot = player_with(card("J"), card("3"))
    action = decide_ai_move(bot, on_table(card("9", "hearts")), Difficulty.HARD, FixedRandom(0.99))
    assert ranks(action) == ["J"]


def test_pass_without_a_qualifying_hand():
    """Test pass when nothing in hand beats the table."""
    bot = player_with(card("3"), card("4"))
    for difficulty in Difficulty:
        action = decide_ai_move(bot, on_table(card("2", "hearts")), difficulty, FixedRandom(0.0))
        assert action.type == "pass"


def test_bomb_used_only_when_nothing_else_beats():
    """Test that bombs are a fallback behind same-kind answers."""
    bomb = [card("4", s) for s in ("clubs", "diamonds", "hearts", "spades")]
    bot = player_with(*bomb, card("6"))
    table = on_table(card("2"), card("2", "hearts"))
    action = decide_ai_move(bot, table, Difficulty.HARD, FixedRandom(0.99))
    assert sorted(c.id for c in action.cards) == sorted(c.id for c in bomb)

    bot = player_with(*bomb, card("A"), card("A", "hearts"))
    table = on_table(card("K"), card("K", "hearts"))
    assert ranks(decide_ai_move(bot, table, Difficulty.HARD, FixedRandom(0.0))) == ["A", "A"]


def test_flush_wushik_answers_mixed_wushik():
    """Test that a flush wushik is found against a mixed one."""
    bot = player_with(card("5", "spades"), card("10", "spades"), card("K", "spades"), card("3"))
    table = on_table(card("5"), card("10", "hearts"), card("K", "diamonds"))
    action = decide_ai_move(bot, table, Difficulty.EASY)
    assert sorted(ranks(action)) == ["10", "5", "K"]


def test_straight_answered_with_same_length():
    """Test straight answers of matching length."""
    bot = player_with(*[card(r, "hearts") for r in ("4", "5", "6", "7", "8", "9")])
    table = on_table(*[card(r) for r in ("3", "4", "5", "6", "7")])

    hard = decide_ai_move(bot, table, Difficulty.HARD, FixedRandom(0.0))
    assert ranks(hard) == ["4", "5", "6", "7", "8"]
    easy = decide_ai_move(bot, table, Difficulty.EASY)
    assert ranks(easy) == ["5", "6", "7", "8", "9"]


# ---------------------------------------------------------------- search helpers

def test_find_straights_and_triple_doubles():
    """Test run search for straights and triple-doubles."""
    hand = [card(r) for r in ("3", "4", "5", "6", "7", "9")] + [card("4", "hearts"), card("5", "hearts")]
    assert len(find_straights(hand, 5)) == 1
    assert find_straights(hand, 6) == []

    pairs = [card(r, s) for r in ("7", "8", "9") for s in ("clubs", "hearts")]
    assert [[c.rank for c in run] for run in find_triple_doubles(pairs, 6)] == \
        [["7", "7", "8", "8", "9", "9"]]


def test_find_power_hands():
    """Test that bombs and each distinct wushik are found."""
    hand = [
        card("5"), card("5", "hearts"), card("10", "hearts"), card("K", "hearts"),
        card("8"), card("8", "hearts"), card("8", "spades"), card("8", "diamonds"),
    ]
    kinds = [classify_hand(cards).value for cards in find_power_hands(hand)]
    assert sorted(kinds) == ["bomb", "wushik", "wushik"]


# ---------------------------------------------------------------- bot wrapper

def test_heuristic_bot_only_acts_on_its_turn():
    """Test HeuristicBot returns None off turn and a play on turn."""
    bot_player = player_with(card("4"), card("9"))
    bot_player.difficulty = Difficulty.EASY
    state = GameState(
        id="test",
        phase=GamePhase.PLAYING,
        players=[bot_player, Player(id="human", name="Human", hand=[card("6")])],
        current_player_id="human"
    )
    bot = HeuristicBot("bot")
    assert bot.choose_action(state) is None

    state.current_player_id = "bot"
    action = bot.choose_action(state)
    assert isinstance(action, BotAction)
    assert action.card_ids == ["0-clubs-4"]


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
