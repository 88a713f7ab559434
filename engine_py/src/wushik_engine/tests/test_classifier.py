"""
Tests for hand classification.
"""

import pytest
from wushik_engine.constants import HandKind
from wushik_engine.models import Card
from wushik_engine.validate import classify_hand


def card(rank, suit="clubs", deck=0):
    return Card(id=f"{deck}-{suit}-{rank}", suit=suit, rank=rank)


def joker(kind, deck=0):
    return Card(id=f"{deck}-joker-{kind}", joker_type=kind)


def test_empty_selection_is_invalid():
    """Test empty selection."""
    assert classify_hand([]) is None


def test_any_single_card_is_a_single():
    """Test single classification."""
    assert classify_hand([card("7")]) == HandKind.SINGLE
    assert classify_hand([joker("big")]) == HandKind.SINGLE


def test_pair():
    """Test pair classification."""
    assert classify_hand([card("9"), card("9", "hearts")]) == HandKind.PAIR
    assert classify_hand([card("9"), card("10", "hearts")]) is None


def test_jokers_never_pair():
    """Test that jokers do not form pairs."""
    assert classify_hand([joker("small"), joker("big")]) is None
    assert classify_hand([joker("big", 0), joker("big", 1)]) is None


def test_triple():
    """Test triple classification."""
    cards = [card("Q"), card("Q", "hearts"), card("Q", "spades")]
    assert classify_hand(cards) == HandKind.TRIPLE


def test_wushik_any_suits():
    """Test wushik classification in any suits."""
    assert classify_hand([card("5", "clubs"), card("10", "diamonds"), card("K", "hearts")]) == HandKind.WUSHIK
    assert classify_hand([card("K", "spades"), card("5", "spades"), card("10", "spades")]) == HandKind.WUSHIK


def test_three_cards_that_are_neither_triple_nor_wushik():
    """Test invalid three-card selections."""
    assert classify_hand([card("5", "clubs"), card("5", "diamonds"), card("10", "hearts")]) is None
    assert classify_hand([card("5"), card("10"), joker("big")]) is None


def test_bomb():
    """Test bomb classification."""
    four = [card("3", s) for s in ("clubs", "diamonds", "hearts", "spades")]
    assert classify_hand(four) == HandKind.BOMB
    five = four + [card("3", "clubs", deck=1)]
    assert classify_hand(five) == HandKind.BOMB


def test_four_jokers_are_not_a_bomb():
    """Test that jokers never make a bomb."""
    jokers = [joker("small", 0), joker("small", 1), joker("big", 0), joker("big", 1)]
    assert classify_hand(jokers) is None


def test_four_unrelated_cards_are_invalid():
    """Test invalid four-card selection."""
    assert classify_hand([card("3"), card("4"), card("5"), card("6")]) is None


def test_straight():
    """Test straight classification."""
    cards = [card("3", "clubs"), card("4", "clubs"), card("5", "diamonds"),
             card("6", "hearts"), card("7", "spades")]
    assert classify_hand(cards) == HandKind.STRAIGHT


def test_straight_order_does_not_matter():
    """Test straights in any order."""
    cards = [card("K"), card("10"), card("A"), card("J"), card("Q")]
    assert classify_hand(cards) == HandKind.STRAIGHT


def test_straight_may_end_on_two_but_not_wrap():
    """Test straight bounds."""
    assert classify_hand([card(r) for r in ("10", "J", "Q", "K", "A", "2")]) == HandKind.STRAIGHT
    assert classify_hand([card(r) for r in ("K", "A", "2", "3", "4")]) is None


def test_joker_breaks_a_straight():
    """Test that a joker breaks a straight."""
    cards = [card("3", "clubs"), card("4", "clubs"), card("5", "diamonds"),
             card("6", "hearts"), joker("big")]
    assert classify_hand(cards) is None


def test_straight_with_gap_is_invalid():
    """Test straight with a gap."""
    assert classify_hand([card(r) for r in ("3", "4", "5", "6", "8")]) is None


def test_triple_double():
    """Test triple-double classification."""
    cards = [
        card("7"), card("7", "hearts"),
        card("8"), card("8", "hearts"),
        card("9"), card("9", "hearts"),
    ]
    assert classify_hand(cards) == HandKind.TRIPLE_DOUBLE


def test_longer_triple_double():
    """Test four consecutive pairs."""
    cards = []
    for rank in ("3", "4", "5", "6"):
        cards += [card(rank), card(rank, "spades")]
    assert classify_hand(cards) == HandKind.TRIPLE_DOUBLE


def test_two_consecutive_pairs_are_not_enough():
    """Test that two pairs are not a triple-double."""
    cards = [card("7"), card("7", "hearts"), card("8"), card("8", "hearts")]
    assert classify_hand(cards) is None


def test_triple_double_needs_consecutive_pairs():
    """Test triple-double with a gap."""
    cards = [
        card("7"), card("7", "hearts"),
        card("8"), card("8", "hearts"),
        card("10"), card("10", "hearts"),
    ]
    assert classify_hand(cards) is None


def test_triple_double_needs_real_pairs():
    """Test triple-double with uneven groups."""
    cards = [
        card("7"), card("7", "hearts"), card("7", "spades"),
        card("8"), card("9"), card("9", "hearts"),
    ]
    assert classify_hand(cards) is None


def test_classification_is_deterministic():
    """Test classification is stable."""
    cards = [card("5", "clubs"), card("10", "diamonds"), card("K", "hearts")]
    assert {classify_hand(cards) for _ in range(5)} == {HandKind.WUSHIK}
    assert classify_hand(list(reversed(cards))) == HandKind.WUSHIK


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
