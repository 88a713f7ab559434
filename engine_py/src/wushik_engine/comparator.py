"""
Card ordering, point values and the beat relation between played hands.
"""

from typing import Iterable, List, Tuple

from .constants import (
    JOKER_VALUES, POINT_TABLE, POWER_KINDS, RANK_ORDER, SUIT_ORDER, HandKind
)
from .models import Card, PlayedHand


def rank_value(card: Card) -> int:
    """
    Position of the card in the rank order.

    Ranks map to 0 (three) through 12 (two). Jokers map to 100 (small) and
    101 (big) so they sit above every real rank without ever being
    consecutive with one.
    """
    if card.is_joker:
        return JOKER_VALUES[card.joker_type]
    try:
        return RANK_ORDER.index(card.rank)
    except ValueError:
        raise ValueError(f"Invalid rank: {card.rank}")


def point_value(card: Card) -> int:
    """Points carried by a card; 0 for anything that does not score."""
    if card.is_joker:
        return 0
    return POINT_TABLE.get(card.rank, 0)


def points_in(cards: Iterable[Card]) -> int:
    return sum(point_value(card) for card in cards)


def suit_value(suit: str) -> int:
    return SUIT_ORDER.index(suit)


def highest_value(cards: List[Card]) -> int:
    if not cards:
        raise ValueError("Cannot get highest rank from empty list")
    return max(rank_value(card) for card in cards)


def is_power(kind: HandKind) -> bool:
    return kind in POWER_KINDS


def is_same_suit_wushik(cards: List[Card]) -> bool:
    suits = {card.suit for card in cards}
    return len(suits) == 1 and None not in suits


def compare_wushik(new_cards: List[Card], current_cards: List[Card]) -> bool:
    """A flush wushik beats a mixed one; two flushes compare by suit."""
    new_same_suit = is_same_suit_wushik(new_cards)
    current_same_suit = is_same_suit_wushik(current_cards)

    if new_same_suit and not current_same_suit:
        return True
    if not new_same_suit:
        # Mixed never beats flush, and two mixed wushiks tie
        return False
    return suit_value(new_cards[0].suit) > suit_value(current_cards[0].suit)


def compare_bombs(new_cards: List[Card], current_cards: List[Card]) -> bool:
    """Longer bombs win outright; equal length compares rank."""
    if len(new_cards) != len(current_cards):
        return len(new_cards) > len(current_cards)
    return rank_value(new_cards[0]) > rank_value(current_cards[0])


def beats(new_hand: PlayedHand, current_hand: PlayedHand) -> bool:
    """
    Decide whether new_hand may replace current_hand on the table.

    Power hands (bomb, wushik) beat everything else; a bomb always beats a
    wushik. Ordinary hands must match kind and card count and then win on
    their highest card. Ties never beat.
    """
    new_kind = new_hand.kind
    current_kind = current_hand.kind

    if is_power(new_kind):
        if not is_power(current_kind):
            return True
        if new_kind != current_kind:
            return new_kind == HandKind.BOMB
        if new_kind == HandKind.BOMB:
            return compare_bombs(new_hand.cards, current_hand.cards)
        return compare_wushik(new_hand.cards, current_hand.cards)

    if new_kind != current_kind:
        return False
    if len(new_hand.cards) != len(current_hand.cards):
        return False
    return highest_value(new_hand.cards) > highest_value(current_hand.cards)


def hand_strength_key(kind: HandKind, cards: List[Card]) -> Tuple[int, int, int]:
    """
    Sort key ordering hands from weakest to strongest.

    Ordinary hands order by highest card. Wushiks come after every ordinary
    hand (mixed first, then flushes by suit) and bombs after every wushik, by
    length and then rank.
    """
    if kind == HandKind.BOMB:
        return 2, len(cards), rank_value(cards[0])
    if kind == HandKind.WUSHIK:
        if is_same_suit_wushik(cards):
            return 1, 1, suit_value(cards[0].suit)
        return 1, 0, 0
    return 0, len(cards), highest_value(cards)
