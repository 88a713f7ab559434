"""
Deck construction, shuffling and dealing utilities.
"""

import logging
import math
import random
from dataclasses import dataclass
from typing import Dict, List, Optional

from .comparator import rank_value, suit_value
from .constants import (
    JOKER_BIG, JOKER_SMALL, PLAYERS_PER_DECK, RANK_ORDER, STARTING_RANK,
    STARTING_SUIT, SUIT_ORDER, WUSHIK_RANKS
)
from .errors import InvariantViolation
from .models import Card, GameState

logger = logging.getLogger(__name__)


@dataclass
class DealResult:
    hands: Dict[str, List[Card]]
    first_player_id: str


def deck_count_for(player_count: int, players_per_deck: int = PLAYERS_PER_DECK) -> int:
    """One deck per started group of four players."""
    return max(1, math.ceil(player_count / players_per_deck))


def create_deck(num_decks: int = 1) -> List[Card]:
    """Create num_decks full decks (52 cards and two jokers each), unshuffled."""
    deck = []

    for d in range(num_decks):
        for suit in SUIT_ORDER:
            for rank in RANK_ORDER:
                deck.append(Card(id=f"{d}-{suit}-{rank}", suit=suit, rank=rank))

        deck.append(Card(id=f"{d}-joker-small", joker_type=JOKER_SMALL))
        deck.append(Card(id=f"{d}-joker-big", joker_type=JOKER_BIG))

    return deck


def shuffle_deck(deck: List[Card], rng: Optional[random.Random] = None) -> List[Card]:
    """
    Shuffle a copy of the deck with a Fisher-Yates pass.

    Args:
        deck: Cards to shuffle
        rng: Optional seeded random source for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    rng = rng or random.Random()
    shuffled = deck.copy()

    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def build_deck(num_decks: int, rng: Optional[random.Random] = None) -> List[Card]:
    return shuffle_deck(create_deck(num_decks), rng)


def deal_cards(deck: List[Card], player_ids: List[str]) -> Dict[str, List[Card]]:
    """
    Deal the whole deck round-robin.

    Card i goes to player i mod N, so hands may differ in size by one when
    the deck does not split evenly. No card is held back.

    Args:
        deck: Shuffled deck of cards
        player_ids: Players in seating order

    Returns:
        Dictionary mapping player_id to their dealt cards
    """
    if not player_ids:
        return {}

    hands = {player_id: [] for player_id in player_ids}
    for i, card in enumerate(deck):
        hands[player_ids[i % len(player_ids)]].append(card)

    return hands


def is_starting_card(card: Card) -> bool:
    return not card.is_joker and card.rank == STARTING_RANK and card.suit == STARTING_SUIT


def find_starting_player(hands: Dict[str, List[Card]]) -> Optional[str]:
    """
    Find the player who leads the round (holds the 3 of spades).

    With several decks more than one player can hold one; the first holder
    in seating order leads.

    Returns:
        Player ID who should start, or None if nobody holds the card
    """
    for player_id, hand in hands.items():
        if any(is_starting_card(card) for card in hand):
            return player_id
    return None


def deal_starting_state(player_ids: List[str], rng: Optional[random.Random] = None,
                        players_per_deck: int = PLAYERS_PER_DECK) -> DealResult:
    """
    Shuffle and deal a fresh round.

    Raises:
        InvariantViolation: if no dealt hand holds the 3 of spades
    """
    num_decks = deck_count_for(len(player_ids), players_per_deck)
    deck = build_deck(num_decks, rng)
    hands = deal_cards(deck, player_ids)

    first_player_id = find_starting_player(hands)
    if first_player_id is None:
        logger.error(f"No 3 of spades among {len(deck)} dealt cards")
        raise InvariantViolation("No player holds the 3 of spades")

    for player_id in hands:
        hands[player_id] = sort_for_display(hands[player_id])

    logger.debug(f"Dealt {len(deck)} cards from {num_decks} deck(s) to {len(player_ids)} players")
    return DealResult(hands=hands, first_player_id=first_player_id)


def sort_by_rank(cards: List[Card]) -> List[Card]:
    """Ascending by rank, jokers last with the small joker first."""
    return sorted(cards, key=rank_value)


def sort_for_display(cards: List[Card]) -> List[Card]:
    """Suit then rank, jokers at the end. No gameplay meaning."""
    def sort_key(card: Card):
        if card.is_joker:
            return len(SUIT_ORDER), rank_value(card)
        return suit_value(card.suit), rank_value(card)

    return sorted(cards, key=sort_key)


def sort_by_recommended(cards: List[Card]) -> List[Card]:
    """
    Group a hand by what it can form.

    Singles, pairs and triples come first, each ascending by rank, followed by
    one wushik if the hand holds a 5, a 10 and a K, then bombs, then jokers.
    """
    rank_groups: Dict[str, List[Card]] = {}
    jokers = []
    for card in sort_by_rank(cards):
        if card.is_joker:
            jokers.append(card)
        else:
            rank_groups.setdefault(card.rank, []).append(card)

    wushik_cards = []
    if all(rank in rank_groups for rank in WUSHIK_RANKS):
        for rank in ('5', '10', 'K'):
            wushik_cards.append(rank_groups[rank].pop(0))
            if not rank_groups[rank]:
                del rank_groups[rank]

    singles, pairs, triples, bombs = [], [], [], []
    for rank in sorted(rank_groups, key=RANK_ORDER.index):
        group = rank_groups[rank]
        if len(group) == 1:
            singles.extend(group)
        elif len(group) == 2:
            pairs.extend(group)
        elif len(group) == 3:
            triples.extend(group)
        else:
            bombs.extend(group)

    return singles + pairs + triples + wushik_cards + bombs + jokers


def validate_deck_integrity(state: GameState) -> bool:
    """
    Check that no card is duplicated and nothing foreign is in play.

    Collected tricks leave play, so the cards still in hands and in the
    trick pool must be a duplicate-free subset of the full deck for this
    table size.
    """
    num_decks = deck_count_for(len(state.players), state.rule_config.players_per_deck)
    expected = {card.id for card in create_deck(num_decks)}

    all_cards = []
    for player in state.players:
        all_cards.extend(card.id for card in player.hand)
    all_cards.extend(card.id for card in state.played_cards)

    actual = set(all_cards)
    return len(all_cards) == len(actual) and actual <= expected
