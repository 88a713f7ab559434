"""
Heuristic bot with three difficulty tiers.

Every tier searches the same legal moves. Tiers differ only in which
qualifying move they pick and in how readily they pass.
"""

import random
from typing import Dict, List, Optional

from .base import BaseBot, BotAction
from ..comparator import beats, hand_strength_key, rank_value
from ..constants import HIGH_CARD_THRESHOLD, RANK_ORDER, SUIT_ORDER, Difficulty, HandKind
from ..models import Card, GameState, PlayedHand, Player
from ..shuffle import sort_by_rank
from ..validate import classify_hand

MEDIUM_PLAY_CHANCE = 0.7
HARD_SPEND_HIGH_CARD_CHANCE = 0.3
LOW_VALUE_TRICK_SIZE = 3
HARD_CONSERVE_MIN_HAND = 5


def group_by_rank(cards: List[Card]) -> Dict[str, List[Card]]:
    """Non-joker cards keyed by rank, ranks in ascending order."""
    groups: Dict[str, List[Card]] = {}
    for card in sort_by_rank(cards):
        if not card.is_joker:
            groups.setdefault(card.rank, []).append(card)
    return groups


def find_groups(cards: List[Card], size: int) -> List[List[Card]]:
    """One same-rank group of the given size per rank that has enough copies."""
    return [group[:size] for group in group_by_rank(cards).values() if len(group) >= size]


def _find_runs(cards: List[Card], length: int, per_rank: int) -> List[List[Card]]:
    groups = group_by_rank(cards)
    ranks = [r for r in RANK_ORDER if len(groups.get(r, [])) >= per_rank]
    values = [RANK_ORDER.index(r) for r in ranks]

    runs = []
    for i in range(len(ranks) - length + 1):
        if values[i + length - 1] - values[i] == length - 1:
            run = []
            for rank in ranks[i:i + length]:
                run.extend(groups[rank][:per_rank])
            runs.append(run)
    return runs


def find_straights(cards: List[Card], length: int) -> List[List[Card]]:
    return _find_runs(cards, length, 1)


def find_triple_doubles(cards: List[Card], length: int) -> List[List[Card]]:
    return _find_runs(cards, length // 2, 2)


def find_hands_of_kind(cards: List[Card], kind: HandKind, length: int) -> List[List[Card]]:
    """
    Candidate plays of the same kind and size as the hand on the table.

    Bombs and wushiks are not searched here; see find_power_hands.
    """
    if kind == HandKind.SINGLE:
        return [[card] for card in sort_by_rank(cards)]
    if kind == HandKind.PAIR:
        return find_groups(cards, 2)
    if kind == HandKind.TRIPLE:
        return find_groups(cards, 3)
    if kind == HandKind.STRAIGHT:
        return find_straights(cards, length)
    if kind == HandKind.TRIPLE_DOUBLE:
        return find_triple_doubles(cards, length)
    return []


def find_power_hands(cards: List[Card]) -> List[List[Card]]:
    """Every bomb (all copies of a rank held four or more times) and wushik."""
    groups = group_by_rank(cards)
    combos = [group for group in groups.values() if len(group) >= 4]

    fives, tens, kings = groups.get('5', []), groups.get('10', []), groups.get('K', [])
    if fives and tens and kings:
        seen = set()
        wushiks = [[fives[0], tens[0], kings[0]]]
        for suit in SUIT_ORDER:
            flush = [
                next((c for c in group if c.suit == suit), None)
                for group in (fives, tens, kings)
            ]
            if all(flush):
                wushiks.append(flush)
        for wushik in wushiks:
            key = frozenset(card.id for card in wushik)
            if key not in seen:
                seen.add(key)
                combos.append(wushik)

    return combos


def _as_played(cards: List[Card], player: Player) -> Optional[PlayedHand]:
    kind = classify_hand(cards)
    if kind is None:
        return None
    return PlayedHand(cards=cards, kind=kind, player_id=player.id, player_name=player.name)


def _beating(candidates: List[List[Card]], player: Player, active_hand: PlayedHand) -> List[PlayedHand]:
    qualifying = []
    for cards in candidates:
        played = _as_played(cards, player)
        if played is not None and beats(played, active_hand):
            qualifying.append(played)
    return sorted(qualifying, key=lambda h: hand_strength_key(h.kind, h.cards))


def find_beating_hands(player: Player, active_hand: PlayedHand) -> List[PlayedHand]:
    """
    All qualifying responses, weakest first.

    Same-kind plays are preferred; power hands are only considered when no
    same-kind play beats the table.
    """
    same_kind = find_hands_of_kind(player.hand, active_hand.kind, len(active_hand.cards))
    qualifying = _beating(same_kind, player, active_hand)
    if qualifying:
        return qualifying
    return _beating(find_power_hands(player.hand), player, active_hand)


def choose_lead(player: Player, difficulty: Difficulty) -> List[Card]:
    """Opening play for a fresh trick, always the lowest instance of a shape."""
    lowest_single = [sort_by_rank(player.hand)[0]]

    if difficulty == Difficulty.EASY:
        return lowest_single

    shapes = [2] if difficulty == Difficulty.MEDIUM else [3, 2]
    for size in shapes:
        groups = find_groups(player.hand, size)
        if groups:
            return groups[0]
    return lowest_single


def select_candidate(candidates: List[PlayedHand], difficulty: Difficulty) -> PlayedHand:
    """easy wastes its best, medium takes the middle, hard spends the least."""
    if difficulty == Difficulty.EASY:
        return candidates[-1]
    if difficulty == Difficulty.MEDIUM:
        return candidates[len(candidates) // 2]
    return candidates[0]


def should_play(player: Player, active_hand: PlayedHand, candidate: PlayedHand,
                difficulty: Difficulty, rng: random.Random) -> bool:
    if difficulty == Difficulty.EASY:
        return True

    if difficulty == Difficulty.MEDIUM:
        return rng.random() < MEDIUM_PLAY_CHANCE

    has_high_card = any(rank_value(card) > HIGH_CARD_THRESHOLD for card in candidate.cards)
    low_value_trick = len(active_hand.cards) <= LOW_VALUE_TRICK_SIZE
    if has_high_card and low_value_trick and len(player.hand) > HARD_CONSERVE_MIN_HAND:
        # Save high cards for a trick worth winning
        return rng.random() < HARD_SPEND_HIGH_CARD_CHANCE
    return True


def decide_ai_move(
    player: Player,
    active_hand: Optional[PlayedHand],
    difficulty: Difficulty,
    rng: Optional[random.Random] = None
) -> BotAction:
    """
    Pick a move for a computer player.

    Args:
        player: The acting player, hand included
        active_hand: Hand on the table, or None when leading
        difficulty: Tier deciding the selection policy
        rng: Random source for the tiers that gamble

    Returns:
        BotAction to play the chosen cards, or to pass
    """
    difficulty = Difficulty(difficulty)
    rng = rng or random.Random()

    if active_hand is None:
        return BotAction.play(choose_lead(player, difficulty))

    candidates = find_beating_hands(player, active_hand)
    if not candidates:
        return BotAction.pass_turn()

    choice = select_candidate(candidates, difficulty)
    if should_play(player, active_hand, choice, difficulty, rng):
        return BotAction.play(choice.cards)
    return BotAction.pass_turn()


class HeuristicBot(BaseBot):
    """
    Bot that plays through decide_ai_move.

    The difficulty defaults to the one stored on the player record.
    """

    def __init__(self, player_id: str, difficulty: Optional[Difficulty] = None,
                 rng: Optional[random.Random] = None):
        super().__init__(player_id)
        self.difficulty = difficulty
        self.rng = rng or random.Random()

    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """Choose a play or a pass when it is this bot's turn."""
        if not self.is_my_turn(state):
            return None

        if not self.get_player_hand(state):
            return None

        player = state.get_player(self.player_id)
        difficulty = self.difficulty or player.difficulty or state.ai_difficulty
        return decide_ai_move(player, self.get_current_hand(state), difficulty, self.rng)
