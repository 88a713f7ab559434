"""
Hand classification and validation of play/pass attempts.
"""

from typing import List, Optional

from .comparator import beats, rank_value
from .constants import (
    ACTION_NOT_ALLOWED, CANNOT_BEAT, CARD_NOT_IN_HAND, ILLEGAL_PASS, INVALID_HAND,
    NOT_YOUR_TURN, PLAYER_NOT_FOUND, WUSHIK_RANKS, GamePhase, HandKind
)
from .models import Card, GameState, PlayedHand, Player


class ValidationResult:
    """Result of play or pass validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        kind: Optional[HandKind] = None,
        cards: Optional[List[Card]] = None
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.kind = kind
        self.cards = cards or []

    @classmethod
    def success(cls, kind: Optional[HandKind] = None, cards: Optional[List[Card]] = None) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, kind=kind, cards=cards)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def _all_same_rank(cards: List[Card]) -> bool:
    first = cards[0].rank
    return all(not card.is_joker and card.rank == first for card in cards)


def _is_consecutive(values: List[int]) -> bool:
    return all(b == a + 1 for a, b in zip(values, values[1:]))


def classify_hand(cards: List[Card]) -> Optional[HandKind]:
    """
    Determine which combination a selection of cards forms.

    Checks run in a fixed precedence and the first match wins, so a
    selection maps to at most one kind.

    Args:
        cards: Cards being played, in any order

    Returns:
        The HandKind, or None if the cards form no legal combination
    """
    count = len(cards)
    if count == 0:
        return None

    ordered = sorted(cards, key=rank_value)

    if count == 1:
        return HandKind.SINGLE

    if count == 2:
        return HandKind.PAIR if _all_same_rank(ordered) else None

    if count == 3:
        if _all_same_rank(ordered):
            return HandKind.TRIPLE
        if all(not c.is_joker for c in ordered) and {c.rank for c in ordered} == WUSHIK_RANKS:
            return HandKind.WUSHIK
        return None

    if _all_same_rank(ordered):
        return HandKind.BOMB

    if count >= 5 and not any(c.is_joker for c in ordered):
        if _is_consecutive([rank_value(c) for c in ordered]):
            return HandKind.STRAIGHT

    if count >= 6 and count % 2 == 0 and not any(c.is_joker for c in ordered):
        pairs = [ordered[i:i + 2] for i in range(0, count, 2)]
        if all(a.rank == b.rank for a, b in pairs):
            if _is_consecutive([rank_value(pair[0]) for pair in pairs]):
                return HandKind.TRIPLE_DOUBLE

    return None


def resolve_cards(player: Player, card_ids: List[str]) -> Optional[List[Card]]:
    """Look the ids up in the player's hand; None if any is missing or repeated."""
    if len(set(card_ids)) != len(card_ids):
        return None
    by_id = {card.id: card for card in player.hand}
    try:
        return [by_id[card_id] for card_id in card_ids]
    except KeyError:
        return None


def _validate_turn(state: GameState, player_id: str) -> Optional[ValidationResult]:
    if state.phase != GamePhase.PLAYING:
        return ValidationResult.error(
            ACTION_NOT_ALLOWED,
            f"Game is not in play phase (current: {state.phase.value})"
        )

    if state.get_player(player_id) is None:
        return ValidationResult.error(
            PLAYER_NOT_FOUND,
            f"Unknown player: {player_id}"
        )

    if state.current_player_id != player_id:
        return ValidationResult.error(
            NOT_YOUR_TURN,
            f"It's not your turn (current turn: {state.current_player_id})"
        )
    return None


def validate_play(state: GameState, player_id: str, card_ids: List[str]) -> ValidationResult:
    """
    Validate a card play attempt.

    Args:
        state: Current game state
        player_id: ID of player attempting the play
        card_ids: IDs of the cards being played

    Returns:
        ValidationResult with the classified kind and resolved cards on success
    """
    turn_error = _validate_turn(state, player_id)
    if turn_error:
        return turn_error

    player = state.get_player(player_id)
    cards = resolve_cards(player, card_ids)
    if cards is None:
        return ValidationResult.error(
            CARD_NOT_IN_HAND,
            "You don't hold all of those cards"
        )

    kind = classify_hand(cards)
    if kind is None:
        return ValidationResult.error(
            INVALID_HAND,
            "Invalid hand! Please select valid cards."
        )

    if state.current_hand is not None:
        candidate = PlayedHand(cards=cards, kind=kind, player_id=player.id, player_name=player.name)
        if not beats(candidate, state.current_hand):
            return ValidationResult.error(
                CANNOT_BEAT,
                f"Your {kind.value} cannot beat the current {state.current_hand.kind.value}"
            )

    return ValidationResult.success(kind=kind, cards=cards)


def validate_pass(state: GameState, player_id: str) -> ValidationResult:
    """Validate a pass attempt; somebody has to lead every trick."""
    turn_error = _validate_turn(state, player_id)
    if turn_error:
        return turn_error

    if state.current_hand is None:
        return ValidationResult.error(
            ILLEGAL_PASS,
            "You must lead this trick"
        )
    return ValidationResult.success()
