# engine_py/src/wushik_engine/scoring.py

import logging
from typing import Dict, Optional

from .comparator import points_in
from .errors import InvariantViolation
from .models import GameState, Player, RoundResult

logger = logging.getLogger(__name__)


def collect_trick(state: GameState) -> int:
    """
    Award the trick pool to the owner of the hand on the table.

    The owner gains the points of every card played during the trick, not
    just their own. Mutates the state: the trick is cleared and the points
    are added to the owner's temp_points.

    Returns:
        The number of points collected
    """
    owner = state.get_player(state.current_hand.player_id)
    if owner is None:
        raise InvariantViolation(f"Trick owner {state.current_hand.player_id} is not seated")

    points = points_in(state.played_cards)
    owner.temp_points += points
    state.clear_trick()
    return points


def player_at_position(state: GameState, position: int) -> Optional[Player]:
    for player in state.players:
        if player.finish_position == position:
            return player
    return None


def redistribute_round_points(state: GameState) -> RoundResult:
    """
    Fold the round's points into every player's total.

    Every player adds their own temp_points, except the last player, whose
    temp_points go to first place instead. Second place also gains the
    points still in the last player's hand. Mutates the state: totals are
    updated and all per-round markers are reset.

    Raises:
        InvariantViolation: if the last, first or second place is missing
    """
    last = state.get_player(state.last_player_id)
    first = player_at_position(state, 1)
    second = player_at_position(state, 2)

    if last is None or first is None or second is None:
        logger.error(f"Round {state.round_number} ended without a full podium in game {state.id}")
        raise InvariantViolation("Round end requires a first, second and last place")

    last_hand_points = points_in(last.hand)
    gains: Dict[str, int] = {}
    for player in state.players:
        if player.id == last.id:
            gains[player.id] = 0
        else:
            gains[player.id] = player.temp_points
    gains[first.id] += last.temp_points
    gains[second.id] += last_hand_points

    for player in state.players:
        player.total_points += gains[player.id]
        player.temp_points = 0
        player.has_finished = False
        player.finish_position = None

    return RoundResult(
        round_number=state.round_number,
        first_player_id=first.id,
        second_player_id=second.id,
        last_player_id=last.id,
        gains=gains,
        last_hand_points=last_hand_points
    )


def find_winner(state: GameState) -> Optional[Player]:
    """First player in seating order at or past the target score."""
    for player in state.players:
        if player.total_points >= state.target_points:
            return player
    return None
