"""
Turn, trick and round state machine.

Every transition takes a GameState snapshot and returns an ActionResult.
The input snapshot is never modified: accepted actions work on a deep copy,
rejected ones hand the original back untouched.
"""

import copy
import logging
import random
import uuid
from typing import List, Optional

from .bots.heuristic import decide_ai_move
from .constants import (
    ACTION_NOT_ALLOWED, DUPLICATE_PLAYER, GAME_FULL, LOG_COLLECT, LOG_DEAL, LOG_FINISH,
    LOG_GAME_END, LOG_PASS, LOG_PLAY, LOG_ROUND_END, NOT_ENOUGH_PLAYERS,
    NOT_YOUR_TURN, Difficulty, GamePhase
)
from .errors import GameError, InvariantViolation
from .models import GameState, PlayedHand, Player
from .rules import RuleConfig, default_rules
from .scoring import collect_trick, find_winner, redistribute_round_points
from .shuffle import deal_starting_state
from .validate import validate_pass, validate_play

logger = logging.getLogger(__name__)


class ActionResult:
    """Outcome of a state transition."""

    def __init__(
        self,
        success: bool,
        state: GameState,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None
    ):
        self.success = success
        self.state = state
        self.error_code = error_code
        self.error_message = error_message

    @classmethod
    def ok(cls, state: GameState) -> 'ActionResult':
        return cls(success=True, state=state)

    @classmethod
    def error(cls, state: GameState, error_code: str, error_message: str) -> 'ActionResult':
        return cls(success=False, state=state, error_code=error_code, error_message=error_message)

    def unwrap(self) -> GameState:
        """Return the new state, raising GameError if the action was rejected."""
        if not self.success:
            raise GameError(self.error_code, self.error_message)
        return self.state


def _reject(state: GameState, code: str, message: str) -> ActionResult:
    logger.debug(f"Rejected action in game {state.id}: [{code}] {message}")
    return ActionResult.error(state, code, message)


def _resolve_rng(rng: Optional[random.Random], seed: Optional[int]) -> Optional[random.Random]:
    if rng is None and seed is not None:
        return random.Random(seed)
    return rng


# ---------------------------------------------------------------- roster

def create_game(game_id: str, rules: Optional[RuleConfig] = None) -> GameState:
    """Create an empty table waiting for players."""
    rules = rules or default_rules
    return GameState(
        id=game_id,
        target_points=rules.target_points,
        ai_difficulty=rules.default_difficulty,
        rule_config=rules
    )


def join_game(state: GameState, player_id: str, name: str) -> ActionResult:
    """Seat a human player."""
    return _seat_player(state, Player(id=player_id, name=name))


def add_ai_player(
    state: GameState,
    name: Optional[str] = None,
    difficulty: Optional[Difficulty] = None,
    player_id: Optional[str] = None
) -> ActionResult:
    """Seat a computer player; difficulty defaults to the table's tier."""
    player_id = player_id or f"ai-{uuid.uuid4().hex[:8]}"
    name = name or f"Computer {len(state.players) + 1}"
    return _seat_player(state, Player(
        id=player_id,
        name=name,
        is_ai=True,
        difficulty=Difficulty(difficulty) if difficulty else state.ai_difficulty
    ))


def _seat_player(state: GameState, player: Player) -> ActionResult:
    if state.phase != GamePhase.WAITING:
        return _reject(state, ACTION_NOT_ALLOWED, "Players can only join before the game starts")
    if state.get_player(player.id) is not None:
        return _reject(state, DUPLICATE_PLAYER, f"Player {player.id} is already seated")
    if len(state.players) >= state.rule_config.max_players:
        return _reject(state, GAME_FULL, "Game is full")

    new_state = copy.deepcopy(state)
    new_state.players.append(player)
    new_state.increment_version()
    logger.info(f"{player.name} joined game {state.id} (seat {len(new_state.players) - 1})")
    return ActionResult.ok(new_state)


# ---------------------------------------------------------------- dealing

def _deal_round(state: GameState, rng: Optional[random.Random]):
    deal = deal_starting_state(
        state.player_ids(), rng,
        players_per_deck=state.rule_config.players_per_deck
    )
    for player in state.players:
        player.hand = deal.hands[player.id]
        player.temp_points = 0
        player.has_finished = False
        player.finish_position = None

    # The log covers one round; round_history keeps earlier results
    state.play_log = []
    state.clear_trick()
    state.phase = GamePhase.PLAYING
    state.current_player_id = deal.first_player_id
    state.first_player_id = deal.first_player_id
    state.last_player_id = None

    starter = state.get_player(deal.first_player_id)
    state.add_log(starter.name, LOG_DEAL, detail=f"Round {state.round_number}: has the 3 of spades and starts")
    logger.info(f"Round {state.round_number} of game {state.id} dealt, {starter.name} leads")


def start_game(state: GameState, seed: Optional[int] = None,
               rng: Optional[random.Random] = None) -> ActionResult:
    """Deal the first round."""
    if state.phase != GamePhase.WAITING:
        return _reject(state, ACTION_NOT_ALLOWED, f"Game already started (phase: {state.phase.value})")
    if len(state.players) < state.rule_config.min_players:
        return _reject(
            state, NOT_ENOUGH_PLAYERS,
            f"Need at least {state.rule_config.min_players} players"
        )

    new_state = copy.deepcopy(state)
    new_state.round_number = 1
    _deal_round(new_state, _resolve_rng(rng, seed))
    new_state.increment_version()
    return ActionResult.ok(new_state)


def start_next_round(state: GameState, seed: Optional[int] = None,
                     rng: Optional[random.Random] = None) -> ActionResult:
    """Leave the standings checkpoint and deal the next round."""
    if state.phase != GamePhase.ROUND_END:
        return _reject(state, ACTION_NOT_ALLOWED, f"No round to start (phase: {state.phase.value})")

    new_state = copy.deepcopy(state)
    new_state.round_number += 1
    _deal_round(new_state, _resolve_rng(rng, seed))
    new_state.increment_version()
    return ActionResult.ok(new_state)


# ---------------------------------------------------------------- turns

def next_active_player_id(state: GameState, from_id: str) -> Optional[str]:
    """Next player after from_id in seating order who still holds cards."""
    ids = state.player_ids()
    start = ids.index(from_id)
    for offset in range(1, len(ids) + 1):
        candidate = state.players[(start + offset) % len(ids)]
        if not candidate.has_finished:
            return candidate.id
    return None


def _finish_player(state: GameState, player: Player):
    position = sum(1 for p in state.players if p.has_finished) + 1
    player.has_finished = True
    player.finish_position = position
    if position == 1:
        player.first_place_count += 1
    state.add_log(player.name, LOG_FINISH, detail=f"finished in position {position}")
    logger.info(f"{player.name} finished in position {position} in game {state.id}")


def _enter_reveal(state: GameState):
    remaining = state.players_with_cards()
    if len(remaining) != 1:
        raise InvariantViolation(f"Round end needs exactly one player with cards, found {len(remaining)}")

    last = remaining[0]
    state.last_player_id = last.id
    state.current_player_id = None
    state.phase = GamePhase.ROUND_REVEAL
    state.add_log(last.name, LOG_ROUND_END, list(last.hand), detail="finished last")
    logger.info(f"Round {state.round_number} of game {state.id} over, {last.name} is last")


def apply_play(state: GameState, player_id: str, card_ids: List[str]) -> ActionResult:
    """
    Play cards from the acting player's hand.

    Args:
        state: Current game state
        player_id: ID of the player acting
        card_ids: IDs of the cards being played

    Returns:
        ActionResult with the new state, or the rejection reason
    """
    validation = validate_play(state, player_id, card_ids)
    if not validation.valid:
        return _reject(state, validation.error_code, validation.error_message)

    new_state = copy.deepcopy(state)
    player = new_state.get_player(player_id)
    played_ids = set(card_ids)
    cards = [card for card in player.hand if card.id in played_ids]
    player.hand = [card for card in player.hand if card.id not in played_ids]

    new_state.played_cards.extend(cards)
    new_state.current_hand = PlayedHand(
        cards=cards,
        kind=validation.kind,
        player_id=player.id,
        player_name=player.name
    )
    new_state.clear_passes()
    new_state.add_log(player.name, LOG_PLAY, cards, detail=validation.kind.value)
    logger.info(f"{player.name} played {validation.kind.value} ({len(cards)} cards) in game {state.id}")

    if not player.hand:
        _finish_player(new_state, player)

    if len(new_state.players_with_cards()) <= 1:
        _enter_reveal(new_state)
    else:
        new_state.current_player_id = next_active_player_id(new_state, player_id)

    new_state.increment_version()
    return ActionResult.ok(new_state)


def apply_pass(state: GameState, player_id: str) -> ActionResult:
    """
    Pass on the current trick.

    Once every player still holding cards, other than the owner of the hand
    on the table, has passed, the owner collects the trick and leads next.
    """
    validation = validate_pass(state, player_id)
    if not validation.valid:
        return _reject(state, validation.error_code, validation.error_message)

    new_state = copy.deepcopy(state)
    player = new_state.get_player(player_id)
    new_state.passed_player_ids.append(player_id)
    new_state.add_log(player.name, LOG_PASS)

    owner_id = new_state.current_hand.player_id
    waiting_on = [
        p.id for p in new_state.players_with_cards()
        if p.id != owner_id and p.id not in new_state.passed_player_ids
    ]

    if waiting_on:
        new_state.current_player_id = next_active_player_id(new_state, player_id)
    else:
        owner = new_state.get_player(owner_id)
        points = collect_trick(new_state)
        new_state.add_log(owner.name, LOG_COLLECT, detail=f"won the trick and collected {points} points")
        logger.info(f"{owner.name} collected a trick worth {points} points in game {state.id}")
        if owner.has_finished:
            new_state.current_player_id = next_active_player_id(new_state, owner_id)
        else:
            new_state.current_player_id = owner_id

    new_state.increment_version()
    return ActionResult.ok(new_state)


# ---------------------------------------------------------------- round end

def continue_from_reveal(state: GameState) -> ActionResult:
    """
    Score the revealed round and move to the standings or the final result.
    """
    if state.phase != GamePhase.ROUND_REVEAL:
        return _reject(state, ACTION_NOT_ALLOWED, f"No round to score (phase: {state.phase.value})")

    new_state = copy.deepcopy(state)
    result = redistribute_round_points(new_state)
    new_state.round_history.append(result)
    new_state.clear_trick()

    winner = find_winner(new_state)
    if winner:
        new_state.phase = GamePhase.GAME_END
        new_state.winner_id = winner.id
        new_state.add_log(winner.name, LOG_GAME_END, detail=f"wins with {winner.total_points} points")
        logger.info(f"{winner.name} won game {state.id} with {winner.total_points} points")
    else:
        new_state.phase = GamePhase.ROUND_END
        logger.info(f"Round {state.round_number} of game {state.id} scored: {result.gains}")

    new_state.increment_version()
    return ActionResult.ok(new_state)


# ---------------------------------------------------------------- computer players

def apply_ai_move(state: GameState, rng: Optional[random.Random] = None) -> ActionResult:
    """Let the computer player whose turn it is act."""
    player = state.get_player(state.current_player_id)
    if state.phase != GamePhase.PLAYING or player is None or not player.is_ai:
        return _reject(state, NOT_YOUR_TURN, "It is not a computer player's turn")

    action = decide_ai_move(player, state.current_hand, player.difficulty or state.ai_difficulty, rng)
    if action.type == 'play':
        return apply_play(state, player.id, [card.id for card in action.cards])
    return apply_pass(state, player.id)
