"""
Action documents submitted by participants, and their dispatch to the engine.
"""

import random
from enum import Enum
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from .constants import Difficulty
from .engine import (
    ActionResult, add_ai_player, apply_pass, apply_play, continue_from_reveal,
    join_game, start_game, start_next_round
)
from .models import GameState


class ActionType(str, Enum):
    """Inbound action types."""
    JOIN = "join"
    ADD_AI = "add_ai"
    START = "start"
    PLAY = "play"
    PASS = "pass"
    CONTINUE = "continue"
    NEXT_ROUND = "next_round"


class BaseAction(BaseModel):
    """Base action model."""
    type: ActionType


class JoinAction(BaseAction):
    """Join game action."""
    type: ActionType = ActionType.JOIN
    player_id: str = Field(..., min_length=1, max_length=50)
    name: str = Field(..., min_length=1, max_length=30)


class AddAIAction(BaseAction):
    """Add a computer player."""
    type: ActionType = ActionType.ADD_AI
    name: Optional[str] = Field(default=None, min_length=1, max_length=30)
    difficulty: Optional[Difficulty] = None


class StartAction(BaseAction):
    """Start game action."""
    type: ActionType = ActionType.START
    seed: Optional[int] = None


class PlayAction(BaseAction):
    """Play cards action."""
    type: ActionType = ActionType.PLAY
    player_id: str = Field(..., min_length=1)
    cards: List[str] = Field(..., min_length=1)


class PassAction(BaseAction):
    """Pass turn action."""
    type: ActionType = ActionType.PASS
    player_id: str = Field(..., min_length=1)


class ContinueAction(BaseAction):
    """Score the revealed round."""
    type: ActionType = ActionType.CONTINUE


class NextRoundAction(BaseAction):
    """Deal the next round."""
    type: ActionType = ActionType.NEXT_ROUND
    seed: Optional[int] = None


# Union type for all inbound actions
InboundAction = Union[
    JoinAction,
    AddAIAction,
    StartAction,
    PlayAction,
    PassAction,
    ContinueAction,
    NextRoundAction
]

ACTION_MAP = {
    ActionType.JOIN: JoinAction,
    ActionType.ADD_AI: AddAIAction,
    ActionType.START: StartAction,
    ActionType.PLAY: PlayAction,
    ActionType.PASS: PassAction,
    ActionType.CONTINUE: ContinueAction,
    ActionType.NEXT_ROUND: NextRoundAction,
}


def parse_action(data: Dict[str, Any]) -> InboundAction:
    """
    Parse a raw action document into the matching model.

    Raises:
        ValueError: If the action type is unknown or the data is malformed
    """
    action_type = data.get("type")

    if not action_type:
        raise ValueError("Missing action type")

    try:
        action_type = ActionType(action_type)
    except ValueError:
        raise ValueError(f"Invalid action type: {action_type}")

    try:
        return ACTION_MAP[action_type](**data)
    except Exception as e:
        raise ValueError(f"Invalid action data: {str(e)}")


def dispatch(state: GameState, action: InboundAction,
             rng: Optional[random.Random] = None) -> ActionResult:
    """Apply a parsed action to the state."""
    if isinstance(action, JoinAction):
        return join_game(state, action.player_id, action.name)
    if isinstance(action, AddAIAction):
        return add_ai_player(state, name=action.name, difficulty=action.difficulty)
    if isinstance(action, StartAction):
        return start_game(state, seed=action.seed, rng=rng)
    if isinstance(action, PlayAction):
        return apply_play(state, action.player_id, action.cards)
    if isinstance(action, PassAction):
        return apply_pass(state, action.player_id)
    if isinstance(action, ContinueAction):
        return continue_from_reveal(state)
    if isinstance(action, NextRoundAction):
        return start_next_round(state, seed=action.seed, rng=rng)
    raise ValueError(f"No handler for action: {action!r}")
