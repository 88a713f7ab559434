"""
Rules engine for the WuShiK trick-shedding card game.
"""

from .bots.heuristic import decide_ai_move
from .comparator import beats, point_value, rank_value
from .engine import (
    ActionResult, add_ai_player, apply_pass, apply_play, continue_from_reveal,
    create_game, join_game, start_game, start_next_round
)
from .shuffle import build_deck, deal_starting_state
from .validate import classify_hand

__all__ = [
    "ActionResult",
    "add_ai_player",
    "apply_pass",
    "apply_play",
    "beats",
    "build_deck",
    "classify_hand",
    "continue_from_reveal",
    "create_game",
    "deal_starting_state",
    "decide_ai_move",
    "join_game",
    "point_value",
    "rank_value",
    "start_game",
    "start_next_round",
]
