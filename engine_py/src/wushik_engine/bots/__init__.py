"""
Computer players for WuShiK.
"""

from .base import BaseBot, BotAction
from .heuristic import HeuristicBot, decide_ai_move

__all__ = ["BaseBot", "BotAction", "HeuristicBot", "decide_ai_move"]
