"""
Base bot interface and utilities.
"""

from abc import ABC, abstractmethod
from typing import List, Optional

from ..constants import GamePhase
from ..models import Card, GameState, PlayedHand


class BotAction:
    """Represents a bot action."""

    def __init__(self, action_type: str, cards: Optional[List[Card]] = None):
        self.type = action_type
        self.cards = cards or []

    @classmethod
    def play(cls, cards: List[Card]) -> 'BotAction':
        """Create a play action."""
        return cls('play', cards=list(cards))

    @classmethod
    def pass_turn(cls) -> 'BotAction':
        """Create a pass action."""
        return cls('pass')

    @property
    def card_ids(self) -> List[str]:
        return [card.id for card in self.cards]

    def __repr__(self) -> str:
        if self.type == 'play':
            return f"BotAction(play, {self.card_ids})"
        return "BotAction(pass)"


class BaseBot(ABC):
    """Abstract base class for bot players."""

    def __init__(self, player_id: str):
        self.player_id = player_id

    @abstractmethod
    def choose_action(self, state: GameState) -> Optional[BotAction]:
        """
        Choose an action based on the current game state.

        Args:
            state: Current game state

        Returns:
            BotAction to take, or None if no action needed
        """
        pass

    def get_player_hand(self, state: GameState) -> List[Card]:
        """Get this bot's current hand."""
        player = state.get_player(self.player_id)
        return player.hand if player else []

    def get_current_hand(self, state: GameState) -> Optional[PlayedHand]:
        """Get the hand currently on the table."""
        return state.current_hand

    def is_my_turn(self, state: GameState) -> bool:
        """Check if it's this bot's turn."""
        return state.phase == GamePhase.PLAYING and state.current_player_id == self.player_id
