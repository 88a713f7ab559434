"""
Session driver tying the engine to a game store.

A session loads the latest snapshot, applies one action, and saves the
result, which the store then fans out to subscribers. Computer players are
driven from here with a cosmetic pause before each move.
"""

import asyncio
import logging
import random
from typing import Any, Dict, Optional, Union

from .actions import InboundAction, dispatch, parse_action
from .constants import GAME_NOT_FOUND, GamePhase
from .engine import ActionResult, apply_ai_move, continue_from_reveal, create_game, start_next_round
from .errors import GameError
from .models import GameState
from .rules import RuleConfig, default_rules
from .store import InMemoryGameStore

logger = logging.getLogger(__name__)


class GameSession:
    def __init__(
        self,
        store: InMemoryGameStore,
        game_id: str,
        rules: Optional[RuleConfig] = None,
        rng: Optional[random.Random] = None
    ):
        self.store = store
        self.game_id = game_id
        self.rules = rules or default_rules
        self.rng = rng or random.Random()

    def create(self) -> GameState:
        """Create the game in the store if it does not exist yet."""
        state = self.store.load(self.game_id)
        if state is None:
            state = create_game(self.game_id, self.rules)
            self.store.save(state)
            logger.info(f"Created game {self.game_id}")
        return state

    @property
    def state(self) -> GameState:
        state = self.store.load(self.game_id)
        if state is None:
            raise GameError(GAME_NOT_FOUND, f"Game {self.game_id} does not exist")
        return state

    def _commit(self, result: ActionResult) -> ActionResult:
        if result.success:
            self.store.save(result.state)
        return result

    def submit(self, action: Union[InboundAction, Dict[str, Any]]) -> ActionResult:
        """Apply one participant action against the latest snapshot."""
        if isinstance(action, dict):
            action = parse_action(action)
        return self._commit(dispatch(self.state, action, self.rng))

    def ai_to_act(self) -> bool:
        state = self.state
        player = state.get_player(state.current_player_id)
        return state.phase == GamePhase.PLAYING and player is not None and player.is_ai

    async def run_ai_turns(self, auto_advance: bool = False, max_moves: int = 10000) -> int:
        """
        Let computer players act until a human is up or play stops.

        Args:
            auto_advance: Also score reveals and deal next rounds, for tables
                with no human to press continue
            max_moves: Upper bound on the number of moves made

        Returns:
            Number of moves made
        """
        moves = 0
        while moves < max_moves:
            state = self.state

            if auto_advance and state.phase == GamePhase.ROUND_REVEAL:
                self._commit(continue_from_reveal(state)).unwrap()
                continue
            if auto_advance and state.phase == GamePhase.ROUND_END:
                self._commit(start_next_round(state, rng=self.rng)).unwrap()
                continue
            if not self.ai_to_act():
                break

            if self.rules.ai_think_delay:
                await asyncio.sleep(self.rules.ai_think_delay)

            result = self._commit(apply_ai_move(self.state, self.rng))
            if not result.success:
                logger.error(f"Computer move rejected in game {self.game_id}: {result.error_message}")
            result.unwrap()
            moves += 1

        return moves
