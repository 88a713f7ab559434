"""
In-memory stand-in for the replicated game store.

Snapshots are kept as encoded JSON documents, so anything saved here has
already proven it survives the trip across the replication boundary.
Subscribers are called synchronously, in save order.
"""

import logging
import threading
from collections import defaultdict
from typing import Callable, Dict, List, Optional

from .models import GameState
from .serialization import dumps, loads

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class InMemoryGameStore:
    def __init__(self):
        self.documents: Dict[str, bytes] = {}
        self.listeners: Dict[str, List[Listener]] = defaultdict(list)
        self.game_locks = defaultdict(threading.Lock)

    def save(self, state: GameState):
        """Store a snapshot and push it to every subscriber of the game."""
        with self.game_locks[state.id]:
            raw = dumps(state)
            self.documents[state.id] = raw
            listeners = list(self.listeners[state.id])

        for on_change in listeners:
            try:
                on_change(loads(raw))
            except Exception as e:
                logger.error(f"Error notifying subscriber of game {state.id}: {e}")

    def load(self, game_id: str) -> Optional[GameState]:
        raw = self.documents.get(game_id)
        return loads(raw) if raw is not None else None

    def subscribe(self, game_id: str, on_change: Listener) -> Callable[[], None]:
        """
        Register for snapshots of one game.

        Returns:
            A callable that removes the subscription
        """
        with self.game_locks[game_id]:
            self.listeners[game_id].append(on_change)

        def unsubscribe():
            with self.game_locks[game_id]:
                if on_change in self.listeners[game_id]:
                    self.listeners[game_id].remove(on_change)

        return unsubscribe

    def delete(self, game_id: str):
        with self.game_locks[game_id]:
            self.documents.pop(game_id, None)
            self.listeners.pop(game_id, None)
        self.game_locks.pop(game_id, None)
