# engine_py/src/wushik_engine/errors.py

from .constants import INTERNAL_ERROR


class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class InvariantViolation(GameError):
    """Raised when the state itself is inconsistent, not when an action is merely illegal."""
    def __init__(self, message: str):
        super().__init__(INTERNAL_ERROR, message)

