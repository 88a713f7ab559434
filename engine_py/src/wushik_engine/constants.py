"""Game constants and enumerations"""

from enum import Enum
from typing import Dict, List


RANK_ORDER: List[str] = ['3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A', '2']
SUIT_ORDER: List[str] = ['clubs', 'diamonds', 'hearts', 'spades']

SUIT_CLUBS = 'clubs'
SUIT_DIAMONDS = 'diamonds'
SUIT_HEARTS = 'hearts'
SUIT_SPADES = 'spades'

JOKER_SMALL = 'small'
JOKER_BIG = 'big'
JOKER_VALUES: Dict[str, int] = {JOKER_SMALL: 100, JOKER_BIG: 101}

# Only 5, 10 and K score
POINT_TABLE: Dict[str, int] = {'5': 5, '10': 10, 'K': 10}

WUSHIK_RANKS = frozenset({'5', '10', 'K'})

# The holder of this card leads the first trick of every round
STARTING_RANK = '3'
STARTING_SUIT = SUIT_SPADES

PLAYERS_PER_DECK = 4

# Hard AI treats anything above a 10 as worth saving
HIGH_CARD_THRESHOLD = RANK_ORDER.index('10')


class HandKind(str, Enum):
    """Closed set of legal combinations."""
    SINGLE = "single"
    PAIR = "pair"
    TRIPLE = "triple"
    WUSHIK = "wushik"
    STRAIGHT = "straight"
    TRIPLE_DOUBLE = "triple_double"
    BOMB = "bomb"


POWER_KINDS = frozenset({HandKind.BOMB, HandKind.WUSHIK})


class GamePhase(str, Enum):
    """Coarse game phase."""
    WAITING = "waiting"
    PLAYING = "playing"
    ROUND_REVEAL = "round_reveal"
    ROUND_END = "round_end"
    GAME_END = "game_end"


class Difficulty(str, Enum):
    """Computer player difficulty tiers."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


# Error codes
INVALID_HAND = "INVALID_HAND"
CANNOT_BEAT = "CANNOT_BEAT"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
ILLEGAL_PASS = "ILLEGAL_PASS"
PLAYER_NOT_FOUND = "PLAYER_NOT_FOUND"
CARD_NOT_IN_HAND = "CARD_NOT_IN_HAND"
ACTION_NOT_ALLOWED = "ACTION_NOT_ALLOWED"
GAME_FULL = "GAME_FULL"
DUPLICATE_PLAYER = "DUPLICATE_PLAYER"
NOT_ENOUGH_PLAYERS = "NOT_ENOUGH_PLAYERS"
GAME_NOT_FOUND = "GAME_NOT_FOUND"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Play log actions
LOG_DEAL = "deal"
LOG_PLAY = "play"
LOG_PASS = "pass"
LOG_COLLECT = "collect"
LOG_FINISH = "finish"
LOG_ROUND_END = "round_end"
LOG_GAME_END = "game_end"
