"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Literal, Optional

from .constants import Difficulty, GamePhase, HandKind
from .rules import RuleConfig

Suit = Literal['clubs', 'diamonds', 'hearts', 'spades']
Rank = Literal['3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A', '2']
JokerType = Literal['small', 'big']


@dataclass(frozen=True)
class Card:
    id: str
    suit: Optional[Suit] = field(default=None, compare=False)
    rank: Optional[Rank] = field(default=None, compare=False)
    joker_type: Optional[JokerType] = field(default=None, compare=False)

    def __post_init__(self):
        has_face = self.suit is not None and self.rank is not None
        if has_face == (self.joker_type is not None):
            raise ValueError(f"Card {self.id} must be either a suited card or a joker")

    @property
    def is_joker(self) -> bool:
        return self.joker_type is not None

    def __str__(self) -> str:
        if self.is_joker:
            return f"{self.joker_type} joker"
        return f"{self.rank} of {self.suit}"


@dataclass
class PlayedHand:
    cards: List[Card]
    kind: HandKind
    player_id: str
    player_name: str


@dataclass
class Player:
    id: str
    name: str
    hand: List[Card] = field(default_factory=list)
    temp_points: int = 0  # points collected during the current round
    total_points: int = 0
    has_finished: bool = False
    finish_position: Optional[int] = None
    is_ai: bool = False
    difficulty: Optional[Difficulty] = None
    first_place_count: int = 0


@dataclass
class PlayLogEntry:
    player_name: str
    action: str
    cards: List[Card] = field(default_factory=list)
    detail: Optional[str] = None


@dataclass
class RoundResult:
    round_number: int
    first_player_id: str
    second_player_id: str
    last_player_id: str
    gains: dict = field(default_factory=dict)  # player id -> points added this round
    last_hand_points: int = 0


@dataclass
class GameState:
    id: str
    version: int = 0
    phase: GamePhase = GamePhase.WAITING
    players: List[Player] = field(default_factory=list)  # seating order
    current_player_id: Optional[str] = None
    current_hand: Optional[PlayedHand] = None
    played_cards: List[Card] = field(default_factory=list)  # trick pool
    passed_player_ids: List[str] = field(default_factory=list)
    round_number: int = 0
    target_points: int = 100
    winner_id: Optional[str] = None
    first_player_id: Optional[str] = None  # holder of the 3 of spades
    last_player_id: Optional[str] = None  # last place, set during the reveal
    ai_difficulty: Difficulty = Difficulty.MEDIUM
    play_log: List[PlayLogEntry] = field(default_factory=list)
    round_history: List[RoundResult] = field(default_factory=list)
    rule_config: RuleConfig = field(default_factory=RuleConfig)

    def get_player(self, player_id: Optional[str]) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def player_ids(self) -> List[str]:
        return [p.id for p in self.players]

    def players_with_cards(self) -> List[Player]:
        return [p for p in self.players if not p.has_finished]

    def clear_passes(self):
        self.passed_player_ids = []

    def clear_trick(self):
        self.current_hand = None
        self.played_cards = []
        self.clear_passes()

    def add_log(self, player_name: str, action: str, cards: Optional[List[Card]] = None,
                detail: Optional[str] = None):
        self.play_log.append(PlayLogEntry(
            player_name=player_name,
            action=action,
            cards=list(cards or []),
            detail=detail
        ))

    def increment_version(self):
        self.version += 1
