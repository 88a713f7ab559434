"""
State serialization and sanitization utilities.

A game travels across the replication boundary as one JSON document holding
every card, player and played hand inline.
"""

from typing import Any, Dict, List, Optional

import orjson

from .constants import Difficulty, GamePhase, HandKind
from .models import Card, GameState, PlayedHand, Player, PlayLogEntry, RoundResult
from .rules import RuleConfig


def card_to_dict(card: Card) -> Dict[str, Any]:
    if card.is_joker:
        return {"id": card.id, "joker_type": card.joker_type}
    return {"id": card.id, "suit": card.suit, "rank": card.rank}


def card_from_dict(data: Dict[str, Any]) -> Card:
    return Card(
        id=data["id"],
        suit=data.get("suit"),
        rank=data.get("rank"),
        joker_type=data.get("joker_type")
    )


def _cards(items: List[Dict[str, Any]]) -> List[Card]:
    return [card_from_dict(item) for item in items]


def _hand_to_dict(hand: Optional[PlayedHand]) -> Optional[Dict[str, Any]]:
    if hand is None:
        return None
    return {
        "cards": [card_to_dict(c) for c in hand.cards],
        "kind": hand.kind.value,
        "player_id": hand.player_id,
        "player_name": hand.player_name
    }


def _player_to_dict(player: Player) -> Dict[str, Any]:
    return {
        "id": player.id,
        "name": player.name,
        "hand": [card_to_dict(c) for c in player.hand],
        "temp_points": player.temp_points,
        "total_points": player.total_points,
        "has_finished": player.has_finished,
        "finish_position": player.finish_position,
        "is_ai": player.is_ai,
        "difficulty": player.difficulty.value if player.difficulty else None,
        "first_place_count": player.first_place_count
    }


def to_document(state: GameState) -> Dict[str, Any]:
    """Full, unsanitized snapshot as a JSON-compatible dictionary."""
    return {
        "id": state.id,
        "version": state.version,
        "phase": state.phase.value,
        "players": [_player_to_dict(p) for p in state.players],
        "current_player_id": state.current_player_id,
        "current_hand": _hand_to_dict(state.current_hand),
        "played_cards": [card_to_dict(c) for c in state.played_cards],
        "passed_player_ids": list(state.passed_player_ids),
        "round_number": state.round_number,
        "target_points": state.target_points,
        "winner_id": state.winner_id,
        "first_player_id": state.first_player_id,
        "last_player_id": state.last_player_id,
        "ai_difficulty": state.ai_difficulty.value,
        "play_log": [
            {
                "player_name": entry.player_name,
                "action": entry.action,
                "cards": [card_to_dict(c) for c in entry.cards],
                "detail": entry.detail
            }
            for entry in state.play_log
        ],
        "round_history": [
            {
                "round_number": r.round_number,
                "first_player_id": r.first_player_id,
                "second_player_id": r.second_player_id,
                "last_player_id": r.last_player_id,
                "gains": dict(r.gains),
                "last_hand_points": r.last_hand_points
            }
            for r in state.round_history
        ],
        "rules": state.rule_config.model_dump(mode="json")
    }


def from_document(data: Dict[str, Any]) -> GameState:
    """Rebuild a GameState from a document produced by to_document."""
    current_hand = data.get("current_hand")
    return GameState(
        id=data["id"],
        version=data.get("version", 0),
        phase=GamePhase(data["phase"]),
        players=[
            Player(
                id=p["id"],
                name=p["name"],
                hand=_cards(p.get("hand", [])),
                temp_points=p.get("temp_points", 0),
                total_points=p.get("total_points", 0),
                has_finished=p.get("has_finished", False),
                finish_position=p.get("finish_position"),
                is_ai=p.get("is_ai", False),
                difficulty=Difficulty(p["difficulty"]) if p.get("difficulty") else None,
                first_place_count=p.get("first_place_count", 0)
            )
            for p in data.get("players", [])
        ],
        current_player_id=data.get("current_player_id"),
        current_hand=PlayedHand(
            cards=_cards(current_hand["cards"]),
            kind=HandKind(current_hand["kind"]),
            player_id=current_hand["player_id"],
            player_name=current_hand["player_name"]
        ) if current_hand else None,
        played_cards=_cards(data.get("played_cards", [])),
        passed_player_ids=list(data.get("passed_player_ids", [])),
        round_number=data.get("round_number", 0),
        target_points=data.get("target_points", 100),
        winner_id=data.get("winner_id"),
        first_player_id=data.get("first_player_id"),
        last_player_id=data.get("last_player_id"),
        ai_difficulty=Difficulty(data.get("ai_difficulty", Difficulty.MEDIUM.value)),
        play_log=[
            PlayLogEntry(
                player_name=e["player_name"],
                action=e["action"],
                cards=_cards(e.get("cards", [])),
                detail=e.get("detail")
            )
            for e in data.get("play_log", [])
        ],
        round_history=[RoundResult(**r) for r in data.get("round_history", [])],
        rule_config=RuleConfig(**data["rules"]) if data.get("rules") else RuleConfig()
    )


def dumps(state: GameState) -> bytes:
    return orjson.dumps(to_document(state))


def loads(raw: bytes) -> GameState:
    return from_document(orjson.loads(raw))


def _hand_visible(state: GameState, player: Player, viewer_id: Optional[str]) -> bool:
    if player.id == viewer_id or state.phase == GamePhase.GAME_END:
        return True
    return state.phase == GamePhase.ROUND_REVEAL and player.id == state.last_player_id


def sanitize_state(state: GameState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Sanitize game state for one participant.

    Args:
        state: Game state to sanitize
        viewer_id: ID of the player viewing the state (to show their cards)

    Returns:
        The document with other players' hands reduced to a card count. The
        last player's hand stays visible during the round reveal.
    """
    sanitized = to_document(state)

    for player, doc in zip(state.players, sanitized["players"]):
        doc["hand_count"] = len(player.hand)
        if not _hand_visible(state, player, viewer_id):
            del doc["hand"]

    return sanitized
