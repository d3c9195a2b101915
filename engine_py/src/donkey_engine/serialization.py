"""
State serialization and sanitization utilities.
"""

from typing import Any, Dict, Optional

from .engine import draw_target_index
from .models import Card, Player, RoomState


def serialize_card(card: Card) -> Dict[str, Any]:
    return {
        "id": card.id,
        "suit": card.suit,
        "rank": card.rank,
        "color": card.color,
    }


def sanitize_state(state: RoomState, viewer_id: Optional[str] = None) -> Dict[str, Any]:
    """
    Build the view of a room that one player is allowed to see.

    Only the viewer's own cards are included; everyone else, the draw target
    included, is reduced to a card count.

    Args:
        state: Room state to project
        viewer_id: ID of the player viewing the state

    Returns:
        Sanitized state dictionary safe for JSON transmission
    """
    target: Optional[Player] = None
    if state.in_progress:
        target_idx = draw_target_index(state)
        if target_idx >= 0:
            target = state.players[target_idx]

    current = state.current_player
    viewer = state.find_player(viewer_id) if viewer_id else None

    return {
        "id": state.id,
        "version": state.version,
        "phase": state.phase,
        "started": state.started,
        "turn_index": state.turn_index,
        "current_player_id": current.id if current else None,
        "target_player_id": target.id if target else None,
        "target_card_count": target.card_count if target else 0,
        "is_my_turn": bool(current and viewer_id and current.id == viewer_id),
        "my_id": viewer_id,
        "my_cards": [serialize_card(c) for c in viewer.hand] if viewer else [],
        "players": [
            {
                "id": p.id,
                "name": p.name,
                "card_count": p.card_count,
                "finished": p.finished,
                "connected": p.connected,
                "is_me": p.id == viewer_id,
            }
            for p in state.players
        ],
        "finished_order": state.finished_order.copy(),
        "discard_pile_count": len(state.discard_pile),
        "winner_id": state.winner_id,
        "loser_id": state.loser_id,
        "host_id": state.host_id,
    }


def serialize_player_for_list(player: Player) -> Dict[str, Any]:
    """Serialize player for lobby player list."""
    return {
        "id": player.id,
        "name": player.name,
        "card_count": player.card_count,
        "finished": player.finished,
    }


def get_public_room_info(state: RoomState) -> Dict[str, Any]:
    """Get public information about a room for lobby previews."""
    return {
        "id": state.id,
        "phase": state.phase,
        "started": state.started,
        "player_count": len(state.players),
        "players": [serialize_player_for_list(p) for p in state.players],
    }

