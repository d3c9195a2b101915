"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, Field, StrictInt, ValidationError

from .. import errors


class EventType(str, Enum):
    """Inbound event types."""
    JOIN = "join"
    START = "start"
    DRAW = "draw"
    REQUEST_STATE = "request_state"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    JOIN_SUCCESS = "join_success"
    STATE_FULL = "state_full"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    INVALID_EVENT = "INVALID_EVENT"
    ROOM_NOT_FOUND = errors.ROOM_NOT_FOUND
    GAME_ALREADY_STARTED = errors.GAME_ALREADY_STARTED
    ROOM_FULL = errors.ROOM_FULL
    NOT_HOST = errors.NOT_HOST
    NOT_ENOUGH_PLAYERS = errors.NOT_ENOUGH_PLAYERS
    NOT_YOUR_TURN = errors.NOT_YOUR_TURN
    INVALID_CARD_SELECTION = errors.INVALID_CARD_SELECTION
    GAME_NOT_STARTED = errors.GAME_NOT_STARTED
    INTERNAL = "INTERNAL"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    type: EventType


class JoinEvent(BaseEvent):
    """Join (or rejoin) a room."""
    type: EventType = EventType.JOIN
    room_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1, max_length=64)
    name: Optional[str] = Field(default=None, max_length=30)


class StartEvent(BaseEvent):
    """Start game event, authorised by the host credential."""
    type: EventType = EventType.START
    room_id: str = Field(..., min_length=1, max_length=50)
    host_id: str = Field(..., min_length=1, max_length=64)
    seed: Optional[int] = None


class DrawEvent(BaseEvent):
    """Draw one card, by index, from the draw target's hand."""
    type: EventType = EventType.DRAW
    room_id: str = Field(..., min_length=1, max_length=50)
    player_id: str = Field(..., min_length=1, max_length=64)
    card_index: StrictInt


class RequestStateEvent(BaseEvent):
    """Request full state event."""
    type: EventType = EventType.REQUEST_STATE


InboundEvent = Union[JoinEvent, StartEvent, DrawEvent, RequestStateEvent]


# Outbound event models
class JoinSuccessEvent(BaseModel):
    """Join success confirmation event."""
    type: OutboundEventType = OutboundEventType.JOIN_SUCCESS
    player_id: str
    room_id: str
    timestamp: float


class StateFullEvent(BaseModel):
    """Full state event."""
    type: OutboundEventType = OutboundEventType.STATE_FULL
    state: Dict[str, Any]
    timestamp: float


class ErrorEvent(BaseModel):
    """Error event."""
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str
    timestamp: float


OutboundEvent = Union[JoinSuccessEvent, StateFullEvent, ErrorEvent]


EVENT_MAP = {
    EventType.JOIN: JoinEvent,
    EventType.START: StartEvent,
    EventType.DRAW: DrawEvent,
    EventType.REQUEST_STATE: RequestStateEvent,
}


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")
    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    try:
        return EVENT_MAP[event_type](**data)
    except ValidationError as e:
        raise ValueError(f"Invalid event data: {e}")


def create_error_event(code: ErrorCode, message: str) -> ErrorEvent:
    """Create an error event."""
    return ErrorEvent(code=code, message=message, timestamp=time.time())


def create_game_error_event(exc: errors.GameError) -> ErrorEvent:
    """Map a rejected engine operation onto its error event."""
    try:
        code = ErrorCode(exc.code)
    except ValueError:
        code = ErrorCode.INTERNAL
    return create_error_event(code, exc.message)


def create_join_success_event(player_id: str, room_id: str) -> JoinSuccessEvent:
    """Create a join success event."""
    return JoinSuccessEvent(player_id=player_id, room_id=room_id, timestamp=time.time())


def create_state_full_event(state: Dict[str, Any]) -> StateFullEvent:
    """Create a full state event."""
    return StateFullEvent(state=state, timestamp=time.time())
