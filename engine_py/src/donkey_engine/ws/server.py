"""
FastAPI WebSocket server for the Donkey game.
"""

import json
import logging
import uuid
from typing import Dict, Optional, Tuple

import orjson
from fastapi import FastAPI, HTTPException, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from ..engine import DonkeyEngine
from ..errors import GameError
from ..models import RoomState
from ..serialization import sanitize_state, get_public_room_info
from .events import (
    parse_inbound_event, create_error_event, create_game_error_event,
    create_join_success_event, create_state_full_event, ErrorCode,
    JoinEvent, StartEvent, DrawEvent, RequestStateEvent,
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

# FastAPI app
app = FastAPI(title="Donkey Game Engine", version="1.0.0")

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Global state
engine = DonkeyEngine()


class CreateRoomResponse(BaseModel):
    game_id: str
    host_id: str


class ConnectionManager:
    """Maps live WebSockets to (room, player) and pushes events to them."""

    def __init__(self):
        self.player_connections: Dict[Tuple[str, str], WebSocket] = {}
        self.connection_bindings: Dict[WebSocket, Tuple[str, str]] = {}
        self.connection_ids: Dict[WebSocket, str] = {}

    def register(self, websocket: WebSocket) -> str:
        connection_id = str(uuid.uuid4())
        self.connection_ids[websocket] = connection_id
        return connection_id

    def connect(self, websocket: WebSocket, room_id: str, player_id: str):
        """Bind a connection to a player, replacing any previous connection for them."""
        previous = self.connection_bindings.get(websocket)
        if previous and previous != (room_id, player_id):
            self.player_connections.pop(previous, None)

        old_socket = self.player_connections.get((room_id, player_id))
        if old_socket is not None and old_socket is not websocket:
            self.connection_bindings.pop(old_socket, None)

        self.player_connections[(room_id, player_id)] = websocket
        self.connection_bindings[websocket] = (room_id, player_id)
        logger.info(f"Player {player_id} connected to room {room_id}")

    def disconnect(self, websocket: WebSocket) -> Tuple[Optional[str], Optional[str]]:
        """Forget a connection. Returns the (player_id, room_id) it was bound to, if any."""
        self.connection_ids.pop(websocket, None)
        binding = self.connection_bindings.pop(websocket, None)
        if not binding:
            return None, None

        room_id, player_id = binding
        if self.player_connections.get(binding) is websocket:
            del self.player_connections[binding]
        logger.info(f"Player {player_id} disconnected from room {room_id}")
        return player_id, room_id

    def binding(self, websocket: WebSocket) -> Optional[Tuple[str, str]]:
        return self.connection_bindings.get(websocket)

    def connection_count(self) -> int:
        return len(self.player_connections)

    async def send_event(self, websocket: WebSocket, event: BaseModel):
        await websocket.send_text(orjson.dumps(event.model_dump(mode="json")).decode())

    async def send_to_player(self, room_id: str, player_id: str, event: BaseModel) -> bool:
        """Push an event to a player's current connection; False if they are offline."""
        websocket = self.player_connections.get((room_id, player_id))
        if websocket is None:
            return False
        try:
            await self.send_event(websocket, event)
            return True
        except Exception as e:
            # The receive loop of that socket notices the failure and cleans up
            logger.error(f"Error sending to player {player_id}: {e}")
            return False

    async def broadcast_state(self, room: RoomState):
        """Send every connected player their own full view of the room."""
        for player in list(room.players):
            if not player.connected:
                continue
            state_event = create_state_full_event(sanitize_state(room, player.id))
            await self.send_to_player(room.id, player.id, state_event)


manager = ConnectionManager()


@app.get("/")
async def root():
    return {"message": "Donkey Card Game API", "version": "1.0.0"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "rooms": len(engine.rooms),
        "connections": manager.connection_count(),
    }


@app.post("/api/rooms", response_model=CreateRoomResponse)
@app.get("/api/create-game", response_model=CreateRoomResponse)
async def create_game():
    """Create a room and hand back its code and host credential."""
    room = engine.create_room()
    return CreateRoomResponse(game_id=room.id, host_id=room.host_id)


@app.get("/api/rooms/{room_id}")
@app.get("/api/game/{room_id}")
async def get_game(room_id: str):
    """Lobby preview, available without joining."""
    room = engine.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail="Game not found")
    return get_public_room_info(room)


@app.websocket("/ws")
async def websocket_endpoint(websocket: WebSocket):
    """Main WebSocket endpoint."""
    await websocket.accept()
    manager.register(websocket)
    logger.info("WebSocket connection accepted")

    try:
        while True:
            raw_data = await websocket.receive_text()

            try:
                event = parse_inbound_event(json.loads(raw_data))
            except ValueError as e:
                # json.JSONDecodeError is a ValueError
                await manager.send_event(websocket, create_error_event(ErrorCode.INVALID_EVENT, str(e)))
                continue

            try:
                await handle_event(websocket, event)
            except GameError as e:
                logger.warning(f"Rejected intent: {e}")
                await manager.send_event(websocket, create_game_error_event(e))
            except WebSocketDisconnect:
                raise
            except Exception as e:
                logger.error(f"Error handling event: {e}", exc_info=True)
                await manager.send_event(
                    websocket, create_error_event(ErrorCode.INTERNAL, "Internal server error")
                )

    except WebSocketDisconnect:
        logger.info("WebSocket disconnected")
    except Exception as e:
        logger.error(f"WebSocket error: {e}")
    finally:
        binding = manager.binding(websocket)
        still_current = binding is not None and manager.player_connections.get(binding) is websocket
        player_id, room_id = manager.disconnect(websocket)

        # A player who already reconnected elsewhere stays connected
        if still_current and room_id in engine.rooms:
            engine.disconnect_player(player_id, room_id)
            await manager.broadcast_state(engine.rooms[room_id])


async def handle_event(websocket: WebSocket, event):
    """Dispatch an inbound event. GameErrors propagate to the caller."""
    if isinstance(event, JoinEvent):
        await handle_join(websocket, event)
    elif isinstance(event, StartEvent):
        await handle_start(websocket, event)
    elif isinstance(event, DrawEvent):
        await handle_draw(websocket, event)
    elif isinstance(event, RequestStateEvent):
        await handle_request_state(websocket, event)
    else:
        raise ValueError(f"Unhandled event type: {type(event)}")


async def handle_join(websocket: WebSocket, event: JoinEvent):
    """Handle join room event."""
    player = engine.join_room(
        event.room_id, event.player_id, event.name,
        connection_id=manager.connection_ids.get(websocket),
    )

    # A socket holds one seat; moving it releases the seat it held before
    previous = manager.binding(websocket)
    released = None
    if previous and previous != (event.room_id, player.id) \
            and manager.player_connections.get(previous) is websocket:
        released = previous

    manager.connect(websocket, event.room_id, player.id)
    if released and released[0] in engine.rooms:
        old_room, old_player = released
        engine.disconnect_player(old_player, old_room)
        await manager.broadcast_state(engine.rooms[old_room])

    await manager.send_event(websocket, create_join_success_event(player.id, event.room_id))
    await manager.broadcast_state(engine.rooms[event.room_id])


async def handle_start(websocket: WebSocket, event: StartEvent):
    """Handle start game event."""
    room = engine.start_game(event.room_id, event.host_id, event.seed)
    await manager.broadcast_state(room)


async def handle_draw(websocket: WebSocket, event: DrawEvent):
    """Handle draw card event."""
    engine.draw_card(event.room_id, event.player_id, event.card_index)
    await manager.broadcast_state(engine.rooms[event.room_id])


async def handle_request_state(websocket: WebSocket, event: RequestStateEvent):
    """Resend the caller's own view of their room."""
    binding = manager.binding(websocket)
    if not binding:
        await manager.send_event(websocket, create_error_event(ErrorCode.INVALID_EVENT, "Not in a room"))
        return
    room_id, player_id = binding
    room = engine.require_room(room_id)
    await manager.send_event(websocket, create_state_full_event(sanitize_state(room, player_id)))
