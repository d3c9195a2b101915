"""Main game engine: room registry and the Donkey state machine"""

import logging
import threading
import uuid
from collections import defaultdict
from typing import Dict, List, Optional

from .constants import PHASE_LOBBY, PHASE_IN_PROGRESS, PHASE_ENDED
from .errors import (
    RoomNotFound, GameAlreadyStarted, RoomFull, NotHost, NotEnoughPlayers,
    NotYourTurn, InvalidCardSelection, GameNotStarted,
)
from .models import Card, Player, RoomState
from .pairs import eliminate_pairs
from .rules import RuleConfig, default_rules
from .shuffle import create_deck, shuffle_deck, deal_cards

logger = logging.getLogger(__name__)


def generate_room_code() -> str:
    return uuid.uuid4().hex[:8].upper()


def draw_target_index(room: RoomState) -> int:
    """Index of the next unfinished player after the turn holder, or -1."""
    n = len(room.players)
    if n == 0:
        return -1
    for i in range(1, n + 1):
        idx = (room.turn_index + i) % n
        if idx != room.turn_index and not room.players[idx].finished:
            return idx
    return -1


def check_finished_players(room: RoomState):
    """Mark empty hands as finished and end the game once one hand remains."""
    holders = []
    for player in room.players:
        if not player.hand and not player.finished:
            player.finished = True
            room.finished_order.append(player.id)
            logger.info(f"Player {player.id} finished in room {room.id} "
                        f"(position {len(room.finished_order)})")
        if player.hand:
            holders.append(player)

    if len(holders) == 1 and room.loser_id is None:
        room.loser_id = holders[0].id
        room.winner_id = room.finished_order[0] if room.finished_order else None
        room.phase = PHASE_ENDED
        logger.info(f"Game over in room {room.id}: winner={room.winner_id} loser={room.loser_id}")


class DonkeyEngine:
    def __init__(self, rules: RuleConfig = None):
        self.rules = rules or default_rules
        self.rooms: Dict[str, RoomState] = {}
        self.room_locks = defaultdict(threading.Lock)
        self._registry_lock = threading.Lock()

    def create_room(self, host_id: Optional[str] = None) -> RoomState:
        with self._registry_lock:
            room_id = generate_room_code()
            while room_id in self.rooms:
                logger.warning(f"Room code collision detected, regenerating: {room_id}")
                room_id = generate_room_code()
            room = RoomState(id=room_id, host_id=host_id or str(uuid.uuid4()))
            self.rooms[room_id] = room
        logger.info(f"Created room {room_id}")
        return room

    def get_room(self, room_id: str) -> Optional[RoomState]:
        return self.rooms.get(room_id)

    def require_room(self, room_id: str) -> RoomState:
        room = self.get_room(room_id)
        if not room:
            raise RoomNotFound(room_id)
        return room

    def join_room(self, room_id: str, player_id: str, name: Optional[str] = None,
                  connection_id: Optional[str] = None) -> Player:
        """Join a lobby, or reconnect to a room the player already belongs to."""
        room = self.require_room(room_id)
        with self.room_locks[room_id]:
            name = (name or '').strip()
            player = room.find_player(player_id)

            if room.started:
                if not player:
                    raise GameAlreadyStarted("Game already started")
                player.connection_id = connection_id
                player.connected = True
                room.version += 1
                logger.info(f"Player {player_id} reconnected to room {room_id}")
                return player

            if player:
                player.connection_id = connection_id
                player.connected = True
                if name:
                    player.name = name
            else:
                if self.rules.is_full(len(room.players)):
                    raise RoomFull(f"Game is full (max {self.rules.max_players} players)")
                player = Player(
                    id=player_id,
                    name=name or f"Player {len(room.players) + 1}",
                    connection_id=connection_id,
                )
                room.players.append(player)
                logger.info(f"Player {player_id} ({player.name}) joined room {room_id}")
            room.version += 1
            return player

    def start_game(self, room_id: str, requester_id: str, seed: Optional[int] = None) -> RoomState:
        room = self.require_room(room_id)
        with self.room_locks[room_id]:
            if room.phase != PHASE_LOBBY:
                raise GameAlreadyStarted("Game already started")
            if requester_id != room.host_id:
                raise NotHost("Only the host can start the game")
            if not self.rules.can_start(len(room.players)):
                raise NotEnoughPlayers(f"Need at least {self.rules.min_players} players to start")

            room.phase = PHASE_IN_PROGRESS
            deck = shuffle_deck(create_deck(), seed)
            hands = deal_cards(deck, len(room.players))

            for player, hand in zip(room.players, hands):
                remaining, discarded = eliminate_pairs(hand)
                player.hand = remaining
                room.discard_pile.extend(discarded)

            check_finished_players(room)

            # First seat still holding cards; no wrap past the last seat
            room.turn_index = 0
            last = len(room.players) - 1
            while room.players[room.turn_index].finished and room.turn_index < last:
                room.turn_index += 1

            room.version += 1
            logger.info(f"Game started in room {room_id} with {len(room.players)} players, "
                        f"{len(room.discard_pile)} cards discarded on deal")
            return room

    def draw_card(self, room_id: str, player_id: str, card_index: int) -> Card:
        """Draw the card at card_index from the draw target into the acting player's hand."""
        room = self.require_room(room_id)
        with self.room_locks[room_id]:
            if room.phase != PHASE_IN_PROGRESS:
                raise GameNotStarted("Game is not in progress")
            current = room.current_player
            if current is None or current.id != player_id:
                raise NotYourTurn("It's not your turn!")

            target_idx = draw_target_index(room)
            if target_idx < 0:
                raise InvalidCardSelection("No player to draw from")
            target = room.players[target_idx]
            if card_index < 0 or card_index >= len(target.hand):
                raise InvalidCardSelection("Invalid card selection")

            drawn = target.hand.pop(card_index)
            current.hand.append(drawn)

            remaining, discarded = eliminate_pairs(current.hand)
            current.hand = remaining
            room.discard_pile.extend(discarded)

            check_finished_players(room)

            if room.loser_id is None:
                self._advance_turn(room)

            room.version += 1
            logger.info(f"Player {player_id} drew from {target.id} in room {room_id} "
                        f"({len(discarded)} cards discarded)")
            return drawn

    def _advance_turn(self, room: RoomState):
        n = len(room.players)
        attempts = 0
        while True:
            room.turn_index = (room.turn_index + 1) % n
            attempts += 1
            if not room.players[room.turn_index].finished or attempts >= n:
                break

    def disconnect_player(self, player_id: str, room_id: Optional[str] = None) -> List[str]:
        """Mark a player disconnected; their seat and turn are kept."""
        if room_id is not None:
            candidates = [self.require_room(room_id)]
        else:
            candidates = list(self.rooms.values())

        affected = []
        for room in candidates:
            with self.room_locks[room.id]:
                player = room.find_player(player_id)
                if not player:
                    continue
                player.connected = False
                player.connection_id = None
                room.version += 1
                affected.append(room.id)
                logger.info(f"Player {player_id} disconnected from room {room.id}")
        return affected
