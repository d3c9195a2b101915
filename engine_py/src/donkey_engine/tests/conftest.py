"""
Shared fixtures for the Donkey engine tests.
"""

from collections import Counter

import pytest

from donkey_engine.constants import DECK_SIZE, PHASE_IN_PROGRESS
from donkey_engine.engine import DonkeyEngine
from donkey_engine.models import Card, Player, RoomState


def total_cards(room: RoomState) -> int:
    return sum(len(p.hand) for p in room.players) + len(room.discard_pile)


def assert_conserved(room: RoomState):
    assert total_cards(room) == DECK_SIZE


def assert_no_pairs(hand):
    counts = Counter(c.rank for c in hand if not c.is_joker)
    assert all(n == 1 for n in counts.values())


def cards(*specs):
    """cards("2-hearts", "joker") -> [Card, Card]"""
    result = []
    for spec in specs:
        if spec == "joker":
            result.append(Card.joker())
        else:
            rank, suit = spec.split("-")
            result.append(Card(suit=suit, rank=rank))
    return result


def install_game(engine: DonkeyEngine, hands, turn_index=0, discarded=0) -> RoomState:
    """Register an in-progress room with hand-picked hands, bypassing the deal."""
    room = engine.create_room(host_id="host")
    for i, hand in enumerate(hands):
        room.players.append(Player(id=f"p{i}", name=f"Player {i + 1}", hand=list(hand)))
    room.phase = PHASE_IN_PROGRESS
    room.turn_index = turn_index
    room.discard_pile = [Card(suit="spades", rank="2")] * discarded
    return room


@pytest.fixture
def engine():
    return DonkeyEngine()


@pytest.fixture
def lobby(engine):
    """A room whose host has joined as p0, plus two more players."""
    room = engine.create_room(host_id="p0")
    for i in range(3):
        engine.join_room(room.id, f"p{i}", f"Player {i}")
    return room


@pytest.fixture
def started(engine, lobby):
    engine.start_game(lobby.id, "p0", seed=42)
    return lobby
