"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import List, Optional

from .constants import (
    JOKER_SUIT, JOKER_RANK, PHASE_LOBBY, PHASE_IN_PROGRESS, PHASE_ENDED,
    card_id, card_color,
)


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    id: str = ''

    def __post_init__(self):
        if not self.id:
            object.__setattr__(self, 'id', card_id(self.rank, self.suit))

    @classmethod
    def joker(cls) -> 'Card':
        return cls(suit=JOKER_SUIT, rank=JOKER_RANK)

    @property
    def is_joker(self) -> bool:
        return self.suit == JOKER_SUIT

    @property
    def color(self) -> str:
        return card_color(self.suit)


@dataclass
class Player:
    id: str
    name: str
    connection_id: Optional[str] = None  # current transport session, volatile
    hand: List[Card] = field(default_factory=list)
    finished: bool = False
    connected: bool = True

    @property
    def card_count(self) -> int:
        return len(self.hand)


@dataclass
class RoomState:
    id: str
    host_id: str
    version: int = 0
    phase: str = PHASE_LOBBY  # lobby|in_progress|ended
    players: List[Player] = field(default_factory=list)  # join order == turn order
    turn_index: int = 0
    discard_pile: List[Card] = field(default_factory=list)
    finished_order: List[str] = field(default_factory=list)
    winner_id: Optional[str] = None
    loser_id: Optional[str] = None

    @property
    def started(self) -> bool:
        return self.phase != PHASE_LOBBY

    @property
    def in_progress(self) -> bool:
        return self.phase == PHASE_IN_PROGRESS

    @property
    def ended(self) -> bool:
        return self.phase == PHASE_ENDED

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.turn_index < len(self.players):
            return self.players[self.turn_index]
        return None
