"""Game constants and utilities"""

from typing import List

SUITS: List[str] = ['hearts', 'diamonds', 'clubs', 'spades']
RANKS: List[str] = ['2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K', 'A']
RED_SUITS = ('hearts', 'diamonds')

JOKER_SUIT = 'joker'
JOKER_RANK = 'JOKER'
JOKER_ID = 'joker'

DECK_SIZE = len(SUITS) * len(RANKS) + 1

MIN_PLAYERS = 2
MAX_PLAYERS = 20

# Phases
PHASE_LOBBY = 'lobby'
PHASE_IN_PROGRESS = 'in_progress'
PHASE_ENDED = 'ended'


def card_id(rank: str, suit: str) -> str:
    if suit == JOKER_SUIT:
        return JOKER_ID
    return f"{rank}-{suit}"


def card_color(suit: str) -> str:
    if suit == JOKER_SUIT:
        return 'none'
    return 'red' if suit in RED_SUITS else 'black'
