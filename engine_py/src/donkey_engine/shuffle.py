"""
Card shuffling and dealing utilities.
"""

import random
from typing import List, Optional

from .constants import SUITS, RANKS
from .models import Card


def create_deck() -> List[Card]:
    """Create the 53-card Donkey deck: 52 standard cards followed by one Joker."""
    deck = []

    # Standard 52 cards, suit-major
    for suit in SUITS:
        for rank in RANKS:
            deck.append(Card(suit=suit, rank=rank))

    deck.append(Card.joker())
    return deck


def shuffle_deck(deck: List[Card], seed: Optional[int] = None) -> List[Card]:
    """
    Shuffle a deck, deterministically if seed is provided.

    Args:
        deck: Cards to shuffle (left untouched)
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    rng = random.Random(seed) if seed is not None else random
    shuffled = list(deck)

    # Fisher-Yates, j drawn from [0, i] inclusive
    for i in range(len(shuffled) - 1, 0, -1):
        j = rng.randint(0, i)
        shuffled[i], shuffled[j] = shuffled[j], shuffled[i]

    return shuffled


def deal_cards(deck: List[Card], player_count: int) -> List[List[Card]]:
    """
    Deal the whole deck round-robin, one card per player per round.

    Earlier seats receive the remainder when the deck does not divide evenly.

    Args:
        deck: Shuffled deck of cards
        player_count: Number of seats to deal to

    Returns:
        One hand per seat, in seat order
    """
    if player_count <= 0:
        return []

    hands: List[List[Card]] = [[] for _ in range(player_count)]
    for i, card in enumerate(deck):
        hands[i % player_count].append(card)

    return hands
