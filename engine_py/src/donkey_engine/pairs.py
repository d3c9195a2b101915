"""
Pair elimination: discard every matched-rank pair from a hand.
"""

from collections import defaultdict
from typing import Dict, List, Tuple

from .models import Card


def eliminate_pairs(hand: List[Card]) -> Tuple[List[Card], List[Card]]:
    """
    Remove all same-rank pairs from a hand.

    The Joker never pairs and always stays in the remaining hand (placed last).
    Ranks held three times keep a single card; ranks held four times vanish.

    Args:
        hand: Cards to inspect (not mutated)

    Returns:
        (remaining, discarded)
    """
    rank_groups: Dict[str, List[Card]] = defaultdict(list)
    jokers: List[Card] = []

    for card in hand:
        if card.is_joker:
            jokers.append(card)
            continue
        rank_groups[card.rank].append(card)

    remaining: List[Card] = []
    discarded: List[Card] = []

    for group in rank_groups.values():
        while len(group) >= 2:
            discarded.append(group.pop())
            discarded.append(group.pop())
        remaining.extend(group)

    remaining.extend(jokers)
    return remaining, discarded
