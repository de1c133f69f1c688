"""
Baccarat hand evaluation.

In Baccarat, hand values are calculated differently than blackjack:
- Cards 2-9 are worth face value
- 10, J, Q, K are worth 0
- Aces are worth 1
- Only the rightmost digit of the sum counts (17 = 7, 23 = 3)

Hands are plain tuples of `Card`, so every function here is pure.
"""

from typing import Sequence

from shoecount.common.card import Card


def hand_value(cards: Sequence[Card]) -> int:
    """
    Calculate the value of a hand.

    In Baccarat, only the rightmost digit counts.
    For example: 15 = 5, 20 = 0, 17 = 7

    Args:
        cards: Cards in the hand, in the order dealt

    Returns:
        Hand value (0-9)
    """
    return sum(card.point_value for card in cards) % 10


def is_natural(player: Sequence[Card], banker: Sequence[Card]) -> bool:
    """
    Check whether the initial deal is a natural (either side 8 or 9 on two cards).

    Args:
        player: Player hand
        banker: Banker hand

    Returns:
        True if the round ends on the first four cards
    """
    if len(player) != 2 or len(banker) != 2:
        return False
    return max(hand_value(player), hand_value(banker)) >= 8


def third_card_value(cards: Sequence[Card]) -> int:
    """
    Get the point value of the third card (used for Banker drawing rules).

    Returns:
        Value of third card, or -1 if no third card
    """
    if len(cards) >= 3:
        return cards[2].point_value
    return -1
