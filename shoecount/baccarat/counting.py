"""
Shoe counting.

Running count and cards-dealt tracking across the whole shoe, and the
true-count normalisation. Burn cards and round cards are counted the same
way.
"""

from dataclasses import replace
from typing import TYPE_CHECKING

from shoecount.baccarat.constants import CARDS_PER_DECK

if TYPE_CHECKING:
    from shoecount.state.models import ShoeState

MIN_DECKS_REMAINING = 0.5


def record_card(shoe: "ShoeState", count_value: int) -> "ShoeState":
    """
    Record one dealt card against the shoe.

    Args:
        shoe: Current shoe state
        count_value: Count value of the dealt card

    Returns:
        New shoe state with the count and cards dealt advanced
    """
    return replace(
        shoe,
        running_count=shoe.running_count + count_value,
        cards_dealt=shoe.cards_dealt + 1,
    )


def cards_remaining(cards_dealt: int, total_cards: int) -> int:
    """Cards left in the shoe. Negative if more cards were entered than the shoe holds."""
    return total_cards - cards_dealt


def decks_remaining(
    cards_dealt: int,
    total_cards: int,
    cards_per_deck: int = CARDS_PER_DECK,
    min_decks: float = MIN_DECKS_REMAINING,
) -> float:
    """
    Estimate the decks left in the shoe.

    The estimate never drops below ``min_decks`` so the true count does not
    diverge as the shoe empties.
    """
    return max(cards_remaining(cards_dealt, total_cards) / cards_per_deck, min_decks)


def true_count(
    running_count: int,
    cards_dealt: int,
    total_cards: int,
    cards_per_deck: int = CARDS_PER_DECK,
    min_decks: float = MIN_DECKS_REMAINING,
) -> float:
    """
    Normalise the running count by the decks remaining.

    >>> round(true_count(4, 5, 416), 3)
    0.506

    Args:
        running_count: Cumulative count of every card dealt
        cards_dealt: Cards dealt since the shoe was reset
        total_cards: Cards in a full shoe

    Returns:
        The true count
    """
    return running_count / decks_remaining(cards_dealt, total_cards, cards_per_deck, min_decks)
