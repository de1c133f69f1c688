"""Baccarat-specific constants and the rank value table."""

from typing import Dict, Tuple

from shoecount.common.card import Card, CardConfig, Rank

DEFAULT_DECKS = 8
CARDS_PER_DECK = 52

# Point values follow the Baccarat scale; count values are a Hi-Lo style
# weighting tuned for Baccarat (low cards favour Player, 5-8 favour Banker).
CARD_CONFIG: Dict[Rank, CardConfig] = {
    Rank.ACE: CardConfig(point_value=1, count_value=1),
    Rank.TWO: CardConfig(point_value=2, count_value=1),
    Rank.THREE: CardConfig(point_value=3, count_value=1),
    Rank.FOUR: CardConfig(point_value=4, count_value=2),
    Rank.FIVE: CardConfig(point_value=5, count_value=-1),
    Rank.SIX: CardConfig(point_value=6, count_value=-1),
    Rank.SEVEN: CardConfig(point_value=7, count_value=-1),
    Rank.EIGHT: CardConfig(point_value=8, count_value=-2),
    Rank.NINE: CardConfig(point_value=9, count_value=0),
    Rank.TEN: CardConfig(point_value=0, count_value=0),
    Rank.JACK: CardConfig(point_value=0, count_value=0),
    Rank.QUEEN: CardConfig(point_value=0, count_value=0),
    Rank.KING: CardConfig(point_value=0, count_value=0),
}

# Keypad order
RANKS: Tuple[Rank, ...] = tuple(CARD_CONFIG)


def lookup(rank: Rank) -> CardConfig:
    """Get the point and count values for a given rank."""
    return CARD_CONFIG[rank]


def make_card(rank: Rank) -> Card:
    """Build the card dealt for a given rank."""
    config = CARD_CONFIG[rank]
    return Card(rank=rank, point_value=config.point_value, count_value=config.count_value)
