"""
Baccarat rules and counting.

This module provides the card value table, hand evaluation, the third-card
tableau, shoe counting and the count-based recommendation.
"""

from shoecount.baccarat.constants import CARD_CONFIG, RANKS, lookup, make_card
from shoecount.baccarat.hand import hand_value, is_natural
from shoecount.baccarat.rules import (
    BaccaratRules,
    Slot,
    Winner,
    determine_winner,
    next_expected_slot,
)
from shoecount.baccarat.counting import true_count, decks_remaining
from shoecount.baccarat.recommendation import Recommendation, favored_side, recommend

__all__ = [
    "CARD_CONFIG",
    "RANKS",
    "lookup",
    "make_card",
    "hand_value",
    "is_natural",
    "BaccaratRules",
    "Slot",
    "Winner",
    "determine_winner",
    "next_expected_slot",
    "true_count",
    "decks_remaining",
    "Recommendation",
    "recommend",
    "favored_side",
]
