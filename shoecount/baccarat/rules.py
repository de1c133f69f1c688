"""
Baccarat rules and drawing logic.

Baccarat has fixed drawing rules - no player decisions after betting.
The rules determine when Player and Banker draw a third card, and in what
order the cards of a round are dealt.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from shoecount.baccarat.constants import CARDS_PER_DECK, DEFAULT_DECKS
from shoecount.baccarat.hand import hand_value, is_natural, third_card_value
from shoecount.common.card import Card


class Slot(Enum):
    """Positions a dealt card can fill within a round, in dealing order."""

    P1 = "P1"
    P2 = "P2"
    B1 = "B1"
    B2 = "B2"
    P3 = "P3"
    B3 = "B3"
    NONE = "NONE"

    @property
    def side(self) -> Optional["Winner"]:
        """The hand a card in this slot goes to, or None for NONE."""
        if self is Slot.NONE:
            return None
        return Winner.PLAYER if self.value.startswith("P") else Winner.BANKER


class Winner(Enum):
    """Possible outcomes of a Baccarat round."""

    PLAYER = "PLAYER"
    BANKER = "BANKER"
    TIE = "TIE"


# The four initial slots always follow each other in this order.
INITIAL_SEQUENCE = {
    Slot.P1: Slot.P2,
    Slot.P2: Slot.B1,
    Slot.B1: Slot.B2,
}


@dataclass
class BaccaratRules:
    """
    Configuration for the shoe and the count-based recommendation.

    Attributes:
        num_decks: Number of decks in the shoe
        cards_per_deck: Cards in a single deck
        min_decks_remaining: Floor applied to the decks-remaining estimate
        player_threshold: True count at or above which Player is recommended
        banker_threshold: True count at or below which Banker is recommended
    """

    num_decks: int = DEFAULT_DECKS  # Standard is 8 decks
    cards_per_deck: int = CARDS_PER_DECK
    min_decks_remaining: float = 0.5
    player_threshold: float = 1.5
    banker_threshold: float = -1.5

    def __post_init__(self):
        if self.num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if self.cards_per_deck < 1:
            raise ValueError("Cards per deck must be at least 1")
        if self.min_decks_remaining <= 0:
            raise ValueError("Minimum decks remaining must be positive")
        if self.banker_threshold >= self.player_threshold:
            raise ValueError("Banker threshold must be below the Player threshold")

    @property
    def total_cards(self) -> int:
        """Number of cards in a full shoe."""
        return self.num_decks * self.cards_per_deck


def player_draws_third_card(player_value: int) -> bool:
    """
    Determine if Player draws a third card.

    Player drawing rules:
    - 0-5: Draw
    - 6-7: Stand
    - 8-9: Natural (no draw)

    Args:
        player_value: Player's two-card total

    Returns:
        True if Player should draw, False otherwise
    """
    return player_value <= 5


def banker_draws_third_card(banker_value: int, player_drew: bool, player_third_card: int) -> bool:
    """
    Determine if Banker draws a third card.

    Banker drawing rules depend on:
    1. Banker's two-card total
    2. Whether Player drew a third card
    3. Value of Player's third card (if drawn)

    Rules:
    - If Player didn't draw: Banker draws on 0-5, stands on 6-7
    - If Player drew:
      - Banker 0-2: Always draw
      - Banker 3: Draw unless Player's 3rd card is 8
      - Banker 4: Draw if Player's 3rd card is 2-7
      - Banker 5: Draw if Player's 3rd card is 4-7
      - Banker 6: Draw if Player's 3rd card is 6-7
      - Banker 7: Stand
      - Banker 8-9: Natural (no draw)

    Args:
        banker_value: Banker's two-card total
        player_drew: Whether Player drew a third card
        player_third_card: Value of Player's third card (0-9, or -1 if no third card)

    Returns:
        True if Banker should draw, False otherwise
    """
    if not player_drew:
        return banker_value <= 5

    if banker_value <= 2:
        return True
    elif banker_value == 3:
        return player_third_card != 8
    elif banker_value == 4:
        return 2 <= player_third_card <= 7
    elif banker_value == 5:
        return 4 <= player_third_card <= 7
    elif banker_value == 6:
        return player_third_card in (6, 7)
    else:
        return False


def next_expected_slot(player: Sequence[Card], banker: Sequence[Card]) -> Slot:
    """
    Decide what the round needs once the initial four cards are out.

    Returns P3 when Player must draw, B3 when Banker must draw, and NONE
    when the round is over. Banker's decision is deferred until Player's
    third card (if any) has been dealt.

    Args:
        player: Player hand
        banker: Banker hand

    Returns:
        Slot.P3, Slot.B3 or Slot.NONE
    """
    if is_natural(player, banker):
        return Slot.NONE

    if len(player) == 2 and player_draws_third_card(hand_value(player)):
        return Slot.P3

    if len(banker) == 2 and len(player) in (2, 3):
        player_drew = len(player) == 3
        if banker_draws_third_card(hand_value(banker), player_drew, third_card_value(player)):
            return Slot.B3

    return Slot.NONE


def determine_winner(player: Sequence[Card], banker: Sequence[Card]) -> Winner:
    """
    Determine the outcome of a finished round.

    Returns:
        Winner enum value
    """
    player_value = hand_value(player)
    banker_value = hand_value(banker)

    if player_value > banker_value:
        return Winner.PLAYER
    elif banker_value > player_value:
        return Winner.BANKER
    else:
        return Winner.TIE
