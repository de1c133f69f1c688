"""
This module defines the `Rank`, `CardConfig`, and `Card` classes, which are used to represent
the cards fed into the counter.

- `Rank`: An enum representing the thirteen ranks of a standard deck: Ace, Two through Ten,
Jack, Queen and King. Suits play no part in Baccarat and are not modelled.

- `CardConfig`: The fixed pair of values a rank carries, its Baccarat point value and its
count value.

- `Card`: An immutable card as dealt into a hand. Two cards of the same rank are equal;
cards carry no identity of their own.
"""

from dataclasses import dataclass
from enum import Enum, unique


@unique
class Rank(Enum):
    """
    Enum for ranks in a card deck.
    """

    ACE = "A"
    TWO = "2"
    THREE = "3"
    FOUR = "4"
    FIVE = "5"
    SIX = "6"
    SEVEN = "7"
    EIGHT = "8"
    NINE = "9"
    TEN = "10"
    JACK = "J"
    QUEEN = "Q"
    KING = "K"

    @property
    def rank_str(self) -> str:
        """A string representation of the rank."""
        return self.value

    @classmethod
    def parse(cls, text: str) -> "Rank":
        """
        Parse a rank from keypad text.

        Accepts the rank symbols case-insensitively plus the shortcuts
        ``1`` (Ace), ``0`` and ``T`` (Ten).

        >>> Rank.parse("q")
        <Rank.QUEEN: 'Q'>
        >>> Rank.parse("0")
        <Rank.TEN: '10'>

        :param text: The text to parse
        :return: The matching rank
        :raises ValueError: If the text does not name a rank
        """
        if isinstance(text, Rank):
            return text
        key = str(text).strip().upper()
        key = _ALIASES.get(key, key)
        try:
            return cls(key)
        except ValueError:
            raise ValueError(f"Invalid rank: {text!r}") from None

    def __str__(self) -> str:
        return self.rank_str


_ALIASES = {"1": "A", "0": "10", "T": "10"}


@dataclass(frozen=True)
class CardConfig:
    """
    Per-rank values.

    Attributes:
        point_value: Contribution to a Baccarat hand total (0-9)
        count_value: Weight in the running count (-2..+2)
    """

    point_value: int
    count_value: int


@dataclass(frozen=True)
class Card:
    """
    Class representing a dealt card.

    >>> card = Card(Rank.SEVEN, 7, -1)
    >>> print(card)
    7
    """

    rank: Rank
    point_value: int
    count_value: int

    def __str__(self) -> str:
        return self.rank.rank_str
