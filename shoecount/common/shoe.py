import random
from typing import List, Optional

from shoecount.baccarat.constants import CARDS_PER_DECK, RANKS
from shoecount.common.card import Rank


class RankShoe:
    def __init__(
        self,
        num_decks: int = 8,
        penetration: float = 0.8,
        burn_cards: int = 0,
        seed: Optional[int] = None,
    ):
        """
        Initialize a RankShoe instance.

        Only ranks are kept: suits carry no information for Baccarat or for the count.

        :param num_decks: Number of decks to use in the shoe (default is 8)
        :param penetration: Fraction of cards dealt before the cut card comes out (default is 80%)
        :param burn_cards: Number of cards burned at the start of each shoe (default is 0)
        :param seed: Seed for the shoe's own random generator, for reproducible shoes
        """
        if num_decks < 1:
            raise ValueError("Number of decks must be at least 1")
        if not 0 < penetration <= 1:
            raise ValueError("Penetration must be between 0 and 1")
        if burn_cards < 0:
            raise ValueError("Number of burn cards must be non-negative")

        self.num_decks = num_decks
        self.penetration = penetration
        self.burn_cards = burn_cards
        self.rng = random.Random(seed)
        self.cards: List[Rank] = []
        self.next_card_index = 0

        self.total_cards = CARDS_PER_DECK * num_decks
        self.reshuffle_point: int = int(self.total_cards * self.penetration)
        self.cut_card_reached = False

        self.initialize_shoe()

    def initialize_shoe(self):
        """Fill the shoe with the specified number of decks and shuffle."""
        self.cards = []
        for _ in range(self.num_decks):
            for rank in RANKS:
                self.cards.extend([rank] * (CARDS_PER_DECK // len(RANKS)))
        self.shuffle()

    def shuffle(self):
        """Shuffle all cards in the shoe and reset the next card index."""
        self.rng.shuffle(self.cards)
        self.next_card_index = 0
        self.cut_card_reached = False

    def burn(self) -> List[Rank]:
        """
        Deal the burn cards for this shoe.

        :return: The burned ranks, in dealing order
        """
        return [self.deal() for _ in range(min(self.burn_cards, self.cards_remaining))]

    def deal(self) -> Rank:
        """
        Deal one card from the shoe.

        The cut card only flags the end of the shoe; the round in progress is
        still completed from the cards behind it.

        :return: The rank of the dealt card
        :raises IndexError: If the shoe is empty
        """
        if self.next_card_index >= self.total_cards:
            raise IndexError("No cards left in the shoe")

        rank = self.cards[self.next_card_index]
        self.next_card_index += 1

        if self.next_card_index >= self.reshuffle_point:
            self.cut_card_reached = True

        return rank

    @property
    def cards_remaining(self) -> int:
        """Return the number of cards remaining in the shoe."""
        return self.total_cards - self.next_card_index

    def is_cut_card_reached(self) -> bool:
        """Return whether the cut card has been reached."""
        return self.cut_card_reached

    def get_penetration_percentage(self) -> float:
        """Return the current penetration percentage (how far through the shoe we are)."""
        return self.next_card_index / self.total_cards

    def __str__(self) -> str:
        return f"Shoe with {self.cards_remaining} cards remaining"

    def __repr__(self) -> str:
        return f"RankShoe(num_decks={self.num_decks}, penetration={self.penetration}, burn_cards={self.burn_cards})"
