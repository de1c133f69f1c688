"""
Immutable state models for the counting session.

This module provides dataclasses for representing the state of a shoe and
the round being dealt in an immutable manner. These classes are designed to
be used with pure transition functions that create new state instances
rather than modifying existing ones, so any instance can double as an undo
snapshot.
"""

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any, Dict, Optional, Tuple, Union

from shoecount.baccarat.constants import CARDS_PER_DECK, DEFAULT_DECKS
from shoecount.baccarat.hand import hand_value
from shoecount.baccarat.rules import Slot, Winner
from shoecount.common.card import Card


class GamePhase(Enum):
    """Possible phases of a counting session."""

    LOCKED = auto()
    BURN = auto()
    PLAYING = auto()


@dataclass(frozen=True)
class AwaitingSlot:
    """A round still being dealt; ``slot`` is the position the next card fills."""

    slot: Slot

    def __post_init__(self):
        if self.slot is Slot.NONE:
            raise ValueError("A round awaiting a card needs a real slot")


@dataclass(frozen=True)
class Finished:
    """A completed round."""

    winner: Winner
    is_natural: bool = False


RoundStatus = Union[AwaitingSlot, Finished]


@dataclass(frozen=True)
class RoundState:
    """
    Immutable representation of the round being dealt.

    Attributes:
        player: Cards dealt to Player, in order
        banker: Cards dealt to Banker, in order
        status: Either the slot awaited next or the finished outcome
    """

    player: Tuple[Card, ...] = ()
    banker: Tuple[Card, ...] = ()
    status: RoundStatus = AwaitingSlot(Slot.P1)

    @property
    def next_expected_slot(self) -> Slot:
        if isinstance(self.status, AwaitingSlot):
            return self.status.slot
        return Slot.NONE

    @property
    def is_finished(self) -> bool:
        return isinstance(self.status, Finished)

    @property
    def is_natural(self) -> bool:
        return isinstance(self.status, Finished) and self.status.is_natural

    @property
    def winner(self) -> Optional[Winner]:
        if isinstance(self.status, Finished):
            return self.status.winner
        return None

    @property
    def player_value(self) -> int:
        return hand_value(self.player)

    @property
    def banker_value(self) -> int:
        return hand_value(self.banker)

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the round to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the round
        """
        return {
            "player": [str(card) for card in self.player],
            "banker": [str(card) for card in self.banker],
            "player_value": self.player_value,
            "banker_value": self.banker_value,
            "next_expected_slot": self.next_expected_slot.value,
            "is_finished": self.is_finished,
            "is_natural": self.is_natural,
            "winner": self.winner.value if self.winner else None,
        }


@dataclass(frozen=True)
class ShoeState:
    """
    Immutable representation of the shoe.

    Attributes:
        total_cards: Cards in a full shoe
        cards_dealt: Cards dealt since the last reset, burn cards included
        running_count: Sum of count values of every dealt card
        round_count: Number of the round currently shown (starts at 1)
        results: Winners of every finished round, oldest first
    """

    total_cards: int = DEFAULT_DECKS * CARDS_PER_DECK
    cards_dealt: int = 0
    running_count: int = 0
    round_count: int = 1
    results: Tuple[Winner, ...] = ()

    @property
    def cards_remaining(self) -> int:
        return self.total_cards - self.cards_dealt

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total_cards": self.total_cards,
            "cards_dealt": self.cards_dealt,
            "cards_remaining": self.cards_remaining,
            "running_count": self.running_count,
            "round_count": self.round_count,
            "results": [winner.value for winner in self.results],
        }


@dataclass(frozen=True)
class SessionState:
    """
    Immutable representation of the whole session.

    Shoe and round live in one value so that every input moves both
    together.

    Attributes:
        phase: Current phase of the session
        shoe: Shoe statistics
        round: The round being dealt (idle while burning)
        burn_count: Cards burned in the current burn phase
    """

    phase: GamePhase = GamePhase.LOCKED
    shoe: ShoeState = field(default_factory=ShoeState)
    round: RoundState = field(default_factory=RoundState)
    burn_count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the session state to a dictionary suitable for serialization.

        Returns:
            Dictionary representation of the session state
        """
        return {
            "phase": self.phase.name,
            "shoe": self.shoe.to_dict(),
            "round": self.round.to_dict(),
            "burn_count": self.burn_count,
        }
