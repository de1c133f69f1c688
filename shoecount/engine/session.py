"""
Live counting session.

`CountingSession` owns the live `SessionState` and the undo history, and is
the only place the four control commands (card input, undo, finishing the
burn phase, resetting the shoe) enter the engine. Every command swaps the
whole state for the value a pure transition returns, so observers never see
the shoe and the round out of step.
"""

import logging
from typing import Any, Dict, Optional, Tuple, Union

from shoecount.baccarat.counting import decks_remaining, true_count
from shoecount.baccarat.recommendation import Recommendation, recommend
from shoecount.baccarat.rules import BaccaratRules, Slot, Winner
from shoecount.common.card import Card, Rank
from shoecount.events import EventBus, EngineEventType
from shoecount.state.history import HistorySnapshotStack
from shoecount.state.models import GamePhase, SessionState, ShoeState
from shoecount.state.transitions import StateTransitionEngine


class CountingSession:
    """
    A single shoe being tracked at the table.

    The session starts locked. ``start()`` is called once the access gate
    has been passed, which opens the burn phase.
    """

    def __init__(self, rules: Optional[BaccaratRules] = None):
        """
        Initialize a counting session.

        Args:
            rules: Shoe and recommendation configuration
        """
        self.rules = rules if rules else BaccaratRules()
        self.history = HistorySnapshotStack()
        self.state = SessionState(shoe=ShoeState(total_cards=self.rules.total_cards))
        self.logger = logging.getLogger(__name__)

    # Commands

    def start(self) -> bool:
        """Open the session and enter the burn phase."""
        if self.state.phase is not GamePhase.LOCKED:
            self.logger.debug("Ignoring start in phase %s", self.state.phase.name)
            return False

        self.state = StateTransitionEngine.start(self.state)
        self.logger.info("Session started, burning cards")
        return True

    def submit_card(self, rank: Union[Rank, str]) -> bool:
        """
        Enter the next card seen at the table.

        The card goes wherever the current phase and slot say it goes;
        callers never choose the side.

        Args:
            rank: The card's rank, or keypad text naming it

        Returns:
            True if the card was taken, False if the session ignored it

        Raises:
            ValueError: If ``rank`` is text that names no rank
        """
        rank = Rank.parse(rank)
        if self.state.phase is GamePhase.LOCKED:
            self.logger.debug("Ignoring card %s while locked", rank)
            return False

        self.history.push(self.state)
        previous = self.state
        self.state = StateTransitionEngine.apply_input(self.state, rank)

        if self.state.phase is GamePhase.BURN:
            self.logger.debug("Burned %s (%d burned)", rank, self.state.burn_count)
        else:
            self.logger.debug(
                "Dealt %s, next slot %s",
                rank,
                self.state.round.next_expected_slot.value,
            )
            if self.state.round.is_finished and not previous.round.is_finished:
                self.logger.info(
                    "Round %d: %s wins %d-%d%s",
                    self.state.shoe.round_count,
                    self.state.round.winner.value,
                    self.state.round.player_value,
                    self.state.round.banker_value,
                    " (natural)" if self.state.round.is_natural else "",
                )
        return True

    def finish_burn_phase(self) -> bool:
        """Stop burning and wait for the first Player card."""
        if self.state.phase is not GamePhase.BURN:
            self.logger.debug("Ignoring finish_burn_phase in phase %s", self.state.phase.name)
            return False

        self.history.push(self.state)
        self.state = StateTransitionEngine.finish_burn_phase(self.state)
        self.logger.info("Burn phase finished after %d cards", self.state.burn_count)
        return True

    def undo(self) -> bool:
        """
        Restore the state from before the last input.

        Returns:
            True if a snapshot was restored, False if there was nothing to undo
        """
        snapshot = self.history.pop()
        if snapshot is None:
            self.logger.debug("Nothing to undo")
            return False

        self.state = snapshot
        EventBus.get_instance().emit(
            EngineEventType.UNDO,
            {
                "phase": snapshot.phase.name,
                "cards_dealt": snapshot.shoe.cards_dealt,
                "history_size": len(self.history),
            },
        )
        self.logger.debug("Undo restored %s with %d cards dealt", snapshot.phase.name, snapshot.shoe.cards_dealt)
        return True

    def reset_shoe(self) -> bool:
        """
        Start a fresh shoe. Clears the undo history, so it cannot be undone.

        Confirmation is the caller's responsibility.
        """
        if self.state.phase is GamePhase.LOCKED:
            self.logger.debug("Ignoring reset_shoe while locked")
            return False

        self.state = StateTransitionEngine.reset_shoe(self.state)
        self.history.clear()
        self.logger.info("Shoe reset, burning cards")
        return True

    # Projections

    @property
    def phase(self) -> GamePhase:
        return self.state.phase

    @property
    def running_count(self) -> int:
        return self.state.shoe.running_count

    @property
    def cards_dealt(self) -> int:
        return self.state.shoe.cards_dealt

    @property
    def cards_remaining(self) -> int:
        return self.state.shoe.cards_remaining

    @property
    def decks_remaining(self) -> float:
        return decks_remaining(
            self.state.shoe.cards_dealt,
            self.state.shoe.total_cards,
            self.rules.cards_per_deck,
            self.rules.min_decks_remaining,
        )

    @property
    def true_count(self) -> float:
        return true_count(
            self.state.shoe.running_count,
            self.state.shoe.cards_dealt,
            self.state.shoe.total_cards,
            self.rules.cards_per_deck,
            self.rules.min_decks_remaining,
        )

    @property
    def recommendation(self) -> Recommendation:
        return recommend(self.true_count, self.rules.player_threshold, self.rules.banker_threshold)

    @property
    def recommendation_visible(self) -> bool:
        """Whether advice should be shown: between rounds, or before round 1 starts."""
        if self.state.phase is not GamePhase.PLAYING:
            return False
        round_state = self.state.round
        return round_state.is_finished or (
            self.state.shoe.round_count == 1 and not round_state.player
        )

    @property
    def round_count(self) -> int:
        return self.state.shoe.round_count

    @property
    def results(self) -> Tuple[Winner, ...]:
        return self.state.shoe.results

    @property
    def burn_count(self) -> int:
        return self.state.burn_count

    @property
    def player_cards(self) -> Tuple[Card, ...]:
        return self.state.round.player

    @property
    def banker_cards(self) -> Tuple[Card, ...]:
        return self.state.round.banker

    @property
    def player_value(self) -> int:
        return self.state.round.player_value

    @property
    def banker_value(self) -> int:
        return self.state.round.banker_value

    @property
    def next_expected_slot(self) -> Optional[Slot]:
        """The slot the next card fills, or None outside the playing phase."""
        if self.state.phase is not GamePhase.PLAYING:
            return None
        return self.state.round.next_expected_slot

    @property
    def is_finished(self) -> bool:
        return self.state.round.is_finished

    @property
    def is_natural(self) -> bool:
        return self.state.round.is_natural

    @property
    def winner(self) -> Optional[Winner]:
        return self.state.round.winner

    @property
    def can_undo(self) -> bool:
        return bool(self.history)

    def snapshot(self) -> SessionState:
        """Return the current immutable session state."""
        return self.state

    def summary(self) -> Dict[str, Any]:
        """
        Tally the results road.

        Returns:
            Dictionary with outcome counts and the current streak
        """
        results = self.state.shoe.results
        streak = 0
        streak_side = None
        if results:
            streak_side = results[-1]
            for winner in reversed(results):
                if winner is not streak_side:
                    break
                streak += 1

        return {
            "rounds_finished": len(results),
            "player_wins": sum(1 for w in results if w is Winner.PLAYER),
            "banker_wins": sum(1 for w in results if w is Winner.BANKER),
            "ties": sum(1 for w in results if w is Winner.TIE),
            "streak": streak,
            "streak_side": streak_side.value if streak_side else None,
        }

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert the session to a dictionary suitable for adapters.

        Returns:
            The raw state plus the derived count and advice
        """
        data = self.state.to_dict()
        data.update(
            {
                "true_count": self.true_count,
                "decks_remaining": self.decks_remaining,
                "recommendation": self.recommendation.value,
                "recommendation_visible": self.recommendation_visible,
                "can_undo": self.can_undo,
            }
        )
        return data

    def __str__(self) -> str:
        return f"Counting session: {self.state.phase.name}, round {self.round_count}"

    def __repr__(self) -> str:
        return (
            f"CountingSession(phase={self.state.phase.name}, RC={self.running_count}, "
            f"dealt={self.cards_dealt}, rounds={len(self.results)})"
        )
