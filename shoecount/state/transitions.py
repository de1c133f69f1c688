"""
State transition functions for the counting session.

This module provides pure functions for transitioning between session states,
without modifying the original state objects. Each public transition takes a
`SessionState` and returns the next one, so the shoe and the round always
advance together.
"""

from dataclasses import replace

from shoecount.baccarat.constants import make_card
from shoecount.baccarat.counting import record_card
from shoecount.baccarat.hand import is_natural
from shoecount.baccarat.rules import (
    INITIAL_SEQUENCE,
    Slot,
    Winner,
    determine_winner,
    next_expected_slot,
)
from shoecount.common.card import Card, Rank
from shoecount.events import EventBus, EngineEventType
from shoecount.state.models import (
    AwaitingSlot,
    Finished,
    GamePhase,
    RoundState,
    SessionState,
    ShoeState,
)


class StateTransitionEngine:
    """
    Pure functions for state transitions.

    This class contains static methods that implement session transitions.
    Each method takes a state and returns a new state, without modifying the
    original. Inputs the current phase does not accept return the state
    unchanged.
    """

    @staticmethod
    def start(state: SessionState) -> SessionState:
        """
        Open a locked session and enter the burn phase.

        Args:
            state: Current session state

        Returns:
            New session state in the burn phase
        """
        if state.phase is not GamePhase.LOCKED:
            return state

        new_state = replace(state, phase=GamePhase.BURN, burn_count=0)

        event_bus = EventBus.get_instance()
        event_bus.emit(EngineEventType.SESSION_STARTED, {"total_cards": state.shoe.total_cards})
        event_bus.emit(EngineEventType.BURN_STARTED, {"cards_dealt": state.shoe.cards_dealt})

        return new_state

    @staticmethod
    def deal_card(round_state: RoundState, card: Card) -> RoundState:
        """
        Deal a card into the slot the round is waiting for.

        A finished round is replaced by a fresh one and the card becomes its
        first Player card.

        Args:
            round_state: Current round
            card: Card to deal

        Returns:
            New round state
        """
        if round_state.is_finished:
            round_state = RoundState()

        slot = round_state.next_expected_slot
        player, banker = round_state.player, round_state.banker
        if slot.side is Winner.PLAYER:
            player = player + (card,)
        else:
            banker = banker + (card,)

        if slot in INITIAL_SEQUENCE:
            return RoundState(player, banker, AwaitingSlot(INITIAL_SEQUENCE[slot]))

        if slot is Slot.B2 and is_natural(player, banker):
            return RoundState(player, banker, Finished(determine_winner(player, banker), is_natural=True))

        following = next_expected_slot(player, banker)
        if following is Slot.NONE:
            return RoundState(player, banker, Finished(determine_winner(player, banker)))
        return RoundState(player, banker, AwaitingSlot(following))

    @staticmethod
    def apply_input(state: SessionState, rank: Rank) -> SessionState:
        """
        Apply one card input to the session.

        While burning, the card is only counted. While playing, it is dealt
        into the round and counted in the same step.

        Args:
            state: Current session state
            rank: Rank of the card entered

        Returns:
            New session state
        """
        if state.phase is GamePhase.LOCKED:
            return state

        card = make_card(rank)
        shoe = record_card(state.shoe, card.count_value)
        event_bus = EventBus.get_instance()

        if state.phase is GamePhase.BURN:
            new_state = replace(state, shoe=shoe, burn_count=state.burn_count + 1)
            event_bus.emit(
                EngineEventType.CARD_BURNED,
                {"rank": rank.value, "burn_count": new_state.burn_count},
            )
            StateTransitionEngine._emit_count(new_state)
            return new_state

        new_round_started = state.round.is_finished
        if new_round_started:
            shoe = replace(shoe, round_count=shoe.round_count + 1)

        slot = Slot.P1 if new_round_started else state.round.next_expected_slot
        round_state = StateTransitionEngine.deal_card(state.round, card)
        if round_state.is_finished:
            shoe = replace(shoe, results=shoe.results + (round_state.winner,))

        new_state = replace(state, shoe=shoe, round=round_state)

        if slot is Slot.P1:
            event_bus.emit(EngineEventType.ROUND_STARTED, {"round": shoe.round_count})
        event_bus.emit(
            EngineEventType.CARD_DEALT,
            {
                "round": shoe.round_count,
                "slot": slot.value,
                "rank": rank.value,
                "next_expected_slot": round_state.next_expected_slot.value,
            },
        )
        StateTransitionEngine._emit_count(new_state)
        if round_state.is_finished:
            event_bus.emit(
                EngineEventType.ROUND_ENDED,
                {
                    "round": shoe.round_count,
                    "winner": round_state.winner.value,
                    "is_natural": round_state.is_natural,
                    "player_value": round_state.player_value,
                    "banker_value": round_state.banker_value,
                },
            )

        return new_state

    @staticmethod
    def finish_burn_phase(state: SessionState) -> SessionState:
        """
        Leave the burn phase and wait for the first Player card.

        Args:
            state: Current session state

        Returns:
            New session state in the playing phase
        """
        if state.phase is not GamePhase.BURN:
            return state

        new_state = replace(state, phase=GamePhase.PLAYING, round=RoundState())

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.BURN_FINISHED,
            {"burn_count": state.burn_count, "cards_dealt": state.shoe.cards_dealt},
        )

        return new_state

    @staticmethod
    def reset_shoe(state: SessionState) -> SessionState:
        """
        Start a fresh shoe and re-enter the burn phase.

        The shoe size is kept; counts, results and the round are cleared.

        Args:
            state: Current session state

        Returns:
            New session state for a fresh shoe
        """
        if state.phase is GamePhase.LOCKED:
            return state

        new_state = SessionState(
            phase=GamePhase.BURN,
            shoe=ShoeState(total_cards=state.shoe.total_cards),
        )

        event_bus = EventBus.get_instance()
        event_bus.emit(
            EngineEventType.SHOE_RESET,
            {
                "cards_dealt": state.shoe.cards_dealt,
                "rounds_finished": len(state.shoe.results),
            },
        )
        event_bus.emit(EngineEventType.BURN_STARTED, {"cards_dealt": 0})

        return new_state

    @staticmethod
    def _emit_count(state: SessionState) -> None:
        EventBus.get_instance().emit(
            EngineEventType.COUNT_UPDATED,
            {
                "running_count": state.shoe.running_count,
                "cards_dealt": state.shoe.cards_dealt,
                "cards_remaining": state.shoe.cards_remaining,
            },
        )
