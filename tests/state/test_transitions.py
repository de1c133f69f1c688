"""
Tests for the pure session transitions.

These drive StateTransitionEngine directly, without a session object, to
check the dealing protocol and the events each transition publishes.
"""

import pytest
from unittest.mock import MagicMock

from shoecount.baccarat.constants import make_card
from shoecount.baccarat.rules import Slot, Winner
from shoecount.common.card import Rank
from shoecount.events import EventBus, EngineEventType
from shoecount.state.models import GamePhase, RoundState, SessionState, ShoeState
from shoecount.state.transitions import StateTransitionEngine


def apply(state, *symbols):
    for symbol in symbols:
        state = StateTransitionEngine.apply_input(state, Rank.parse(symbol))
    return state


@pytest.fixture
def playing_state():
    state = StateTransitionEngine.start(SessionState())
    return StateTransitionEngine.finish_burn_phase(state)


@pytest.fixture
def events():
    """Collect every event emitted on the bus as (name, data)."""
    received = []
    EventBus.get_instance().on_any(received.append)
    return received


class TestPhases:
    def test_start_enters_burn(self):
        state = StateTransitionEngine.start(SessionState())
        assert state.phase is GamePhase.BURN

    def test_start_only_from_locked(self, playing_state):
        assert StateTransitionEngine.start(playing_state) is playing_state

    def test_cards_ignored_while_locked(self):
        state = SessionState()
        assert StateTransitionEngine.apply_input(state, Rank.ACE) is state

    def test_finish_burn_only_from_burn(self, playing_state):
        assert StateTransitionEngine.finish_burn_phase(playing_state) is playing_state
        locked = SessionState()
        assert StateTransitionEngine.finish_burn_phase(locked) is locked

    def test_finish_burn_awaits_first_player_card(self, playing_state):
        assert playing_state.phase is GamePhase.PLAYING
        assert playing_state.round.next_expected_slot is Slot.P1

    def test_reset_ignored_while_locked(self):
        locked = SessionState()
        assert StateTransitionEngine.reset_shoe(locked) is locked


class TestBurn:
    def test_burn_counts_cards_without_dealing(self):
        state = StateTransitionEngine.start(SessionState())
        state = apply(state, "A", "8", "K")

        assert state.burn_count == 3
        assert state.shoe.cards_dealt == 3
        assert state.shoe.running_count == 1 - 2 + 0
        assert state.round == RoundState()

    def test_burn_and_play_count_alike(self, playing_state):
        burning = StateTransitionEngine.start(SessionState())
        burned = apply(burning, "4", "5")
        dealt = apply(playing_state, "4", "5")
        assert burned.shoe.running_count == dealt.shoe.running_count == 1
        assert burned.shoe.cards_dealt == dealt.shoe.cards_dealt == 2


class TestDealing:
    def test_initial_sequence(self, playing_state):
        state = playing_state
        visited = []
        for symbol in ("2", "3", "6", "K"):
            visited.append(state.round.next_expected_slot)
            state = apply(state, symbol)
        assert visited == [Slot.P1, Slot.P2, Slot.B1, Slot.B2]

    def test_cards_go_to_the_expected_side(self, playing_state):
        state = apply(playing_state, "2", "3", "6")
        assert state.round.player == (make_card(Rank.TWO), make_card(Rank.THREE))
        assert state.round.banker == (make_card(Rank.SIX),)

    def test_natural(self, playing_state):
        """Player 4,4 (8) against Banker 3,2 (5)."""
        state = apply(playing_state, "4", "4", "3", "2")

        assert state.round.is_finished
        assert state.round.is_natural
        assert state.round.winner is Winner.PLAYER
        assert state.round.next_expected_slot is Slot.NONE
        assert state.shoe.results == (Winner.PLAYER,)

    def test_natural_tie(self, playing_state):
        state = apply(playing_state, "4", "5", "9", "K")
        assert state.round.is_natural
        assert state.round.winner is Winner.TIE

    def test_third_card_tableau(self, playing_state):
        """Player 2,3 draws 5; Banker 6,7 draws K and wins 3-0."""
        state = apply(playing_state, "2", "3", "6", "7")
        assert state.round.next_expected_slot is Slot.P3

        state = apply(state, "5")
        assert state.round.player_value == 0
        assert state.round.next_expected_slot is Slot.B3

        state = apply(state, "K")
        assert state.round.banker_value == 3
        assert state.round.is_finished
        assert not state.round.is_natural
        assert state.round.winner is Winner.BANKER
        assert state.shoe.results == (Winner.BANKER,)

    def test_banker_stands_against_player_eight(self, playing_state):
        state = apply(playing_state, "A", "K", "3", "K", "8")
        assert state.round.is_finished
        assert state.round.winner is Winner.PLAYER  # 9 against 3

    def test_player_stands_banker_draws(self, playing_state):
        state = apply(playing_state, "6", "K", "2", "2")
        assert state.round.next_expected_slot is Slot.B3
        state = apply(state, "A")
        assert state.round.winner is Winner.PLAYER  # 6 against 5

    def test_both_stand(self, playing_state):
        state = apply(playing_state, "7", "K", "6", "K")
        assert state.round.is_finished
        assert state.round.winner is Winner.PLAYER
        assert len(state.round.player) == 2
        assert len(state.round.banker) == 2

    def test_new_round_after_finish(self, playing_state):
        state = apply(playing_state, "4", "4", "3", "2")
        assert state.shoe.round_count == 1

        state = apply(state, "9")
        assert state.shoe.round_count == 2
        assert state.round.player == (make_card(Rank.NINE),)
        assert state.round.banker == ()
        assert state.round.next_expected_slot is Slot.P2
        assert state.shoe.results == (Winner.PLAYER,)

    def test_cards_beyond_shoe_size_are_accepted(self):
        state = StateTransitionEngine.start(
            SessionState(shoe=ShoeState(total_cards=2))
        )
        state = apply(state, "A", "A", "A")
        assert state.shoe.cards_dealt == 3
        assert state.shoe.cards_remaining == -1

    def test_input_state_is_not_modified(self, playing_state):
        before = apply(playing_state, "2", "3")
        after = apply(before, "6")
        assert before.round.banker == ()
        assert before.shoe.cards_dealt == 2
        assert after.shoe.cards_dealt == 3


class TestReset:
    def test_reset_returns_to_burn(self, playing_state):
        state = apply(playing_state, "4", "4", "3", "2", "A")
        state = StateTransitionEngine.reset_shoe(state)

        assert state.phase is GamePhase.BURN
        assert state.burn_count == 0
        assert state.shoe == ShoeState(total_cards=416)
        assert state.round == RoundState()

    def test_reset_keeps_shoe_size(self):
        state = StateTransitionEngine.start(SessionState(shoe=ShoeState(total_cards=312)))
        state = StateTransitionEngine.reset_shoe(apply(state, "2"))
        assert state.shoe.total_cards == 312
        assert state.shoe.cards_dealt == 0


class TestEvents:
    def test_start_events(self, events):
        StateTransitionEngine.start(SessionState())
        names = [name for name, _ in events]
        assert names == [
            EngineEventType.SESSION_STARTED.name,
            EngineEventType.BURN_STARTED.name,
        ]

    def test_burn_events(self, events):
        state = StateTransitionEngine.start(SessionState())
        events.clear()
        apply(state, "4")
        assert [name for name, _ in events] == [
            EngineEventType.CARD_BURNED.name,
            EngineEventType.COUNT_UPDATED.name,
        ]
        assert events[0][1] == {"rank": "4", "burn_count": 1}
        assert events[1][1]["running_count"] == 2

    def test_round_events(self, playing_state, events):
        apply(playing_state, "4", "4", "3", "2")
        names = [name for name, _ in events]

        assert names[0] == EngineEventType.ROUND_STARTED.name
        assert names.count(EngineEventType.CARD_DEALT.name) == 4
        assert names[-1] == EngineEventType.ROUND_ENDED.name

        ended = events[-1][1]
        assert ended["winner"] == "PLAYER"
        assert ended["is_natural"] is True
        assert ended["player_value"] == 8
        assert ended["banker_value"] == 5

    def test_card_dealt_reports_slots(self, playing_state, events):
        apply(playing_state, "2", "3")
        dealt = [data for name, data in events if name == EngineEventType.CARD_DEALT.name]
        assert dealt[0]["slot"] == "P1"
        assert dealt[0]["next_expected_slot"] == "P2"
        assert dealt[1]["slot"] == "P2"

    def test_failing_handler_does_not_break_transition(self, playing_state):
        handler = MagicMock(side_effect=RuntimeError("boom"))
        EventBus.get_instance().on(EngineEventType.CARD_DEALT, handler)

        state = apply(playing_state, "2")

        handler.assert_called_once()
        assert state.round.player == (make_card(Rank.TWO),)

    def test_no_events_for_ignored_input(self, events):
        StateTransitionEngine.apply_input(SessionState(), Rank.ACE)
        assert events == []


# One rank per point value 0-9
POINT_RANKS = [Rank.KING, Rank.ACE, Rank.TWO, Rank.THREE, Rank.FOUR,
               Rank.FIVE, Rank.SIX, Rank.SEVEN, Rank.EIGHT, Rank.NINE]


def walk_rounds():
    """Yield every round state reachable by dealing, one card value at a time."""
    pending = [RoundState()]
    while pending:
        round_state = pending.pop()
        yield round_state
        if round_state.is_finished:
            continue
        first_two = round_state.next_expected_slot in (Slot.P1, Slot.B1)
        # Within each two-card hand only the total matters, so fix the first card
        ranks = [Rank.KING] if first_two else POINT_RANKS
        for rank in ranks:
            pending.append(StateTransitionEngine.deal_card(round_state, make_card(rank)))


class TestReachableRounds:
    """Every deal the protocol allows, checked against the round invariants."""

    def test_invariants_hold_for_every_deal(self):
        finished = 0
        for round_state in walk_rounds():
            player, banker = round_state.player, round_state.banker
            assert len(player) <= 3
            assert len(banker) <= 3
            assert (round_state.next_expected_slot is Slot.NONE) == round_state.is_finished
            assert (round_state.winner is not None) == round_state.is_finished
            if round_state.is_natural:
                assert len(player) == 2 and len(banker) == 2
            if round_state.is_finished:
                finished += 1
                assert len(player) >= 2 and len(banker) >= 2
        assert finished > 0

    def test_banker_never_draws_before_player_decides(self):
        """A standing two-card Player hand with a drawing total never faces three Banker cards."""
        for round_state in walk_rounds():
            if len(round_state.banker) == 3 and len(round_state.player) == 2:
                assert round_state.player_value in (6, 7)

    def test_banker_draws_last(self):
        for round_state in walk_rounds():
            if len(round_state.banker) == 3:
                assert round_state.is_finished
