"""Tests for running/true count arithmetic."""

import pytest

from shoecount.baccarat.counting import (
    cards_remaining,
    decks_remaining,
    record_card,
    true_count,
)
from shoecount.state.models import ShoeState


class TestRecordCard:
    def test_advances_count_and_cards_dealt(self):
        shoe = ShoeState()
        shoe = record_card(shoe, 2)
        shoe = record_card(shoe, -1)
        assert shoe.running_count == 1
        assert shoe.cards_dealt == 2

    def test_returns_new_state(self):
        shoe = ShoeState()
        new_shoe = record_card(shoe, 1)
        assert shoe.cards_dealt == 0
        assert shoe.running_count == 0
        assert new_shoe is not shoe

    def test_keeps_other_fields(self):
        shoe = ShoeState(total_cards=312, round_count=4)
        new_shoe = record_card(shoe, 0)
        assert new_shoe.total_cards == 312
        assert new_shoe.round_count == 4


class TestTrueCount:
    def test_counting_scenario(self):
        """A, 2, 3, 4, 5 into a fresh 8-deck shoe."""
        running = 1 + 1 + 1 + 2 - 1
        assert running == 4
        assert decks_remaining(5, 416) == pytest.approx(411 / 52)
        assert true_count(running, 5, 416) == pytest.approx(4 / (411 / 52))
        assert true_count(running, 5, 416) == pytest.approx(0.506, abs=1e-3)

    def test_full_shoe(self):
        assert true_count(8, 0, 416) == pytest.approx(1.0)

    def test_floor_at_half_a_deck(self):
        assert decks_remaining(400, 416) == 0.5
        assert decks_remaining(416, 416) == 0.5
        assert true_count(3, 416, 416) == pytest.approx(6.0)

    def test_floor_holds_past_the_end_of_the_shoe(self):
        assert decks_remaining(500, 416) == 0.5
        assert cards_remaining(500, 416) == -84

    @pytest.mark.parametrize("cards_dealt", range(0, 417, 13))
    @pytest.mark.parametrize("running", [-20, -3, 0, 5, 17])
    def test_bound(self, running, cards_dealt):
        assert decks_remaining(cards_dealt, 416) >= 0.5
        assert abs(true_count(running, cards_dealt, 416)) <= abs(running) / 0.5

    def test_custom_floor_and_deck_size(self):
        assert decks_remaining(300, 312, cards_per_deck=52, min_decks=1.0) == 1.0
        assert true_count(6, 0, 312) == pytest.approx(1.0)
