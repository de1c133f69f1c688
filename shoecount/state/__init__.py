"""
Immutable state management for the counting session.

This package provides immutable state classes, pure transition functions
and the undo history built on them.
"""

from shoecount.state.models import (
    AwaitingSlot,
    Finished,
    GamePhase,
    RoundState,
    RoundStatus,
    SessionState,
    ShoeState,
)
from shoecount.state.transitions import StateTransitionEngine
from shoecount.state.history import HistorySnapshotStack

__all__ = [
    "AwaitingSlot",
    "Finished",
    "GamePhase",
    "RoundState",
    "RoundStatus",
    "SessionState",
    "ShoeState",
    "StateTransitionEngine",
    "HistorySnapshotStack",
]
