"""
Undo history for the counting session.

Snapshots are `SessionState` values. Those are frozen dataclasses holding
tuples, so a pushed snapshot shares nothing that a later transition could
change.
"""

from typing import List, Optional

from shoecount.state.models import SessionState


class HistorySnapshotStack:
    """Append-only stack of session snapshots, popped by undo."""

    def __init__(self):
        self._snapshots: List[SessionState] = []

    def push(self, snapshot: SessionState) -> None:
        """
        Record the state as it was before a mutating input.

        Args:
            snapshot: Session state to restore on the matching undo
        """
        if not isinstance(snapshot, SessionState):
            raise TypeError(f"Invalid snapshot: {snapshot!r}")
        self._snapshots.append(snapshot)

    def pop(self) -> Optional[SessionState]:
        """
        Remove and return the most recent snapshot.

        Returns:
            The snapshot, or None when there is nothing to undo
        """
        if not self._snapshots:
            return None
        return self._snapshots.pop()

    def peek(self) -> Optional[SessionState]:
        """Return the most recent snapshot without removing it."""
        return self._snapshots[-1] if self._snapshots else None

    def clear(self) -> None:
        self._snapshots.clear()

    def __len__(self) -> int:
        return len(self._snapshots)

    def __bool__(self) -> bool:
        return bool(self._snapshots)
