"""
Session engine for shoecount.

This package provides the stateful session that owns the live state and
accepts the control commands.
"""

from shoecount.engine.session import CountingSession

__all__ = ["CountingSession"]
