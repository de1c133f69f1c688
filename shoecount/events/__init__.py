"""
Event system for the shoecount engine.

This package provides the event bus that transitions publish to and
presentation layers subscribe to.
"""

from shoecount.events.emitter import EventEmitter, EventBus, EngineEventType

__all__ = ["EventEmitter", "EventBus", "EngineEventType"]
