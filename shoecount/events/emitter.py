"""
Event system for the shoecount engine.

Transitions and the session publish what happened (a card burned or dealt,
a round finished, an undo) so that presentation layers can react without
reaching into the state themselves.
"""

from collections import defaultdict
from typing import Any, Callable, Dict, Union
import threading
import logging
from enum import Enum

# Create a logger for the event system
logger = logging.getLogger("shoecount.events")


class EventEmitter:
    """
    Event emitter for the shoecount engine.

    Handlers run in subscription order. Handlers registered with ``on_any``
    receive ``(event_name, data)`` and run after the handlers for that event.
    A failing handler is logged and never reaches the emitter's caller.
    """

    def __init__(self):
        """Initialize the event emitter."""
        self._listeners = defaultdict(list)
        self._global_listeners = []
        self._listener_lock = threading.RLock()

    def on(self, event_type: Union[str, Enum], callback: Callable) -> Callable:
        """
        Subscribe to an event type.

        Args:
            event_type: The event type to subscribe to (string or enum)
            callback: Function to call when event occurs, signature: fn(event_data)

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        with self._listener_lock:
            self._listeners[event_type].append(callback)

        def unsubscribe():
            with self._listener_lock:
                if callback in self._listeners[event_type]:
                    self._listeners[event_type].remove(callback)

        return unsubscribe

    def on_any(self, callback: Callable) -> Callable:
        """
        Subscribe to all events.

        Args:
            callback: Function to call for any event, signature: fn((event_type, event_data))

        Returns:
            Unsubscribe function that can be called to remove this subscription
        """
        with self._listener_lock:
            self._global_listeners.append(callback)

        def unsubscribe():
            with self._listener_lock:
                if callback in self._global_listeners:
                    self._global_listeners.remove(callback)

        return unsubscribe

    def emit(self, event_type: Union[str, Enum], data: Dict[str, Any]) -> None:
        """
        Emit an event to all registered listeners.

        Args:
            event_type: The type of event to emit
            data: The data to include with the event
        """
        if isinstance(event_type, Enum):
            event_type = event_type.name

        with self._listener_lock:
            handlers_to_call = [
                (callback, data) for callback in self._listeners.get(event_type, [])
            ]
            handlers_to_call.extend(
                (callback, (event_type, data)) for callback in self._global_listeners
            )

        # Call handlers outside of the lock to avoid deadlocks
        for callback, args in handlers_to_call:
            try:
                callback(args)
            except Exception as e:
                logger.error(
                    f"Error in event handler for {event_type}: {e}", exc_info=True
                )

    def remove_all_listeners(self, event_type: Union[str, Enum, None] = None) -> None:
        """
        Remove all listeners for a specific event type or all events.

        Args:
            event_type: Optional event type. If None, removes all listeners for all events.
        """
        with self._listener_lock:
            if event_type is None:
                self._listeners.clear()
                self._global_listeners.clear()
            else:
                if isinstance(event_type, Enum):
                    event_type = event_type.name
                self._listeners[event_type].clear()


class EventBus:
    """
    Global event bus for the application.

    This singleton class provides a centralized event bus that can be accessed
    from anywhere in the application.
    """

    _instance = None
    _lock = threading.Lock()

    @classmethod
    def get_instance(cls) -> EventEmitter:
        """
        Get the singleton instance of the EventBus.

        Returns:
            EventEmitter instance
        """
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = EventEmitter()
        return cls._instance


class EngineEventType(Enum):
    """
    Event types published by the counting engine.
    """

    # Session lifecycle
    SESSION_STARTED = "session_started"
    SHOE_RESET = "shoe_reset"
    UNDO = "undo"

    # Burn phase
    BURN_STARTED = "burn_started"
    CARD_BURNED = "card_burned"
    BURN_FINISHED = "burn_finished"

    # Rounds
    ROUND_STARTED = "round_started"
    CARD_DEALT = "card_dealt"
    ROUND_ENDED = "round_ended"

    # Counting
    COUNT_UPDATED = "count_updated"
