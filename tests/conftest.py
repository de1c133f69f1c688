"""
Pytest configuration for tests at the root level.

This module contains pytest fixtures and configuration for testing components.
"""

import pytest

from shoecount.baccarat.rules import BaccaratRules
from shoecount.engine.session import CountingSession
from shoecount.events import EventBus


# Reset event bus before each test
@pytest.fixture(scope="function", autouse=True)
def reset_event_bus():
    """Reset the event bus singleton before each test."""
    EventBus._instance = None
    yield
    EventBus._instance = None


@pytest.fixture
def session():
    """A session that has passed the gate and is burning cards."""
    session = CountingSession(BaccaratRules())
    session.start()
    return session


@pytest.fixture
def playing_session(session):
    """A session with the burn phase already finished."""
    session.finish_burn_phase()
    return session

