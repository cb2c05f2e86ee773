"""Fixtures for infrastructure event system tests."""

import pytest
from unittest.mock import MagicMock

from infrastructure.events.dispatcher import EventDispatcher
from infrastructure.events.models import Event


@pytest.fixture
def event_factory():
    """Factory for creating test events."""

    def _factory(event_type: str = "user", payload=None, metadata: dict = None):
        return Event(event_type=event_type, payload=payload, metadata=metadata or {})

    return _factory


@pytest.fixture
def dispatcher():
    """An isolated dispatcher."""
    return EventDispatcher()


@pytest.fixture
def mock_event_handler():
    """Mock event handler function."""
    return MagicMock()
