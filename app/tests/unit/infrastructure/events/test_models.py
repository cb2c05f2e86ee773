"""Unit tests for infrastructure event models."""

from datetime import datetime
from uuid import UUID

import pytest

from infrastructure.directory.models import User
from infrastructure.events.models import Event

pytestmark = pytest.mark.unit


class TestEvent:
    """Tests for Event."""

    def test_defaults(self):
        event = Event(event_type="user")

        assert event.payload is None
        assert event.metadata == {}
        assert isinstance(event.timestamp, datetime)
        assert isinstance(event.correlation_id, UUID)

    def test_to_dict_dumps_model_payload(self):
        user = User(dn="cn=John,dc=example,dc=com", mail="john@example.com")
        event = Event(event_type="user", payload=user, metadata={"identifier": "john"})

        data = event.to_dict()

        assert data["event_type"] == "user"
        assert data["payload"] == {"dn": "cn=John,dc=example,dc=com", "mail": "john@example.com"}
        assert data["metadata"] == {"identifier": "john"}
        assert data["timestamp"] == event.timestamp.isoformat()
        assert data["correlation_id"] == str(event.correlation_id)

    def test_to_dict_keeps_plain_payload(self):
        assert Event(event_type="x", payload={"a": 1}).to_dict()["payload"] == {"a": 1}

    def test_hashable(self):
        event = Event(event_type="user")

        assert event in {event}
