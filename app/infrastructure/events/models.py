"""Event models for the infrastructure event system."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict
from uuid import UUID, uuid4


@dataclass
class Event:
    """A notification broadcast to observers.

    Events are records of something that happened, e.g. a directory
    entity was resolved (``event_type="user"``, ``payload=<User>``).
    """

    event_type: str
    """The type of event (e.g., 'user')."""

    payload: Any = None
    """The object the event is about (e.g., the resolved entity)."""

    timestamp: datetime = field(default_factory=datetime.now)
    """When the event occurred."""

    correlation_id: UUID = field(default_factory=uuid4)
    """Unique ID to track related events across the system."""

    metadata: Dict[str, Any] = field(default_factory=dict)
    """Custom metadata for this event type."""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize event metadata to a log-friendly dictionary.

        The payload is rendered with ``model_dump`` when it is a pydantic
        model and left untouched otherwise.
        """
        payload = self.payload
        if hasattr(payload, "model_dump"):
            payload = payload.model_dump(exclude_none=True)
        return {
            "event_type": self.event_type,
            "payload": payload,
            "timestamp": self.timestamp.isoformat(),
            "correlation_id": str(self.correlation_id),
            "metadata": dict(self.metadata),
        }

    def __hash__(self) -> int:
        """Hash based on correlation_id and timestamp."""
        return hash((self.correlation_id, self.timestamp))
