"""Infrastructure event system - in-process observer notifications.

Usage:

    from infrastructure.events import Event, register_event_handler

    @register_event_handler("user")
    def on_user_resolved(event: Event) -> None:
        user = event.payload
        ...

Services that need their own observer set take an ``EventDispatcher``:

    dispatcher = EventDispatcher()
    dispatcher.register("user", on_user_resolved)
    service = DirectoryService(..., dispatcher=dispatcher)
"""

from infrastructure.events.dispatcher import (
    EventDispatcher,
    clear_handlers,
    default_dispatcher,
    register_event_handler,
)
from infrastructure.events.models import Event

__all__ = [
    "Event",
    "EventDispatcher",
    "default_dispatcher",
    "register_event_handler",
    "clear_handlers",
]
