"""Event dispatcher for the infrastructure event system.

Provides an in-process handler registry. Handlers are registered per
event type and called synchronously, in registration order, when an
event is dispatched. A module-level default dispatcher backs the
decorator API; services that need isolated observers own their own
EventDispatcher instance.
"""

from threading import Lock
from typing import Any, Callable, Dict, List

from infrastructure.logging import get_module_logger
from infrastructure.events.models import Event

logger = get_module_logger()


class EventDispatcher:
    """Registry of observers keyed by event type."""

    def __init__(self) -> None:
        self._handlers: Dict[str, List[Callable]] = {}
        self._lock = Lock()

    def register(self, event_type: str, handler: Callable) -> Callable:
        """Register ``handler`` for ``event_type`` and return it unchanged."""
        with self._lock:
            self._handlers.setdefault(event_type, []).append(handler)
            total = len(self._handlers[event_type])
        logger.debug(
            "registered_event_handler",
            handler=getattr(handler, "__name__", "unknown"),
            event_type=event_type,
            total_handlers=total,
        )
        return handler

    def dispatch(self, event: Event) -> List[Any]:
        """Dispatch event synchronously to all registered handlers.

        If a handler raises, the exception is logged and the remaining
        handlers still run.

        Args:
            event: The event to dispatch.

        Returns:
            List of return values from the handlers that succeeded.
        """
        results = []
        handlers = self.handlers_for(event.event_type)

        logger.debug(
            "dispatching_event",
            event_type=event.event_type,
            handler_count=len(handlers),
            correlation_id=str(event.correlation_id),
        )

        for handler in handlers:
            try:
                results.append(handler(event))
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=getattr(handler, "__name__", "unknown"),
                    event_type=event.event_type,
                    error=str(e),
                    correlation_id=str(event.correlation_id),
                )

        return results

    def handlers_for(self, event_type: str) -> List[Callable]:
        """Get all handlers registered for a specific event type."""
        with self._lock:
            return list(self._handlers.get(event_type, []))

    def clear(self) -> None:
        """Clear all registered handlers."""
        with self._lock:
            self._handlers.clear()
        logger.debug("cleared_all_event_handlers")


# Process-wide default dispatcher
default_dispatcher = EventDispatcher()


def register_event_handler(event_type: str):
    """Decorator to register an event handler on the default dispatcher.

    Args:
        event_type: The type of event to handle (e.g., 'user').

    Returns:
        Decorator function that registers the handler.
    """

    def decorator(handler_func: Callable) -> Callable:
        return default_dispatcher.register(event_type, handler_func)

    return decorator


def clear_handlers() -> None:
    """Clear all handlers of the default dispatcher.

    WARNING: This is intended for testing only.
    """
    default_dispatcher.clear()
