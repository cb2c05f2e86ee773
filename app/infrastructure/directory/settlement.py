"""Single-settlement result delivery.

A lookup outcome reaches the caller through up to three channels fed from
one settlement event:

* an ``asyncio.Future`` (always);
* a completion callback ``callback(error, result)`` (when supplied);
* an observer notification on an EventDispatcher (success only).

On success the notification goes out first, then the callback runs, then
the future resolves. On failure no notification is sent; the callback
receives the error and the future is rejected with the same exception.
A cancelled lookup cancels the future.
"""

import asyncio
from typing import Any, Callable, Dict, Optional

from infrastructure.events import Event, EventDispatcher, default_dispatcher
from infrastructure.logging import get_correlation_id, get_module_logger

logger = get_module_logger()


def _mark_exception_retrieved(future: asyncio.Future) -> None:
    # The callback is the consumer of the error; the future may never be awaited.
    if not future.cancelled():
        future.exception()


class Settlement:
    """Settles one outcome across the future, callback and observers.

    Args:
        event_type: Event type broadcast on success (e.g. 'user').
        callback: Optional completion callback ``(error, result)``.
        dispatcher: Observer registry; the process default when omitted.
        metadata: Extra metadata attached to the success event.
    """

    def __init__(
        self,
        event_type: str,
        callback: Optional[Callable[[Optional[BaseException], Any], Any]] = None,
        dispatcher: Optional[EventDispatcher] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        self._event_type = event_type
        self._callback = callback
        self._dispatcher = dispatcher or default_dispatcher
        self._metadata = metadata or {}
        self._settled = False
        self.future: asyncio.Future = asyncio.get_running_loop().create_future()
        if callback is not None:
            self.future.add_done_callback(_mark_exception_retrieved)

    @property
    def settled(self) -> bool:
        return self._settled

    def resolve(self, result: Any) -> None:
        """Deliver a successful outcome on all channels."""
        if not self._begin("resolve"):
            return
        metadata = dict(self._metadata)
        correlation_id = get_correlation_id()
        if correlation_id:
            metadata["correlation_id"] = correlation_id
        self._dispatcher.dispatch(
            Event(event_type=self._event_type, payload=result, metadata=metadata)
        )
        self._invoke_callback(None, result)
        if not self.future.done():
            self.future.set_result(result)

    def reject(self, error: BaseException) -> None:
        """Deliver a failure on the callback and future channels."""
        if not self._begin("reject"):
            return
        self._invoke_callback(error, None)
        if not self.future.done():
            self.future.set_exception(error)

    def cancel(self) -> None:
        """Settle a lookup that was cancelled before it finished.

        The callback receives a CancelledError and the future is cancelled.
        """
        if not self._begin("cancel"):
            return
        self._invoke_callback(asyncio.CancelledError(), None)
        self.future.cancel()

    def _begin(self, action: str) -> bool:
        if self._settled:
            logger.warning(
                "settlement_already_settled",
                event_type=self._event_type,
                action=action,
            )
            return False
        self._settled = True
        return True

    def _invoke_callback(self, error: Optional[BaseException], result: Any) -> None:
        if self._callback is None:
            return
        try:
            self._callback(error, result)
        except Exception:
            logger.exception(
                "completion_callback_failed",
                event_type=self._event_type,
                callback=getattr(self._callback, "__name__", "unknown"),
            )
