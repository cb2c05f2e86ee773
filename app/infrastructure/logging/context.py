"""Lookup context binding for structured logging.

Binds a correlation id (and any extra keys) to every log entry emitted
while a directory lookup is in flight.

Usage:
    from infrastructure.logging import bind_request_context

    with bind_request_context(identifier="jsmith"):
        logger.info("searching_user")
"""

import uuid
from contextlib import contextmanager
from typing import Optional, Any, Generator
import structlog


@contextmanager
def bind_request_context(
    correlation_id: Optional[str] = None,
    **extra_context: Any,
) -> Generator[str, None, None]:
    """Bind lookup-scoped context to all logs within the context manager.

    Args:
        correlation_id: Unique lookup identifier. Auto-generated if not provided.
        **extra_context: Additional key-value pairs to include in logs.

    Yields:
        The correlation id bound for the block.
    """
    context: dict[str, Any] = {"correlation_id": correlation_id or str(uuid.uuid4())}
    context.update({k: v for k, v in extra_context.items() if v is not None})

    structlog.contextvars.bind_contextvars(**context)
    try:
        yield context["correlation_id"]
    finally:
        structlog.contextvars.unbind_contextvars(*context.keys())


def get_correlation_id() -> Optional[str]:
    """Correlation id of the lookup in flight, or None outside one."""
    return structlog.contextvars.get_contextvars().get("correlation_id")
