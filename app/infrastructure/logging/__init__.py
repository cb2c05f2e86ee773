"""Structured logging infrastructure.

Centralized logging configuration for the directory lookup service using
structlog.

Public API:
    - configure_logging(): Initialize logging
    - get_module_logger(): Get a logger for the calling module
    - bind_request_context(): Context manager for lookup-scoped logging
    - get_correlation_id(): Correlation id of the lookup in flight

Example:
    from infrastructure.logging import get_module_logger, bind_request_context

    logger = get_module_logger()

    with bind_request_context(identifier="jsmith"):
        logger.info("searching_user")
"""

from infrastructure.logging.setup import (
    configure_logging,
    get_module_logger,
)

from infrastructure.logging.context import (
    bind_request_context,
    get_correlation_id,
)

from infrastructure.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
    SENSITIVE_PATTERNS,
)

__all__ = [
    "configure_logging",
    "get_module_logger",
    "bind_request_context",
    "get_correlation_id",
    "mask_sensitive_data",
    "truncate_large_values",
    "SENSITIVE_PATTERNS",
]
