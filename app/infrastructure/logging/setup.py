"""Structlog configuration and logger setup.

Usage:
    from infrastructure.logging import configure_logging, get_module_logger

    configure_logging()

    logger = get_module_logger()
    logger.info("users_found", count=1)

Dependencies:
    - infrastructure.configuration.settings
"""

import inspect
import logging
import sys
from typing import List, Optional

import structlog
from structlog.stdlib import BoundLogger

from infrastructure.configuration import settings
from infrastructure.logging.formatters import (
    mask_sensitive_data,
    truncate_large_values,
)


def _is_test_environment() -> bool:
    """True when running under pytest."""
    return "pytest" in sys.modules


def _processors(json_output: bool) -> List:
    renderer = (
        structlog.processors.JSONRenderer()
        if json_output
        else structlog.dev.ConsoleRenderer()
    )
    return [
        structlog.stdlib.filter_by_level,
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.format_exc_info,
        mask_sensitive_data(),
        truncate_large_values(),
        renderer,
    ]


def configure_logging(
    log_level: Optional[str] = None,
    is_production: Optional[bool] = None,
) -> BoundLogger:
    """Configure structlog on top of the standard library logger.

    Args:
        log_level: Overrides settings.LOG_LEVEL. Ignored under pytest, where
            every record is dropped.
        is_production: Overrides settings.is_production; selects JSON output
            instead of the console renderer.

    Returns:
        Configured logger instance
    """
    if _is_test_environment():
        level = logging.CRITICAL + 1
    else:
        level = getattr(logging, (log_level or settings.LOG_LEVEL).upper(), logging.INFO)

    json_output = settings.is_production if is_production is None else is_production

    structlog.configure(
        processors=_processors(json_output),
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", level=level, force=True)
    return structlog.stdlib.get_logger()


# Module-level logger (auto-configured on import)
logger: BoundLogger = configure_logging()


def get_module_logger() -> BoundLogger:
    """Get a logger bound to the calling module.

    Example:
        # In infrastructure/directory/service.py
        logger = get_module_logger()
        # context: {"component": "service",
        #           "module_path": "infrastructure.directory.service"}
    """
    frame = inspect.currentframe()
    caller = frame.f_back if frame is not None else None
    module_name = caller.f_globals.get("__name__") if caller is not None else None
    if not module_name:
        return logger.bind(component="unknown")
    return logger.bind(
        component=module_name.rsplit(".", 1)[-1],
        module_path=module_name,
    )
