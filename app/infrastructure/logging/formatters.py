"""Structlog processors used by the logging pipeline."""

from typing import Any


# Key fragments whose values never reach the log output
SENSITIVE_PATTERNS = frozenset(
    {
        "password",
        "secret",
        "token",
        "credential",
        "authorization",
        "private_key",
    }
)


def mask_sensitive_data(
    mask_value: str = "***REDACTED***",
    additional_patterns: frozenset[str] | None = None,
):
    """Create a processor that masks sensitive values in log entries.

    Keys are matched case-insensitively against SENSITIVE_PATTERNS, so a
    bound ``bind_password`` or ``LDAP_BIND_PASSWORD`` is redacted.

    Args:
        mask_value: The string to replace sensitive values with.
        additional_patterns: Extra patterns to consider sensitive.

    Returns:
        A structlog processor function.
    """
    patterns = SENSITIVE_PATTERNS
    if additional_patterns:
        patterns = patterns | additional_patterns

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        masked_dict = {}
        for key, value in event_dict.items():
            key_lower = key.lower()
            is_sensitive = any(pattern in key_lower for pattern in patterns)
            if is_sensitive and value is not None:
                masked_dict[key] = mask_value
            else:
                masked_dict[key] = value
        return masked_dict

    return processor


def truncate_large_values(max_length: int = 1000):
    """Create a processor that truncates overly large string values.

    Directory records can carry large binary-ish attributes
    (thumbnailPhoto, certificates); this keeps them out of the logs.

    Args:
        max_length: Maximum string length before truncation.

    Returns:
        A structlog processor function.
    """

    def processor(
        logger: Any, method_name: str, event_dict: dict[str, Any]
    ) -> dict[str, Any]:
        for key, value in event_dict.items():
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = (
                    value[:max_length] + f"...[truncated, {len(value)} chars total]"
                )
        return event_dict

    return processor
