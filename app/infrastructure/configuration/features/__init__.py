"""Feature settings __init__ - exports all feature settings."""

from infrastructure.configuration.features.directory import (
    DEFAULT_GROUP_ATTRIBUTES,
    DEFAULT_USER_ATTRIBUTES,
    DirectorySettings,
)

__all__ = [
    "DirectorySettings",
    "DEFAULT_USER_ATTRIBUTES",
    "DEFAULT_GROUP_ATTRIBUTES",
]
