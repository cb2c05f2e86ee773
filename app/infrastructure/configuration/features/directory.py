"""Directory lookup feature settings."""

import json
from typing import Any, Optional

from pydantic import Field, field_validator
import structlog

from infrastructure.configuration.base import FeatureSettings

logger = structlog.stdlib.get_logger().bind(component="config.directory")


DEFAULT_USER_ATTRIBUTES = [
    "dn",
    "distinguishedName",
    "userPrincipalName",
    "sAMAccountName",
    "mail",
    "lockoutTime",
    "whenCreated",
    "pwdLastSet",
    "userAccountControl",
    "employeeID",
    "sn",
    "givenName",
    "initials",
    "cn",
    "displayName",
    "comment",
    "description",
]

DEFAULT_GROUP_ATTRIBUTES = [
    "dn",
    "cn",
    "description",
    "distinguishedName",
    "objectCategory",
]


def _parse_attribute_list(value: Optional[Any], setting_name: str) -> Any:
    """Parse an attribute list from a JSON array, a comma list or a sequence."""
    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        return [str(item) for item in value]
    if isinstance(value, str):
        s = value.strip()
        if not s:
            return []
        if s.startswith("["):
            try:
                parsed = json.loads(s)
            except (json.JSONDecodeError, ValueError) as e:
                logger.error(
                    "failed_to_parse_attribute_list", setting=setting_name, error=str(e)
                )
                raise ValueError(f"{setting_name} must be valid JSON: {e}") from e
            if not isinstance(parsed, list):
                raise ValueError(f"{setting_name} must be a JSON array")
            return [str(item) for item in parsed]
        return [part.strip() for part in s.split(",") if part.strip()]
    raise ValueError(f"{setting_name} must be a JSON array, a comma list or a list")


class DirectorySettings(FeatureSettings):
    """Defaults applied when resolving users and their group memberships.

    Environment Variables:
        DIRECTORY_USER_ATTRIBUTES: Attributes returned for a user when the
            caller does not request any (JSON array or comma separated list)
        DIRECTORY_GROUP_ATTRIBUTES: Attributes returned for each group of a
            user's membership
        DIRECTORY_LOG_TRUNCATE_LENGTH: Maximum filter length written to logs
        DIRECTORY_NESTED_MEMBERSHIP: Include nested groups when resolving
            memberships (Active Directory in-chain matching rule)

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        attributes = settings.directory.user_attributes
        ```
    """

    user_attributes: Any = Field(
        default_factory=lambda: list(DEFAULT_USER_ATTRIBUTES),
        alias="DIRECTORY_USER_ATTRIBUTES",
        description="Default attributes returned for a user",
    )
    group_attributes: Any = Field(
        default_factory=lambda: list(DEFAULT_GROUP_ATTRIBUTES),
        alias="DIRECTORY_GROUP_ATTRIBUTES",
        description="Default attributes returned for a group",
    )
    log_truncate_length: int = Field(
        default=256,
        alias="DIRECTORY_LOG_TRUNCATE_LENGTH",
        description="Maximum length of query filters written to logs",
    )
    nested_membership: bool = Field(
        default=False,
        alias="DIRECTORY_NESTED_MEMBERSHIP",
        description="Resolve nested group memberships",
    )

    @field_validator("user_attributes", mode="before")
    @classmethod
    def _parse_user_attributes(cls, v: Optional[Any]) -> Any:
        """Parse DIRECTORY_USER_ATTRIBUTES."""
        parsed = _parse_attribute_list(v, "DIRECTORY_USER_ATTRIBUTES")
        return list(DEFAULT_USER_ATTRIBUTES) if parsed is None else parsed

    @field_validator("group_attributes", mode="before")
    @classmethod
    def _parse_group_attributes(cls, v: Optional[Any]) -> Any:
        """Parse DIRECTORY_GROUP_ATTRIBUTES."""
        parsed = _parse_attribute_list(v, "DIRECTORY_GROUP_ATTRIBUTES")
        return list(DEFAULT_GROUP_ATTRIBUTES) if parsed is None else parsed
