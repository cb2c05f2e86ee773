"""Infrastructure configuration module - public API.

Centralized configuration for the directory lookup service using Pydantic
BaseSettings with domain-based organization.

Exports:
    settings: Singleton Settings instance (main configuration object)
    Settings: Main settings class (for testing/overrides)
    LdapSettings: Directory server connection settings
    DirectorySettings: Lookup defaults

Example:
    ```python
    from infrastructure.services import get_settings

    settings = get_settings()

    ldap_url = settings.ldap.LDAP_URL
    user_attributes = settings.directory.user_attributes
    ```
"""

from infrastructure.configuration.settings import Settings, settings
from infrastructure.configuration.integrations import LdapSettings
from infrastructure.configuration.features import DirectorySettings

__all__ = ["Settings", "settings", "LdapSettings", "DirectorySettings"]
