"""LDAP directory integration settings."""

from typing import Optional

from pydantic import Field

from infrastructure.configuration.base import IntegrationSettings


class LdapSettings(IntegrationSettings):
    """Connection settings for the LDAP / Active Directory server.

    Environment Variables:
        LDAP_URL: Server URL (e.g., 'ldaps://dc01.example.com:636')
        LDAP_BIND_DN: Service account used to bind
        LDAP_BIND_PASSWORD: Password for the service account
        LDAP_BASE_DN: Root of the directory tree (e.g., 'dc=example,dc=com')
        LDAP_USER_BASE_DN: Optional subtree for user searches
        LDAP_GROUP_BASE_DN: Optional subtree for group searches
        LDAP_CONNECT_TIMEOUT: Connection timeout in seconds (default: 10)
        LDAP_USE_SSL: Force TLS even when the URL scheme is 'ldap://'

    Example:
        ```python
        from infrastructure.services import get_settings

        settings = get_settings()

        url = settings.ldap.LDAP_URL
        user_base = settings.ldap.user_base_dn
        ```
    """

    LDAP_URL: str = Field(default="", alias="LDAP_URL")
    LDAP_BIND_DN: str = Field(default="", alias="LDAP_BIND_DN")
    LDAP_BIND_PASSWORD: str = Field(default="", alias="LDAP_BIND_PASSWORD")
    LDAP_BASE_DN: str = Field(default="", alias="LDAP_BASE_DN")
    LDAP_USER_BASE_DN: Optional[str] = Field(default=None, alias="LDAP_USER_BASE_DN")
    LDAP_GROUP_BASE_DN: Optional[str] = Field(default=None, alias="LDAP_GROUP_BASE_DN")
    LDAP_CONNECT_TIMEOUT: int = Field(default=10, alias="LDAP_CONNECT_TIMEOUT")
    LDAP_USE_SSL: bool = Field(default=False, alias="LDAP_USE_SSL")

    @property
    def user_base_dn(self) -> str:
        """Base DN for user searches, falling back to LDAP_BASE_DN."""
        return self.LDAP_USER_BASE_DN or self.LDAP_BASE_DN

    @property
    def group_base_dn(self) -> str:
        """Base DN for group searches, falling back to LDAP_BASE_DN."""
        return self.LDAP_GROUP_BASE_DN or self.LDAP_BASE_DN
