"""
Factory functions for dependency injection.

Provides application-scoped singleton providers for core infrastructure services.
"""

from functools import lru_cache

from infrastructure.configuration import Settings
from infrastructure.clients.ldap import LdapSearchClient, LdapSessionProvider
from infrastructure.directory import DirectoryContext, DirectoryService
from infrastructure.events import default_dispatcher


@lru_cache
def get_settings() -> Settings:
    """
    Get application-scoped settings singleton.

    The @lru_cache decorator ensures only ONE instance is created per process.

    Returns:
        Settings: Cached settings instance loaded from environment.
    """
    return Settings()


@lru_cache
def get_ldap_session_provider() -> LdapSessionProvider:
    """
    Get application-scoped LDAP session provider singleton.

    Raises:
        ValueError: If LDAP_URL is not configured.
    """
    ldap = get_settings().ldap
    return LdapSessionProvider(
        url=ldap.LDAP_URL,
        bind_dn=ldap.LDAP_BIND_DN,
        bind_password=ldap.LDAP_BIND_PASSWORD,
        use_ssl=ldap.LDAP_USE_SSL,
        connect_timeout=ldap.LDAP_CONNECT_TIMEOUT,
    )


@lru_cache
def get_ldap_search_client() -> LdapSearchClient:
    """Get application-scoped LDAP search executor."""
    return LdapSearchClient(get_ldap_session_provider())


@lru_cache
def get_directory_service() -> DirectoryService:
    """
    Get application-scoped directory lookup service.

    Wires the LDAP search client, the configured search roots and lookup
    defaults, and the process-wide event dispatcher.

    Usage:
        directory = get_directory_service()
        user = await directory.find_user("jsmith")
    """
    settings = get_settings()
    return DirectoryService(
        search_executor=get_ldap_search_client(),
        context=DirectoryContext.from_settings(settings.ldap),
        settings=settings.directory,
        dispatcher=default_dispatcher,
    )
