"""
Dependency injection services.

Provides provider functions returning application-scoped singletons.
"""

from infrastructure.services.providers import (
    get_settings,
    get_ldap_session_provider,
    get_ldap_search_client,
    get_directory_service,
)

__all__ = [
    "get_settings",
    "get_ldap_session_provider",
    "get_ldap_search_client",
    "get_directory_service",
]
