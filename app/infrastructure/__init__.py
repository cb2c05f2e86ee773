"""Infrastructure modules for the directory lookup service.

Centralized infrastructure components:
- configuration: Settings management (settings, LdapSettings, DirectorySettings)
- logging: Structured logging (get_module_logger, bind_request_context)
- events: In-process observer notifications (Event, EventDispatcher)
- clients.ldap: ldap3 transport (LdapSessionProvider, LdapSearchClient)
- directory: User lookup (DirectoryService, User, QueryOptions)
- services: Singleton providers (get_settings, get_directory_service)
"""

# Configuration
from infrastructure.configuration import settings

# Observability
from infrastructure.logging import get_module_logger

# Dependency Injection Services
from infrastructure.services import (
    get_settings,
    get_directory_service,
)

__all__ = [
    "settings",
    "get_module_logger",
    "get_settings",
    "get_directory_service",
]
