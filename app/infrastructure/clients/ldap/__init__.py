"""LDAP clients for the infrastructure layer.

Public API:
- LdapSessionProvider: server definition and bound connections
- LdapSearchClient: async search executor used by DirectoryService

Note: Application code should obtain clients from infrastructure.services.
"""

from infrastructure.clients.ldap.search import LdapSearchClient
from infrastructure.clients.ldap.session_provider import LdapSessionProvider

__all__ = [
    "LdapSearchClient",
    "LdapSessionProvider",
]
