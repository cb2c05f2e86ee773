"""Directory context: where searches for each entity kind are rooted."""

from dataclasses import dataclass, field
from typing import Dict

from infrastructure.configuration import LdapSettings


@dataclass(frozen=True)
class DirectoryContext:
    """Immutable per-service search roots.

    The base DN for an entity kind is resolved on every query and carried
    on the query itself, so concurrent lookups never write shared state.

    Attributes:
        base_dn: Root used when no kind-specific base DN is configured.
        base_dns: Optional per-kind overrides, e.g. ``{"user": "ou=People,..."}``.
    """

    base_dn: str = ""
    base_dns: Dict[str, str] = field(default_factory=dict)

    def base_dn_for(self, kind: str) -> str:
        """Return the search root for ``kind`` ('user', 'group', ...)."""
        return self.base_dns.get(kind) or self.base_dn

    @classmethod
    def from_settings(cls, ldap: LdapSettings) -> "DirectoryContext":
        """Build a context from LDAP integration settings."""
        return cls(
            base_dn=ldap.LDAP_BASE_DN,
            base_dns={"user": ldap.user_base_dn, "group": ldap.group_base_dn},
        )
