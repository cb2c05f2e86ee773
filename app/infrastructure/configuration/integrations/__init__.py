"""Integration settings __init__ - exports all integration settings."""

from infrastructure.configuration.integrations.ldap import LdapSettings

__all__ = [
    "LdapSettings",
]
