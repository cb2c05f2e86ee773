"""Tests for infrastructure.directory.context."""

import pytest

from infrastructure.configuration import LdapSettings
from infrastructure.directory.context import DirectoryContext

pytestmark = pytest.mark.unit


class TestDirectoryContext:
    def test_kind_override(self):
        context = DirectoryContext(
            base_dn="dc=example,dc=com", base_dns={"user": "ou=People,dc=example,dc=com"}
        )

        assert context.base_dn_for("user") == "ou=People,dc=example,dc=com"
        assert context.base_dn_for("group") == "dc=example,dc=com"

    def test_from_settings(self, monkeypatch):
        monkeypatch.delenv("LDAP_USER_BASE_DN", raising=False)
        ldap = LdapSettings(
            LDAP_BASE_DN="dc=example,dc=com",
            LDAP_GROUP_BASE_DN="ou=Groups,dc=example,dc=com",
        )

        context = DirectoryContext.from_settings(ldap)

        assert context.base_dn_for("user") == "dc=example,dc=com"
        assert context.base_dn_for("group") == "ou=Groups,dc=example,dc=com"

    def test_immutable(self):
        context = DirectoryContext(base_dn="dc=example,dc=com")

        with pytest.raises(AttributeError):
            context.base_dn = "dc=other,dc=com"
