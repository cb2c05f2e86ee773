"""Tests for infrastructure.directory.filters."""

import pytest

from infrastructure.directory.filters import (
    build_membership_filter,
    build_user_filter,
    is_distinguished_name,
    truncate_log_output,
)

pytestmark = pytest.mark.unit


class TestBuildUserFilter:
    def test_account_name(self):
        assert build_user_filter("jsmith") == (
            "(&(objectCategory=User)(|(sAMAccountName=jsmith)(userPrincipalName=jsmith)))"
        )

    def test_user_principal_name(self):
        assert "(userPrincipalName=jsmith@example.com)" in build_user_filter(
            "jsmith@example.com"
        )

    def test_distinguished_name(self):
        dn = "CN=John Smith,OU=People,DC=example,DC=com"

        assert build_user_filter(dn) == (
            f"(&(objectCategory=User)(distinguishedName={dn}))"
        )

    def test_no_identifier_matches_all_users(self):
        assert build_user_filter(None) == "(objectCategory=User)"
        assert build_user_filter("") == "(objectCategory=User)"

    def test_special_characters_are_escaped(self):
        result = build_user_filter("j*smith)(")

        assert "j\\2asmith\\29\\28" in result
        assert "j*smith" not in result


class TestIsDistinguishedName:
    @pytest.mark.parametrize(
        "value",
        ["CN=John,DC=example,DC=com", "uid=jsmith,ou=people,dc=example,dc=com"],
    )
    def test_distinguished_names(self, value):
        assert is_distinguished_name(value) is True

    @pytest.mark.parametrize("value", ["jsmith", "jsmith@example.com", "", None])
    def test_plain_identifiers(self, value):
        assert is_distinguished_name(value) is False


class TestBuildMembershipFilter:
    def test_direct(self):
        assert build_membership_filter("CN=John,DC=example,DC=com") == (
            "(&(objectCategory=Group)(member=CN=John,DC=example,DC=com))"
        )

    def test_nested_uses_in_chain_rule(self):
        assert build_membership_filter("CN=John,DC=x", nested=True) == (
            "(&(objectCategory=Group)(member:1.2.840.113556.1.4.1941:=CN=John,DC=x))"
        )


class TestTruncateLogOutput:
    def test_short_output_unchanged(self):
        assert truncate_log_output("(cn=x)", 10) == "(cn=x)"

    def test_long_output_cut(self):
        assert truncate_log_output("abcdefghij", 4) == "abcd..."

    def test_none(self):
        assert truncate_log_output(None) == ""
