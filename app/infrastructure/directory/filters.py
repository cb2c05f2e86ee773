"""LDAP filter construction for directory lookups."""

import re
from typing import Optional

from ldap3.utils.conv import escape_filter_chars

USER_CATEGORY_FILTER = "(objectCategory=User)"
GROUP_CATEGORY_FILTER = "(objectCategory=Group)"

# Active Directory LDAP_MATCHING_RULE_IN_CHAIN
IN_CHAIN_MATCHING_RULE = "1.2.840.113556.1.4.1941"

_DN_PATTERN = re.compile(r"^\s*[A-Za-z][\w.-]*\s*=\s*[^=]+")


def is_distinguished_name(value: Optional[str]) -> bool:
    """Return True when ``value`` looks like ``attr=value[,attr=value...]``."""
    if not value:
        return False
    return bool(_DN_PATTERN.match(value))


def build_user_filter(identifier: Optional[str]) -> str:
    """Build the filter that matches a user by identifier.

    The identifier may be a distinguished name, a sAMAccountName or a
    userPrincipalName. With no identifier every user matches.
    """
    if not identifier:
        return USER_CATEGORY_FILTER
    if is_distinguished_name(identifier):
        return (
            f"(&{USER_CATEGORY_FILTER}"
            f"(distinguishedName={escape_filter_chars(identifier.strip())}))"
        )
    value = escape_filter_chars(identifier)
    return (
        f"(&{USER_CATEGORY_FILTER}"
        f"(|(sAMAccountName={value})(userPrincipalName={value})))"
    )


def build_membership_filter(dn: str, nested: bool = False) -> str:
    """Build the filter that matches groups having ``dn`` as a member."""
    value = escape_filter_chars(dn)
    if nested:
        return f"(&{GROUP_CATEGORY_FILTER}(member:{IN_CHAIN_MATCHING_RULE}:={value}))"
    return f"(&{GROUP_CATEGORY_FILTER}(member={value}))"


def truncate_log_output(output: Optional[str], max_length: int = 256) -> str:
    """Shorten ``output`` for diagnostics, marking the cut with '...'."""
    if output is None:
        return ""
    if len(output) <= max_length:
        return output
    return output[:max_length] + "..."
