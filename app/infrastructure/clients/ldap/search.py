"""ldap3-backed search executor for directory lookups."""

import asyncio
from typing import Any, Dict, List

import structlog
from ldap3 import ALL_ATTRIBUTES, BASE, LEVEL, NO_ATTRIBUTES, SUBTREE

from infrastructure.clients.ldap.session_provider import LdapSessionProvider
from infrastructure.directory.models import EffectiveQuery, SearchScope

logger = structlog.get_logger()

SCOPES = {
    SearchScope.BASE: BASE,
    SearchScope.ONE: LEVEL,
    SearchScope.SUB: SUBTREE,
}


def _ldap_attributes(attributes: List[str]) -> Any:
    """Translate an attribute list into ldap3's ``attributes`` argument.

    An empty list means every attribute. ``dn`` is not an LDAP attribute
    (ldap3 reports it beside the attributes) and is not sent.
    """
    if not attributes:
        return ALL_ATTRIBUTES
    sent = [a for a in attributes if a.lower() != "dn"]
    return sent or NO_ATTRIBUTES


def entry_to_record(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten an ldap3 response entry into a raw record with ``dn`` set."""
    record = dict(entry.get("attributes") or {})
    record["dn"] = entry.get("dn")
    return record


class LdapSearchClient:
    """Runs EffectiveQuery searches with ldap3.

    ldap3 is blocking; each search runs in a worker thread on its own
    connection. LDAP errors propagate unchanged.

    Args:
        session_provider: Source of bound connections.
    """

    def __init__(self, session_provider: LdapSessionProvider) -> None:
        self._session_provider = session_provider
        self._logger = logger.bind(component="ldap_search_client")

    async def search(self, query: EffectiveQuery) -> List[Dict[str, Any]]:
        return await asyncio.to_thread(self.search_sync, query)

    def search_sync(self, query: EffectiveQuery) -> List[Dict[str, Any]]:
        """Blocking search; returns search result entries only."""
        self._logger.debug(
            "ldap_search",
            base_dn=query.base_dn,
            scope=query.scope.value,
            size_limit=query.size_limit,
            time_limit=query.time_limit,
        )
        connection = self._session_provider.get_connection()
        try:
            connection.search(
                search_base=query.base_dn,
                search_filter=query.filter,
                search_scope=SCOPES[query.scope],
                attributes=_ldap_attributes(query.attributes),
                size_limit=query.size_limit or 0,
                time_limit=query.time_limit or 0,
            )
            records = [
                entry_to_record(entry)
                for entry in connection.response or []
                if entry.get("type") == "searchResEntry"
            ]
        finally:
            connection.unbind()
        self._logger.debug("ldap_search_completed", count=len(records))
        return records
