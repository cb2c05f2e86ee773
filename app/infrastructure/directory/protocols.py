"""Collaborator contracts consumed by the directory service."""

from typing import Any, List, Mapping, Optional, Protocol, Sequence, runtime_checkable

from infrastructure.directory.models import EffectiveQuery, Group, QueryOptions


@runtime_checkable
class SearchExecutor(Protocol):
    """Executes a query against the directory.

    Returns the raw records (attribute name to value(s), ``dn`` included)
    or raises. Paging, retries and limits are the executor's business.
    """

    async def search(
        self, query: EffectiveQuery
    ) -> Sequence[Mapping[str, Any]]:  # pragma: no cover - typing helper
        ...


@runtime_checkable
class MembershipFetcher(Protocol):
    """Resolves the groups a distinguished name belongs to."""

    async def fetch(
        self, options: Optional[QueryOptions], dn: str
    ) -> List[Group]:  # pragma: no cover - typing helper
        ...
