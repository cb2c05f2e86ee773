"""Group membership enrichment for resolved users."""

from typing import List, Optional, Sequence

from infrastructure.directory.attributes import join_attributes, pick_attributes
from infrastructure.directory.context import DirectoryContext
from infrastructure.directory.filters import build_membership_filter
from infrastructure.directory.models import (
    EffectiveQuery,
    Group,
    QueryOptions,
    SearchScope,
    User,
)
from infrastructure.directory.protocols import MembershipFetcher, SearchExecutor
from infrastructure.logging import get_module_logger

logger = get_module_logger()

# Attributes a Group entity cannot be built without
REQUIRED_GROUP_ATTRIBUTES = ["dn", "cn"]


def reduce_membership_options(
    options: Optional[QueryOptions],
) -> Optional[QueryOptions]:
    """Options forwarded to the membership lookup.

    The user's filter and attribute list describe the user search and are
    dropped; limits and membership markers carry over.
    """
    if options is None:
        return None
    return options.model_copy(update={"filter": None, "attributes": None})


class LdapMembershipFetcher:
    """Resolve group memberships with a group search on the same directory.

    Args:
        search_executor: Executor used for the group search.
        context: Directory context providing the group base DN.
        group_attributes: Attributes projected onto each Group.
        nested: Follow nested groups (Active Directory in-chain rule).
    """

    def __init__(
        self,
        search_executor: SearchExecutor,
        context: DirectoryContext,
        group_attributes: Sequence[str],
        nested: bool = False,
    ) -> None:
        self._search_executor = search_executor
        self._context = context
        self._group_attributes = list(group_attributes)
        self._nested = nested

    def build_query(self, options: Optional[QueryOptions], dn: str) -> EffectiveQuery:
        """Group query for members of ``dn``."""
        opts = options or QueryOptions()
        return EffectiveQuery(
            base_dn=self._context.base_dn_for("group"),
            filter=build_membership_filter(dn, nested=self._nested),
            scope=SearchScope.SUB,
            attributes=join_attributes(
                self._group_attributes, REQUIRED_GROUP_ATTRIBUTES
            ),
            size_limit=opts.size_limit,
            time_limit=opts.time_limit,
        )

    async def fetch(self, options: Optional[QueryOptions], dn: str) -> List[Group]:
        query = self.build_query(options, dn)
        records = await self._search_executor.search(query)
        groups = []
        for record in records:
            picked = pick_attributes(record, self._group_attributes)
            picked["dn"] = record.get("dn")
            groups.append(Group.model_validate(picked))
        logger.debug("groups_found", dn=dn, count=len(groups), nested=self._nested)
        return groups


async def attach_membership(
    user: User,
    options: Optional[QueryOptions],
    fetcher: MembershipFetcher,
) -> User:
    """Fetch the groups of ``user`` and attach them as ``user.groups``.

    Failures from the fetcher propagate unchanged.
    """
    logger.debug("fetching_user_membership", dn=user.dn)
    groups = await fetcher.fetch(reduce_membership_options(options), user.dn or "")
    user.groups = list(groups)
    return user
