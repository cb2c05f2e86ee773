"""Query construction for user lookups."""

from typing import Optional, Sequence

from infrastructure.directory.attributes import (
    join_attributes,
    required_user_attributes,
)
from infrastructure.directory.context import DirectoryContext
from infrastructure.directory.filters import build_user_filter
from infrastructure.directory.models import EffectiveQuery, QueryOptions, SearchScope


def build_user_query(
    options: Optional[QueryOptions],
    identifier: Optional[str],
    context: DirectoryContext,
    default_attributes: Sequence[str],
) -> EffectiveQuery:
    """Build the query sent to the search transport for a user lookup.

    Args:
        options: Caller options, or None.
        identifier: DN, sAMAccountName or userPrincipalName of the user.
        context: Directory context the base DN is resolved from.
        default_attributes: Configured default user attributes.

    Returns:
        EffectiveQuery with the filter defaulted from the identifier, the
        scope defaulted to subtree and attributes merged in the order
        requested, defaults, required.
    """
    opts = options or QueryOptions()
    attributes = join_attributes(
        opts.attributes,
        default_attributes,
        required_user_attributes(opts),
    )
    return EffectiveQuery(
        base_dn=context.base_dn_for("user"),
        filter=opts.filter or build_user_filter(identifier),
        scope=opts.scope or SearchScope.SUB,
        attributes=attributes,
        size_limit=opts.size_limit,
        time_limit=opts.time_limit,
    )
