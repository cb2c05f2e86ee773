"""Directory user lookup.

Resolves a single directory user by identifier and, on request, the
groups the user belongs to.

Usage:
    from infrastructure.directory import DirectoryService, QueryOptions

    service = DirectoryService(search_executor, context, settings.directory)
    user = await service.find_user(QueryOptions(attributes=["mail"]), "jsmith")
"""

from infrastructure.directory.arguments import (
    CallShape,
    FindUserCall,
    normalize_find_user_args,
)
from infrastructure.directory.context import DirectoryContext
from infrastructure.directory.membership import LdapMembershipFetcher
from infrastructure.directory.models import (
    EffectiveQuery,
    Group,
    QueryOptions,
    SearchScope,
    User,
)
from infrastructure.directory.protocols import MembershipFetcher, SearchExecutor
from infrastructure.directory.service import DirectoryService

__all__ = [
    "CallShape",
    "DirectoryContext",
    "DirectoryService",
    "EffectiveQuery",
    "FindUserCall",
    "Group",
    "LdapMembershipFetcher",
    "MembershipFetcher",
    "QueryOptions",
    "SearchExecutor",
    "SearchScope",
    "User",
    "normalize_find_user_args",
]
