"""Directory user lookup service.

Resolves one user by identifier: normalizes the call, builds the query,
runs the search, projects the first record, optionally attaches group
memberships and settles the outcome on every delivery channel.

Usage:
    from infrastructure.services import get_directory_service

    directory = get_directory_service()

    user = await directory.find_user("jsmith")
    user = await directory.find_user({"attributes": ["mail"]}, "jsmith", True)

    def on_done(error, user):
        ...

    directory.find_user("jsmith", on_done)
"""

import asyncio
from typing import Any, Mapping, Optional, Sequence, Set

from infrastructure.configuration import DirectorySettings
from infrastructure.directory.arguments import FindUserCall, normalize_find_user_args
from infrastructure.directory.attributes import (
    include_membership_for,
    pick_attributes,
    requested_attributes,
)
from infrastructure.directory.context import DirectoryContext
from infrastructure.directory.filters import truncate_log_output
from infrastructure.directory.membership import LdapMembershipFetcher, attach_membership
from infrastructure.directory.models import QueryOptions, User
from infrastructure.directory.protocols import MembershipFetcher, SearchExecutor
from infrastructure.directory.query import build_user_query
from infrastructure.directory.settlement import Settlement
from infrastructure.events import EventDispatcher
from infrastructure.logging import bind_request_context, get_module_logger

logger = get_module_logger()

USER_EVENT = "user"


class DirectoryService:
    """Look up directory users.

    All collaborators are injected. When no membership fetcher is given,
    memberships are resolved with a group search on ``search_executor``.

    Args:
        search_executor: Runs directory searches.
        context: Search roots per entity kind.
        settings: Lookup defaults (attribute sets, log truncation).
        membership_fetcher: Optional group membership resolver.
        dispatcher: Observer registry notified with ``("user", user)``.
    """

    def __init__(
        self,
        search_executor: SearchExecutor,
        context: DirectoryContext,
        settings: DirectorySettings,
        membership_fetcher: Optional[MembershipFetcher] = None,
        dispatcher: Optional[EventDispatcher] = None,
    ) -> None:
        self._search_executor = search_executor
        self._context = context
        self._settings = settings
        self._membership_fetcher = membership_fetcher or LdapMembershipFetcher(
            search_executor,
            context,
            settings.group_attributes,
            nested=settings.nested_membership,
        )
        self._dispatcher = dispatcher
        self._tasks: Set[asyncio.Task] = set()

    def find_user(self, *args: Any) -> "asyncio.Future[User]":
        """Retrieve a user.

        Accepts ``([options,] identifier[, include_membership][, callback])``;
        see ``infrastructure.directory.arguments`` for how the positional
        forms are told apart. Must be called from a running event loop.

        Args:
            options: Optional QueryOptions or mapping (scope, filter,
                attributes, sizeLimit, timeLimit, includeMembership).
            identifier: sAMAccountName, userPrincipalName or DN.
            include_membership: Attach the user's groups as ``user.groups``.
            callback: Optional ``callback(error, user)`` run once on completion.

        Returns:
            Future resolving to the User (empty when nothing matched) or
            rejected with the search / membership failure.
        """
        call = normalize_find_user_args(*args)
        settlement = Settlement(
            USER_EVENT,
            callback=call.callback,
            dispatcher=self._dispatcher,
            metadata={"identifier": call.identifier},
        )
        task = asyncio.ensure_future(self._run(call, settlement))
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return settlement.future

    async def _run(self, call: FindUserCall, settlement: Settlement) -> None:
        with bind_request_context(operation="find_user", identifier=call.identifier):
            try:
                user = await self.resolve_user(call)
            except Exception as error:
                logger.error(
                    "find_user_failed",
                    error=str(error),
                    error_type=type(error).__name__,
                )
                settlement.reject(error)
                return
            except asyncio.CancelledError:
                logger.warning("find_user_cancelled")
                settlement.cancel()
                raise
            except BaseException as error:
                settlement.reject(error)
                raise
            settlement.resolve(user)

    async def resolve_user(self, call: FindUserCall) -> User:
        """Run the lookup pipeline for a normalized call and return the user.

        Raises whatever the search or membership collaborator raises.
        """
        query = build_user_query(
            call.options,
            call.identifier,
            self._context,
            self._settings.user_attributes,
        )
        log_filter = truncate_log_output(query.filter, self._settings.log_truncate_length)
        logger.debug(
            "searching_user",
            base_dn=query.base_dn,
            filter=log_filter,
            scope=query.scope.value,
            attributes=query.attributes,
        )

        records = await self._search_executor.search(query)
        if not records:
            logger.warning("user_not_found", identifier=call.identifier, filter=log_filter)
            return User()

        user = self._project(records[0], call.options)
        logger.info(
            "users_found",
            count=len(records),
            filter=log_filter,
            dn=user.dn,
        )

        if include_membership_for(call.options, USER_EVENT) or call.include_membership:
            user = await attach_membership(user, call.options, self._membership_fetcher)
        return user

    def _project(
        self, record: Mapping[str, Any], options: Optional[QueryOptions]
    ) -> User:
        attributes: Sequence[str] = requested_attributes(
            options, self._settings.user_attributes
        )
        picked = pick_attributes(record, attributes)
        picked.pop("groups", None)
        picked["dn"] = record.get("dn")
        return User.model_validate(picked)
