"""Fixtures for infrastructure.directory tests."""

import pytest
from unittest.mock import AsyncMock, MagicMock

from infrastructure.configuration import DirectorySettings
from infrastructure.directory import DirectoryContext, DirectoryService, Group
from infrastructure.events import EventDispatcher

USER_ATTRIBUTES = ["dn", "sAMAccountName", "mail", "cn", "displayName"]
GROUP_ATTRIBUTES = ["dn", "cn", "description"]


@pytest.fixture
def directory_settings():
    """DirectorySettings with a small, fixed attribute set."""
    return DirectorySettings(
        DIRECTORY_USER_ATTRIBUTES=list(USER_ATTRIBUTES),
        DIRECTORY_GROUP_ATTRIBUTES=list(GROUP_ATTRIBUTES),
        DIRECTORY_LOG_TRUNCATE_LENGTH=40,
        DIRECTORY_NESTED_MEMBERSHIP=False,
    )


@pytest.fixture
def directory_context():
    return DirectoryContext(
        base_dn="dc=example,dc=com",
        base_dns={
            "user": "ou=People,dc=example,dc=com",
            "group": "ou=Groups,dc=example,dc=com",
        },
    )


@pytest.fixture
def make_record():
    """Factory for raw directory records."""

    def _make(sam="jsmith", **extra):
        record = {
            "dn": f"CN={sam},OU=People,DC=example,DC=com",
            "sAMAccountName": sam,
            "mail": f"{sam}@example.com",
            "cn": sam.title(),
            "displayName": f"{sam.title()} Display",
            "objectCategory": "CN=Person,CN=Schema,CN=Configuration,DC=example,DC=com",
            "telephoneNumber": "555-0100",
        }
        record.update(extra)
        return record

    return _make


@pytest.fixture
def search_executor():
    """Search executor returning no records unless told otherwise."""
    executor = MagicMock()
    executor.search = AsyncMock(return_value=[])
    return executor


@pytest.fixture
def groups():
    return [
        Group(dn="CN=Admins,OU=Groups,DC=example,DC=com", cn="Admins"),
        Group(dn="CN=Staff,OU=Groups,DC=example,DC=com", cn="Staff"),
    ]


@pytest.fixture
def membership_fetcher(groups):
    fetcher = MagicMock()
    fetcher.fetch = AsyncMock(return_value=groups)
    return fetcher


@pytest.fixture
def dispatcher():
    return EventDispatcher()


@pytest.fixture
def observed_users(dispatcher):
    """Collects payloads of 'user' events."""
    received = []
    dispatcher.register("user", lambda event: received.append(event.payload))
    return received


@pytest.fixture
def directory_service(
    search_executor,
    directory_context,
    directory_settings,
    membership_fetcher,
    dispatcher,
):
    return DirectoryService(
        search_executor=search_executor,
        context=directory_context,
        settings=directory_settings,
        membership_fetcher=membership_fetcher,
        dispatcher=dispatcher,
    )
