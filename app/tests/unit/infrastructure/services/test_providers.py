"""Tests for infrastructure.services.providers."""

import pytest

from infrastructure.clients.ldap import LdapSearchClient
from infrastructure.directory import DirectoryService
from infrastructure.events import default_dispatcher
from infrastructure.services import providers

pytestmark = pytest.mark.unit


@pytest.fixture
def clear_provider_caches():
    def _clear():
        providers.get_settings.cache_clear()
        providers.get_ldap_session_provider.cache_clear()
        providers.get_ldap_search_client.cache_clear()
        providers.get_directory_service.cache_clear()

    _clear()
    yield
    _clear()


@pytest.fixture
def ldap_env(monkeypatch):
    monkeypatch.setenv("LDAP_URL", "ldap://dc.example.com")
    monkeypatch.setenv("LDAP_BASE_DN", "dc=example,dc=com")
    monkeypatch.setenv("LDAP_USER_BASE_DN", "ou=People,dc=example,dc=com")
    monkeypatch.delenv("LDAP_GROUP_BASE_DN", raising=False)
    monkeypatch.setenv("DIRECTORY_USER_ATTRIBUTES", "dn,mail")


@pytest.mark.usefixtures("clear_provider_caches")
class TestProviders:
    def test_get_settings_is_cached(self):
        assert providers.get_settings() is providers.get_settings()

    def test_get_settings_cache_clear(self):
        first = providers.get_settings()
        providers.get_settings.cache_clear()

        assert providers.get_settings() is not first

    @pytest.mark.usefixtures("ldap_env")
    def test_get_directory_service(self):
        service = providers.get_directory_service()

        assert isinstance(service, DirectoryService)
        assert service is providers.get_directory_service()
        assert isinstance(service._search_executor, LdapSearchClient)
        assert service._dispatcher is default_dispatcher
        assert service._context.base_dn_for("user") == "ou=People,dc=example,dc=com"
        assert service._context.base_dn_for("group") == "dc=example,dc=com"
        assert service._settings.user_attributes == ["dn", "mail"]

    def test_missing_ldap_url(self, monkeypatch):
        monkeypatch.setenv("LDAP_URL", "")

        with pytest.raises(ValueError, match="LDAP_URL"):
            providers.get_ldap_session_provider()
