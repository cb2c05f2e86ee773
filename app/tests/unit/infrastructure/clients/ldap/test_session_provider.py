"""Tests for infrastructure.clients.ldap.session_provider."""

import ssl

import pytest
from unittest.mock import patch

from ldap3.core.exceptions import LDAPBindError

from infrastructure.clients.ldap import LdapSessionProvider

pytestmark = pytest.mark.unit

MODULE = "infrastructure.clients.ldap.session_provider"


class TestLdapSessionProvider:
    def test_requires_url(self):
        with pytest.raises(ValueError, match="LDAP_URL"):
            LdapSessionProvider(url="")

    @patch(f"{MODULE}.Tls")
    @patch(f"{MODULE}.Server")
    def test_server_created_once(self, mock_server, mock_tls):
        provider = LdapSessionProvider(url="ldap://dc.example.com", connect_timeout=5)

        first = provider.get_server()
        second = provider.get_server()

        assert first is second
        mock_server.assert_called_once()
        args, kwargs = mock_server.call_args
        assert args == ("ldap://dc.example.com",)
        assert kwargs["use_ssl"] is False
        assert kwargs["tls"] is None
        assert kwargs["connect_timeout"] == 5
        mock_tls.assert_not_called()

    @patch(f"{MODULE}.Tls")
    @patch(f"{MODULE}.Server")
    def test_ldaps_url_enables_tls(self, mock_server, mock_tls):
        provider = LdapSessionProvider(url="LDAPS://dc.example.com:636")

        provider.get_server()

        mock_tls.assert_called_once_with(validate=ssl.CERT_REQUIRED)
        assert mock_server.call_args.kwargs["use_ssl"] is True
        assert mock_server.call_args.kwargs["tls"] is mock_tls.return_value

    @patch(f"{MODULE}.Connection")
    @patch(f"{MODULE}.Server")
    def test_get_connection_binds(self, mock_server, mock_connection):
        provider = LdapSessionProvider(
            url="ldap://dc.example.com",
            bind_dn="CN=svc,DC=example,DC=com",
            bind_password="secret",
        )

        connection = provider.get_connection()

        assert connection is mock_connection.return_value
        mock_connection.assert_called_once_with(
            mock_server.return_value,
            user="CN=svc,DC=example,DC=com",
            password="secret",
            auto_bind=True,
            raise_exceptions=True,
            read_only=True,
        )

    @patch(f"{MODULE}.Connection")
    @patch(f"{MODULE}.Server")
    def test_anonymous_bind(self, mock_server, mock_connection):
        LdapSessionProvider(url="ldap://dc", bind_dn="", bind_password="").get_connection()

        assert mock_connection.call_args.kwargs["user"] is None
        assert mock_connection.call_args.kwargs["password"] is None

    @patch(f"{MODULE}.Connection")
    @patch(f"{MODULE}.Server")
    def test_bind_failure_propagates(self, mock_server, mock_connection):
        error = LDAPBindError("invalid credentials")
        mock_connection.side_effect = error
        provider = LdapSessionProvider(url="ldap://dc.example.com")

        with pytest.raises(LDAPBindError) as exc_info:
            provider.get_connection()

        assert exc_info.value is error
