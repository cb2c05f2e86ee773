"""LDAP session provider: server definition and bound connections."""

import ssl
from typing import Optional

import structlog
from ldap3 import ALL, Connection, Server, Tls

logger = structlog.get_logger()


class LdapSessionProvider:
    """Creates bound ldap3 connections for directory operations.

    Args:
        url: Server URL ('ldap://host:389' or 'ldaps://host:636')
        bind_dn: DN of the service account
        bind_password: Password of the service account
        use_ssl: Force TLS regardless of the URL scheme
        connect_timeout: Connection timeout in seconds

    Thread Safety:
        The Server definition is shared; each call to get_connection()
        returns a new Connection, which must not be shared between threads.
    """

    def __init__(
        self,
        url: str,
        bind_dn: Optional[str] = None,
        bind_password: Optional[str] = None,
        use_ssl: bool = False,
        connect_timeout: int = 10,
    ) -> None:
        if not url:
            raise ValueError("LDAP_URL is not configured")
        self._url = url
        self._bind_dn = bind_dn or None
        self._bind_password = bind_password or None
        self._use_ssl = use_ssl or url.lower().startswith("ldaps://")
        self._connect_timeout = connect_timeout
        self._server: Optional[Server] = None
        self._logger = logger.bind(component="ldap_session_provider")

    def get_server(self) -> Server:
        """Return the (lazily created) server definition."""
        if self._server is None:
            tls = Tls(validate=ssl.CERT_REQUIRED) if self._use_ssl else None
            self._server = Server(
                self._url,
                use_ssl=self._use_ssl,
                tls=tls,
                get_info=ALL,
                connect_timeout=self._connect_timeout,
            )
            self._logger.debug("ldap_server_created", url=self._url, use_ssl=self._use_ssl)
        return self._server

    def get_connection(self) -> Connection:
        """Open and bind a new connection.

        Raises:
            ldap3.core.exceptions.LDAPException: If the server is unreachable
                or the bind is rejected.
        """
        try:
            return Connection(
                self.get_server(),
                user=self._bind_dn,
                password=self._bind_password,
                auto_bind=True,
                raise_exceptions=True,
                read_only=True,
            )
        except Exception as e:
            self._logger.error("ldap_bind_failed", url=self._url, error=str(e))
            raise
