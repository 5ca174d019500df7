"""
Connection factory implementation
"""
from typing import Callable, Optional

import requests

from ...core.client import TfsHttpClient, ClientConfig
from ...core.interfaces import ConnectionFactory
from ...domain.connection.models import CollectionHandle, Credential, ServerHandle
from .config_server import RestConfigServerClient, authenticate_collection


class RestConnectionFactory(ConnectionFactory):
    """REST connection factory"""

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        session_factory: Optional[Callable[[], requests.Session]] = None,
    ):
        """
        Args:
            config: HTTP settings shared by every client
            session_factory: Builds the underlying requests.Session
        """
        self.config = config or ClientConfig()
        self.session_factory = session_factory or requests.Session

    def http_client(self, credential: Optional[Credential] = None) -> TfsHttpClient:
        """Create an HTTP client for a credential"""
        credential = credential or Credential.default()
        return TfsHttpClient(
            username=credential.username,
            password=credential.password,
            config=self.config,
            session=self.session_factory(),
        )

    def open_server(self, server: ServerHandle) -> RestConfigServerClient:
        return RestConfigServerClient(server, self.http_client)

    def authenticate(self, handle: CollectionHandle) -> CollectionHandle:
        """
        Authenticate a collection handle.

        Raises:
            AuthenticationError: If the server rejects the credential
            TransportError: If the server cannot be reached
        """
        with self.http_client(handle.credential) as http:
            return authenticate_collection(http, handle)
