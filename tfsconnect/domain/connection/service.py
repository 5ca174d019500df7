"""
Connection domain service - business logic
"""
from dataclasses import replace
from typing import Any, Optional

from ...core.interfaces import ConnectionFactory, RegistrationStore
from ...core.constants import DEFAULT_NAME_PATTERN
from ...core.logging import get_logger
from .models import CollectionHandle, Credential, NameInput, RegisteredConnection, parse_collection_input
from .resolver import CollectionResolver
from .session import ConnectionSession

logger = get_logger(__name__)


class ConnectionService:
    """
    Connection service - pure business logic.

    Handles connect, disconnect, collection lookup and the registered
    connection listing. No direct dependency on CLI, Typer, or HTTP.
    """

    def __init__(
        self,
        session: ConnectionSession,
        factory: ConnectionFactory,
        registry: Optional[RegistrationStore] = None,
        default_server_url: Optional[str] = None,
    ):
        """
        Initialize connection service.

        Args:
            session: Session holding the default connection
            factory: Server connection factory
            registry: Registered connections store
            default_server_url: Server used for name lookups when none is given
        """
        self.session = session
        self.factory = factory
        self.registry = registry
        self.resolver = CollectionResolver(session, factory, registry, default_server_url)

    def connect(
        self,
        collection: Any = None,
        server: Any = None,
        credential: Optional[Credential] = None,
        passthru: bool = False,
    ) -> Optional[CollectionHandle]:
        """
        Connect to a team project collection and make it the default.

        Args:
            collection: Handle, URL, name or None (re-authenticate the default)
            server: Configuration server for name lookups
            credential: Credential to use
            passthru: Return the connected handle

        Returns:
            The handle if passthru, otherwise None

        Raises:
            NoConnectionError: Nothing to connect to
            NotFoundError: Name matched nothing
            AuthenticationError: Handshake failed
        """
        target = parse_collection_input(collection)

        if isinstance(target, NameInput):
            # Catalog matches come back authenticated by the server client
            server_handle = self.resolver.resolve_server(server, credential)
            handle = self.resolver.resolve_collection(target, server_handle, credential)
        else:
            server_handle = self.session.server if target is None else None
            handle = self.resolver.resolve_collection(target, server, credential)
            if credential is not None and handle.credential != credential:
                handle = replace(handle, credential=credential, authenticated=False)
            handle = self.factory.authenticate(handle)

        self.session.set_default(handle, handle.credential, server_handle)
        logger.info(f"Connected to {handle.name} ({handle.url})")

        if passthru:
            return handle
        return None

    def disconnect(self) -> None:
        """
        Drop the default connection.

        Raises:
            NotConnectedError: Nothing is connected
        """
        handle = self.session.handle
        self.session.clear()
        logger.info(f"Disconnected from {handle.url}")

    def get_collection(
        self,
        collection: Any = None,
        server: Any = None,
        credential: Optional[Credential] = None,
    ) -> CollectionHandle:
        return self.resolver.resolve_collection(collection, server, credential)

    def get_collections(
        self,
        collection: Any = None,
        server: Any = None,
        credential: Optional[Credential] = None,
    ) -> list[CollectionHandle]:
        return self.resolver.resolve_collections(collection, server, credential)

    def current(self) -> CollectionHandle:
        return self.session.current()

    def list_registered(
        self,
        pattern: str = DEFAULT_NAME_PATTERN,
        kind: Optional[str] = None,
    ) -> list[RegisteredConnection]:
        """List locally registered connections matching pattern"""
        if self.registry is None:
            return []
        return self.registry.list(pattern, kind)
