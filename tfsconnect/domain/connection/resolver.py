"""
Collection and server resolution
"""
from typing import Any, Optional

from ...core.interfaces import ConnectionFactory, RegistrationStore
from ...core.exceptions import NoConnectionError, NotFoundError
from ...core.logging import get_logger
from ...core.utils import name_matches
from .models import (
    CollectionHandle,
    Credential,
    ServerHandle,
    HandleInput,
    UrlInput,
    NameInput,
    parse_collection_input,
    parse_server_input,
)
from .session import ConnectionSession

logger = get_logger(__name__)


class CollectionResolver:
    """
    Turns a collection argument into collection handles.

    The argument may be a handle (returned as is), an absolute URL (handle
    built locally, nothing queried), a name or glob pattern (looked up in a
    configuration server catalog) or empty (the session default).
    """

    def __init__(
        self,
        session: ConnectionSession,
        factory: ConnectionFactory,
        registry: Optional[RegistrationStore] = None,
        default_server_url: Optional[str] = None,
    ):
        self.session = session
        self.factory = factory
        self.registry = registry
        self.default_server_url = default_server_url

    def resolve_collections(
        self,
        collection: Any = None,
        server: Any = None,
        credential: Optional[Credential] = None,
    ) -> list[CollectionHandle]:
        """
        Resolve a collection argument to one or more handles.

        Raises:
            NoConnectionError: Empty argument and no default connection
            NotFoundError: Name or pattern matched no catalog entry
        """
        target = parse_collection_input(collection)

        if isinstance(target, HandleInput):
            return [target.handle]

        if isinstance(target, UrlInput):
            handle = CollectionHandle.from_url(target.url, credential)
            logger.debug(f"Resolved collection URL {handle.url}")
            return [handle]

        if isinstance(target, NameInput):
            return self._resolve_by_name(target.name, server, credential)

        return [self.session.current()]

    def resolve_collection(
        self,
        collection: Any = None,
        server: Any = None,
        credential: Optional[Credential] = None,
    ) -> CollectionHandle:
        """Resolve to a single handle; the first match wins"""
        handles = self.resolve_collections(collection, server, credential)
        if len(handles) > 1:
            logger.warning(
                f"{len(handles)} collections matched, using {handles[0].name}"
            )
        return handles[0]

    def resolve_server(
        self,
        server: Any = None,
        credential: Optional[Credential] = None,
    ) -> ServerHandle:
        """
        Resolve a server argument to a configuration server handle.

        Names are looked up among registered servers. Without an argument the
        session's server is used, then the configured default server.

        Raises:
            NotFoundError: No registered server with that name
            NoConnectionError: No argument and no default server
        """
        target = parse_server_input(server)

        if isinstance(target, HandleInput):
            return target.handle

        if isinstance(target, UrlInput):
            return ServerHandle.from_url(target.url, credential)

        if isinstance(target, NameInput):
            entry = self.registry.get(target.name) if self.registry else None
            if entry is None or entry.kind != "server":
                raise NotFoundError(f"No registered server named '{target.name}'")
            return ServerHandle(
                url=entry.url,
                name=entry.name,
                credential=credential or Credential.default(),
            )

        if self.session.server is not None:
            if credential is None:
                return self.session.server
            return ServerHandle(self.session.server.url, self.session.server.name, credential)

        if self.default_server_url:
            return ServerHandle.from_url(self.default_server_url, credential)

        raise NoConnectionError("No configuration server information available")

    def _resolve_by_name(
        self,
        pattern: str,
        server: Any,
        credential: Optional[Credential],
    ) -> list[CollectionHandle]:
        server_handle = self.resolve_server(server, credential)
        client = self.factory.open_server(server_handle)

        logger.debug(f"Querying {server_handle.url} for collections matching '{pattern}'")
        matches = [
            info for info in client.query_collections(pattern)
            if name_matches(info.name, pattern)
        ]
        if not matches:
            raise NotFoundError(
                f"No team project collection matching '{pattern}' on {server_handle.url}"
            )

        handles = []
        for info in matches:
            handle = CollectionHandle(
                url=info.url,
                name=info.name,
                instance_id=info.instance_id,
                credential=server_handle.credential,
            )
            handles.append(client.authenticate(handle))
        return handles
