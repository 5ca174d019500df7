"""
Default connection session
"""
from typing import Optional, Dict, Any

from ...core.interfaces import StateStore
from ...core.exceptions import NoConnectionError, NotConnectedError
from ...core.constants import DEFAULT_SESSION_NAME
from ...core.logging import get_logger
from .models import CollectionHandle, Credential, ServerHandle

logger = get_logger(__name__)


class ConnectionSession:
    """
    Holds the default connection: one collection handle and its credential,
    plus the configuration server it was resolved through (if any).

    Operations that accept an optional collection read the default from the
    session they are given. With a state store the slot survives between
    processes, which the CLI relies on.
    """

    def __init__(
        self,
        state_store: Optional[StateStore] = None,
        name: str = DEFAULT_SESSION_NAME,
    ):
        self.name = name
        self.state_store = state_store
        self._handle: Optional[CollectionHandle] = None
        self._credential: Optional[Credential] = None
        self._server: Optional[ServerHandle] = None

        if state_store is not None:
            self._load()

    @property
    def handle(self) -> Optional[CollectionHandle]:
        return self._handle

    @property
    def credential(self) -> Optional[Credential]:
        return self._credential

    @property
    def server(self) -> Optional[ServerHandle]:
        return self._server

    def is_connected(self) -> bool:
        return self._handle is not None

    def current(self) -> CollectionHandle:
        """
        Get the default connection.

        Raises:
            NoConnectionError: If nothing is cached
        """
        if self._handle is None:
            raise NoConnectionError("No connection information available")
        return self._handle

    def set_default(
        self,
        handle: CollectionHandle,
        credential: Optional[Credential] = None,
        server: Optional[ServerHandle] = None,
    ) -> None:
        """Replace the default connection; the previous one is dropped"""
        if self._handle is not None and self._handle.url != handle.url:
            logger.debug(f"Replacing default connection {self._handle.url}")

        self._handle = handle
        self._credential = credential or handle.credential
        self._server = server
        self._save()

    def clear(self) -> None:
        """
        Clear the default connection.

        Raises:
            NotConnectedError: If nothing is cached
        """
        if self._handle is None:
            raise NotConnectedError("Not connected to any team project collection")

        self._handle = None
        self._credential = None
        self._server = None
        if self.state_store is not None:
            self.state_store.delete(self.name)

    # ------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection": self._handle.to_dict() if self._handle else None,
            "credential": self._credential.to_dict() if self._credential else None,
            "server": self._server.to_dict() if self._server else None,
        }

    def _save(self) -> None:
        if self.state_store is not None:
            self.state_store.save(self.name, self.to_dict())

    def _load(self) -> None:
        data = self.state_store.load(self.name)
        if not data:
            return

        try:
            if not data.get("collection"):
                return
            credential = Credential.from_dict(data.get("credential"))
            handle = CollectionHandle.from_dict(data["collection"], credential)
            server = ServerHandle.from_dict(data["server"], credential) if data.get("server") else None
        except (KeyError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring malformed state '{self.name}': {e!r}")
            return

        self._handle = handle
        self._credential = credential
        self._server = server
        logger.debug(f"Loaded default connection {self._handle.url}")
