"""
Core interfaces for dependency injection
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from ..domain.connection.models import (
        CollectionHandle,
        CollectionInfo,
        RegisteredConnection,
        ServerHandle,
    )


class StateStore(ABC):
    """State storage interface"""

    @abstractmethod
    def save(self, name: str, state: Dict[str, Any]) -> None:
        """Save state for a named instance"""
        pass

    @abstractmethod
    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """Load state for a named instance"""
        pass

    @abstractmethod
    def delete(self, name: str) -> None:
        """Delete state for a named instance"""
        pass


class RegistrationStore(ABC):
    """Locally registered collections and servers"""

    @abstractmethod
    def list(self, pattern: str = "*", kind: Optional[str] = None) -> list[RegisteredConnection]:
        """List entries whose name matches pattern"""
        pass

    @abstractmethod
    def get(self, name: str) -> Optional[RegisteredConnection]:
        """Get entry by exact name (case-insensitive)"""
        pass

    @abstractmethod
    def register(self, entry: RegisteredConnection) -> None:
        """Add or replace an entry"""
        pass

    @abstractmethod
    def unregister(self, name: str) -> None:
        """Remove an entry"""
        pass


class ConfigServerClient(ABC):
    """Catalog access on one configuration server"""

    @abstractmethod
    def query_collections(self, name_pattern: str) -> list[CollectionInfo]:
        """Query project collections matching a name or glob pattern"""
        pass

    @abstractmethod
    def authenticate(self, handle: CollectionHandle) -> CollectionHandle:
        """Authenticate a collection handle through this server"""
        pass


class ConnectionFactory(ABC):
    """Server connection factory interface"""

    @abstractmethod
    def open_server(self, server: ServerHandle) -> ConfigServerClient:
        """Create a client for a configuration server"""
        pass

    @abstractmethod
    def authenticate(self, handle: CollectionHandle) -> CollectionHandle:
        """
        Run the authentication handshake against a collection.

        Returns an authenticated copy of handle; raises AuthenticationError
        when the server rejects the credential.
        """
        pass


class PromptProvider(ABC):
    """User prompt interface"""

    @abstractmethod
    def prompt(self, message: str, default: Optional[str] = None, password: bool = False) -> str:
        """Prompt user for input"""
        pass
