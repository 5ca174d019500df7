"""
tfsconnect - TFS / Azure DevOps Server collection connection tool

Resolves team project collections from a URL, a name looked up in a
configuration server catalog, or an existing handle, and keeps a default
connection for later commands:
- Collection resolution (URL, name, glob pattern, default)
- Connect / disconnect with an explicit session object
- Registered connection listing
"""

__version__ = "0.1.0"

from .core import (
    TfsHttpClient,
    ClientConfig,
    setup_logging,
)
from .core.exceptions import (
    TfsConnectError,
    ConfigError,
    NoConnectionError,
    NotFoundError,
    AuthenticationError,
    NotConnectedError,
    TransportError,
)
from .domain.connection import (
    Credential,
    CollectionHandle,
    ServerHandle,
    CollectionInfo,
    RegisteredConnection,
    ConnectionSession,
    CollectionResolver,
    ConnectionService,
)
from .infrastructure.rest import RestConnectionFactory
from .infrastructure.registry import RegisteredConnectionStore
from .infrastructure.state import FileStateStore

__all__ = [
    "__version__",
    # Client
    "TfsHttpClient",
    "ClientConfig",
    "setup_logging",
    # Errors
    "TfsConnectError",
    "ConfigError",
    "NoConnectionError",
    "NotFoundError",
    "AuthenticationError",
    "NotConnectedError",
    "TransportError",
    # Domain
    "Credential",
    "CollectionHandle",
    "ServerHandle",
    "CollectionInfo",
    "RegisteredConnection",
    "ConnectionSession",
    "CollectionResolver",
    "ConnectionService",
    # Infrastructure
    "RestConnectionFactory",
    "RegisteredConnectionStore",
    "FileStateStore",
]
