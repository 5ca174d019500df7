"""
Connection domain - collection resolution and the default connection
"""
from .models import (
    Credential,
    CollectionHandle,
    ServerHandle,
    CollectionInfo,
    RegisteredConnection,
    HandleInput,
    UrlInput,
    NameInput,
    parse_collection_input,
    parse_server_input,
)
from .session import ConnectionSession
from .resolver import CollectionResolver
from .service import ConnectionService

__all__ = [
    "Credential",
    "CollectionHandle",
    "ServerHandle",
    "CollectionInfo",
    "RegisteredConnection",
    "HandleInput",
    "UrlInput",
    "NameInput",
    "parse_collection_input",
    "parse_server_input",
    "ConnectionSession",
    "CollectionResolver",
    "ConnectionService",
]
