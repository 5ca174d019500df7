"""
Connection domain models
"""
from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Optional, Dict, Any, Union

from ...core.exceptions import ConfigError
from ...core.utils import is_absolute_url, normalize_url, last_path_segment


@dataclass(frozen=True)
class Credential:
    """
    Username/password pair, or the default identity.

    The default identity carries no secret: requests made with it rely on
    whatever the HTTP layer picks up from the environment (e.g. ~/.netrc).
    """
    username: Optional[str] = None
    password: Optional[str] = field(default=None, repr=False)

    @classmethod
    def default(cls) -> "Credential":
        """Default identity sentinel"""
        return cls()

    @property
    def is_default(self) -> bool:
        return self.username is None and self.password is None

    def to_dict(self) -> Dict[str, Any]:
        return {"username": self.username, "password": self.password}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "Credential":
        if not data:
            return cls.default()
        return cls(username=data.get("username"), password=data.get("password"))


@dataclass(frozen=True)
class CollectionHandle:
    """Reference to a session against one Team Project Collection"""
    url: str
    name: str
    instance_id: Optional[str] = None
    authenticated: bool = False
    credential: Credential = field(default_factory=Credential.default, repr=False, compare=False)

    @classmethod
    def from_url(cls, url: str, credential: Optional[Credential] = None) -> "CollectionHandle":
        """Build a not-yet-authenticated handle from an absolute URL"""
        normalized = normalize_url(url)
        return cls(
            url=normalized,
            name=last_path_segment(normalized),
            credential=credential or Credential.default(),
        )

    def as_authenticated(self, instance_id: Optional[str] = None) -> "CollectionHandle":
        """Copy of this handle marked authenticated"""
        return replace(self, authenticated=True, instance_id=instance_id or self.instance_id)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "name": self.name,
            "instance_id": self.instance_id,
            "authenticated": self.authenticated,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], credential: Optional[Credential] = None) -> "CollectionHandle":
        return cls(
            url=data["url"],
            name=data.get("name") or last_path_segment(data["url"]),
            instance_id=data.get("instance_id"),
            authenticated=data.get("authenticated", False),
            credential=credential or Credential.default(),
        )


@dataclass(frozen=True)
class ServerHandle:
    """Reference to a configuration server, used for name resolution"""
    url: str
    name: str
    credential: Credential = field(default_factory=Credential.default, repr=False, compare=False)

    @classmethod
    def from_url(cls, url: str, credential: Optional[Credential] = None) -> "ServerHandle":
        normalized = normalize_url(url)
        return cls(
            url=normalized,
            name=last_path_segment(normalized),
            credential=credential or Credential.default(),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {"url": self.url, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any], credential: Optional[Credential] = None) -> "ServerHandle":
        return cls(
            url=data["url"],
            name=data.get("name") or last_path_segment(data["url"]),
            credential=credential or Credential.default(),
        )


@dataclass(frozen=True)
class CollectionInfo:
    """One project collection entry in a server catalog"""
    instance_id: str
    name: str
    url: str


@dataclass
class RegisteredConnection:
    """Collection or server registered with the local client"""
    name: str
    url: str
    kind: str = "collection"  # collection or server
    server_url: Optional[str] = None

    def validate(self) -> None:
        """Validate entry"""
        if not self.name:
            raise ConfigError("Registered connection needs a name")
        if not is_absolute_url(self.url):
            raise ConfigError(f"Invalid URL for '{self.name}': {self.url}")
        if self.kind not in ("collection", "server"):
            raise ConfigError(f"Invalid kind: {self.kind}, must be 'collection' or 'server'")
        if self.server_url and not is_absolute_url(self.server_url):
            raise ConfigError(f"Invalid server URL for '{self.name}': {self.server_url}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "url": self.url,
            "kind": self.kind,
            "server_url": self.server_url,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegisteredConnection":
        return cls(
            name=data["name"],
            url=data["url"],
            kind=data.get("kind", "collection"),
            server_url=data.get("server_url"),
        )


# ============================================================
# Tagged input variants
# ============================================================

@dataclass(frozen=True)
class HandleInput:
    handle: Union[CollectionHandle, ServerHandle]


@dataclass(frozen=True)
class UrlInput:
    url: str


@dataclass(frozen=True)
class NameInput:
    name: str


CollectionInput = Optional[Union[HandleInput, UrlInput, NameInput]]


def parse_collection_input(value: Any) -> CollectionInput:
    """
    Classify a user-supplied collection value.

    Returns:
        HandleInput for an existing handle, UrlInput for an absolute URL,
        NameInput for any other non-empty string, None when empty

    Raises:
        TypeError: For values of any other type
    """
    return _parse_input(value, CollectionHandle)


def parse_server_input(value: Any) -> CollectionInput:
    """Classify a user-supplied server value, like parse_collection_input"""
    return _parse_input(value, ServerHandle)


def _parse_input(value: Any, handle_type: type) -> CollectionInput:
    if value is None:
        return None
    if isinstance(value, (HandleInput, UrlInput, NameInput)):
        return value
    if isinstance(value, handle_type):
        return HandleInput(value)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        if is_absolute_url(text):
            return UrlInput(text)
        return NameInput(text)
    raise TypeError(f"Cannot resolve {handle_type.__name__} from {type(value).__name__}")
