"""
Registered connections store
"""
from __future__ import annotations

import json
from dataclasses import replace
from pathlib import Path
from typing import Optional

from ...core.interfaces import RegistrationStore
from ...core.exceptions import ConfigError, NotFoundError
from ...core.constants import DEFAULT_REGISTRY_PATH, DEFAULT_NAME_PATTERN
from ...core.utils import name_matches, normalize_url
from ...core.logging import get_logger
from ...domain.connection.models import RegisteredConnection

logger = get_logger(__name__)


class RegisteredConnectionStore(RegistrationStore):
    """
    JSON file listing the collections and servers known to this machine.

    Layout: {"connections": [{"name": ..., "url": ..., "kind": ..., "server_url": ...}]}
    The file is read on every call.
    """

    def __init__(self, path: Optional[Path] = None):
        self.path = Path(path or DEFAULT_REGISTRY_PATH).expanduser()

    def _read(self) -> list[RegisteredConnection]:
        if not self.path.exists():
            return []

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except ValueError as e:
            raise ConfigError(f"Failed to parse registered connections {self.path}: {e}") from e

        if not isinstance(data, dict) or not isinstance(data.get("connections", []), list):
            raise ConfigError(f"Unexpected layout in registered connections {self.path}")

        try:
            entries = [RegisteredConnection.from_dict(item) for item in data.get("connections", [])]
        except (KeyError, TypeError, AttributeError) as e:
            raise ConfigError(f"Malformed entry in registered connections {self.path}: {e!r}") from e

        for entry in entries:
            if not isinstance(entry.name, str) or not isinstance(entry.url, str):
                raise ConfigError(f"Malformed entry in registered connections {self.path}: {entry}")
        return entries

    def _write(self, entries: list[RegisteredConnection]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        data = {"connections": [entry.to_dict() for entry in entries]}
        self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")

    def list(
        self,
        pattern: str = DEFAULT_NAME_PATTERN,
        kind: Optional[str] = None,
    ) -> list[RegisteredConnection]:
        """List entries whose name matches the glob pattern, sorted by name"""
        entries = [
            entry for entry in self._read()
            if name_matches(entry.name, pattern) and (kind is None or entry.kind == kind)
        ]
        return sorted(entries, key=lambda e: e.name.lower())

    def get(self, name: str) -> Optional[RegisteredConnection]:
        for entry in self._read():
            if entry.name.lower() == name.lower():
                return entry
        return None

    def register(self, entry: RegisteredConnection) -> None:
        """Add an entry, replacing one with the same name"""
        entry.validate()
        entry = replace(
            entry,
            url=normalize_url(entry.url),
            server_url=normalize_url(entry.server_url) if entry.server_url else None,
        )

        entries = [e for e in self._read() if e.name.lower() != entry.name.lower()]
        entries.append(entry)
        self._write(entries)
        logger.debug(f"Registered {entry.kind} '{entry.name}' -> {entry.url}")

    def unregister(self, name: str) -> None:
        """
        Remove an entry.

        Raises:
            NotFoundError: No entry with that name
        """
        entries = self._read()
        remaining = [e for e in entries if e.name.lower() != name.lower()]
        if len(remaining) == len(entries):
            raise NotFoundError(f"No registered connection named '{name}'")
        self._write(remaining)
