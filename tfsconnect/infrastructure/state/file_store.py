"""
File-based state storage implementation
"""
import json
import os
from pathlib import Path
from typing import Dict, Any, Optional

from ...core.interfaces import StateStore
from ...core.exceptions import ConfigError
from ...core.constants import DEFAULT_STATE_DIR, STATE_FILE_MODE
from ...core.logging import get_logger

logger = get_logger(__name__)


class FileStateStore(StateStore):
    """
    File-based state storage.
    
    Stores each named state as {state_dir}/{name}.json. Files may hold a
    credential, so they are created readable by the owner only.
    """
    
    def __init__(self, state_dir: Optional[Path] = None):
        """
        Initialize file state store.
        
        Args:
            state_dir: Directory for storing state files
        """
        if state_dir is None:
            state_dir = Path(DEFAULT_STATE_DIR)
        
        self.state_dir = Path(state_dir).expanduser()
        self.state_dir.mkdir(parents=True, exist_ok=True)
    
    def _get_state_file(self, name: str) -> Path:
        """Get state file path for instance"""
        if not name or "/" in name or "\\" in name or name.startswith("."):
            raise ConfigError(f"Invalid state name: {name!r}")
        return self.state_dir / f"{name}.json"
    
    def save(self, name: str, state: Dict[str, Any]) -> None:
        """Save state for a named instance"""
        state_file = self._get_state_file(name)
        fd = os.open(state_file, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, STATE_FILE_MODE)
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            json.dump(state, f, indent=2)
        os.chmod(state_file, STATE_FILE_MODE)
    
    def load(self, name: str) -> Optional[Dict[str, Any]]:
        """Load state for a named instance"""
        state_file = self._get_state_file(name)
        if not state_file.exists():
            return None
        
        try:
            return json.loads(state_file.read_text(encoding='utf-8'))
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable state file {state_file}: {e}")
            return None
    
    def delete(self, name: str) -> None:
        """Delete state for a named instance"""
        state_file = self._get_state_file(name)
        if state_file.exists():
            state_file.unlink()
