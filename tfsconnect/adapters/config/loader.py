"""
Configuration loader with priority: CLI > env > TOML > defaults
"""
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Any, Optional, Union

from ...core.client import ClientConfig
from ...core.constants import (
    DEFAULT_API_VERSION,
    DEFAULT_CONFIG_PATH,
    DEFAULT_HTTP_TIMEOUT,
    DEFAULT_REGISTRY_PATH,
    DEFAULT_STATE_DIR,
    ENV_PREFIX,
)
from ...core.exceptions import ConfigError
from ...domain.connection.models import Credential


@dataclass
class Settings:
    """Resolved tool settings"""
    server: Optional[str] = None
    collection: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None
    api_version: str = DEFAULT_API_VERSION
    timeout: int = DEFAULT_HTTP_TIMEOUT
    verify_ssl: Union[bool, str] = True
    state_dir: str = DEFAULT_STATE_DIR
    registry_path: str = DEFAULT_REGISTRY_PATH

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Settings":
        known = {k: v for k, v in data.items() if k in cls.__dataclass_fields__ and v is not None}
        settings = cls(**known)
        settings.validate()
        return settings

    def validate(self) -> None:
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int) or self.timeout < 1:
            raise ConfigError(f"Invalid timeout: {self.timeout}")
        if not self.api_version:
            raise ConfigError("api_version must not be empty")

    def credential(self) -> Optional[Credential]:
        """Configured credential, None when no username or password is set"""
        if self.username is None and self.password is None:
            return None
        return Credential(username=self.username or "", password=self.password or "")

    def client_config(self) -> ClientConfig:
        return ClientConfig(
            api_version=self.api_version,
            timeout=self.timeout,
            verify_ssl=self.verify_ssl,
        )


class ConfigLoader:
    """Configuration loader with priority support"""

    ENV_MAPPINGS = {
        "SERVER": "server",
        "COLLECTION": "collection",
        "USERNAME": "username",
        "PASSWORD": "password",
        "API_VERSION": "api_version",
        "TIMEOUT": "timeout",
        "VERIFY_SSL": "verify_ssl",
        "STATE_DIR": "state_dir",
        "REGISTRY_PATH": "registry_path",
    }

    # Values that must never be coerced to bool/int
    STRING_KEYS = {"server", "collection", "username", "password", "api_version", "state_dir", "registry_path"}

    def __init__(self, env_prefix: str = ENV_PREFIX):
        self._env_prefix = env_prefix

    def load_toml(self, path: Path) -> Dict[str, Any]:
        """Load TOML configuration file"""
        if not path.exists():
            raise ConfigError(f"Configuration file not found: {path}")

        try:
            data = tomllib.loads(path.read_text(encoding='utf-8'))
        except tomllib.TOMLDecodeError as e:
            raise ConfigError(f"Failed to parse TOML configuration: {e}") from e

        # Settings may live at top level or under [tfs]
        return data.get("tfs", data)

    def load_env(self) -> Dict[str, Any]:
        """Load configuration from environment variables"""
        config = {}

        for env_suffix, config_key in self.ENV_MAPPINGS.items():
            value = os.getenv(f"{self._env_prefix}{env_suffix}")
            if value:
                if config_key in self.STRING_KEYS:
                    config[config_key] = value
                elif config_key == "timeout":
                    try:
                        config[config_key] = int(value)
                    except ValueError as e:
                        raise ConfigError(f"Invalid {self._env_prefix}{env_suffix}: {value}") from e
                else:
                    config[config_key] = self._convert_value(value)

        return config

    def _convert_value(self, value: str) -> Any:
        """Convert string value to appropriate type"""
        if value.lower() in ("true", "yes", "1"):
            return True
        if value.lower() in ("false", "no", "0"):
            return False

        try:
            return int(value)
        except ValueError:
            pass

        return value

    def merge_configs(self, *configs: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge multiple configurations with priority.
        Later configs override earlier ones; None values never override.
        """
        result = {}

        for config in configs:
            result = self._deep_merge(result, config)

        return result

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries"""
        result = base.copy()

        for key, value in override.items():
            if value is None:
                continue
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def load(
        self,
        toml_path: Optional[Path] = None,
        cli_overrides: Optional[Dict[str, Any]] = None,
        use_env: bool = True,
    ) -> Settings:
        """
        Load settings with priority: CLI > env > TOML > defaults

        Args:
            toml_path: Path to TOML configuration file; the default path is
                read only if it exists
            cli_overrides: CLI parameter overrides
            use_env: Whether to load from environment variables

        Returns:
            Merged settings
        """
        configs = []

        if toml_path:
            configs.append(self.load_toml(Path(toml_path).expanduser()))
        else:
            default_path = Path(DEFAULT_CONFIG_PATH).expanduser()
            if default_path.exists():
                configs.append(self.load_toml(default_path))

        if use_env:
            env_config = self.load_env()
            if env_config:
                configs.append(env_config)

        if cli_overrides:
            configs.append(cli_overrides)

        return Settings.from_dict(self.merge_configs(*configs))
