"""
Core infrastructure layer
"""
from .client import TfsHttpClient, ClientConfig
from .constants import *
from .exceptions import *
from .logging import setup_logging, get_logger, get_stdout_console, get_stderr_console
from .interfaces import (
    StateStore,
    RegistrationStore,
    ConfigServerClient,
    ConnectionFactory,
    PromptProvider,
)
from .utils import (
    is_absolute_url,
    normalize_url,
    join_url,
    name_matches,
)

__all__ = [
    "TfsHttpClient",
    "ClientConfig",
    "setup_logging",
    "get_logger",
    "get_stdout_console",
    "get_stderr_console",
    "StateStore",
    "RegistrationStore",
    "ConfigServerClient",
    "ConnectionFactory",
    "PromptProvider",
    "is_absolute_url",
    "normalize_url",
    "join_url",
    "name_matches",
]
