"""
Service wiring for CLI commands
"""
from pathlib import Path
from typing import Optional

from ...core.interfaces import PromptProvider
from ...domain.connection import ConnectionService, ConnectionSession, Credential
from ...infrastructure.registry import RegisteredConnectionStore
from ...infrastructure.rest import RestConnectionFactory
from ...infrastructure.state import FileStateStore
from ..config.loader import Settings


def build_service(settings: Settings) -> ConnectionService:
    """Create a connection service backed by the on-disk session and registry"""
    session = ConnectionSession(state_store=FileStateStore(Path(settings.state_dir)))
    return ConnectionService(
        session=session,
        factory=RestConnectionFactory(settings.client_config()),
        registry=RegisteredConnectionStore(Path(settings.registry_path)),
        default_server_url=settings.server,
    )


def resolve_credential(
    settings: Settings,
    prompt_provider: Optional[PromptProvider] = None,
) -> Optional[Credential]:
    """
    Credential from settings, asking for the password when only a username
    is known. None means the default identity.
    """
    if settings.username and settings.password is None and prompt_provider is not None:
        settings.password = prompt_provider.prompt(
            f"Password for {settings.username}", password=True
        )
    return settings.credential()
