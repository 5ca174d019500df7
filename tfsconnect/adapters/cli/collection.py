"""
Collection CLI commands
"""
import typer
from pathlib import Path
from typing import Optional, Dict, Any, Iterable

from rich.table import Table

from ...core.logging import get_logger, get_stdout_console, get_stderr_console
from ...core.exceptions import TfsConnectError
from ...domain.connection import CollectionHandle, RegisteredConnection
from ..config.loader import ConfigLoader, Settings
from .connection import build_service, resolve_credential
from .prompts import RichPromptProvider

logger = get_logger(__name__)
stdout_console = get_stdout_console()
stderr_console = get_stderr_console()
prompt_provider = RichPromptProvider()


def register_collection_commands(app: typer.Typer) -> None:
    """Register collection commands directly on the main app"""
    app.command(name="connect")(connect)
    app.command(name="disconnect")(disconnect)
    app.command(name="get")(get_collection)
    app.command(name="registered")(list_registered)
    app.command(name="register")(register)
    app.command(name="unregister")(unregister)


def _load_settings(config_file: Optional[Path], overrides: Optional[Dict[str, Any]] = None) -> Settings:
    return ConfigLoader().load(toml_path=config_file, cli_overrides=overrides)


def _fail(message: str) -> None:
    stderr_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


def _print_handles(handles: Iterable[CollectionHandle], title: str) -> None:
    table = Table(title=title, show_header=True, header_style="bold cyan")
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="green")
    table.add_column("Instance ID", style="yellow")
    table.add_column("Authenticated", style="magenta")

    for handle in handles:
        table.add_row(
            handle.name,
            handle.url,
            handle.instance_id or "N/A",
            "yes" if handle.authenticated else "no",
        )

    stdout_console.print(table)


def connect(
    collection: Optional[str] = typer.Argument(
        None, help="Collection URL or name (default: current connection)"
    ),
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Configuration server URL or registered name, for name lookups"
    ),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="User name"),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Password or personal access token (prompted if omitted)"
    ),
    passthru: bool = typer.Option(False, "--passthru", help="Print the connected collection"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """
    Connect to a team project collection and make it the default

    Examples:
        tfsconnect connect http://tfs:8080/tfs/DefaultCollection
        tfsconnect connect DefaultCollection --server http://tfs:8080/tfs -u DOMAIN\\me
        tfsconnect connect  # re-authenticate the current connection
    """
    error = None
    try:
        settings = _load_settings(config_file, {
            "collection": collection,
            "server": server,
            "username": username,
            "password": password,
        })
        credential = resolve_credential(settings, prompt_provider)
        service = build_service(settings)
        handle = service.connect(
            settings.collection,
            server=settings.server,
            credential=credential,
            passthru=passthru,
        )
        if handle is not None:
            _print_handles([handle], "Connected Collection")
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to connect")
        error = f"Failed to connect: {e}"

    if error:
        _fail(error)


def disconnect(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """
    Drop the default collection connection

    Examples:
        tfsconnect disconnect
    """
    error = None
    try:
        service = build_service(_load_settings(config_file))
        service.disconnect()
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to disconnect")
        error = f"Failed to disconnect: {e}"

    if error:
        _fail(error)


def get_collection(
    collection: Optional[str] = typer.Argument(
        None, help="Collection URL, name or glob pattern (default: current connection)"
    ),
    server: Optional[str] = typer.Option(
        None, "--server", "-s", help="Configuration server URL or registered name, for name lookups"
    ),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="User name"),
    password: Optional[str] = typer.Option(
        None, "--password", "-p", help="Password or personal access token (prompted if omitted)"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """
    Resolve team project collections without changing the default

    Examples:
        tfsconnect get
        tfsconnect get "Default*" --server http://tfs:8080/tfs
    """
    error = None
    try:
        settings = _load_settings(config_file, {
            "server": server,
            "username": username,
            "password": password,
        })
        credential = resolve_credential(settings, prompt_provider)
        service = build_service(settings)
        handles = service.get_collections(collection, server=settings.server, credential=credential)
        _print_handles(handles, "Team Project Collections")
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to resolve collection")
        error = f"Failed to resolve collection: {e}"

    if error:
        _fail(error)


def list_registered(
    pattern: str = typer.Argument("*", help="Name glob pattern"),
    kind: Optional[str] = typer.Option(None, "--kind", "-k", help="Filter: collection or server"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """
    List registered collections and servers

    Examples:
        tfsconnect registered
        tfsconnect registered "prod*" --kind collection
    """
    error = None
    try:
        service = build_service(_load_settings(config_file))
        entries = service.list_registered(pattern, kind)

        if not entries:
            stdout_console.print("[yellow]No registered connections[/yellow]")
        else:
            table = Table(title="Registered Connections", show_header=True, header_style="bold cyan")
            table.add_column("Name", style="cyan")
            table.add_column("Kind", style="magenta")
            table.add_column("URL", style="green")
            table.add_column("Server", style="blue")
            for entry in entries:
                table.add_row(entry.name, entry.kind, entry.url, entry.server_url or "")
            stdout_console.print(table)
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to list registered connections")
        error = f"Failed to list registered connections: {e}"

    if error:
        _fail(error)


def register(
    name: str = typer.Argument(..., help="Display name"),
    url: str = typer.Argument(..., help="Collection or server URL"),
    kind: str = typer.Option("collection", "--kind", "-k", help="collection or server"),
    server_url: Optional[str] = typer.Option(
        None, "--server-url", help="Configuration server of a collection"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """
    Register a collection or server with the local client

    Examples:
        tfsconnect register DefaultCollection http://tfs:8080/tfs/DefaultCollection
        tfsconnect register tfs http://tfs:8080/tfs --kind server
    """
    error = None
    try:
        service = build_service(_load_settings(config_file))
        service.registry.register(RegisteredConnection(
            name=name, url=url, kind=kind, server_url=server_url,
        ))
        prompt_provider.success(f"Registered {kind} '{name}'")
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to register connection")
        error = f"Failed to register connection: {e}"

    if error:
        _fail(error)


def unregister(
    name: str = typer.Argument(..., help="Registered name"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Configuration file path (TOML)"
    ),
):
    """Remove a registered collection or server"""
    error = None
    try:
        service = build_service(_load_settings(config_file))
        service.registry.unregister(name)
        prompt_provider.success(f"Unregistered '{name}'")
    except TfsConnectError as e:
        error = str(e)
    except Exception as e:
        logger.exception("Failed to unregister connection")
        error = f"Failed to unregister connection: {e}"

    if error:
        _fail(error)
