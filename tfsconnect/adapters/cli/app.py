"""
Main CLI application
"""
import typer
from pathlib import Path
from typing import Optional

from ...core.logging import setup_logging, get_logger
from .collection import register_collection_commands

logger = get_logger(__name__)

app = typer.Typer(
    name="tfsconnect",
    add_completion=False,
    help="Team Project Collection connection tool",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

register_collection_commands(app)


@app.callback()
def main(
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        "-l",
        help="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    ),
    log_file: Optional[Path] = typer.Option(
        None,
        "--log-file",
        help="Log file path",
    ),
):
    """
    tfsconnect - connect to TFS / Azure DevOps Server team project collections
    
    Use subcommands to perform different operations:
    - connect / disconnect: Manage the default collection connection
    - get: Resolve collections by URL, name or pattern
    - registered / register / unregister: Manage registered connections
    """
    setup_logging(level=log_level, log_file=log_file)


def run():
    """CLI entry point"""
    app()


if __name__ == "__main__":
    run()
