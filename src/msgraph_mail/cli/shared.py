"""Shared CLI helpers: console, logger, config loading, transport selection."""

from pathlib import Path

import typer
from rich.console import Console

from msgraph_mail.config import GraphMailConfig
from msgraph_mail.errors import CouldNotGetToken, CouldNotReachService, CouldNotSendMail, GraphMailError
from msgraph_mail.mail_provider import GraphMailTransport, GraphMockTransport
from msgraph_mail.utils.logger import get_logger

console = Console()
logger = get_logger("msgraph_mail.cli")

DEFAULT_SENT_ITEMS_PATH = Path("output") / "sent_items.json"


def load_config() -> GraphMailConfig:
    """Config from the environment; prints the problem and exits 1 when incomplete."""
    try:
        return GraphMailConfig.from_env()
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        logger.warning("cli.missing_env", error=str(e))
        raise typer.Exit(1) from e


def get_transport(dry_run: bool, sent_path: Path | None = None) -> GraphMailTransport | GraphMockTransport:
    """Transport for one CLI send; use it as a context manager so owned clients close."""
    if dry_run:
        return GraphMockTransport(sent_items_path=sent_path or DEFAULT_SENT_ITEMS_PATH)
    return GraphMailTransport(load_config())


def describe_error(error: GraphMailError) -> str:
    """One-line, human readable description of a transport error."""
    if isinstance(error, CouldNotGetToken):
        return f"Token request rejected: {error.error} - {error.description}"
    if isinstance(error, CouldNotSendMail):
        return f"Graph rejected the message: {error.code} - {error.message}"
    if isinstance(error, CouldNotReachService):
        return f"Could not reach Microsoft ({error.reason.value} error)"
    return str(error)
