"""CLI commands: one module per command (send, verify)."""

from typer import Typer

from msgraph_mail.cli import send_mode, verify_mode

app = Typer(help="Send mail through Microsoft Graph with client-credentials auth")


def register_commands() -> None:
    """Register all CLI commands on the global app."""
    app.command()(send_mode.send)
    app.command()(verify_mode.verify)


register_commands()
