"""Send mode: build a MailMessage from command-line options and send it."""

from email.utils import parseaddr
from pathlib import Path

import typer
from pydantic import ValidationError

from msgraph_mail.config import GRAPH_SENDER
from msgraph_mail.errors import GraphMailError
from msgraph_mail.mail_provider import Attachment, MailMessage, NamedAddress, PlainAddress

from .shared import console, describe_error, get_transport, logger


def parse_address(value: str) -> PlainAddress | NamedAddress:
    """'Alice <a@x.com>' -> NamedAddress, 'a@x.com' -> PlainAddress."""
    name, address = parseaddr(value)
    if name:
        return NamedAddress(address=address, name=name)
    return PlainAddress(address=address or value.strip())


def send(
    to: list[str] = typer.Option(..., "--to", "-t", help="Recipient (repeatable); 'Name <addr>' accepted"),
    subject: str = typer.Option("", "--subject", "-s"),
    body: str = typer.Option("", "--body", "-b", help="Message body"),
    html: bool = typer.Option(False, "--html", help="Send body as HTML instead of plain text"),
    cc: list[str] | None = typer.Option(None, "--cc", help="Cc recipient (repeatable)"),
    bcc: list[str] | None = typer.Option(None, "--bcc", help="Bcc recipient (repeatable)"),
    reply_to: list[str] | None = typer.Option(None, "--reply-to", help="Reply-To address (repeatable)"),
    attach: list[Path] | None = typer.Option(None, "--attach", "-a", exists=True, dir_okay=False, help="File to attach (repeatable)"),
    sender: str | None = typer.Option(None, "--from", "-f", help="Mailbox to send from; overrides GRAPH_SENDER"),
    dry_run: bool = typer.Option(False, "--dry-run", help="Write the request body to output/sent_items.json instead of sending"),
) -> None:
    """Send one message through Microsoft Graph."""
    effective_sender = (sender or GRAPH_SENDER or "").strip()
    log = logger.bind(command="send", sender=effective_sender or None, dry_run=dry_run)
    log.info("send.start")

    if not effective_sender:
        console.print("[red]Provide sender via --from / -f or set GRAPH_SENDER in .env[/red]")
        log.warning("send.missing_sender")
        raise typer.Exit(1)

    try:
        message = MailMessage(
            from_=[parse_address(effective_sender)],
            to=[parse_address(v) for v in to],
            cc=[parse_address(v) for v in cc or []],
            bcc=[parse_address(v) for v in bcc or []],
            reply_to=[parse_address(v) for v in reply_to or []],
            subject=subject,
            html_body=body if html else None,
            text_body=None if html else body,
            attachments=[Attachment.from_path(p) for p in attach or []],
        )
    except ValidationError as e:
        console.print(f"[red]Invalid message: {e}[/red]")
        log.warning("send.invalid_message", error=str(e))
        raise typer.Exit(1) from e

    with get_transport(dry_run) as transport:
        try:
            transport.send(message)
        except GraphMailError as e:
            console.print(f"[red]{describe_error(e)}[/red]")
            log.error("send.fail", error_type=type(e).__name__)
            raise typer.Exit(1) from e

    console.print(f"[green]Sent[/green] via {transport} from {effective_sender} to {len(message.to)} recipient(s).")
    log.info("send.ok")
