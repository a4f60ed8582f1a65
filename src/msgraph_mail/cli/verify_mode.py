"""Verify mode: fetch an application token with the configured credentials."""

import typer

from msgraph_mail.auth import TokenProvider
from msgraph_mail.errors import GraphMailError
from msgraph_mail.http_client import default_http_client

from .shared import console, describe_error, load_config, logger


def verify() -> None:
    """Request a client-credentials token and report whether it was issued."""
    log = logger.bind(command="verify")
    config = load_config()
    log.info("verify.start", tenant=config.tenant)

    with default_http_client() as http_client:
        provider = TokenProvider(config, http_client)
        try:
            token = provider.get_access_token()
        except GraphMailError as e:
            console.print(f"[red]{describe_error(e)}[/red]")
            log.error("verify.fail", error_type=type(e).__name__)
            raise typer.Exit(1) from e

    console.print(f"[green]Token acquired[/green] for tenant {config.tenant}: {token[:8]}...")
    log.info("verify.ok")
