"""Microsoft Graph sendMail transport (application permissions, client credentials)."""

from typing import Any
from urllib.parse import quote

import httpx

from msgraph_mail.auth.cache import TokenCache
from msgraph_mail.auth.token_provider import TokenProvider
from msgraph_mail.config import GraphMailConfig
from msgraph_mail.errors import (
    UNKNOWN_CODE,
    UNKNOWN_MESSAGE,
    CouldNotReachService,
    CouldNotSendMail,
)
from msgraph_mail.http_client import NETWORK_ERRORS, default_http_client, error_body
from msgraph_mail.mail_provider.models import MailMessage
from msgraph_mail.mail_provider.payload import build_payload
from msgraph_mail.utils.logger import get_logger

logger = get_logger("msgraph_mail.graph_transport")

SEND_MAIL_ENDPOINT = "https://graph.microsoft.com/v1.0/users/{sender}/sendMail"


class GraphMailTransport:
    """Sends MailMessage objects through POST /users/{sender}/sendMail.

    The HTTP client and token cache are injectable; by default a new
    httpx.Client is created and the process-wide token cache is shared.
    Nothing is retried: every failure surfaces as a typed error.
    """

    def __init__(
        self,
        config: GraphMailConfig,
        http_client: httpx.Client | None = None,
        cache: TokenCache | None = None,
    ):
        self._config = config
        self._owns_http = http_client is None
        self._http = http_client or default_http_client()
        self._tokens = TokenProvider(config, self._http, cache=cache)

    def __str__(self) -> str:
        return "msgraph"

    def __enter__(self) -> "GraphMailTransport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this transport created it."""
        if self._owns_http:
            self._http.close()

    @property
    def token_provider(self) -> TokenProvider:
        return self._tokens

    def send_url(self, sender_address: str) -> str:
        return SEND_MAIL_ENDPOINT.format(sender=quote(sender_address, safe=""))

    def headers(self) -> dict[str, str]:
        """Request headers; token errors propagate unchanged."""
        return {
            "Accept": "application/json",
            "Authorization": f"Bearer {self._tokens.get_access_token()}",
        }

    def send(self, message: MailMessage) -> None:
        """Send message as its first from address.

        Raises TypeError for anything that is not a MailMessage,
        CouldNotGetToken / CouldNotReachService from token acquisition, and
        CouldNotSendMail / CouldNotReachService from the sendMail call.
        """
        if not isinstance(message, MailMessage):
            raise TypeError(f"Expected instance of {MailMessage.__name__}, got {type(message).__name__}")

        payload = build_payload(message)
        sender = payload["from"]["emailAddress"]["address"]
        url = self.send_url(sender)
        headers = self.headers()
        log = logger.bind(sender=sender, recipients=_recipient_count(payload))
        log.info("graph_transport.send", subject=payload.get("subject", ""))

        try:
            response = self._http.post(url, headers=headers, json={"message": payload})
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            if not e.response.is_error:
                log.error("graph_transport.unexpected_status", status=e.response.status_code)
                raise CouldNotReachService.unknown_error() from e
            error = error_body(e.response).get("error")
            if not isinstance(error, dict):
                error = {}
            code = error.get("code") or UNKNOWN_CODE
            text = error.get("message") or UNKNOWN_MESSAGE
            log.error("graph_transport.error", status=e.response.status_code, code=code)
            raise CouldNotSendMail.service_responded_with_error(code, text) from e
        except NETWORK_ERRORS as e:
            log.error("graph_transport.network_error", error_type=type(e).__name__)
            raise CouldNotReachService.network_error() from e
        except Exception as e:
            log.error("graph_transport.unknown_error", error_type=type(e).__name__, error=str(e))
            raise CouldNotReachService.unknown_error() from e

        log.info("graph_transport.sent", status=response.status_code)


def _recipient_count(payload: dict[str, Any]) -> int:
    return sum(len(payload.get(key, [])) for key in ("toRecipients", "ccRecipients", "bccRecipients"))
