"""Shared httpx helpers for the token and sendMail calls."""

from typing import Any

import httpx

from msgraph_mail.config import HTTP_TIMEOUT_SECONDS

# Connection-level failures: DNS, refused, reset, timeouts.
NETWORK_ERRORS = (httpx.NetworkError, httpx.TimeoutException)


def default_http_client() -> httpx.Client:
    """Client used when the caller does not inject one."""
    return httpx.Client(timeout=httpx.Timeout(HTTP_TIMEOUT_SECONDS))


def error_body(response: httpx.Response) -> dict[str, Any]:
    """Decode an error response body as a JSON object; {} when it is not one."""
    try:
        data = response.json()
    except ValueError:
        return {}
    return data if isinstance(data, dict) else {}
