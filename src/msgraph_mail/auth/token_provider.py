"""Client-credentials access token for Microsoft Graph, cached for a short fixed TTL."""

import httpx

from msgraph_mail.auth.cache import TokenCache, default_cache
from msgraph_mail.config import GraphMailConfig
from msgraph_mail.errors import (
    UNKNOWN_CODE,
    UNKNOWN_MESSAGE,
    CouldNotGetToken,
    CouldNotReachService,
)
from msgraph_mail.http_client import NETWORK_ERRORS, error_body
from msgraph_mail.utils.logger import get_logger

logger = get_logger("msgraph_mail.auth.token_provider")

TOKEN_ENDPOINT = "https://login.microsoftonline.com/{tenant}/oauth2/v2.0/token"
GRAPH_SCOPE = "https://graph.microsoft.com/.default"

TOKEN_CACHE_KEY = "mail-msgraph-accesstoken"
# Fixed, independent of the token's expires_in; bounds staleness without parsing claims.
TOKEN_TTL_SECONDS = 45


class TokenProvider:
    """Fetches an application token via the OAuth2 client-credentials grant."""

    def __init__(
        self,
        config: GraphMailConfig,
        http_client: httpx.Client,
        cache: TokenCache | None = None,
    ):
        self._config = config
        self._http = http_client
        self._cache = cache if cache is not None else default_cache

    @property
    def token_url(self) -> str:
        return TOKEN_ENDPOINT.format(tenant=self._config.tenant or "common")

    def get_access_token(self) -> str:
        """Return a cached bearer token, fetching a new one on a cache miss.

        Raises CouldNotGetToken when the endpoint answers 4xx/5xx, and
        CouldNotReachService for connection or any other unexpected failure.
        """
        try:
            return self._cache.remember(TOKEN_CACHE_KEY, TOKEN_TTL_SECONDS, self._fetch_token)
        except httpx.HTTPStatusError as e:
            if not e.response.is_error:
                logger.error("token_provider.unexpected_status", status=e.response.status_code)
                raise CouldNotReachService.unknown_error() from e
            data = error_body(e.response)
            error = data.get("error") or UNKNOWN_CODE
            description = data.get("error_description") or UNKNOWN_MESSAGE
            logger.error(
                "token_provider.error",
                status=e.response.status_code,
                error=error,
                tenant=self._config.tenant,
            )
            raise CouldNotGetToken.service_responded_with_error(error, description) from e
        except NETWORK_ERRORS as e:
            logger.error("token_provider.network_error", error_type=type(e).__name__)
            raise CouldNotReachService.network_error() from e
        except Exception as e:
            logger.error("token_provider.unknown_error", error_type=type(e).__name__, error=str(e))
            raise CouldNotReachService.unknown_error() from e

    def _fetch_token(self) -> str:
        logger.info("token_provider.fetch", tenant=self._config.tenant)
        response = self._http.post(
            self.token_url,
            data={
                "client_id": self._config.client,
                "client_secret": self._config.secret,
                "scope": GRAPH_SCOPE,
                "grant_type": "client_credentials",
            },
        )
        response.raise_for_status()
        return response.json()["access_token"]
