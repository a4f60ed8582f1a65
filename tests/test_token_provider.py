"""Tests for client-credentials token acquisition and caching."""

import unittest
from urllib.parse import parse_qs

import httpx

from msgraph_mail.auth.cache import MemoryTokenCache
from msgraph_mail.auth.token_provider import TOKEN_CACHE_KEY, TokenProvider
from msgraph_mail.config import GraphMailConfig
from msgraph_mail.errors import CouldNotGetToken, CouldNotReachService, ReachFailure


class FakeClock:
    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


def _provider(handler, tenant: str = "contoso", cache: MemoryTokenCache | None = None):
    config = GraphMailConfig(tenant=tenant, client="client-id", secret="s3cret")
    http = httpx.Client(transport=httpx.MockTransport(handler))
    return TokenProvider(config, http, cache=cache or MemoryTokenCache())


class TestTokenProvider(unittest.TestCase):
    """Token endpoint request shape, caching and error mapping."""

    def setUp(self):
        self.requests: list[httpx.Request] = []

    def _ok(self, token: str = "tok-1"):
        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return httpx.Response(200, json={"access_token": token, "expires_in": 3599})

        return handler

    def test_request_shape(self):
        provider = _provider(self._ok())
        self.assertEqual(provider.get_access_token(), "tok-1")
        self.assertEqual(len(self.requests), 1)
        request = self.requests[0]
        self.assertEqual(request.method, "POST")
        self.assertEqual(
            str(request.url),
            "https://login.microsoftonline.com/contoso/oauth2/v2.0/token",
        )
        self.assertTrue(request.headers["content-type"].startswith("application/x-www-form-urlencoded"))
        form = {k: v[0] for k, v in parse_qs(request.content.decode()).items()}
        self.assertEqual(
            form,
            {
                "client_id": "client-id",
                "client_secret": "s3cret",
                "scope": "https://graph.microsoft.com/.default",
                "grant_type": "client_credentials",
            },
        )

    def test_default_tenant_is_common(self):
        config = GraphMailConfig(client="client-id", secret="s3cret")
        self.assertEqual(config.tenant, "common")
        provider = _provider(self._ok(), tenant="")
        self.assertIn("/common/oauth2/v2.0/token", provider.token_url)

    def test_cache_hit_skips_network(self):
        cache = MemoryTokenCache(clock=FakeClock())
        provider = _provider(self._ok(), cache=cache)
        self.assertEqual(provider.get_access_token(), "tok-1")
        self.assertEqual(provider.get_access_token(), "tok-1")
        self.assertEqual(len(self.requests), 1)
        self.assertEqual(cache.get(TOKEN_CACHE_KEY), "tok-1")

    def test_token_refetched_after_ttl(self):
        clock = FakeClock()
        cache = MemoryTokenCache(clock=clock)
        provider = _provider(self._ok(), cache=cache)
        provider.get_access_token()
        clock.now += 44
        provider.get_access_token()
        self.assertEqual(len(self.requests), 1)
        clock.now += 2
        provider.get_access_token()
        self.assertEqual(len(self.requests), 2)

    def test_cached_token_shared_between_providers(self):
        cache = MemoryTokenCache()
        _provider(self._ok("first"), cache=cache).get_access_token()
        self.assertEqual(_provider(self._ok("second"), cache=cache).get_access_token(), "first")
        self.assertEqual(len(self.requests), 1)

    def test_error_response_raises_could_not_get_token(self):
        def handler(request):
            return httpx.Response(400, json={"error": "invalid_client", "error_description": "bad secret"})

        cache = MemoryTokenCache()
        with self.assertRaises(CouldNotGetToken) as ctx:
            _provider(handler, cache=cache).get_access_token()
        self.assertEqual(ctx.exception.error, "invalid_client")
        self.assertEqual(ctx.exception.description, "bad secret")
        self.assertIsInstance(ctx.exception.__cause__, httpx.HTTPStatusError)
        self.assertIsNone(cache.get(TOKEN_CACHE_KEY))

    def test_unparsable_error_body_uses_defaults(self):
        def handler(request):
            return httpx.Response(503, text="<html>Service Unavailable</html>")

        with self.assertRaises(CouldNotGetToken) as ctx:
            _provider(handler).get_access_token()
        self.assertEqual(ctx.exception.error, "Unknown")
        self.assertEqual(ctx.exception.description, "Unknown error")

    def test_connection_refused_is_network_error(self):
        def handler(request):
            raise httpx.ConnectError("Connection refused", request=request)

        with self.assertRaises(CouldNotReachService) as ctx:
            _provider(handler).get_access_token()
        self.assertIs(ctx.exception.reason, ReachFailure.NETWORK)
        self.assertTrue(ctx.exception.is_network_error)

    def test_timeout_is_network_error(self):
        def handler(request):
            raise httpx.ReadTimeout("timed out", request=request)

        with self.assertRaises(CouldNotReachService) as ctx:
            _provider(handler).get_access_token()
        self.assertIs(ctx.exception.reason, ReachFailure.NETWORK)

    def test_missing_access_token_is_unknown_error(self):
        def handler(request):
            return httpx.Response(200, json={"token_type": "Bearer"})

        cache = MemoryTokenCache()
        with self.assertRaises(CouldNotReachService) as ctx:
            _provider(handler, cache=cache).get_access_token()
        self.assertIs(ctx.exception.reason, ReachFailure.UNKNOWN)
        self.assertIsNone(cache.get(TOKEN_CACHE_KEY))

    def test_redirect_is_unknown_error(self):
        def handler(request):
            return httpx.Response(302, headers={"Location": "https://example.com/"})

        with self.assertRaises(CouldNotReachService) as ctx:
            _provider(handler).get_access_token()
        self.assertIs(ctx.exception.reason, ReachFailure.UNKNOWN)


if __name__ == "__main__":
    unittest.main()
