"""Application token acquisition and caching for Graph API access."""

from msgraph_mail.auth.cache import MemoryTokenCache, TokenCache, default_cache
from msgraph_mail.auth.token_provider import (
    TOKEN_CACHE_KEY,
    TOKEN_TTL_SECONDS,
    TokenProvider,
)

__all__ = [
    "MemoryTokenCache",
    "TokenCache",
    "default_cache",
    "TOKEN_CACHE_KEY",
    "TOKEN_TTL_SECONDS",
    "TokenProvider",
]
