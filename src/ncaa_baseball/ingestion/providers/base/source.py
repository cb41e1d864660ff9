from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass
from typing import Any, TypeVar
from urllib.parse import urlencode

from ncaa_baseball.core.logging import logger
from ncaa_baseball.unified.enums import DataSource

from .cache import CacheStats, TTLCache
from .client import BaseHttpClient, Json
from .errors import STALE_FALLBACK_ERRORS
from .rate_limit import RateLimiter

T = TypeVar("T")

Decoder = Callable[[Json], T]


def cache_key(path: str, params: Mapping[str, Any] | None = None) -> str:
    clean = {k: v for k, v in (params or {}).items() if v is not None}
    if not clean:
        return path
    return f"{path}?{urlencode(sorted(clean.items()))}"


@dataclass
class SourceClient:
    """Cached, optionally rate-limited JSON access to one provider.

    fetch() answers from a fresh cache entry without touching the network.
    Otherwise it goes upstream; on success the decoded value replaces the
    entry, on a transport/status/parse failure the previous entry (even if
    expired) is returned instead. With no previous entry the failure
    propagates.
    """

    provider: DataSource
    http: BaseHttpClient
    cache: TTLCache[Any]
    rate_limiter: RateLimiter | None = None

    def fetch(
        self,
        path: str,
        decode: Decoder[T],
        *,
        params: Mapping[str, Any] | None = None,
    ) -> T:
        key = cache_key(path, params)
        cached = self.cache.get(key)
        if cached is not None and self.cache.is_fresh(cached):
            logger.debug("provider_cache_hit", provider=self.provider.value, key=key)
            return cached.value

        ticket = self.cache.begin()
        try:
            if self.rate_limiter is not None:
                self.rate_limiter.acquire()
            payload = self.http.get_json(
                path, params={k: v for k, v in (params or {}).items() if v is not None}
            )
            value = decode(payload)
        except STALE_FALLBACK_ERRORS as e:
            # Re-read: another caller may have refreshed the key meanwhile.
            stale = self.cache.get(key) or cached
            if stale is None:
                raise
            logger.warning(
                "provider_stale_fallback",
                provider=self.provider.value,
                key=key,
                error_kind=e.kind.value,
                error=str(e),
            )
            return stale.value

        self.cache.put(key, value, ticket)
        return value

    def clear_cache(self) -> None:
        self.cache.clear()

    def cache_stats(self) -> CacheStats:
        return self.cache.stats()

    def close(self) -> None:
        self.http.close()
