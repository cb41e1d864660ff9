from __future__ import annotations

import httpx

from ncaa_baseball.core.config import Settings
from ncaa_baseball.ingestion.providers.base.cache import TTLCache
from ncaa_baseball.ingestion.providers.base.client import BaseHttpClient
from ncaa_baseball.ingestion.providers.base.rate_limit import RateLimiter
from ncaa_baseball.ingestion.providers.base.registry import AdapterRegistry
from ncaa_baseball.ingestion.providers.base.source import SourceClient
from ncaa_baseball.unified.enums import DataSource

from .adapter import NcaaAdapter
from .client import NcaaClient


def make_ncaa_adapter(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
    rate_limiter: RateLimiter | None = None,
) -> NcaaAdapter:
    http = BaseHttpClient(
        base_url=settings.ncaa_base_url,
        timeout_s=settings.http_timeout_s,
        connect_timeout_s=settings.http_connect_timeout_s,
        transport=transport,
    )
    source = SourceClient(
        provider=DataSource.NCAA,
        http=http,
        cache=TTLCache(ttl_s=settings.ncaa_cache_ttl_s),
        rate_limiter=rate_limiter
        or RateLimiter(max_per_window=settings.ncaa_max_requests_per_second),
    )
    return NcaaAdapter(client=NcaaClient(source=source))


def register_ncaa_adapter(
    registry: AdapterRegistry,
    *,
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> None:
    registry.register(
        DataSource.NCAA,
        factory=lambda: make_ncaa_adapter(settings, transport=transport),
    )
