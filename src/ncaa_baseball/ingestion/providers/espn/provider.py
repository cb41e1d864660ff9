from __future__ import annotations

import httpx

from ncaa_baseball.core.config import Settings
from ncaa_baseball.ingestion.providers.base.cache import TTLCache
from ncaa_baseball.ingestion.providers.base.client import BaseHttpClient
from ncaa_baseball.ingestion.providers.base.registry import AdapterRegistry
from ncaa_baseball.ingestion.providers.base.source import SourceClient
from ncaa_baseball.unified.enums import DataSource

from .adapter import EspnAdapter
from .client import EspnClient


def make_espn_adapter(
    settings: Settings,
    *,
    transport: httpx.BaseTransport | None = None,
) -> EspnAdapter:
    http = BaseHttpClient(
        base_url=settings.espn_base_url,
        timeout_s=settings.http_timeout_s,
        connect_timeout_s=settings.http_connect_timeout_s,
        transport=transport,
    )
    source = SourceClient(
        provider=DataSource.ESPN,
        http=http,
        cache=TTLCache(ttl_s=settings.espn_cache_ttl_s),
    )
    return EspnAdapter(client=EspnClient(source=source))


def register_espn_adapter(
    registry: AdapterRegistry,
    *,
    settings: Settings,
    transport: httpx.BaseTransport | None = None,
) -> None:
    registry.register(
        DataSource.ESPN,
        factory=lambda: make_espn_adapter(settings, transport=transport),
    )
