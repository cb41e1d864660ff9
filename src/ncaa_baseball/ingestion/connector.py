"""
Multi-source data connector.

Holds a priority-ordered list of providers and, for every unified operation,
asks each provider in turn until one returns usable (non-empty) data. Provider
failures never reach the caller: they are classified, logged with the
provider's name, and treated like an empty answer. When every provider is
exhausted the caller gets an empty list (or None for a box score).
"""

from __future__ import annotations

import datetime as dt
import threading
from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from typing import Generic, TypeVar

import httpx

from ncaa_baseball.core.config import Settings, settings as default_settings
from ncaa_baseball.core.logging import logger
from ncaa_baseball.ingestion.dates import ProviderDates, provider_dates, today_utc
from ncaa_baseball.ingestion.providers.base.adapter import ProviderAdapter
from ncaa_baseball.ingestion.providers.base.cache import CacheStats
from ncaa_baseball.ingestion.providers.base.errors import ErrorKind, error_kind
from ncaa_baseball.ingestion.providers.base.registry import AdapterRegistry
from ncaa_baseball.ingestion.providers.espn.provider import register_espn_adapter
from ncaa_baseball.ingestion.providers.ncaa.provider import register_ncaa_adapter
from ncaa_baseball.unified.enums import DataSource
from ncaa_baseball.unified.types import (
    BoxScore,
    Game,
    PlayByPlayEvent,
    RankingEntry,
    StandingEntry,
)

T = TypeVar("T")

DEFAULT_SOURCES: tuple[DataSource, ...] = (DataSource.ESPN, DataSource.NCAA)


@dataclass(frozen=True)
class Attempt(Generic[T]):
    """Outcome of asking one provider for one operation."""

    provider: DataSource
    value: T | None = None
    error_kind: ErrorKind | None = None
    error: str | None = None

    @property
    def usable(self) -> bool:
        return self.error_kind is None


def _is_empty(value: object) -> bool:
    if value is None:
        return True
    if isinstance(value, list | tuple):
        return len(value) == 0
    return False


def _coerce_source(value: DataSource | str) -> DataSource:
    try:
        return DataSource(value.strip().lower() if isinstance(value, str) else value)
    except ValueError as e:
        raise ValueError(f"Unknown data source: {value!r}") from e


def resolve_sources(
    sources: Sequence[DataSource | str], configured: Iterable[DataSource]
) -> tuple[DataSource, ...]:
    """Validate a priority list against the configured providers."""
    resolved = tuple(_coerce_source(s) for s in sources)
    if not resolved:
        raise ValueError("At least one data source is required.")
    available = set(configured)
    missing = [s.value for s in resolved if s not in available]
    if missing:
        raise ValueError(f"No adapter configured for: {', '.join(missing)}")
    return resolved


class DataConnector:
    def __init__(
        self,
        adapters: dict[DataSource, ProviderAdapter],
        sources: Sequence[DataSource | str] = DEFAULT_SOURCES,
    ) -> None:
        self._adapters = dict(adapters)
        self._lock = threading.Lock()
        self._sources: tuple[DataSource, ...] = ()
        self.set_sources(sources)

    # --- Source priority ----------------------------------------------------

    def set_sources(self, sources: Sequence[DataSource | str]) -> None:
        """Replace the provider priority order (highest first)."""
        resolved = resolve_sources(sources, self._adapters)
        with self._lock:
            self._sources = resolved

    def get_sources(self) -> list[DataSource]:
        with self._lock:
            return list(self._sources)

    # --- Fallback chain -----------------------------------------------------

    def _chain(self, source: DataSource | str | None) -> tuple[DataSource, ...]:
        if source is not None:
            try:
                return (_coerce_source(source),)
            except ValueError:
                logger.warning("unknown_source", source=str(source))
                return ()
        with self._lock:
            return self._sources

    def _attempt(
        self,
        provider: DataSource,
        call: Callable[[ProviderAdapter], T],
    ) -> Attempt[T]:
        adapter = self._adapters.get(provider)
        if adapter is None:
            return Attempt(
                provider=provider,
                error_kind=ErrorKind.UNEXPECTED,
                error=f"No adapter configured for {provider.value}",
            )
        try:
            value = call(adapter)
        except Exception as e:
            return Attempt(provider=provider, error_kind=error_kind(e), error=str(e))
        if _is_empty(value):
            return Attempt(provider=provider, error_kind=ErrorKind.EMPTY)
        return Attempt(provider=provider, value=value)

    def _first_usable(
        self,
        operation: str,
        call: Callable[[ProviderAdapter], T],
        *,
        source: DataSource | str | None = None,
        **context: object,
    ) -> T | None:
        for provider in self._chain(source):
            attempt = self._attempt(provider, call)
            if attempt.usable:
                return attempt.value
            logger.warning(
                "provider_fallback",
                operation=operation,
                provider=provider.value,
                error_kind=attempt.error_kind.value if attempt.error_kind else None,
                error=attempt.error,
                **context,
            )
        return None

    # --- Unified operations -------------------------------------------------

    def get_scoreboard(self, date: str | dt.date | None = None) -> list[Game]:
        """
        Games for one day from the first provider that has any.

        `date` may be "YYYY-MM-DD", "YYYYMMDD", "YYYY/MM/DD" or a datetime.date;
        each provider receives it in its own format.
        """
        dates: ProviderDates = provider_dates(date)
        return (
            self._first_usable(
                "scoreboard", lambda a: a.scoreboard(dates), date=dates.espn
            )
            or []
        )

    def get_box_score(
        self, game_id: str, source: DataSource | str | None = None
    ) -> BoxScore | None:
        """Box score for one game. Pin `source` when the id came from a specific provider."""
        return self._first_usable(
            "box_score", lambda a: a.box_score(game_id), source=source, game_id=game_id
        )

    def get_play_by_play(
        self, game_id: str, source: DataSource | str | None = None
    ) -> list[PlayByPlayEvent]:
        return (
            self._first_usable(
                "play_by_play",
                lambda a: a.play_by_play(game_id),
                source=source,
                game_id=game_id,
            )
            or []
        )

    def get_standings(
        self, season: int | None = None, source: DataSource | str | None = None
    ) -> list[StandingEntry]:
        return (
            self._first_usable(
                "standings", lambda a: a.standings(season), source=source, season=season
            )
            or []
        )

    def get_rankings(
        self, week: int | None = None, source: DataSource | str | None = None
    ) -> list[RankingEntry]:
        return (
            self._first_usable(
                "rankings", lambda a: a.rankings(week), source=source, week=week
            )
            or []
        )

    def get_recent_games(self, days: int = 7, end: dt.date | None = None) -> list[Game]:
        """Scoreboards for the `days` days ending at `end` (default today, UTC), newest first."""
        last = end or today_utc()
        games: list[Game] = []
        for offset in range(max(days, 0)):
            games.extend(self.get_scoreboard(last - dt.timedelta(days=offset)))
        return games

    # --- Cache helpers ------------------------------------------------------

    def clear_all_caches(self) -> None:
        for adapter in self._adapters.values():
            adapter.clear_cache()

    def cache_stats(self) -> dict[DataSource, CacheStats]:
        return {p: a.cache_stats() for p, a in self._adapters.items()}

    def close(self) -> None:
        for adapter in self._adapters.values():
            adapter.close()

    def __enter__(self) -> DataConnector:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()


def build_connector(
    settings: Settings | None = None,
    *,
    sources: Sequence[DataSource | str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> DataConnector:
    """Wire ESPN and NCAA adapters from settings."""
    s = settings or default_settings

    registry = AdapterRegistry()
    register_espn_adapter(registry, settings=s, transport=transport)
    register_ncaa_adapter(registry, settings=s, transport=transport)

    # Reject a bad priority list before any HTTP client is opened.
    order = resolve_sources(sources or s.source_order(), registry.providers())
    return DataConnector(registry.build_all(), sources=order)
