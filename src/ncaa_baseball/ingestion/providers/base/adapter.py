from __future__ import annotations

from typing import Protocol

from ncaa_baseball.ingestion.dates import ProviderDates
from ncaa_baseball.unified.enums import DataSource
from ncaa_baseball.unified.types import (
    BoxScore,
    Game,
    PlayByPlayEvent,
    RankingEntry,
    StandingEntry,
)

from .cache import CacheStats


class ProviderAdapter(Protocol):
    """
    The connector depends on this, not on any HTTP client.

    Each method fetches through the provider's SourceClient and returns
    unified entities. Provider failures propagate as exceptions; an empty
    list / None means the provider answered but had nothing usable.
    """

    provider_key: DataSource

    def scoreboard(self, dates: ProviderDates) -> list[Game]: ...

    def box_score(self, game_id: str) -> BoxScore | None: ...

    def play_by_play(self, game_id: str) -> list[PlayByPlayEvent]: ...

    def standings(self, season: int | None) -> list[StandingEntry]: ...

    def rankings(self, week: int | None) -> list[RankingEntry]: ...

    def clear_cache(self) -> None: ...

    def cache_stats(self) -> CacheStats: ...

    def close(self) -> None: ...
