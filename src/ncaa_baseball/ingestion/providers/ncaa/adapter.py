from __future__ import annotations

from dataclasses import dataclass

from ncaa_baseball.ingestion.dates import ProviderDates
from ncaa_baseball.ingestion.providers.base.cache import CacheStats
from ncaa_baseball.unified.enums import DataSource
from ncaa_baseball.unified.types import (
    BoxScore,
    Game,
    PlayByPlayEvent,
    RankingEntry,
    StandingEntry,
)

from .client import NcaaClient
from .normalize import (
    normalize_ncaa_box_score,
    normalize_ncaa_play_by_play,
    normalize_ncaa_rankings,
    normalize_ncaa_scoreboard,
    normalize_ncaa_standings,
)


@dataclass(frozen=True)
class NcaaAdapter:
    """NCAA fetch + normalize, one method per unified operation."""

    client: NcaaClient
    provider_key: DataSource = DataSource.NCAA

    def scoreboard(self, dates: ProviderDates) -> list[Game]:
        return normalize_ncaa_scoreboard(self.client.get_scoreboard(dates.ncaa).games)

    def box_score(self, game_id: str) -> BoxScore | None:
        return normalize_ncaa_box_score(game_id, self.client.get_box_score(game_id))

    def play_by_play(self, game_id: str) -> list[PlayByPlayEvent]:
        return normalize_ncaa_play_by_play(self.client.get_play_by_play(game_id))

    def standings(self, season: int | None) -> list[StandingEntry]:
        return normalize_ncaa_standings(self.client.get_standings(season))

    def rankings(self, week: int | None) -> list[RankingEntry]:
        return normalize_ncaa_rankings(self.client.get_rankings(week))

    def clear_cache(self) -> None:
        self.client.source.clear_cache()

    def cache_stats(self) -> CacheStats:
        return self.client.source.cache_stats()

    def close(self) -> None:
        self.client.source.close()
