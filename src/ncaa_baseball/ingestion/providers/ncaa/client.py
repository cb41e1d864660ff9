from __future__ import annotations

from dataclasses import dataclass

from ncaa_baseball.ingestion.dates import current_year, ncaa_today
from ncaa_baseball.ingestion.providers.base.source import SourceClient

from .payloads import (
    NcaaBoxScore,
    NcaaPlayByPlay,
    NcaaRankings,
    NcaaScoreboard,
    NcaaStandings,
    decode_box_score,
    decode_play_by_play,
    decode_rankings,
    decode_scoreboard,
    decode_standings,
)

SPORT_PATH = "baseball/d1"


@dataclass
class NcaaClient:
    """NCAA public API. The SourceClient must carry a RateLimiter (5 req/s policy)."""

    source: SourceClient

    def get_scoreboard(self, date: str | None = None) -> NcaaScoreboard:
        """D1 scoreboard for one day. `date` is YYYY/MM/DD (defaults to today)."""
        d = date or ncaa_today()
        return self.source.fetch(f"/scoreboard/{SPORT_PATH}/{d}/all-conf", decode_scoreboard)

    def get_box_score(self, game_id: str) -> NcaaBoxScore:
        return self.source.fetch(f"/game/{game_id}/boxscore", decode_box_score)

    def get_play_by_play(self, game_id: str) -> NcaaPlayByPlay:
        return self.source.fetch(f"/game/{game_id}/play_by_play", decode_play_by_play)

    def get_standings(self, year: int | None = None) -> NcaaStandings:
        y = year or current_year()
        return self.source.fetch(f"/standings/{SPORT_PATH}/{y}", decode_standings)

    def get_rankings(self, week: int | None = None) -> NcaaRankings:
        w = week or 1
        return self.source.fetch(f"/rankings/{SPORT_PATH}/{w}", decode_rankings)
