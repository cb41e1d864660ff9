from __future__ import annotations

from dataclasses import dataclass

from ncaa_baseball.ingestion.providers.base.source import SourceClient

from .payloads import (
    EspnRankings,
    EspnScoreboard,
    EspnStandings,
    EspnSummary,
    decode_rankings,
    decode_scoreboard,
    decode_standings,
    decode_summary,
)


@dataclass
class EspnClient:
    """ESPN college-baseball site API (scoreboard, summary, standings, rankings)."""

    source: SourceClient

    def get_scoreboard(self, date: str | None = None, limit: int = 100) -> EspnScoreboard:
        """Scoreboard for one day. `date` is compact YYYYMMDD."""
        return self.source.fetch(
            "/scoreboard",
            decode_scoreboard,
            params={"dates": date, "limit": limit},
        )

    def get_summary(self, game_id: str) -> EspnSummary:
        """Game summary: header, box score and plays in one payload."""
        return self.source.fetch("/summary", decode_summary, params={"event": game_id})

    def get_standings(self, season: int | None = None) -> EspnStandings:
        return self.source.fetch("/standings", decode_standings, params={"season": season})

    def get_rankings(self, week: int | None = None) -> EspnRankings:
        return self.source.fetch("/rankings", decode_rankings, params={"week": week})
