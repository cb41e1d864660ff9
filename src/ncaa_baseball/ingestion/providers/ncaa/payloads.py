"""Decoders for the public NCAA API (ncaa-api.henrygd.me).

The feed has shipped several shapes over time: scoreboard games both bare and
wrapped in {"game": {...}}, team names as flat `nameShort/nameSeo` or nested
`names.short/names.seo`, and list payloads under their own key or `data`.
All of them decode into the same intermediates below.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ncaa_baseball.ingestion.providers.base.client import Json
from ncaa_baseball.ingestion.providers.base.payloads import require_dict, require_list
from ncaa_baseball.unified.coerce import as_dict, dict_items, optional_str


@dataclass(frozen=True)
class NcaaTeam:
    short: str | None
    seo: str | None
    char6: str | None
    full: str | None
    score: Any
    record: str | None
    logo: str | None


@dataclass(frozen=True)
class NcaaGame:
    game_id: str
    title: str | None
    start_date: str | None
    start_epoch: Any
    state: str | None
    current_period: str | None
    home: NcaaTeam
    away: NcaaTeam


@dataclass(frozen=True)
class NcaaScoreboard:
    games: tuple[NcaaGame, ...]


@dataclass(frozen=True)
class NcaaPeriodScore:
    period: str | None
    score: Any


@dataclass(frozen=True)
class NcaaBoxTeam:
    team: NcaaTeam
    home_away: str | None
    stats: dict[str, Any]
    period_scores: tuple[NcaaPeriodScore, ...]


@dataclass(frozen=True)
class NcaaBoxScore:
    game_id: str | None
    date: str | None
    state: str | None
    current_period: str | None
    teams: tuple[NcaaBoxTeam, ...]


@dataclass(frozen=True)
class NcaaPlay:
    description: str | None
    score: Any
    team: str | None
    time: str | None


@dataclass(frozen=True)
class NcaaPeriod:
    period: Any
    plays: tuple[NcaaPlay, ...]


@dataclass(frozen=True)
class NcaaPlayByPlay:
    game_id: str | None
    periods: tuple[NcaaPeriod, ...]


@dataclass(frozen=True)
class NcaaStandingRow:
    rank: Any
    team_name: str | None
    conference: str | None
    wins: Any
    losses: Any
    pct: Any
    games_back: Any
    conf_wins: Any
    conf_losses: Any
    streak: str | None


@dataclass(frozen=True)
class NcaaStandings:
    rows: tuple[NcaaStandingRow, ...]


@dataclass(frozen=True)
class NcaaRankingRow:
    rank: Any
    team_name: str | None
    record: str | None
    previous_rank: Any
    trend: str | None


@dataclass(frozen=True)
class NcaaRankings:
    rows: tuple[NcaaRankingRow, ...]


def _decode_team(raw: Any) -> NcaaTeam:
    t = as_dict(raw)
    names = as_dict(t.get("names"))
    return NcaaTeam(
        short=optional_str(t.get("nameShort")) or optional_str(names.get("short")),
        seo=optional_str(t.get("nameSeo")) or optional_str(names.get("seo")),
        char6=optional_str(t.get("nameChar6")) or optional_str(names.get("char6")),
        full=optional_str(t.get("nameFull")) or optional_str(names.get("full")),
        score=t.get("score"),
        record=optional_str(t.get("currentRecord")),
        logo=optional_str(t.get("logoUrl")),
    )


def decode_scoreboard(payload: Json) -> NcaaScoreboard:
    games: list[NcaaGame] = []
    for item in dict_items(require_list(payload, "games", context="ncaa scoreboard")):
        raw = as_dict(item.get("game")) or item
        game_id = optional_str(raw.get("gameID"))
        if game_id is None:
            continue
        games.append(
            NcaaGame(
                game_id=game_id,
                title=optional_str(raw.get("title")),
                start_date=optional_str(raw.get("startDate")),
                start_epoch=raw.get("startTimeEpoch"),
                state=optional_str(raw.get("gameState")),
                current_period=optional_str(raw.get("currentPeriod")),
                home=_decode_team(raw.get("home")),
                away=_decode_team(raw.get("away")),
            )
        )
    return NcaaScoreboard(games=tuple(games))


def decode_box_score(payload: Json) -> NcaaBoxScore:
    context = "ncaa boxscore"
    meta = require_dict(payload, "meta", context=context)
    teams: list[NcaaBoxTeam] = []
    for t in dict_items(require_list(payload, "teams", context=context)):
        teams.append(
            NcaaBoxTeam(
                team=_decode_team(t),
                home_away=optional_str(t.get("homeAway")),
                stats=dict(as_dict(t.get("stats"))),
                period_scores=tuple(
                    NcaaPeriodScore(period=optional_str(ps.get("period")), score=ps.get("score"))
                    for ps in dict_items(t.get("periodScores"))
                ),
            )
        )
    return NcaaBoxScore(
        game_id=optional_str(meta.get("gameID")),
        date=optional_str(meta.get("gameDate")),
        state=optional_str(meta.get("gameState")),
        current_period=optional_str(meta.get("currentPeriod")),
        teams=tuple(teams),
    )


def decode_play_by_play(payload: Json) -> NcaaPlayByPlay:
    context = "ncaa play_by_play"
    meta = require_dict(payload, "meta", context=context)
    periods: list[NcaaPeriod] = []
    for p in dict_items(require_list(payload, "periods", context=context)):
        plays = p.get("plays", p.get("playStats"))
        periods.append(
            NcaaPeriod(
                period=p.get("period", p.get("periodNumber")),
                plays=tuple(
                    NcaaPlay(
                        description=optional_str(play.get("description"))
                        or optional_str(play.get("playText")),
                        score=play.get("score"),
                        team=optional_str(play.get("team")),
                        time=optional_str(play.get("time")),
                    )
                    for play in dict_items(plays)
                ),
            )
        )
    return NcaaPlayByPlay(game_id=optional_str(meta.get("gameID")), periods=tuple(periods))


def _rows(payload: Json, key: str, *, context: str) -> list[dict[str, Any]]:
    rows = require_list(payload, key, context=context)
    if not rows:
        rows = require_list(payload, "data", context=context)
    return dict_items(rows)


def decode_standings(payload: Json) -> NcaaStandings:
    return NcaaStandings(
        rows=tuple(
            NcaaStandingRow(
                rank=r.get("rank"),
                team_name=optional_str(r.get("teamName")),
                conference=optional_str(r.get("conference")),
                wins=r.get("wins"),
                losses=r.get("losses"),
                pct=r.get("pct"),
                games_back=r.get("gamesBack"),
                conf_wins=r.get("confWins"),
                conf_losses=r.get("confLosses"),
                streak=optional_str(r.get("streak")),
            )
            for r in _rows(payload, "standings", context="ncaa standings")
        )
    )


def decode_rankings(payload: Json) -> NcaaRankings:
    return NcaaRankings(
        rows=tuple(
            NcaaRankingRow(
                rank=r.get("rank"),
                team_name=optional_str(r.get("teamName")),
                record=optional_str(r.get("record")),
                previous_rank=r.get("previousRank"),
                trend=optional_str(r.get("trend")),
            )
            for r in _rows(payload, "rankings", context="ncaa rankings")
        )
    )
