from __future__ import annotations

from ncaa_baseball.ingestion.dates import to_iso_utc
from ncaa_baseball.unified.coerce import optional_float, optional_int, parse_float, parse_int
from ncaa_baseball.unified.enums import DataSource, HalfInning, map_ncaa_state
from ncaa_baseball.unified.types import (
    BoxScore,
    BoxScoreTeam,
    Game,
    PlayByPlayEvent,
    RankingEntry,
    StandingEntry,
    TeamScore,
    inning_count,
)

from .payloads import (
    NcaaBoxScore,
    NcaaBoxTeam,
    NcaaGame,
    NcaaPlayByPlay,
    NcaaRankings,
    NcaaStandings,
    NcaaTeam,
)

SOURCE = DataSource.NCAA


def _abbreviation(name: str) -> str:
    return name.replace(" ", "")[:4].upper()


def _team_score(t: NcaaTeam, side: str) -> TeamScore:
    name = t.short or t.full or side.title()
    return TeamScore(
        id=t.seo or t.short or "",
        display_name=name,
        abbreviation=t.char6 or _abbreviation(name),
        score=parse_int(t.score),
        line_score=(),
        record=t.record,
        logo=t.logo,
    )


def _game_date(game: NcaaGame) -> str:
    return to_iso_utc(game.start_epoch) or to_iso_utc(game.start_date) or ""


def normalize_ncaa_game(game: NcaaGame) -> Game:
    home = _team_score(game.home, "home")
    away = _team_score(game.away, "away")
    return Game(
        id=game.game_id,
        source=SOURCE,
        date=_game_date(game),
        title=game.title or f"{away.display_name} at {home.display_name}",
        state=map_ncaa_state(game.state),
        status_detail=game.current_period or game.state or "",
        home=home,
        away=away,
    )


def normalize_ncaa_scoreboard(games: tuple[NcaaGame, ...]) -> list[Game]:
    return [normalize_ncaa_game(g) for g in games]


def _pick_home_away(teams: tuple[NcaaBoxTeam, ...]) -> tuple[NcaaBoxTeam | None, NcaaBoxTeam | None]:
    home = next((t for t in teams if t.home_away == "home"), None)
    away = next((t for t in teams if t.home_away == "away"), None)

    # Without flags the feed lists the visitor first.
    if home is None and teams:
        home = teams[1] if len(teams) > 1 else teams[0]
    if away is None and teams:
        away = next((t for t in teams if t is not home), teams[0])
    return home, away


def _box_team(t: NcaaBoxTeam | None, side: str) -> BoxScoreTeam:
    if t is None:
        return BoxScoreTeam(id="", display_name=side.title(), abbreviation=side.upper())
    stats = t.stats
    name = t.team.full or t.team.short or side.title()
    return BoxScoreTeam(
        id=t.team.seo or t.team.short or "",
        display_name=name,
        abbreviation=t.team.char6 or _abbreviation(name),
        score=parse_int(t.team.score),
        line_score=tuple(parse_int(ps.score) for ps in t.period_scores),
        record=t.team.record,
        logo=t.team.logo,
        hits=parse_int(stats.get("H", stats.get("hits"))),
        errors=parse_int(stats.get("E", stats.get("errors"))),
    )


def normalize_ncaa_box_score(game_id: str, data: NcaaBoxScore) -> BoxScore | None:
    if not data.teams:
        return None

    home_raw, away_raw = _pick_home_away(data.teams)
    home = _box_team(home_raw, "home")
    away = _box_team(away_raw, "away")

    return BoxScore(
        source=SOURCE,
        game_id=game_id,
        date=to_iso_utc(data.date) or (data.date or ""),
        status=map_ncaa_state(data.state),
        status_detail=data.current_period or data.state or "",
        home=home,
        away=away,
        inning_count=inning_count(home.line_score, away.line_score),
    )


def normalize_ncaa_play_by_play(data: NcaaPlayByPlay) -> list[PlayByPlayEvent]:
    """Flatten NCAA periods into events.

    The feed does not say which half of the inning a play belongs to. Every
    event is tagged `half=top` with `half_inferred=True`; callers that need
    real half-innings must use ESPN. Outs are not reported either (always 0).
    """
    events: list[PlayByPlayEvent] = []
    for period in data.periods:
        inning = parse_int(period.period, default=1) or 1
        for idx, play in enumerate(period.plays):
            score = play.score
            events.append(
                PlayByPlayEvent(
                    source=SOURCE,
                    id=f"{inning}_{idx}",
                    sequence_number=len(events),
                    inning=inning,
                    half=HalfInning.TOP,
                    outs=0,
                    text=play.description or "",
                    type="play",
                    scoring_play=score is not None and str(score).strip() != "",
                    half_inferred=True,
                )
            )
    return events


def normalize_ncaa_standings(data: NcaaStandings) -> list[StandingEntry]:
    return [
        StandingEntry(
            source=SOURCE,
            team_name=r.team_name,
            conference=r.conference or "",
            wins=parse_int(r.wins),
            losses=parse_int(r.losses),
            win_pct=parse_float(r.pct),
            rank=optional_int(r.rank),
            conf_wins=optional_int(r.conf_wins),
            conf_losses=optional_int(r.conf_losses),
            games_back=optional_float(r.games_back),
            streak=r.streak,
        )
        for r in data.rows
        if r.team_name
    ]


def normalize_ncaa_rankings(data: NcaaRankings) -> list[RankingEntry]:
    return [
        RankingEntry(
            source=SOURCE,
            rank=parse_int(r.rank),
            team_name=r.team_name or "",
            record=r.record or "",
            previous_rank=optional_int(r.previous_rank),
            trend=r.trend,
        )
        for r in data.rows
    ]
