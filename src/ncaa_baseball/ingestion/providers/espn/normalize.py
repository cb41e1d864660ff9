from __future__ import annotations

from dataclasses import replace

from ncaa_baseball.ingestion.dates import to_iso_utc
from ncaa_baseball.unified.coerce import optional_float, optional_int, parse_float, parse_int
from ncaa_baseball.unified.enums import DataSource, GameState, HalfInning, map_espn_state
from ncaa_baseball.unified.types import (
    BattingLine,
    BoxScore,
    BoxScorePlayer,
    BoxScoreTeam,
    Game,
    PitchingLine,
    PlayByPlayEvent,
    RankingEntry,
    StandingEntry,
    TeamScore,
    inning_count,
)

from .payloads import (
    EspnAthleteLine,
    EspnCompetitor,
    EspnEvent,
    EspnPlayerGroup,
    EspnRankings,
    EspnStandings,
    EspnStatus,
    EspnSummary,
)

SOURCE = DataSource.ESPN


def _line_score(c: EspnCompetitor | None) -> tuple[int, ...]:
    if c is None:
        return ()
    return tuple(parse_int(v) for v in c.line_scores)


def _team_score(c: EspnCompetitor | None, side: str) -> TeamScore:
    if c is None:
        return TeamScore(id="", display_name=side.title(), abbreviation=side.upper())
    return TeamScore(
        id=c.team_id or "",
        display_name=c.display_name or side.title(),
        abbreviation=c.abbreviation or side.upper(),
        score=parse_int(c.score),
        line_score=_line_score(c),
        record=c.record,
        logo=c.logo,
    )


def _state(status: EspnStatus) -> GameState:
    return map_espn_state(status.state, status.name)


def normalize_espn_game(event: EspnEvent) -> Game:
    home = _team_score(event.home, "home")
    away = _team_score(event.away, "away")
    return Game(
        id=event.id,
        source=SOURCE,
        date=to_iso_utc(event.date) or "",
        title=event.name or f"{away.display_name} at {home.display_name}",
        state=_state(event.status),
        status_detail=event.status.detail or event.status.description or "",
        home=home,
        away=away,
        venue=event.venue,
    )


def normalize_espn_scoreboard(events: tuple[EspnEvent, ...]) -> list[Game]:
    return [normalize_espn_game(e) for e in events]


def _box_team(c: EspnCompetitor | None, side: str, stats: dict[str, object]) -> BoxScoreTeam:
    base = _team_score(c, side)
    return BoxScoreTeam(
        id=base.id,
        display_name=base.display_name,
        abbreviation=base.abbreviation,
        score=base.score,
        line_score=base.line_score,
        record=base.record,
        logo=base.logo,
        hits=parse_int(stats.get("hits", stats.get("H"))),
        errors=parse_int(stats.get("errors", stats.get("E"))),
    )


def _stat(stats: tuple[str, ...], idx: int) -> str | None:
    return stats[idx] if idx < len(stats) else None


def _batting(line: EspnAthleteLine) -> BattingLine:
    s = line.stats
    return BattingLine(
        at_bats=parse_int(_stat(s, 0)),
        runs=parse_int(_stat(s, 1)),
        hits=parse_int(_stat(s, 2)),
        rbi=parse_int(_stat(s, 3)),
        walks=parse_int(_stat(s, 4)),
        strikeouts=parse_int(_stat(s, 5)),
        avg=_stat(s, 6) or ".000",
    )


def _pitching(line: EspnAthleteLine) -> PitchingLine:
    s = line.stats
    return PitchingLine(
        innings_pitched=_stat(s, 0) or "0.0",
        hits=parse_int(_stat(s, 1)),
        runs=parse_int(_stat(s, 2)),
        earned_runs=parse_int(_stat(s, 3)),
        walks=parse_int(_stat(s, 4)),
        strikeouts=parse_int(_stat(s, 5)),
        era=_stat(s, 6) or "0.00",
        pitches=optional_int(_stat(s, 7)),
    )


def _roster(group: EspnPlayerGroup | None) -> tuple[BoxScorePlayer, ...] | None:
    if group is None:
        return None

    # Two-way players appear in both lists; merge on athlete id.
    players: dict[str, BoxScorePlayer] = {}

    for line in group.batting:
        key = line.athlete_id or f"anon-{len(players)}"
        players[key] = _player(line, batting=_batting(line))

    for line in group.pitching:
        key = line.athlete_id or f"anon-{len(players)}"
        existing = players.get(key)
        if existing is None:
            players[key] = _player(line, pitching=_pitching(line))
        else:
            players[key] = replace(existing, pitching=_pitching(line))

    return tuple(players.values()) or None


def _player(
    line: EspnAthleteLine,
    *,
    batting: BattingLine | None = None,
    pitching: PitchingLine | None = None,
) -> BoxScorePlayer:
    return BoxScorePlayer(
        id=line.athlete_id or "",
        display_name=line.display_name or "Unknown",
        jersey=line.jersey,
        position=line.position,
        batting=batting,
        pitching=pitching,
    )


def normalize_espn_box_score(game_id: str, summary: EspnSummary) -> BoxScore | None:
    if not summary.has_boxscore:
        return None

    home_id = summary.home.team_id if summary.home else None
    away_id = summary.away.team_id if summary.away else None

    home = _box_team(summary.home, "home", summary.team_stats.get(home_id or "", {}))
    away = _box_team(summary.away, "away", summary.team_stats.get(away_id or "", {}))

    groups = {g.team_id: g for g in summary.players if g.team_id}

    return BoxScore(
        source=SOURCE,
        game_id=game_id,
        date=to_iso_utc(summary.date) or (summary.date or ""),
        status=_state(summary.status),
        status_detail=summary.status.detail or summary.status.description or "",
        home=home,
        away=away,
        inning_count=inning_count(home.line_score, away.line_score),
        venue=summary.venue,
        attendance=summary.attendance,
        home_roster=_roster(groups.get(home_id)) if home_id else None,
        away_roster=_roster(groups.get(away_id)) if away_id else None,
        notes=summary.notes,
    )


def normalize_espn_play_by_play(summary: EspnSummary) -> list[PlayByPlayEvent]:
    events: list[PlayByPlayEvent] = []
    for index, play in enumerate(summary.plays):
        seq = optional_int(play.sequence_number)
        events.append(
            PlayByPlayEvent(
                source=SOURCE,
                id=play.id or f"play_{index}",
                sequence_number=seq if seq is not None and seq >= 0 else index,
                inning=parse_int(play.inning, default=1) or 1,
                half=HalfInning.BOTTOM if play.home_away == "home" else HalfInning.TOP,
                outs=parse_int(play.outs),
                text=play.text or "",
                type=play.type or "Unknown",
                scoring_play=play.scoring_play,
                balls=optional_int(play.balls),
                strikes=optional_int(play.strikes),
                short_text=play.short_text,
                timestamp=play.wallclock,
            )
        )
    return events


def normalize_espn_standings(standings: EspnStandings) -> list[StandingEntry]:
    entries: list[StandingEntry] = []
    for row in standings.rows:
        if not row.team_name:
            continue
        s = row.stats
        streak = s.get("streak")
        entries.append(
            StandingEntry(
                source=SOURCE,
                team_name=row.team_name,
                conference=row.conference or "",
                wins=parse_int(s.get("wins")),
                losses=parse_int(s.get("losses")),
                win_pct=parse_float(s.get("winPercent", s.get("pct"))),
                rank=optional_int(s.get("playoffSeed")),
                conf_wins=optional_int(s.get("vsConf_wins", s.get("conferenceWins"))),
                conf_losses=optional_int(s.get("vsConf_losses", s.get("conferenceLosses"))),
                games_back=optional_float(s.get("gamesBehind")),
                streak=str(streak) if streak not in (None, "") else None,
            )
        )
    return entries


def normalize_espn_rankings(rankings: EspnRankings) -> list[RankingEntry]:
    entries: list[RankingEntry] = []
    for index, row in enumerate(rankings.rows):
        current = optional_int(row.current)
        previous = optional_int(row.previous)
        entries.append(
            RankingEntry(
                source=SOURCE,
                rank=current if current and current > 0 else index + 1,
                team_name=row.team_name or "",
                record=row.record or "",
                previous_rank=previous if previous and previous > 0 else None,
                trend=row.trend,
            )
        )
    return entries
