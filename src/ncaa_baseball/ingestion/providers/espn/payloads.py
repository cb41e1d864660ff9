"""Decoders for the ESPN college-baseball site API.

Each decoder takes the raw JSON object and returns frozen intermediates whose
fields are either present with the documented type or set to their default
(None / "" / empty tuple). Values that need interpretation (scores, states,
dates) stay raw here and are resolved by the normalizers.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ncaa_baseball.ingestion.providers.base.client import Json
from ncaa_baseball.ingestion.providers.base.payloads import require_dict, require_list
from ncaa_baseball.unified.coerce import as_dict, as_list, dict_items, optional_int, optional_str


@dataclass(frozen=True)
class EspnCompetitor:
    home_away: str | None
    team_id: str | None
    display_name: str | None
    abbreviation: str | None
    logo: str | None
    score: Any
    record: str | None
    line_scores: tuple[Any, ...] = ()


@dataclass(frozen=True)
class EspnStatus:
    state: str | None
    name: str | None
    detail: str | None
    description: str | None


@dataclass(frozen=True)
class EspnEvent:
    id: str
    date: str | None
    name: str | None
    status: EspnStatus
    home: EspnCompetitor | None
    away: EspnCompetitor | None
    venue: str | None


@dataclass(frozen=True)
class EspnScoreboard:
    events: tuple[EspnEvent, ...]


@dataclass(frozen=True)
class EspnAthleteLine:
    athlete_id: str | None
    display_name: str | None
    jersey: str | None
    position: str | None
    stats: tuple[str, ...]


@dataclass(frozen=True)
class EspnPlayerGroup:
    team_id: str | None
    batting: tuple[EspnAthleteLine, ...]
    pitching: tuple[EspnAthleteLine, ...]


@dataclass(frozen=True)
class EspnPlay:
    id: str | None
    sequence_number: Any
    inning: Any
    home_away: str | None
    outs: Any
    balls: Any
    strikes: Any
    text: str | None
    short_text: str | None
    type: str | None
    scoring_play: bool
    wallclock: str | None


@dataclass(frozen=True)
class EspnSummary:
    has_boxscore: bool
    date: str | None
    status: EspnStatus
    venue: str | None
    attendance: int | None
    notes: tuple[str, ...]
    home: EspnCompetitor | None
    away: EspnCompetitor | None
    # team id -> {stat name: display value}
    team_stats: dict[str, dict[str, Any]]
    players: tuple[EspnPlayerGroup, ...]
    plays: tuple[EspnPlay, ...]


@dataclass(frozen=True)
class EspnStandingRow:
    team_name: str | None
    conference: str | None
    # stat name -> value (prefers numeric `value`, falls back to `displayValue`)
    stats: dict[str, Any]


@dataclass(frozen=True)
class EspnStandings:
    rows: tuple[EspnStandingRow, ...]


@dataclass(frozen=True)
class EspnRankingRow:
    current: Any
    previous: Any
    team_name: str | None
    record: str | None
    trend: str | None


@dataclass(frozen=True)
class EspnRankings:
    rows: tuple[EspnRankingRow, ...]


def _decode_status(raw: Any) -> EspnStatus:
    status_type = as_dict(as_dict(raw).get("type"))
    return EspnStatus(
        state=optional_str(status_type.get("state")),
        name=optional_str(status_type.get("name")),
        detail=optional_str(status_type.get("detail")),
        description=optional_str(status_type.get("description")),
    )


def _decode_competitor(raw: dict[str, Any]) -> EspnCompetitor:
    team = as_dict(raw.get("team"))

    logo = optional_str(team.get("logo"))
    if logo is None:
        logos = dict_items(team.get("logos"))
        logo = optional_str(logos[0].get("href")) if logos else None

    record = None
    for r in dict_items(raw.get("records")):
        if r.get("type") == "total":
            record = optional_str(r.get("summary"))
            break
    if record is None:
        record = optional_str(raw.get("record"))

    score = raw.get("score")
    if isinstance(score, dict):
        score = score.get("value", score.get("displayValue"))

    return EspnCompetitor(
        home_away=optional_str(raw.get("homeAway")),
        team_id=optional_str(team.get("id")) or optional_str(raw.get("id")),
        display_name=optional_str(team.get("displayName")),
        abbreviation=optional_str(team.get("abbreviation")),
        logo=logo,
        score=score,
        record=record,
        line_scores=tuple(
            ls.get("value", ls.get("displayValue")) for ls in dict_items(raw.get("linescores"))
        ),
    )


def _home_away(competitors: list[dict[str, Any]]) -> tuple[EspnCompetitor | None, EspnCompetitor | None]:
    decoded = [_decode_competitor(c) for c in competitors]
    home = next((c for c in decoded if c.home_away == "home"), None)
    away = next((c for c in decoded if c.home_away == "away"), None)
    return home, away


def decode_scoreboard(payload: Json) -> EspnScoreboard:
    events: list[EspnEvent] = []
    for raw in dict_items(require_list(payload, "events", context="espn scoreboard")):
        event_id = optional_str(raw.get("id"))
        if event_id is None:
            continue

        competitions = dict_items(raw.get("competitions"))
        competition = competitions[0] if competitions else {}
        home, away = _home_away(dict_items(competition.get("competitors")))

        status_raw = raw.get("status") or competition.get("status")
        venue = optional_str(as_dict(competition.get("venue")).get("fullName"))

        events.append(
            EspnEvent(
                id=event_id,
                date=optional_str(raw.get("date")) or optional_str(competition.get("date")),
                name=optional_str(raw.get("name")),
                status=_decode_status(status_raw),
                home=home,
                away=away,
                venue=venue,
            )
        )
    return EspnScoreboard(events=tuple(events))


def _decode_athletes(raw: Any) -> tuple[EspnAthleteLine, ...]:
    lines: list[EspnAthleteLine] = []
    for a in dict_items(raw):
        athlete = as_dict(a.get("athlete"))
        lines.append(
            EspnAthleteLine(
                athlete_id=optional_str(athlete.get("id")),
                display_name=optional_str(athlete.get("displayName")),
                jersey=optional_str(athlete.get("jersey")),
                position=optional_str(as_dict(athlete.get("position")).get("abbreviation")),
                stats=tuple(str(s) for s in as_list(a.get("stats")) if s is not None),
            )
        )
    return tuple(lines)


def _decode_play(raw: dict[str, Any]) -> EspnPlay:
    return EspnPlay(
        id=optional_str(raw.get("id")),
        sequence_number=raw.get("sequenceNumber"),
        inning=as_dict(raw.get("period")).get("number"),
        home_away=optional_str(raw.get("homeAway")),
        outs=raw.get("outsAfterPlay", raw.get("outs")),
        balls=raw.get("ballCount", as_dict(raw.get("resultCount")).get("balls")),
        strikes=raw.get("strikeCount", as_dict(raw.get("resultCount")).get("strikes")),
        text=optional_str(raw.get("text")),
        short_text=optional_str(raw.get("shortText")),
        type=optional_str(as_dict(raw.get("type")).get("text")),
        scoring_play=raw.get("scoringPlay") is True,
        wallclock=optional_str(raw.get("wallclock")),
    )


def decode_summary(payload: Json) -> EspnSummary:
    """Decode `/summary?event=` (box score and play by play share this payload)."""
    context = "espn summary"
    header = require_dict(payload, "header", context=context)
    boxscore = require_dict(payload, "boxscore", context=context)
    plays = require_list(payload, "plays", context=context)

    competitions = dict_items(header.get("competitions"))
    competition = competitions[0] if competitions else {}
    home, away = _home_away(dict_items(competition.get("competitors")))

    team_stats: dict[str, dict[str, Any]] = {}
    for t in dict_items(boxscore.get("teams")):
        team_id = optional_str(as_dict(t.get("team")).get("id"))
        if team_id is None:
            continue
        stats: dict[str, Any] = {}
        for s in dict_items(t.get("statistics")):
            name = optional_str(s.get("name"))
            if name is not None:
                stats[name] = s.get("displayValue", s.get("value"))
            # Newer payloads group batting/pitching totals one level deeper.
            for inner in dict_items(s.get("stats")):
                inner_name = optional_str(inner.get("name"))
                if inner_name is not None and inner_name not in stats:
                    stats[inner_name] = inner.get("displayValue", inner.get("value"))
        team_stats[team_id] = stats

    groups: list[EspnPlayerGroup] = []
    for p in dict_items(boxscore.get("players")):
        batting: tuple[EspnAthleteLine, ...] = ()
        pitching: tuple[EspnAthleteLine, ...] = ()
        for s in dict_items(p.get("statistics")):
            if s.get("type") == "batting":
                batting = _decode_athletes(s.get("athletes"))
            elif s.get("type") == "pitching":
                pitching = _decode_athletes(s.get("athletes"))
        groups.append(
            EspnPlayerGroup(
                team_id=optional_str(as_dict(p.get("team")).get("id")),
                batting=batting,
                pitching=pitching,
            )
        )

    season_year = optional_str(as_dict(header.get("season")).get("year"))

    return EspnSummary(
        has_boxscore=bool(boxscore),
        date=optional_str(competition.get("date")) or season_year,
        status=_decode_status(competition.get("status")),
        venue=optional_str(as_dict(competition.get("venue")).get("fullName")),
        attendance=optional_int(competition.get("attendance")),
        notes=tuple(
            h for h in (optional_str(n.get("headline")) for n in dict_items(competition.get("notes")))
            if h is not None
        ),
        home=home,
        away=away,
        team_stats=team_stats,
        players=tuple(groups),
        plays=tuple(_decode_play(p) for p in dict_items(plays)),
    )


def _stat_value(raw: dict[str, Any]) -> Any:
    value = raw.get("value")
    if value is None:
        value = raw.get("displayValue")
    return value


def _standing_rows(entries: Any, conference: str | None) -> list[EspnStandingRow]:
    rows: list[EspnStandingRow] = []
    for entry in dict_items(entries):
        team = as_dict(entry.get("team"))
        stats: dict[str, Any] = {}
        for s in dict_items(entry.get("stats")):
            name = optional_str(s.get("name")) or optional_str(s.get("type"))
            if name is not None:
                stats[name] = _stat_value(s)
            if s.get("name") == "streak" and s.get("displayValue") is not None:
                stats["streak"] = s.get("displayValue")
        # Flat entries (older payloads) carry the numbers on the entry itself.
        for key in ("wins", "losses", "winPercent", "pct", "gamesBehind"):
            if key in entry and key not in stats:
                stats[key] = entry[key]
        rows.append(
            EspnStandingRow(
                team_name=optional_str(team.get("displayName")) or optional_str(entry.get("displayName")),
                conference=conference or optional_str(team.get("conferenceId")),
                stats=stats,
            )
        )
    return rows


def decode_standings(payload: Json) -> EspnStandings:
    context = "espn standings"
    rows: list[EspnStandingRow] = []
    for child in dict_items(require_list(payload, "children", context=context)):
        conference = optional_str(child.get("name")) or optional_str(child.get("abbreviation"))
        standings = as_dict(child.get("standings"))
        rows.extend(_standing_rows(standings.get("entries"), conference))
        # Children without a standings block are themselves entries.
        if not standings and ("team" in child or "stats" in child):
            rows.extend(_standing_rows([child], None))

    if not rows:
        standings = require_dict(payload, "standings", context=context)
        rows.extend(_standing_rows(standings.get("entries"), None))

    return EspnStandings(rows=tuple(rows))


def decode_rankings(payload: Json) -> EspnRankings:
    polls = require_list(payload, "rankings", context="espn rankings")
    items = dict_items(polls)
    if items and "ranks" in items[0]:
        ranks = dict_items(items[0].get("ranks"))
    else:
        ranks = items

    rows: list[EspnRankingRow] = []
    for r in ranks:
        team = as_dict(r.get("team"))
        name = optional_str(team.get("displayName"))
        if name is None:
            parts = [optional_str(team.get("location")), optional_str(team.get("name"))]
            name = " ".join(p for p in parts if p) or None
        rows.append(
            EspnRankingRow(
                current=r.get("current"),
                previous=r.get("previous", r.get("previousRank")),
                team_name=name,
                record=optional_str(r.get("recordSummary")),
                trend=optional_str(r.get("trend")),
            )
        )
    return EspnRankings(rows=tuple(rows))
