from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

from .enums import DataSource, GameState, HalfInning


def _plain(value: Any) -> Any:
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, dict):
        return {k: _plain(v) for k, v in value.items()}
    if isinstance(value, list | tuple):
        return [_plain(v) for v in value]
    return value


class _Serializable:
    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))  # type: ignore[call-overload]


@dataclass(frozen=True)
class TeamScore(_Serializable):
    id: str
    display_name: str
    abbreviation: str
    score: int = 0
    line_score: tuple[int, ...] = ()
    record: str | None = None
    logo: str | None = None


@dataclass(frozen=True)
class Game(_Serializable):
    id: str
    source: DataSource
    date: str
    title: str
    state: GameState
    status_detail: str
    home: TeamScore
    away: TeamScore
    venue: str | None = None


@dataclass(frozen=True)
class BoxScoreTeam(TeamScore):
    hits: int = 0
    errors: int = 0


@dataclass(frozen=True)
class BattingLine(_Serializable):
    at_bats: int = 0
    runs: int = 0
    hits: int = 0
    rbi: int = 0
    walks: int = 0
    strikeouts: int = 0
    avg: str = ".000"


@dataclass(frozen=True)
class PitchingLine(_Serializable):
    innings_pitched: str = "0.0"
    hits: int = 0
    runs: int = 0
    earned_runs: int = 0
    walks: int = 0
    strikeouts: int = 0
    era: str = "0.00"
    pitches: int | None = None


@dataclass(frozen=True)
class BoxScorePlayer(_Serializable):
    id: str
    display_name: str
    jersey: str | None = None
    position: str | None = None
    batting: BattingLine | None = None
    pitching: PitchingLine | None = None


@dataclass(frozen=True)
class BoxScore(_Serializable):
    source: DataSource
    game_id: str
    date: str
    status: GameState
    status_detail: str
    home: BoxScoreTeam
    away: BoxScoreTeam
    inning_count: int = 9
    venue: str | None = None
    attendance: int | None = None
    home_roster: tuple[BoxScorePlayer, ...] | None = None
    away_roster: tuple[BoxScorePlayer, ...] | None = None
    notes: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class PlayByPlayEvent(_Serializable):
    source: DataSource
    id: str
    sequence_number: int
    inning: int
    half: HalfInning
    outs: int
    text: str
    type: str
    scoring_play: bool
    balls: int | None = None
    strikes: int | None = None
    short_text: str | None = None
    timestamp: str | None = None
    # True when the provider does not say which half the play happened in
    # and `half` is a placeholder rather than observed data.
    half_inferred: bool = False


@dataclass(frozen=True)
class StandingEntry(_Serializable):
    source: DataSource
    team_name: str
    conference: str
    wins: int
    losses: int
    win_pct: float
    rank: int | None = None
    conf_wins: int | None = None
    conf_losses: int | None = None
    games_back: float | None = None
    streak: str | None = None


@dataclass(frozen=True)
class RankingEntry(_Serializable):
    source: DataSource
    rank: int
    team_name: str
    record: str
    previous_rank: int | None = None
    trend: str | None = None


def inning_count(*line_scores: tuple[int, ...]) -> int:
    return max([len(ls) for ls in line_scores] + [9])
