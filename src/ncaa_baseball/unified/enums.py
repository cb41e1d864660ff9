from __future__ import annotations

from enum import StrEnum


class DataSource(StrEnum):
    ESPN = "espn"
    NCAA = "ncaa"


class GameState(StrEnum):
    PRE = "pre"
    IN = "in"
    POST = "post"
    CANCELLED = "cancelled"


class HalfInning(StrEnum):
    TOP = "top"
    BOTTOM = "bottom"


# Provider vocabularies -> GameState. Lookups are on lower-cased values.
ESPN_STATE_MAP: dict[str, GameState] = {
    "pre": GameState.PRE,
    "in": GameState.IN,
    "post": GameState.POST,
}

ESPN_STATUS_NAME_MAP: dict[str, GameState] = {
    "status_canceled": GameState.CANCELLED,
    "status_cancelled": GameState.CANCELLED,
    "status_abandoned": GameState.CANCELLED,
    "status_forfeit": GameState.POST,
    "status_postponed": GameState.PRE,
    "status_rain_delay": GameState.IN,
    "status_scheduled": GameState.PRE,
    "status_in_progress": GameState.IN,
    "status_final": GameState.POST,
}

NCAA_STATE_MAP: dict[str, GameState] = {
    "pre": GameState.PRE,
    "live": GameState.IN,
    "final": GameState.POST,
    "cancelled": GameState.CANCELLED,
    "canceled": GameState.CANCELLED,
    "delayed": GameState.PRE,
    "postponed": GameState.PRE,
}


def map_espn_state(state: str | None, status_name: str | None = None) -> GameState:
    """Map ESPN `status.type.state` (+ optional `status.type.name`) to GameState.

    A known status name wins: ESPN reports cancelled and postponed games
    with state "post" or "pre", which would otherwise read as final or scheduled.
    """
    if status_name:
        by_name = ESPN_STATUS_NAME_MAP.get(status_name.strip().lower())
        if by_name is not None:
            return by_name
    if state:
        return ESPN_STATE_MAP.get(state.strip().lower(), GameState.PRE)
    return GameState.PRE


def map_ncaa_state(state: str | None) -> GameState:
    if not state:
        return GameState.PRE
    return NCAA_STATE_MAP.get(state.strip().lower(), GameState.PRE)
