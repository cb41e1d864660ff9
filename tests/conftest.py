from __future__ import annotations

import threading
from collections.abc import Callable
from typing import Any

import httpx
import pytest

from ncaa_baseball.core.config import Settings
from ncaa_baseball.ingestion.connector import DataConnector
from ncaa_baseball.ingestion.providers.base.rate_limit import RateLimiter
from ncaa_baseball.ingestion.providers.espn.provider import make_espn_adapter
from ncaa_baseball.ingestion.providers.ncaa.provider import make_ncaa_adapter
from ncaa_baseball.unified.enums import DataSource

ESPN_BASE_URL = "https://espn.test/college-baseball"
NCAA_BASE_URL = "https://ncaa.test"


class FakeClock:
    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def monotonic(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    def wait(self, event: threading.Event, timeout_s: float) -> None:
        self.now += timeout_s


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def test_settings() -> Settings:
    return Settings(
        espn_base_url=ESPN_BASE_URL,
        ncaa_base_url=NCAA_BASE_URL,
        espn_cache_ttl_s=30.0,
        ncaa_cache_ttl_s=300.0,
    )


Handler = Callable[[httpx.Request], httpx.Response]


def make_connector(
    settings: Settings,
    *,
    espn: Handler,
    ncaa: Handler,
    sources: tuple[DataSource, ...] = (DataSource.ESPN, DataSource.NCAA),
) -> DataConnector:
    adapters = {
        DataSource.ESPN: make_espn_adapter(settings, transport=httpx.MockTransport(espn)),
        DataSource.NCAA: make_ncaa_adapter(
            settings,
            transport=httpx.MockTransport(ncaa),
            rate_limiter=RateLimiter(max_per_window=100),
        ),
    }
    return DataConnector(adapters, sources=sources)


@pytest.fixture
def espn_scoreboard_payload() -> dict[str, Any]:
    return {
        "events": [
            {
                "id": "401700001",
                "date": "2025-03-01T18:00Z",
                "name": "LSU Tigers at Texas Longhorns",
                "status": {
                    "type": {
                        "state": "in",
                        "name": "STATUS_IN_PROGRESS",
                        "detail": "Top 4th",
                        "description": "In Progress",
                    }
                },
                "competitions": [
                    {
                        "venue": {"fullName": "UFCU Disch-Falk Field"},
                        "competitors": [
                            {
                                "homeAway": "home",
                                "score": "3",
                                "team": {
                                    "id": "126",
                                    "displayName": "Texas Longhorns",
                                    "abbreviation": "TEX",
                                    "logos": [{"href": "https://a.espncdn.test/tex.png"}],
                                },
                                "records": [{"type": "total", "summary": "10-2"}],
                                "linescores": [{"value": 1}, {"value": 0}, {"value": 2}],
                            },
                            {
                                "homeAway": "away",
                                "score": "",
                                "team": {
                                    "id": "85",
                                    "displayName": "LSU Tigers",
                                    "abbreviation": "LSU",
                                },
                            },
                        ],
                    }
                ],
            }
        ]
    }


@pytest.fixture
def ncaa_scoreboard_payload() -> dict[str, Any]:
    return {
        "games": [
            {
                "game": {
                    "gameID": "6300001",
                    "title": "LSU Texas",
                    "startDate": "03-01-2025",
                    "startTimeEpoch": "1740852000",
                    "gameState": "live",
                    "currentPeriod": "4th",
                    "home": {
                        "score": "3",
                        "names": {"short": "Texas", "seo": "texas", "char6": "TEXAS"},
                        "currentRecord": "10-2",
                    },
                    "away": {
                        "score": "",
                        "names": {"short": "LSU", "seo": "lsu"},
                    },
                }
            }
        ]
    }


@pytest.fixture
def espn_summary_payload() -> dict[str, Any]:
    return {
        "header": {
            "competitions": [
                {
                    "date": "2025-03-01T18:00Z",
                    "attendance": 6512,
                    "venue": {"fullName": "UFCU Disch-Falk Field"},
                    "status": {
                        "type": {"state": "post", "name": "STATUS_FINAL", "detail": "Final"}
                    },
                    "notes": [{"headline": "Game 1 of series"}],
                    "competitors": [
                        {
                            "homeAway": "home",
                            "score": "5",
                            "team": {"id": "126", "displayName": "Texas Longhorns", "abbreviation": "TEX"},
                            "linescores": [{"value": 1}, {"value": 0}, {"value": 2}, {"value": 2}],
                        },
                        {
                            "homeAway": "away",
                            "score": "4",
                            "team": {"id": "85", "displayName": "LSU Tigers", "abbreviation": "LSU"},
                            "linescores": [{"value": 0}, {"value": 4}],
                        },
                    ],
                }
            ]
        },
        "boxscore": {
            "teams": [
                {
                    "team": {"id": "126"},
                    "statistics": [
                        {"name": "hits", "displayValue": "9"},
                        {"name": "errors", "displayValue": "1"},
                    ],
                },
                {
                    "team": {"id": "85"},
                    "statistics": [
                        {"name": "hits", "displayValue": "7"},
                        {"name": "errors", "displayValue": ""},
                    ],
                },
            ],
            "players": [
                {
                    "team": {"id": "126"},
                    "statistics": [
                        {
                            "type": "batting",
                            "athletes": [
                                {
                                    "athlete": {
                                        "id": "p1",
                                        "displayName": "Two Way",
                                        "jersey": "7",
                                        "position": {"abbreviation": "P"},
                                    },
                                    "stats": ["4", "1", "2", "1", "0", "1", ".333"],
                                }
                            ],
                        },
                        {
                            "type": "pitching",
                            "athletes": [
                                {
                                    "athlete": {"id": "p1", "displayName": "Two Way"},
                                    "stats": ["6.0", "5", "3", "3", "2", "8", "3.10", "97"],
                                },
                                {
                                    "athlete": {"id": "p2", "displayName": "Closer"},
                                    "stats": ["3.0", "2", "1", "1", "0", "4", "1.50"],
                                },
                            ],
                        },
                    ],
                }
            ],
        },
        "plays": [
            {
                "id": "p-1",
                "sequenceNumber": "1",
                "period": {"number": 1},
                "homeAway": "away",
                "outsAfterPlay": 1,
                "text": "Smith grounded out to ss.",
                "type": {"text": "Play Result"},
                "scoringPlay": False,
            },
            {
                "id": "p-2",
                "sequenceNumber": "2",
                "period": {"number": 1},
                "homeAway": "home",
                "outsAfterPlay": 0,
                "text": "Jones homered to left, Jones scored.",
                "type": {"text": "Home Run"},
                "scoringPlay": True,
                "wallclock": "2025-03-01T18:20:00Z",
            },
        ],
    }


@pytest.fixture
def ncaa_box_score_payload() -> dict[str, Any]:
    return {
        "meta": {
            "gameID": "6300001",
            "gameDate": "03-01-2025",
            "gameState": "final",
            "currentPeriod": "FINAL",
        },
        "teams": [
            {
                "names": {"char6": "LSU", "short": "LSU", "full": "Louisiana State", "seo": "lsu"},
                "score": "4",
                "stats": {"H": "7", "E": "0"},
                "periodScores": [{"period": "1", "score": "0"}, {"period": "2", "score": "4"}],
            },
            {
                "names": {"char6": "TEXAS", "short": "Texas", "full": "University of Texas", "seo": "texas"},
                "score": "5",
                "stats": {"hits": "9", "errors": "1"},
                "periodScores": [
                    {"period": "1", "score": "1"},
                    {"period": "2", "score": ""},
                    {"period": "3", "score": "2"},
                    {"period": "4", "score": "2"},
                ],
            },
        ],
    }


@pytest.fixture
def ncaa_play_by_play_payload() -> dict[str, Any]:
    return {
        "meta": {"gameID": "6300001", "gameDate": "03-01-2025", "gameState": "final"},
        "periods": [
            {
                "period": "1",
                "plays": [
                    {"description": "Smith grounded out to ss."},
                    {"description": "Jones homered to left field.", "score": "0-1"},
                ],
            },
            {"period": "2", "plays": [{"description": "Lee struck out swinging.", "score": " "}]},
        ],
    }


@pytest.fixture
def connector_factory(test_settings: Settings) -> Callable[..., DataConnector]:
    def factory(**kwargs: Any) -> DataConnector:
        return make_connector(test_settings, **kwargs)

    return factory
