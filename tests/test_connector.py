from __future__ import annotations

import datetime as dt
import threading
from typing import Any

import httpx
import pytest
from structlog.testing import capture_logs

from ncaa_baseball.ingestion.connector import DataConnector, build_connector
from ncaa_baseball.ingestion.dates import ProviderDates
from ncaa_baseball.ingestion.providers.base.cache import CacheStats
from ncaa_baseball.unified.enums import DataSource, GameState


def _fallbacks(logs: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [e for e in logs if e["event"] == "provider_fallback"]


class RecordingHandler:
    """MockTransport handler that records request URLs and answers by path suffix."""

    def __init__(self, routes: dict[str, Any] | None = None, *, status: int = 200) -> None:
        self.routes = routes or {}
        self.status = status
        self.requests: list[httpx.URL] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request.url)
        if self.status != 200:
            return httpx.Response(self.status, json={"error": "unavailable"})
        for suffix, body in self.routes.items():
            if request.url.path.endswith(suffix):
                return httpx.Response(200, json=body)
        return httpx.Response(404, json={"error": "not found"})


def test_first_non_empty_provider_short_circuits(
    connector_factory, espn_scoreboard_payload
) -> None:
    espn = RecordingHandler({"/scoreboard": espn_scoreboard_payload})
    ncaa = RecordingHandler()
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        games = connector.get_scoreboard("2025-03-01")

    assert [g.source for g in games] == [DataSource.ESPN]
    assert ncaa.requests == []
    assert _fallbacks(logs) == []


def test_failed_provider_falls_back_with_one_warning(
    connector_factory, ncaa_scoreboard_payload
) -> None:
    espn = RecordingHandler(status=500)
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        games = connector.get_scoreboard("2025-03-01")

    assert [g.id for g in games] == ["6300001"]
    assert games[0].source is DataSource.NCAA
    assert games[0].state is GameState.IN

    warnings = _fallbacks(logs)
    assert len(warnings) == 1
    assert warnings[0]["provider"] == "espn"
    assert warnings[0]["error_kind"] == "http"
    assert warnings[0]["log_level"] == "warning"


def test_empty_provider_result_falls_back(connector_factory, ncaa_scoreboard_payload) -> None:
    espn = RecordingHandler({"/scoreboard": {"events": []}})
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        games = connector.get_scoreboard("2025-03-01")

    assert len(games) == 1
    warnings = _fallbacks(logs)
    assert [(w["provider"], w["error_kind"]) for w in warnings] == [("espn", "empty")]


def test_exhausted_chain_returns_empty_values(connector_factory) -> None:
    connector = connector_factory(espn=RecordingHandler(status=503), ncaa=RecordingHandler(status=500))

    with capture_logs() as logs:
        assert connector.get_scoreboard("2025-03-01") == []
        assert connector.get_box_score("401700001") is None
        assert connector.get_play_by_play("401700001") == []
        assert connector.get_standings(2025) == []
        assert connector.get_rankings(1) == []

    providers = [w["provider"] for w in _fallbacks(logs)]
    assert providers == ["espn", "ncaa"] * 5


def test_network_failure_is_classified(connector_factory, ncaa_scoreboard_payload) -> None:
    def espn(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectTimeout("connect timed out", request=request)

    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        assert len(connector.get_scoreboard("2025-03-01")) == 1

    assert [w["error_kind"] for w in _fallbacks(logs)] == ["network"]


def test_malformed_payload_is_classified_as_parse(connector_factory, ncaa_scoreboard_payload) -> None:
    espn = RecordingHandler({"/scoreboard": {"events": {"unexpected": "object"}}})
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        assert len(connector.get_scoreboard("2025-03-01")) == 1

    assert [w["error_kind"] for w in _fallbacks(logs)] == ["parse"]


@pytest.mark.parametrize("date", ["2025-03-01", "20250301", "2025/03/01", dt.date(2025, 3, 1)])
def test_every_date_format_reaches_each_provider_in_its_own_format(
    connector_factory, ncaa_scoreboard_payload, date
) -> None:
    espn = RecordingHandler({"/scoreboard": {"events": []}})
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    connector.get_scoreboard(date)

    assert [u.params.get("dates") for u in espn.requests] == ["20250301"]
    assert [u.path for u in ncaa.requests] == ["/scoreboard/baseball/d1/2025/03/01/all-conf"]


def test_equivalent_dates_share_one_cached_request(
    connector_factory, espn_scoreboard_payload
) -> None:
    espn = RecordingHandler({"/scoreboard": espn_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=RecordingHandler())

    first = connector.get_scoreboard("2025-03-01")
    assert connector.get_scoreboard("20250301") == first
    assert connector.get_scoreboard("2025/03/01") == first

    assert len(espn.requests) == 1


def test_clear_all_caches_forces_refetch(connector_factory, espn_scoreboard_payload) -> None:
    espn = RecordingHandler({"/scoreboard": espn_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=RecordingHandler())

    connector.get_scoreboard("2025-03-01")
    connector.get_scoreboard("2025-03-01")
    assert len(espn.requests) == 1

    connector.clear_all_caches()
    assert connector.cache_stats()[DataSource.ESPN] == CacheStats(size=0, keys=())

    connector.get_scoreboard("2025-03-01")
    assert len(espn.requests) == 2


def test_pinned_source_skips_the_chain(connector_factory, ncaa_box_score_payload) -> None:
    espn = RecordingHandler()
    ncaa = RecordingHandler({"/boxscore": ncaa_box_score_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    box = connector.get_box_score("6300001", source="ncaa")

    assert box is not None
    assert box.source is DataSource.NCAA
    assert espn.requests == []
    assert [u.path for u in ncaa.requests] == ["/game/6300001/boxscore"]


def test_pinned_unknown_source_returns_empty(connector_factory) -> None:
    espn = RecordingHandler()
    ncaa = RecordingHandler()
    connector = connector_factory(espn=espn, ncaa=ncaa)

    with capture_logs() as logs:
        assert connector.get_play_by_play("1", source="statsbomb") == []

    assert espn.requests == [] and ncaa.requests == []
    assert [e["event"] for e in logs] == ["unknown_source"]


def test_box_score_and_play_by_play_share_one_summary_request(
    connector_factory, espn_summary_payload
) -> None:
    espn = RecordingHandler({"/summary": espn_summary_payload})
    connector = connector_factory(espn=espn, ncaa=RecordingHandler())

    box = connector.get_box_score("401700001")
    plays = connector.get_play_by_play("401700001")

    assert box is not None and box.source is DataSource.ESPN
    assert len(plays) == 2
    assert len(espn.requests) == 1
    assert espn.requests[0].params["event"] == "401700001"


def test_set_sources_changes_priority(
    connector_factory, espn_scoreboard_payload, ncaa_scoreboard_payload
) -> None:
    espn = RecordingHandler({"/scoreboard": espn_scoreboard_payload})
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    connector.set_sources(["ncaa", "espn"])
    games = connector.get_scoreboard("2025-03-01")

    assert games[0].source is DataSource.NCAA
    assert espn.requests == []


def test_get_sources_returns_a_copy(connector_factory) -> None:
    connector = connector_factory(espn=RecordingHandler(), ncaa=RecordingHandler())

    sources = connector.get_sources()
    sources.clear()

    assert connector.get_sources() == [DataSource.ESPN, DataSource.NCAA]


@pytest.mark.parametrize("sources", [[], ["espn", "statsbomb"]])
def test_set_sources_rejects_invalid_lists(connector_factory, sources) -> None:
    connector = connector_factory(espn=RecordingHandler(), ncaa=RecordingHandler())

    with pytest.raises(ValueError):
        connector.set_sources(sources)

    assert connector.get_sources() == [DataSource.ESPN, DataSource.NCAA]


def test_set_sources_rejects_unconfigured_provider() -> None:
    class OnlyAdapter:
        provider_key = DataSource.ESPN

    connector = DataConnector({DataSource.ESPN: OnlyAdapter()}, sources=["espn"])  # type: ignore[dict-item]

    with pytest.raises(ValueError, match="ncaa"):
        connector.set_sources(["ncaa"])


def test_unexpected_adapter_error_never_escapes() -> None:
    class BrokenAdapter:
        provider_key = DataSource.ESPN

        def rankings(self, week: int | None) -> list[Any]:
            raise KeyError("rank")

    class StaticAdapter:
        provider_key = DataSource.NCAA

        def rankings(self, week: int | None) -> list[str]:
            return ["Texas"]

    connector = DataConnector(
        {DataSource.ESPN: BrokenAdapter(), DataSource.NCAA: StaticAdapter()},  # type: ignore[dict-item]
    )

    with capture_logs() as logs:
        assert connector.get_rankings() == ["Texas"]

    assert [w["error_kind"] for w in _fallbacks(logs)] == ["unexpected"]


def test_get_recent_games_walks_back_from_end_date() -> None:
    seen: list[str] = []

    class DayAdapter:
        provider_key = DataSource.ESPN

        def scoreboard(self, dates: ProviderDates) -> list[str]:
            seen.append(dates.espn)
            return [] if dates.espn == "20250302" else [dates.espn]

    connector = DataConnector({DataSource.ESPN: DayAdapter()}, sources=["espn"])  # type: ignore[dict-item]

    games = connector.get_recent_games(days=3, end=dt.date(2025, 3, 3))

    assert seen == ["20250303", "20250302", "20250301"]
    assert games == ["20250303", "20250301"]
    assert connector.get_recent_games(days=0) == []


def test_concurrent_reads_during_source_changes(
    connector_factory, espn_scoreboard_payload, ncaa_scoreboard_payload
) -> None:
    espn = RecordingHandler({"/scoreboard": espn_scoreboard_payload})
    ncaa = RecordingHandler({"/all-conf": ncaa_scoreboard_payload})
    connector = connector_factory(espn=espn, ncaa=ncaa)

    results: list[int] = []
    errors: list[Exception] = []

    def reader() -> None:
        try:
            for _ in range(20):
                results.append(len(connector.get_scoreboard("2025-03-01")))
        except Exception as e:
            errors.append(e)

    def writer() -> None:
        for i in range(20):
            connector.set_sources(["ncaa", "espn"] if i % 2 else ["espn", "ncaa"])

    threads = [threading.Thread(target=reader) for _ in range(4)] + [threading.Thread(target=writer)]
    for t in threads:
        t.start()
    for t in threads:
        t.join(timeout=10.0)

    assert errors == []
    assert results == [1] * 80


def test_build_connector_uses_settings_order(test_settings) -> None:
    settings = test_settings.model_copy(update={"data_sources": "ncaa,espn"})

    with build_connector(settings, transport=httpx.MockTransport(RecordingHandler())) as connector:
        assert connector.get_sources() == [DataSource.NCAA, DataSource.ESPN]


@pytest.mark.parametrize("sources", [["statsbomb"], ["espn", "bogus"]])
def test_build_connector_rejects_sources_before_opening_clients(
    monkeypatch, test_settings, sources
) -> None:
    built: list[bool] = []

    def build_all(self) -> dict[DataSource, Any]:
        built.append(True)
        return {}

    monkeypatch.setattr(
        "ncaa_baseball.ingestion.providers.base.registry.AdapterRegistry.build_all", build_all
    )

    with pytest.raises(ValueError):
        build_connector(test_settings, sources=sources)

    assert built == []
