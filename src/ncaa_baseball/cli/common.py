from __future__ import annotations

import json
from collections.abc import Iterator, Sequence
from contextlib import contextmanager
from typing import Any

import typer

from ncaa_baseball.core.config import settings
from ncaa_baseball.ingestion.connector import DataConnector, build_connector


@contextmanager
def connector_scope(sources: Sequence[str] | None = None) -> Iterator[DataConnector]:
    """
    Context-managed connector for CLI commands.
    Ensures provider HTTP clients are closed.
    """
    try:
        connector = build_connector(settings, sources=sources or None)
    except ValueError as e:
        raise typer.BadParameter(str(e), param_hint="--sources") from e
    try:
        yield connector
    finally:
        connector.close()


def parse_sources(value: str | None) -> list[str] | None:
    if not value:
        return None
    return [s.strip() for s in value.split(",") if s.strip()]


def echo_json(value: Any) -> None:
    if isinstance(value, list):
        payload: Any = [v.to_dict() for v in value]
    elif value is None:
        payload = None
    else:
        payload = value.to_dict()
    typer.echo(json.dumps(payload, indent=2))
