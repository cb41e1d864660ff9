from __future__ import annotations

import typer

from ncaa_baseball.cli.common import connector_scope, echo_json, parse_sources

app = typer.Typer(no_args_is_help=True, help="NCAA baseball data from ESPN and the NCAA API.")

SourcesOption = typer.Option(
    None,
    "--sources",
    help="Comma-separated provider priority (e.g. espn,ncaa). Defaults to settings.",
)
SourceOption = typer.Option(
    None,
    "--source",
    help="Pin a single provider (espn or ncaa) and skip fallback.",
)


@app.command("scoreboard")
def scoreboard_cmd(
    date: str | None = typer.Option(
        None, "--date", help="YYYY-MM-DD, YYYYMMDD or YYYY/MM/DD (default today)."
    ),
    sources: str | None = SourcesOption,
) -> None:
    """Games for one day."""

    with connector_scope(parse_sources(sources)) as connector:
        echo_json(connector.get_scoreboard(date))


@app.command("recent")
def recent_cmd(
    days: int = typer.Option(7, "--days", min=1, help="Number of days, ending today."),
    sources: str | None = SourcesOption,
) -> None:
    """Games for the last N days, newest first."""

    with connector_scope(parse_sources(sources)) as connector:
        echo_json(connector.get_recent_games(days))


@app.command("box-score")
def box_score_cmd(
    game_id: str = typer.Argument(..., help="Provider game id."),
    source: str | None = SourceOption,
    sources: str | None = SourcesOption,
) -> None:
    """Box score for one game."""

    with connector_scope(parse_sources(sources)) as connector:
        box = connector.get_box_score(game_id, source=source)
    echo_json(box)
    if box is None:
        raise typer.Exit(code=1)


@app.command("play-by-play")
def play_by_play_cmd(
    game_id: str = typer.Argument(..., help="Provider game id."),
    source: str | None = SourceOption,
    sources: str | None = SourcesOption,
) -> None:
    """Play-by-play events for one game."""

    with connector_scope(parse_sources(sources)) as connector:
        echo_json(connector.get_play_by_play(game_id, source=source))


@app.command("standings")
def standings_cmd(
    season: int | None = typer.Option(None, "--season", help="Season year (e.g. 2025)."),
    source: str | None = SourceOption,
    sources: str | None = SourcesOption,
) -> None:
    """Conference standings."""

    with connector_scope(parse_sources(sources)) as connector:
        echo_json(connector.get_standings(season, source=source))


@app.command("rankings")
def rankings_cmd(
    week: int | None = typer.Option(None, "--week", help="Poll week (default latest/1)."),
    source: str | None = SourceOption,
    sources: str | None = SourcesOption,
) -> None:
    """Top-25 rankings."""

    with connector_scope(parse_sources(sources)) as connector:
        echo_json(connector.get_rankings(week, source=source))


@app.command("sources")
def sources_cmd(sources: str | None = SourcesOption) -> None:
    """Print the provider priority order in effect."""

    with connector_scope(parse_sources(sources)) as connector:
        typer.echo(",".join(s.value for s in connector.get_sources()))
