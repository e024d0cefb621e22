from __future__ import annotations

from typing import NoReturn

import typer

from pitchside.cli.common import session_scope
from pitchside.core.config import settings
from pitchside.ingestion.errors import DataImportError
from pitchside.ingestion.providers.api_football.provider import (
    import_api_football_leagues,
    import_api_football_players,
    import_api_football_teams,
)
from pitchside.ingestion.providers.base.errors import ProviderError

app = typer.Typer(help="Ingest provider data into the local DB.")


def _fail(e: DataImportError | ProviderError) -> NoReturn:
    typer.echo(f"Import failed ({e.__class__.__name__}, status={e.http_status}): {e}", err=True)
    raise typer.Exit(code=1) from e


@app.command("api-football-players")
def ingest_api_football_players_cmd(
    season: int = typer.Option(..., "--season", help="Season year (e.g. 2021)."),
    league: int = typer.Option(..., "--league", help="API-Football league id (e.g. 39)."),
    team: int = typer.Option(..., "--team", help="API-Football team id (e.g. 33)."),
    page: int = typer.Option(1, "--page", help="Provider page to import (starting page)."),
    all_pages: bool = typer.Option(
        False,
        "--all-pages",
        help="Keep importing until the provider's last page.",
    ),
    max_pages: int | None = typer.Option(
        None,
        "--max-pages",
        help="Optional cap on pages imported with --all-pages.",
    ),
    show_errors: bool = typer.Option(
        False,
        "--show-errors/--no-show-errors",
        help="Print player_id + reason for each failed mapping.",
    ),
) -> None:
    """Fetch API-Football players and upsert players + player/team/league/season mappings."""

    try:
        with session_scope() as session:
            result = import_api_football_players(
                session,
                cfg=settings,
                season=season,
                league=league,
                team=team,
                page=page,
                all_pages=all_pages,
                max_pages=max_pages,
            )
    except (DataImportError, ProviderError) as e:
        _fail(e)

    typer.echo(
        " ".join(
            [
                f"Imported players season={season} league={league} team={team}:",
                f"pages_imported={result.pages_imported}",
                f"total_pages={result.total_pages}",
                f"imported={result.imported}",
                f"mappings_inserted={result.mappings_inserted}",
                f"mapping_errors={len(result.mapping_errors)}",
            ]
        )
    )

    for summary in result.pages:
        if summary.message:
            typer.echo(f"  page {summary.page}: {summary.message}")

    if show_errors:
        for error in result.mapping_errors:
            typer.echo(f"  player_id={error.player_id}: {error.reason}")


@app.command("api-football-teams")
def ingest_api_football_teams_cmd(
    league: int = typer.Option(..., "--league", help="API-Football league id (e.g. 39)."),
    season: int = typer.Option(..., "--season", help="Season year (e.g. 2021)."),
    show_errors: bool = typer.Option(
        False,
        "--show-errors/--no-show-errors",
        help="Print team_id + reason for each failed league link.",
    ),
) -> None:
    """Fetch a league's teams for a season and link them to the league season."""

    try:
        with session_scope() as session:
            summary = import_api_football_teams(
                session, cfg=settings, league=league, season=season
            )
    except (DataImportError, ProviderError) as e:
        _fail(e)

    typer.echo(
        f"Imported teams league={league} season={season}: imported={summary.imported} "
        f"mappings_inserted={summary.mappings_inserted} "
        f"mapping_errors={len(summary.mapping_errors)}"
    )
    if summary.message:
        typer.echo(f"  {summary.message}")
    if show_errors:
        for error in summary.mapping_errors:
            typer.echo(f"  team_id={error.team_id}: {error.reason}")


@app.command("api-football-leagues")
def ingest_api_football_leagues_cmd(
    league: int | None = typer.Option(None, "--league", help="API-Football league id."),
    season: int | None = typer.Option(None, "--season", help="Only leagues with this season."),
    country: str | None = typer.Option(None, "--country", help="Country name (e.g. England)."),
) -> None:
    """Fetch leagues by id or country and upsert them."""

    try:
        with session_scope() as session:
            summary = import_api_football_leagues(
                session, cfg=settings, league=league, season=season, country=country
            )
    except (DataImportError, ProviderError) as e:
        _fail(e)

    typer.echo(f"Imported leagues: imported={summary.imported}")
    if summary.message:
        typer.echo(f"  {summary.message}")
