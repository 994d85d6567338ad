"""Command line interface (Typer).

One command per API operation. Results render as Rich tables; `--json`
prints the records with their upstream keys instead.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Callable, Optional, Sequence

import typer
from rich.console import Console, RenderableType

from adapters.http_client import build_async_client
from adapters.json_exporter import dumps, export_records_json, records_to_json, to_payload
from adapters.kitsu_api import (
    fetch_all_categories,
    fetch_anime_by_id,
    fetch_anime_categories,
    fetch_currently_airing_anime,
    fetch_episode_by_id,
    fetch_episodes_by_anime_id,
    fetch_upcoming_anime,
    search_anime,
    search_anime_by_category,
)
from cli import doctor
from cli.ui_components import (
    build_anime_panel,
    build_anime_table,
    build_category_table,
    build_episode_panel,
    build_episode_table,
    print_banner,
)
from core.config import AppSettings, get_settings
from core.domain.models import Anime, KitsuRecord
from core.logging_setup import setup_logging

app = typer.Typer(no_args_is_help=True, help="Browse the Kitsu anime catalogue from the terminal.")
app.add_typer(doctor.app, name="doctor")

_console = Console()
_status_console = Console(stderr=True)

JSON_OPTION = typer.Option(False, "--json", help="Print records as JSON instead of a table.")
OUTPUT_OPTION = typer.Option(None, "--output", "-o", help="Also write the JSON records to this file.")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging on stderr."),
) -> None:
    settings = get_settings()
    setup_logging("DEBUG" if verbose else settings.log_level)


def _emit_list(
    records: Sequence[KitsuRecord],
    *,
    as_json: bool,
    output: Optional[Path],
    render: Callable[[Sequence], RenderableType],
) -> None:
    if output is not None:
        path = export_records_json(records=records, output_path=output)
        _status_console.print(f"[green]Saved {len(records)} record(s) to:[/green] {path}")
    if as_json:
        typer.echo(records_to_json(records))
        return
    if not records:
        _console.print("[dim]No results.[/dim]")
        return
    _console.print(render(records))


def _emit_single(
    record: Optional[KitsuRecord],
    *,
    as_json: bool,
    output: Optional[Path],
    render: Callable[[KitsuRecord], RenderableType],
    missing: str,
) -> None:
    if output is not None and record is not None:
        path = export_records_json(records=record, output_path=output)
        _status_console.print(f"[green]Saved record to:[/green] {path}")
    if as_json:
        typer.echo(records_to_json(record))
    elif record is None:
        _console.print(f"[yellow]{missing}[/yellow]")
    else:
        _console.print(render(record))
    if record is None:
        raise typer.Exit(code=1)


@app.command()
def airing(as_json: bool = JSON_OPTION, output: Optional[Path] = OUTPUT_OPTION) -> None:
    """Anime currently airing, newest first."""

    items = asyncio.run(fetch_currently_airing_anime())
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_anime_table(r, title="Currently airing"))


@app.command()
def upcoming(as_json: bool = JSON_OPTION, output: Optional[Path] = OUTPUT_OPTION) -> None:
    """Announced anime, soonest first."""

    items = asyncio.run(fetch_upcoming_anime())
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_anime_table(r, title="Upcoming"))


@app.command()
def search(
    query: str = typer.Argument(..., help="Text to search in titles."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Search anime by title."""

    items = asyncio.run(search_anime(query))
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_anime_table(r, title=f"Search: {query}"))


@app.command()
def anime(
    anime_id: str = typer.Argument(..., help="Kitsu anime id."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Details of one anime."""

    record = asyncio.run(fetch_anime_by_id(anime_id))
    _emit_single(
        record,
        as_json=as_json,
        output=output,
        render=build_anime_panel,
        missing=f"No anime found for id {anime_id}.",
    )


@app.command()
def episode(
    episode_id: str = typer.Argument(..., help="Kitsu episode id."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Details of one episode."""

    record = asyncio.run(fetch_episode_by_id(episode_id))
    _emit_single(
        record,
        as_json=as_json,
        output=output,
        render=build_episode_panel,
        missing=f"No episode found for id {episode_id}.",
    )


@app.command()
def episodes(
    anime_id: str = typer.Argument(..., help="Kitsu anime id."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """First page of episodes for an anime."""

    items = asyncio.run(fetch_episodes_by_anime_id(anime_id))
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_episode_table(r, title=f"Episodes of {anime_id}"))


@app.command()
def categories(
    anime_id: Optional[str] = typer.Option(None, "--anime", help="Only the categories of this anime."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """All categories, or the categories of one anime."""

    if anime_id is None:
        items = asyncio.run(fetch_all_categories())
        title = "Categories"
    else:
        items = asyncio.run(fetch_anime_categories(anime_id))
        title = f"Categories of {anime_id}"
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_category_table(r, title=title))


@app.command(name="by-category")
def by_category(
    category_id: str = typer.Argument(..., help="Kitsu category id."),
    as_json: bool = JSON_OPTION,
    output: Optional[Path] = OUTPUT_OPTION,
) -> None:
    """Anime in one category."""

    items = asyncio.run(search_anime_by_category(category_id))
    _emit_list(items, as_json=as_json, output=output, render=lambda r: build_anime_table(r, title=f"Category {category_id}"))


async def _fetch_overview(settings: AppSettings) -> tuple[list[Anime], list[Anime]]:
    async with build_async_client(settings) as client:
        current, announced = await asyncio.gather(
            fetch_currently_airing_anime(settings=settings, client=client),
            fetch_upcoming_anime(settings=settings, client=client),
        )
    return current, announced


@app.command()
def overview(as_json: bool = JSON_OPTION) -> None:
    """Airing and upcoming anime, fetched concurrently."""

    current, announced = asyncio.run(_fetch_overview(get_settings()))
    if as_json:
        typer.echo(dumps({"current": to_payload(current), "upcoming": to_payload(announced)}))
        return

    print_banner(_console)
    for records, title in ((current, "Currently airing"), (announced, "Upcoming")):
        if records:
            _console.print(build_anime_table(records, title=title))
        else:
            _console.print(f"[dim]{title}: no results.[/dim]")


def run() -> None:
    app()
