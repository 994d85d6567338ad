"""Rich UI components for the CLI.

Keeps table/panel layout out of the command functions so several commands
can share them.
"""

from __future__ import annotations

from typing import Sequence

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import Anime, Category, Episode
from core.domain.presentation import get_best_title, get_image_url


def print_banner(console: Console) -> None:
    """Print the welcome banner (skipped in JSON mode)."""

    title = Text("kitsu-client", style="bold cyan")
    subtitle = Text("Kitsu anime catalogue • airing • upcoming • search", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


def _dash(value: object) -> str:
    return "-" if value is None or value == "" else str(value)


def build_anime_table(anime: Sequence[Anime], *, title: str = "Anime") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Status", style="white")
    table.add_column("Start", style="white", no_wrap=True)
    table.add_column("Episodes", justify="right")
    table.add_column("Rating", justify="right", style="green")
    table.add_column("Poster", style="magenta", overflow="fold")

    for item in anime:
        attrs = item.attributes
        table.add_row(
            item.id,
            get_best_title(attrs.titles, attrs.canonical_title),
            _dash(attrs.status.value if attrs.status else None),
            _dash(attrs.start_date),
            _dash(attrs.episode_count),
            _dash(attrs.average_rating),
            get_image_url(attrs.poster_image, "small"),
        )
    return table


def build_episode_table(episodes: Sequence[Episode], *, title: str = "Episodes") -> Table:
    table = Table(title=title)
    table.add_column("#", justify="right", no_wrap=True)
    table.add_column("Season", justify="right")
    table.add_column("Title", style="cyan")
    table.add_column("Airdate", no_wrap=True)
    table.add_column("Length", justify="right")
    table.add_column("ID", style="dim", no_wrap=True)

    for episode in episodes:
        attrs = episode.attributes
        table.add_row(
            _dash(attrs.number),
            _dash(attrs.season_number),
            get_best_title(attrs.titles, attrs.canonical_title),
            _dash(attrs.airdate),
            _dash(f"{attrs.length} min" if attrs.length else None),
            episode.id,
        )
    return table


def build_category_table(categories: Sequence[Category], *, title: str = "Categories") -> Table:
    table = Table(title=title)
    table.add_column("ID", style="dim", no_wrap=True)
    table.add_column("Title", style="cyan")
    table.add_column("Slug", style="white")
    table.add_column("NSFW", style="red")
    table.add_column("Children", justify="right")

    for category in categories:
        attrs = category.attributes
        table.add_row(
            category.id,
            _dash(attrs.title),
            _dash(attrs.slug),
            "yes" if attrs.nsfw else "",
            _dash(attrs.child_count),
        )
    return table


def build_anime_panel(anime: Anime) -> Panel:
    """Detail panel for a single anime."""

    attrs = anime.attributes
    title = Text(get_best_title(attrs.titles, attrs.canonical_title), style="bold yellow")
    body = Text()
    if attrs.synopsis:
        body.append(attrs.synopsis.strip() + "\n\n")
    body.append(f"Status: {_dash(attrs.status.value if attrs.status else None)}\n")
    body.append(f"Aired: {_dash(attrs.start_date)} → {_dash(attrs.end_date)}\n")
    body.append(f"Episodes: {_dash(attrs.episode_count)} × {_dash(attrs.episode_length)} min\n")
    body.append(f"Rating: {_dash(attrs.average_rating)}/100\n")
    if attrs.age_rating:
        body.append(f"Age rating: {attrs.age_rating} {attrs.age_rating_guide or ''}".rstrip() + "\n")
    body.append(f"\nPoster: {get_image_url(attrs.poster_image)}", style="dim")
    return Panel(body, title=title, border_style="yellow")


def build_episode_panel(episode: Episode) -> Panel:
    attrs = episode.attributes
    title = Text(get_best_title(attrs.titles, attrs.canonical_title), style="bold yellow")
    body = Text()
    if attrs.synopsis:
        body.append(attrs.synopsis.strip() + "\n\n")
    body.append(f"Episode {_dash(attrs.number)} (season {_dash(attrs.season_number)}, #{_dash(attrs.relative_number)})\n")
    body.append(f"Airdate: {_dash(attrs.airdate)}\n")
    media = episode.relationships.media.data
    if media is not None:
        body.append(f"Parent: {media.type}/{media.id}\n")
    body.append(f"\nThumbnail: {get_image_url(attrs.thumbnail, 'original')}", style="dim")
    return Panel(body, title=title, border_style="yellow")
