"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from adapters.kitsu_api import build_url
from core.config import BASE_URL, AppSettings, get_settings

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        return False, str(exc) or type(exc).__name__
    return response.is_success, f"HTTP {response.status_code}"


@app.command()
def run() -> None:
    """Show the effective configuration and check that the API answers."""

    settings = get_settings()

    table = Table(title="kitsu-client doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    origin = "default" if settings.base_url == BASE_URL else "KITSU_BASE_URL"
    table.add_row("Base URL", "OK", f"{settings.base_url} ({origin})")

    if settings.http_timeout_seconds is None:
        table.add_row("Timeout", "DEFAULT", "httpx default")
    else:
        table.add_row("Timeout", "OK", f"{settings.http_timeout_seconds:g}s")

    table.add_row("User-Agent", "OK" if settings.user_agent else "NONE", settings.user_agent or "not sent")
    table.add_row("Log level", "OK", settings.log_level)

    check_url = build_url("/categories", {"page[limit]": 1}, settings=settings)
    ok_http, detail_http = asyncio.run(_check_http(check_url, settings))
    table.add_row("API connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not ok_http:
        raise typer.Exit(code=1)
