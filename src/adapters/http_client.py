"""httpx wrapper.

- Standardizes timeout and headers for every Kitsu request.
- Tests substitute a client built on `httpx.MockTransport`.
"""

from __future__ import annotations

from typing import Any

import httpx

from core.config import AppSettings, get_settings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an `httpx.AsyncClient` from settings.

    No headers are added unless `settings.user_agent` or `extra_headers` ask
    for them, and the httpx default timeout applies unless
    `settings.http_timeout_seconds` is set.
    """

    settings = settings or get_settings()
    headers: dict[str, str] = {}
    if settings.user_agent:
        headers["User-Agent"] = settings.user_agent
    if extra_headers:
        headers.update(extra_headers)

    kwargs: dict[str, Any] = {"follow_redirects": True, "headers": headers}
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout_seconds)
    if transport is not None:
        kwargs["transport"] = transport
    return httpx.AsyncClient(**kwargs)
