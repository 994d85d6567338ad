"""Kitsu API client.

Each public coroutine issues one GET against `AppSettings.base_url`, checks
the status, decodes the JSON:API envelope and returns its `data`.

Failure handling:
- Non-2xx, transport errors and undecodable bodies are logged and collapsed
  into the operation's empty value: `[]` for lists, `None` for lookups.
- So are invalid environment settings and input that cannot be
  percent-encoded; the URL is built inside the same guard.
- Blank input (empty search text, empty id) returns the empty value without
  touching the network.
- Nothing is retried and nothing is raised to the caller.
"""

from __future__ import annotations

import asyncio
import logging
from enum import Enum
from typing import Any, Mapping, Sequence
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from adapters.http_client import build_async_client
from core.config import AppSettings, get_settings
from core.domain.models import Anime, Category, Episode, ListResponse, SingleResponse, T

logger = logging.getLogger(__name__)

DEFAULT_PAGE_LIMIT = 20
CATEGORY_PAGE_LIMIT = 40
DEFAULT_RATE_LIMIT_DELAY = 0.7


class KitsuOperation(str, Enum):
    """Operation names used in log lines."""

    CURRENTLY_AIRING = "fetch_currently_airing_anime"
    UPCOMING = "fetch_upcoming_anime"
    SEARCH = "search_anime"
    ANIME_BY_ID = "fetch_anime_by_id"
    EPISODE_BY_ID = "fetch_episode_by_id"
    EPISODES_BY_ANIME = "fetch_episodes_by_anime_id"
    ANIME_CATEGORIES = "fetch_anime_categories"
    ALL_CATEGORIES = "fetch_all_categories"
    ANIME_BY_CATEGORY = "search_anime_by_category"


async def rate_limit_delay(seconds: float = DEFAULT_RATE_LIMIT_DELAY) -> None:
    """Sleep between calls to stay under the upstream rate limit.

    Opt-in: none of the fetch functions call it.
    """

    await asyncio.sleep(seconds)


def encode_component(value: str) -> str:
    """Percent-encode like JavaScript's `encodeURIComponent`."""

    return quote(value, safe="!~*'()")


def build_url(
    path: str,
    params: Mapping[str, str | int] | None = None,
    *,
    ids: Sequence[str] = (),
    settings: AppSettings | None = None,
) -> str:
    """Join `path` to the base URL and append `params` in insertion order.

    `{}` placeholders in `path` take `ids`, each stripped and encoded as a
    single path segment. Parameter names such as `filter[status]` are written
    verbatim; values go through `encode_component`.

    Raises `UnicodeEncodeError` for text that has no UTF-8 form (lone
    surrogates) and `pydantic.ValidationError` when the default settings are
    invalid.
    """

    settings = settings or get_settings()
    if ids:
        path = path.format(*(quote(value.strip(), safe="") for value in ids))
    url = f"{settings.base_url}/{path.lstrip('/')}"
    if params:
        url += "?" + "&".join(f"{key}={encode_component(str(value))}" for key, value in params.items())
    return url


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


def _label(operation: KitsuOperation, subject: str | None) -> str:
    return operation.value if subject is None else f"{operation.value}({subject!r})"


async def _get_json(
    path: str,
    params: Mapping[str, str | int] | None = None,
    *,
    ids: Sequence[str] = (),
    operation: KitsuOperation,
    subject: str | None,
    settings: AppSettings | None,
    client: httpx.AsyncClient | None,
) -> Any | None:
    label = _label(operation, subject)

    try:
        settings = settings or get_settings()
        url = build_url(path, params, ids=ids, settings=settings)
    except (ValidationError, UnicodeEncodeError) as exc:
        logger.warning("%s: cannot build the request: %s", label, exc)
        return None

    try:
        if client is None:
            async with build_async_client(settings) as own_client:
                response = await own_client.get(url)
        else:
            response = await client.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("%s: request to %s failed: %s", label, url, exc)
        return None

    if response.status_code == 404:
        logger.info("%s: not found (HTTP 404)", label)
        return None
    if not response.is_success:
        logger.warning("%s: API error HTTP %s %s", label, response.status_code, response.reason_phrase)
        return None

    try:
        return response.json()
    except ValueError as exc:
        logger.warning("%s: response body is not valid JSON: %s", label, exc)
        return None


async def _fetch_list(
    model: type[T],
    path: str,
    params: Mapping[str, str | int] | None = None,
    *,
    ids: Sequence[str] = (),
    operation: KitsuOperation,
    subject: str | None = None,
    settings: AppSettings | None,
    client: httpx.AsyncClient | None,
) -> list[T]:
    payload = await _get_json(
        path, params, ids=ids, operation=operation, subject=subject, settings=settings, client=client
    )
    if payload is None:
        return []
    try:
        envelope = ListResponse[model].model_validate(payload)
    except ValidationError as exc:
        logger.warning("%s: unexpected list envelope: %s", _label(operation, subject), exc)
        return []
    logger.debug("%s: %d of %s results", operation.value, len(envelope.data), envelope.meta.count)
    return envelope.data


async def _fetch_single(
    model: type[T],
    path: str,
    params: Mapping[str, str | int] | None = None,
    *,
    ids: Sequence[str] = (),
    operation: KitsuOperation,
    subject: str,
    settings: AppSettings | None,
    client: httpx.AsyncClient | None,
) -> T | None:
    payload = await _get_json(
        path, params, ids=ids, operation=operation, subject=subject, settings=settings, client=client
    )
    if payload is None:
        return None
    try:
        return SingleResponse[model].model_validate(payload).data
    except ValidationError as exc:
        logger.warning("%s: unexpected envelope: %s", _label(operation, subject), exc)
        return None


def _airing_params(status: str, sort: str) -> dict[str, str | int]:
    return {"filter[status]": status, "sort": sort, "page[limit]": DEFAULT_PAGE_LIMIT, "include": "categories"}


async def fetch_currently_airing_anime(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Anime]:
    """Anime currently airing, most recent start date first."""

    return await _fetch_list(
        Anime,
        "/anime",
        _airing_params("current", "-startDate"),
        operation=KitsuOperation.CURRENTLY_AIRING,
        settings=settings,
        client=client,
    )


async def fetch_upcoming_anime(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Anime]:
    """Announced anime, soonest start date first."""

    return await _fetch_list(
        Anime,
        "/anime",
        _airing_params("upcoming", "startDate"),
        operation=KitsuOperation.UPCOMING,
        settings=settings,
        client=client,
    )


async def search_anime(
    query: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Anime]:
    """Full-text search on titles. Blank queries return `[]` without a request."""

    if _is_blank(query):
        return []
    return await _fetch_list(
        Anime,
        "/anime",
        {"filter[text]": query, "page[limit]": DEFAULT_PAGE_LIMIT},
        operation=KitsuOperation.SEARCH,
        subject=query,
        settings=settings,
        client=client,
    )


async def fetch_anime_by_id(
    anime_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Anime | None:
    if _is_blank(anime_id):
        logger.debug("%s: empty id, skipping request", KitsuOperation.ANIME_BY_ID.value)
        return None
    return await _fetch_single(
        Anime,
        "/anime/{}",
        ids=(anime_id,),
        operation=KitsuOperation.ANIME_BY_ID,
        subject=anime_id,
        settings=settings,
        client=client,
    )


async def fetch_episode_by_id(
    episode_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> Episode | None:
    """One episode; `include=media` asks Kitsu for the parent anime linkage."""

    if _is_blank(episode_id):
        logger.debug("%s: empty id, skipping request", KitsuOperation.EPISODE_BY_ID.value)
        return None
    return await _fetch_single(
        Episode,
        "/episodes/{}",
        {"include": "media"},
        ids=(episode_id,),
        operation=KitsuOperation.EPISODE_BY_ID,
        subject=episode_id,
        settings=settings,
        client=client,
    )


async def fetch_episodes_by_anime_id(
    anime_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Episode]:
    """First page of episodes for an anime, ordered by episode number."""

    if _is_blank(anime_id):
        logger.debug("%s: empty id, skipping request", KitsuOperation.EPISODES_BY_ANIME.value)
        return []
    return await _fetch_list(
        Episode,
        "/anime/{}/episodes",
        {"sort": "number", "page[limit]": DEFAULT_PAGE_LIMIT},
        ids=(anime_id,),
        operation=KitsuOperation.EPISODES_BY_ANIME,
        subject=anime_id,
        settings=settings,
        client=client,
    )


async def fetch_anime_categories(
    anime_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Category]:
    if _is_blank(anime_id):
        logger.debug("%s: empty id, skipping request", KitsuOperation.ANIME_CATEGORIES.value)
        return []
    return await _fetch_list(
        Category,
        "/anime/{}/categories",
        ids=(anime_id,),
        operation=KitsuOperation.ANIME_CATEGORIES,
        subject=anime_id,
        settings=settings,
        client=client,
    )


async def fetch_all_categories(
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Category]:
    """First 40 categories, alphabetical."""

    return await _fetch_list(
        Category,
        "/categories",
        {"page[limit]": CATEGORY_PAGE_LIMIT, "sort": "title"},
        operation=KitsuOperation.ALL_CATEGORIES,
        settings=settings,
        client=client,
    )


async def search_anime_by_category(
    category_id: str,
    *,
    settings: AppSettings | None = None,
    client: httpx.AsyncClient | None = None,
) -> list[Anime]:
    if _is_blank(category_id):
        logger.debug("%s: empty id, skipping request", KitsuOperation.ANIME_BY_CATEGORY.value)
        return []
    return await _fetch_list(
        Anime,
        "/categories/{}/anime",
        {"page[limit]": DEFAULT_PAGE_LIMIT},
        ids=(category_id,),
        operation=KitsuOperation.ANIME_BY_CATEGORY,
        subject=category_id,
        settings=settings,
        client=client,
    )


__all__ = [
    "CATEGORY_PAGE_LIMIT",
    "DEFAULT_PAGE_LIMIT",
    "DEFAULT_RATE_LIMIT_DELAY",
    "KitsuOperation",
    "build_url",
    "encode_component",
    "fetch_all_categories",
    "fetch_anime_by_id",
    "fetch_anime_categories",
    "fetch_currently_airing_anime",
    "fetch_episode_by_id",
    "fetch_episodes_by_anime_id",
    "fetch_upcoming_anime",
    "rate_limit_delay",
    "search_anime",
    "search_anime_by_category",
]
