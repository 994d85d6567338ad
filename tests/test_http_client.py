import asyncio

import httpx

from adapters.http_client import build_async_client
from core.config import AppSettings


def test_no_custom_headers_by_default():
    client = build_async_client(AppSettings(_env_file=None, user_agent=None))
    try:
        assert client.headers["User-Agent"].startswith("python-httpx/")
        assert client.timeout == httpx.Timeout(5.0)
        assert client.follow_redirects is True
    finally:
        asyncio.run(client.aclose())


def test_settings_drive_user_agent_and_timeout():
    client = build_async_client(
        AppSettings(_env_file=None, user_agent="kitsu-test/0.1", http_timeout_seconds=12),
        extra_headers={"Accept": "application/vnd.api+json"},
    )
    try:
        assert client.headers["User-Agent"] == "kitsu-test/0.1"
        assert client.headers["Accept"] == "application/vnd.api+json"
        assert client.timeout == httpx.Timeout(12)
    finally:
        asyncio.run(client.aclose())


def test_transport_is_used():
    def handler(request):
        return httpx.Response(200, json={"ok": True})

    async def scenario():
        async with build_async_client(AppSettings(_env_file=None), transport=httpx.MockTransport(handler)) as client:
            response = await client.get("https://kitsu.io/api/edge/anime")
        return response.json()

    assert asyncio.run(scenario()) == {"ok": True}
