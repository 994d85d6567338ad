import httpx
import pytest

from adapters import kitsu_api
from core.config import AppSettings, get_settings

API = "https://kitsu.io/api/edge"


def anime_resource(anime_id, title, **attributes):
    return {
        "id": anime_id,
        "type": "anime",
        "links": {"self": f"{API}/anime/{anime_id}"},
        "attributes": {
            "canonicalTitle": title,
            "titles": {"en_jp": title},
            "status": "current",
            "startDate": "2023-09-29",
            "episodeCount": 28,
            "averageRating": "90.12",
            "posterImage": {"small": f"https://media.kitsu.io/anime/{anime_id}/small.jpg"},
            **attributes,
        },
        "relationships": {
            "episodes": {"links": {"self": f"{API}/anime/{anime_id}/relationships/episodes",
                                   "related": f"{API}/anime/{anime_id}/episodes"}},
            "categories": {"links": {"self": f"{API}/anime/{anime_id}/relationships/categories",
                                     "related": f"{API}/anime/{anime_id}/categories"}},
        },
    }


def episode_resource(episode_id, number, anime_id="46474", with_media=True):
    media = {"links": {"self": f"{API}/episodes/{episode_id}/relationships/media",
                       "related": f"{API}/episodes/{episode_id}/media"}}
    if with_media:
        media["data"] = {"type": "anime", "id": anime_id}
    return {
        "id": episode_id,
        "type": "episodes",
        "links": {"self": f"{API}/episodes/{episode_id}"},
        "attributes": {
            "titles": {"en_us": f"Episode {number}"},
            "canonicalTitle": f"Episode {number}",
            "seasonNumber": 1,
            "number": number,
            "relativeNumber": number,
            "airdate": "2023-09-29",
            "length": 24,
        },
        "relationships": {"media": media},
    }


def category_resource(category_id, title):
    return {
        "id": category_id,
        "type": "categories",
        "links": {"self": f"{API}/categories/{category_id}"},
        "attributes": {
            "title": title,
            "description": f"{title} anime",
            "slug": title.lower(),
            "nsfw": False,
            "childCount": 0,
        },
    }


def list_envelope(data, count=None, with_next=False):
    links = {"first": f"{API}/anime?page[limit]=20&page[offset]=0",
             "last": f"{API}/anime?page[limit]=20&page[offset]=100"}
    if with_next:
        links["next"] = f"{API}/anime?page[limit]=20&page[offset]=20"
    return {"data": data, "meta": {"count": len(data) if count is None else count}, "links": links}


@pytest.fixture
def settings():
    return AppSettings(base_url=API, _env_file=None)


@pytest.fixture
def stub_api(monkeypatch):
    """Route every client built by kitsu_api through an httpx.MockTransport.

    Call the returned function with a handler `request -> httpx.Response`;
    it returns the list the issued requests are recorded into.
    """

    real_build = kitsu_api.build_async_client

    def install(handler):
        requests = []

        def recording(request):
            requests.append(request)
            return handler(request)

        transport = httpx.MockTransport(recording)
        monkeypatch.setattr(
            kitsu_api,
            "build_async_client",
            lambda settings=None, **kw: real_build(settings, transport=transport, **kw),
        )
        return requests

    return install


@pytest.fixture(autouse=True)
def fresh_default_settings():
    """Each test reads the default settings from its own environment."""

    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
