import pytest
from pydantic import ValidationError

from core.domain.models import Anime, AnimeStatus, Category, Episode, ListResponse, SingleResponse
from conftest import anime_resource, category_resource, episode_resource, list_envelope


def test_anime_reads_camel_case_payload():
    anime = Anime.model_validate(
        anime_resource(
            "1",
            "Cowboy Bebop",
            episodeLength=25,
            nsfw=False,
            nextRelease=None,
            coverImage={"original": "https://img/cover.jpg"},
            someNewUpstreamField={"ignored": True},
        )
    )

    attrs = anime.attributes
    assert attrs.canonical_title == "Cowboy Bebop"
    assert attrs.titles == {"en_jp": "Cowboy Bebop"}
    assert attrs.status is AnimeStatus.CURRENT
    assert attrs.episode_length == 25
    assert attrs.cover_image.original == "https://img/cover.jpg"
    assert attrs.poster_image.medium is None
    assert anime.relationships.episodes.links.related.endswith("/anime/1/episodes")


def test_anime_dump_restores_upstream_keys():
    anime = Anime.model_validate(anime_resource("1", "Cowboy Bebop"))
    dumped = anime.model_dump(mode="json", by_alias=True)

    assert dumped["links"]["self"].endswith("/anime/1")
    assert dumped["attributes"]["canonicalTitle"] == "Cowboy Bebop"
    assert dumped["attributes"]["posterImage"]["small"].endswith("small.jpg")


def test_records_are_frozen():
    anime = Anime.model_validate(anime_resource("1", "Cowboy Bebop"))
    with pytest.raises(ValidationError):
        anime.id = "2"


def test_null_attributes_are_accepted():
    anime = Anime.model_validate(
        {
            "id": "3",
            "type": "anime",
            "links": {"self": "x"},
            "attributes": {"canonicalTitle": None, "status": None, "posterImage": None, "episodeCount": None},
        }
    )
    assert anime.attributes.poster_image is None
    assert anime.relationships is None


def test_unknown_status_is_rejected():
    with pytest.raises(ValidationError):
        Anime.model_validate(anime_resource("1", "x", status="airing"))


def test_episode_requires_media_relationship():
    payload = episode_resource("10", 1)
    del payload["relationships"]
    with pytest.raises(ValidationError):
        Episode.model_validate(payload)


def test_episode_parent_linkage():
    episode = Episode.model_validate(episode_resource("10", 4, anime_id="77"))
    assert episode.relationships.media.data.id == "77"
    assert episode.attributes.relative_number == 4
    assert episode.attributes.titles["en_us"] == "Episode 4"


def test_list_envelope_keeps_meta_and_links():
    envelope = ListResponse[Category].model_validate(
        list_envelope([category_resource("1", "Action"), category_resource("2", "Comedy")], count=217, with_next=True)
    )
    assert [c.id for c in envelope.data] == ["1", "2"]
    assert envelope.meta.count == 217
    assert envelope.links.next.endswith("offset]=20")
    assert envelope.links.first is not None


def test_list_envelope_without_next_link():
    envelope = ListResponse[Category].model_validate(list_envelope([]))
    assert envelope.data == []
    assert envelope.links.next is None


def test_single_envelope():
    envelope = SingleResponse[Category].model_validate({"data": category_resource("5", "Horror")})
    assert envelope.data.attributes.title == "Horror"
    assert envelope.data.attributes.child_count == 0


def test_null_collections_and_flags_are_accepted():
    anime = Anime.model_validate(
        anime_resource("4", "Monster", titles=None, abbreviatedTitles=None, ratingFrequencies=None, nsfw=None)
    )
    attrs = anime.attributes
    assert attrs.titles == {}
    assert attrs.abbreviated_titles == []
    assert attrs.rating_frequencies == {}
    assert attrs.nsfw is None


def test_null_items_inside_collections_are_kept():
    anime = Anime.model_validate(
        anime_resource("4", "Monster", abbreviatedTitles=["MON", None], ratingFrequencies={"2": "7", "4": None})
    )
    assert anime.attributes.abbreviated_titles == ["MON", None]
    assert anime.attributes.rating_frequencies == {"2": "7", "4": None}
    dumped = anime.model_dump(mode="json", by_alias=True)["attributes"]
    assert dumped["abbreviatedTitles"] == ["MON", None]


def test_null_episode_titles_and_category_nsfw():
    payload = episode_resource("10", 1)
    payload["attributes"]["titles"] = None
    assert Episode.model_validate(payload).attributes.titles == {}

    category = category_resource("1", "Action")
    category["attributes"]["nsfw"] = None
    assert Category.model_validate(category).attributes.nsfw is None
