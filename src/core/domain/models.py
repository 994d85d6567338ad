"""Domain models (Pydantic v2).

Records mirror the Kitsu JSON:API envelope:
`{ id, type, links: { self }, attributes: {...}, relationships?: {...} }`.

Notes:
- Python attributes are snake_case; the upstream camelCase keys are kept as
  aliases, so `model_validate(payload)` reads the raw JSON and
  `model_dump(by_alias=True)` writes it back in the same shape.
- Records are frozen. Every fetch builds fresh values; nothing is shared.
- Nearly every attribute is optional because Kitsu returns `null` freely.
  Collection attributes read a `null` as empty. A single null must never
  make a whole list page undecodable.
"""

from __future__ import annotations

from enum import Enum
from typing import Generic, Literal, TypeVar

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

ImageSize = Literal["tiny", "small", "medium", "large", "original"]

Titles = dict[str, str | None]


class KitsuRecord(BaseModel):
    """Base for every upstream shape: immutable, alias-aware, lenient on extras."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)


class AnimeStatus(str, Enum):
    """Airing status values used by the `filter[status]` parameter."""

    CURRENT = "current"
    FINISHED = "finished"
    TBA = "tba"
    UNRELEASED = "unreleased"
    UPCOMING = "upcoming"


class KitsuImage(KitsuRecord):
    """Image URLs keyed by size tier. Any tier may be missing."""

    tiny: str | None = None
    small: str | None = None
    medium: str | None = None
    large: str | None = None
    original: str | None = None


class ResourceLinks(KitsuRecord):
    self_link: str | None = Field(
        default=None,
        alias="self",
        description="Canonical API URL of the resource.",
    )
    related: str | None = Field(
        default=None,
        description="API URL of the related collection (relationships only).",
    )


class RelationshipLinks(KitsuRecord):
    links: ResourceLinks = Field(default_factory=ResourceLinks)


class ResourceIdentifier(KitsuRecord):
    """JSON:API resource linkage (`{type, id}`)."""

    type: str = Field(..., min_length=1)
    id: str = Field(..., min_length=1)


class AnimeAttributes(KitsuRecord):
    """Everything Kitsu publishes about one anime."""

    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    slug: str | None = Field(
        default=None,
        description="URL identifier, e.g. 'attack-on-titan'.",
    )
    synopsis: str | None = None
    description: str | None = None
    cover_image_top_offset: int | None = Field(default=None, alias="coverImageTopOffset")

    titles: Titles = Field(
        default_factory=dict,
        description="Titles keyed by language tag (en, en_us, en_jp, ja_jp, ...).",
    )
    canonical_title: str | None = Field(default=None, alias="canonicalTitle")
    abbreviated_titles: list[str | None] = Field(default_factory=list, alias="abbreviatedTitles")

    average_rating: str | None = Field(
        default=None,
        alias="averageRating",
        description="Average rating out of 100, sent as a string.",
    )
    rating_frequencies: dict[str, str | None] = Field(default_factory=dict, alias="ratingFrequencies")
    user_count: int | None = Field(default=None, alias="userCount")
    favorites_count: int | None = Field(default=None, alias="favoritesCount")

    start_date: str | None = Field(default=None, alias="startDate")
    end_date: str | None = Field(default=None, alias="endDate")
    next_release: str | None = Field(default=None, alias="nextRelease")

    popularity_rank: int | None = Field(default=None, alias="popularityRank")
    rating_rank: int | None = Field(default=None, alias="ratingRank")
    age_rating: str | None = Field(default=None, alias="ageRating")
    age_rating_guide: str | None = Field(default=None, alias="ageRatingGuide")

    subtype: str | None = Field(
        default=None,
        description="TV, movie, OVA, ONA, special, music.",
    )
    status: AnimeStatus | None = None
    tba: str | None = None

    poster_image: KitsuImage | None = Field(default=None, alias="posterImage")
    cover_image: KitsuImage | None = Field(default=None, alias="coverImage")

    episode_count: int | None = Field(default=None, alias="episodeCount")
    episode_length: int | None = Field(
        default=None,
        alias="episodeLength",
        description="Minutes per episode.",
    )
    total_length: int | None = Field(
        default=None,
        alias="totalLength",
        description="Total runtime in minutes.",
    )
    youtube_video_id: str | None = Field(default=None, alias="youtubeVideoId")
    show_type: str | None = Field(default=None, alias="showType")
    nsfw: bool | None = None

    @field_validator("titles", "rating_frequencies", mode="before")
    @classmethod
    def _null_mapping(cls, value: object) -> object:
        return {} if value is None else value

    @field_validator("abbreviated_titles", mode="before")
    @classmethod
    def _null_list(cls, value: object) -> object:
        return [] if value is None else value


class AnimeRelationships(KitsuRecord):
    episodes: RelationshipLinks | None = None
    categories: RelationshipLinks | None = None


class Anime(KitsuRecord):
    """One anime resource. Relationships are links only, never embedded."""

    id: str = Field(..., min_length=1)
    type: str = Field(default="anime")
    links: ResourceLinks = Field(default_factory=ResourceLinks)
    attributes: AnimeAttributes = Field(default_factory=AnimeAttributes)
    relationships: AnimeRelationships | None = None


class EpisodeAttributes(KitsuRecord):
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    titles: Titles = Field(default_factory=dict)
    canonical_title: str | None = Field(default=None, alias="canonicalTitle")
    season_number: int | None = Field(default=None, alias="seasonNumber")
    number: int | None = Field(
        default=None,
        description="Absolute episode number across the whole series.",
    )
    relative_number: int | None = Field(
        default=None,
        alias="relativeNumber",
        description="Episode number within its season.",
    )
    synopsis: str | None = None
    airdate: str | None = None
    length: int | None = Field(default=None, description="Minutes.")
    thumbnail: KitsuImage | None = None

    @field_validator("titles", mode="before")
    @classmethod
    def _null_titles(cls, value: object) -> object:
        return {} if value is None else value


class MediaRelationship(RelationshipLinks):
    """Pointer from an episode to its parent media."""

    data: ResourceIdentifier | None = None


class EpisodeRelationships(KitsuRecord):
    media: MediaRelationship


class Episode(KitsuRecord):
    id: str = Field(..., min_length=1)
    type: str = Field(default="episodes")
    links: ResourceLinks = Field(default_factory=ResourceLinks)
    attributes: EpisodeAttributes = Field(default_factory=EpisodeAttributes)
    relationships: EpisodeRelationships


class CategoryAttributes(KitsuRecord):
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    title: str | None = Field(default=None, description="Genre name, e.g. 'Action'.")
    description: str | None = None
    slug: str | None = None
    nsfw: bool | None = None
    child_count: int | None = Field(default=None, alias="childCount")


class Category(KitsuRecord):
    id: str = Field(..., min_length=1)
    type: str = Field(default="categories")
    links: ResourceLinks | None = None
    attributes: CategoryAttributes = Field(default_factory=CategoryAttributes)


T = TypeVar("T", bound=KitsuRecord)


class ListMeta(KitsuRecord):
    count: int | None = Field(
        default=None,
        description="Total number of results available upstream (not just this page).",
    )


class PaginationLinks(KitsuRecord):
    first: str | None = None
    next: str | None = None
    last: str | None = None


class ListResponse(KitsuRecord, Generic[T]):
    """List envelope: one page of records plus count and pagination links."""

    data: list[T]
    meta: ListMeta = Field(default_factory=ListMeta)
    links: PaginationLinks = Field(default_factory=PaginationLinks)


class SingleResponse(KitsuRecord, Generic[T]):
    """Single-record envelope."""

    data: T
