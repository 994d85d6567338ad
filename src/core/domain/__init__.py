"""Domain models and entities.

- Pure, immutable data structures (Pydantic v2) plus display helpers.
- The domain knows nothing about HTTP, the CLI or any SDK.
"""

from core.domain.models import (
    Anime,
    AnimeAttributes,
    AnimeStatus,
    Category,
    CategoryAttributes,
    Episode,
    EpisodeAttributes,
    ImageSize,
    KitsuImage,
    ListResponse,
    SingleResponse,
    Titles,
)
from core.domain.presentation import PLACEHOLDER_IMAGE_URL, UNKNOWN_TITLE, get_best_title, get_image_url

__all__ = [
    "Anime",
    "AnimeAttributes",
    "AnimeStatus",
    "Category",
    "CategoryAttributes",
    "Episode",
    "EpisodeAttributes",
    "ImageSize",
    "KitsuImage",
    "ListResponse",
    "PLACEHOLDER_IMAGE_URL",
    "SingleResponse",
    "Titles",
    "UNKNOWN_TITLE",
    "get_best_title",
    "get_image_url",
]
