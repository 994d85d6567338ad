"""Display helpers over already-fetched records.

Pure functions: no I/O, no logging. Empty strings count as missing values.
"""

from __future__ import annotations

from typing import Mapping

from core.domain.models import ImageSize, KitsuImage

UNKNOWN_TITLE = "Unknown Title"
PLACEHOLDER_IMAGE_URL = "https://via.placeholder.com/225x350?text=No+Image"

# Highest priority first.
TITLE_PREFERENCE: tuple[str, ...] = ("en", "en_us", "en_jp", "ja_jp")


def get_best_title(
    titles: Mapping[str, str | None] | None = None,
    canonical_title: str | None = None,
) -> str:
    """Pick the title to display.

    Order: canonical title, then English, English (US), romanized Japanese,
    Japanese, and finally `UNKNOWN_TITLE`.
    """

    if not titles and not canonical_title:
        return UNKNOWN_TITLE
    if canonical_title:
        return canonical_title

    for tag in TITLE_PREFERENCE:
        value = titles.get(tag) if titles else None
        if value:
            return value
    return UNKNOWN_TITLE


def get_image_url(image: KitsuImage | None = None, size: ImageSize = "medium") -> str:
    """Return the URL for `size`, falling back to medium, original, then a placeholder."""

    if image is None:
        return PLACEHOLDER_IMAGE_URL
    return getattr(image, size, None) or image.medium or image.original or PLACEHOLDER_IMAGE_URL
