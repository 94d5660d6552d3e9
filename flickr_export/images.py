"""Size-variant selection for Flickr photos.

Flickr only returns the ``url_*`` extras that exist for a given photo, so
every reference is picked through a fixed fallback chain.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .models import AlbumPhoto, TaggedPhoto

logger = logging.getLogger("flickr_export.images")


@dataclass
class ImageVariants:
    """Medium and large references resolved for a gallery line."""

    medium: str
    large: str

    @property
    def complete(self) -> bool:
        return bool(self.medium and self.large)


def _first(*urls: str) -> str:
    for url in urls:
        if url:
            return url
    return ""


def resolve_variants(photo: AlbumPhoto) -> ImageVariants:
    """Pick large (h, b, o) and medium (m, w, large) for an album photo."""
    large = _first(photo.url_h, photo.url_b, photo.url_o)
    medium = _first(photo.url_m, photo.url_w, large)
    variants = ImageVariants(medium=medium, large=large)
    if not variants.complete:
        logger.warning(
            "Photo without medium or large size, emitting anyway: %s (%r)",
            photo.title,
            photo,
        )
    return variants


def choose_thumbnail(photo: TaggedPhoto) -> str:
    """Smallest available size: square, small, medium, large."""
    return _first(photo.url_q, photo.url_s, photo.url_m, photo.url_l)


def choose_image(photo: TaggedPhoto) -> str:
    """Largest available size: large, medium, small, square."""
    return _first(photo.url_l, photo.url_m, photo.url_s, photo.url_q)
