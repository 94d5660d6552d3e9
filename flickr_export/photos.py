"""Tagged-photo export: one Markdown page per tagged Flickr photo."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from .client import FlickrClient
from .config import ErrorPolicy, PhotoExportConfig
from .markdown import compose_photo
from .models import ExportResult, TaggedPhoto
from .utils import slugify, unique_path

logger = logging.getLogger("flickr_export.photos")


def photo_slug(photo: TaggedPhoto) -> str:
    return slugify(photo.title, fallback=photo.id)


def write_photo(photo: TaggedPhoto, output_dir: Path) -> Optional[Path]:
    """Write ``photo`` to a free path in ``output_dir``; untagged photos are skipped."""
    if not photo.tags:
        logger.debug("Skipping untagged photo %s", photo.id)
        return None
    path = unique_path(output_dir, photo_slug(photo), "md")
    path.write_text(compose_photo(photo), encoding="utf-8")
    logger.info("Wrote: %s", path)
    return path


def export_photos(client: FlickrClient, config: PhotoExportConfig) -> ExportResult:
    """Page through all photos of the user and write the tagged ones.

    Decode or status errors while paging always abort. Write failures abort
    unless ``config.on_error`` is ``skip``.
    """
    output_dir = config.output_dir
    output_dir.mkdir(parents=True, exist_ok=True)

    result = ExportResult()
    for photo in client.fetch_photos_paged(config.credentials.user_id):
        try:
            path = write_photo(photo, output_dir)
        except OSError as exc:
            if config.on_error is ErrorPolicy.ABORT:
                raise
            logger.error("Skipping photo %s: %s", photo.id, exc)
            result.failed += 1
            continue
        if path is None:
            result.untagged += 1
        else:
            result.written.append(path)
    return result
