"""Album export: one gallery document per Flickr photoset."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

import requests

from .client import FlickrClient, FlickrError
from .config import AlbumExportConfig, ErrorPolicy
from .markdown import compose_album
from .models import Album, AlbumPhoto, ExportResult
from .utils import sanitize_filename

logger = logging.getLogger("flickr_export.albums")


def album_path(album: Album, config: AlbumExportConfig) -> Path:
    """Later albums with the same derived name overwrite earlier ones."""
    stem = sanitize_filename(album.title, fallback=album.id)
    return config.output_dir / f"{stem}.{config.extension}"


def write_album(
    album: Album,
    photos: Sequence[AlbumPhoto],
    config: AlbumExportConfig,
) -> Path:
    path = album_path(album, config)
    path.write_text(compose_album(album, photos), encoding="utf-8")
    logger.info("Wrote %s", path)
    return path


def export_albums(client: FlickrClient, config: AlbumExportConfig) -> ExportResult:
    """Fetch every album of the user and write one document per album.

    Failing to list albums is fatal. Failures for a single album are logged and
    skipped unless ``config.on_error`` is ``abort``.
    """
    albums = client.fetch_albums(config.credentials.user_id)
    config.output_dir.mkdir(parents=True, exist_ok=True)
    logger.info("Found %d albums", len(albums))

    result = ExportResult()
    for index, album in enumerate(albums, start=1):
        logger.info("[%d/%d] Fetching '%s'...", index, len(albums), album.title)
        try:
            photos = client.fetch_album_photos(album.id)
            result.written.append(write_album(album, photos, config))
        except (requests.RequestException, FlickrError, OSError) as exc:
            if config.on_error is ErrorPolicy.ABORT:
                raise
            logger.error("Skipping album %s (%s): %s", album.id, album.title, exc)
            result.failed += 1
    return result
