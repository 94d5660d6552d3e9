"""Front matter and body rendering for exported documents."""

from __future__ import annotations

import datetime as dt
import html
import json
from typing import List, Optional, Sequence

from .images import choose_image, choose_thumbnail, resolve_variants
from .models import Album, AlbumPhoto, TaggedPhoto


def image_caption(title: str) -> str:
    """Captions are only shown for titles longer than a single word."""
    if " " not in title.strip():
        return ""
    return title


def escape_shortcode(value: str) -> str:
    return value.replace('"', '\\"')


def escape_title(value: str) -> str:
    return value.replace('"', "'")


def toml_string(value: str) -> str:
    """Quote as a TOML literal string, or a basic string when that is impossible."""
    if "'" in value or "\n" in value or "\r" in value:
        return json.dumps(value, ensure_ascii=False)
    return f"'{value}'"


def parse_tags(raw: str) -> List[str]:
    """Split Flickr's space-separated tag string, dropping empty tokens."""
    return [tag for tag in raw.strip().split(" ") if tag]


def gallery_line(photo: AlbumPhoto) -> str:
    """Render one ``gallery_image`` shortcode for an album photo."""
    variants = resolve_variants(photo)
    caption = escape_shortcode(image_caption(photo.title))
    return (
        f'{{{{% gallery_image title="{caption}" medium="{variants.medium}" '
        f'large="{variants.large}" original="{photo.url_o}" %}}}}'
    )


def compose_album(
    album: Album,
    photos: Sequence[AlbumPhoto],
    now: Optional[dt.datetime] = None,
) -> str:
    """Generate the album document: TOML front matter plus one line per photo."""
    timestamp = (now or dt.datetime.now().astimezone()).replace(microsecond=0).isoformat()
    cover = photos[0].url_m if photos else ""
    lines = [
        "+++",
        f"date = {toml_string(timestamp)}",
        "draft = false",
        f"title = {toml_string(album.title)}",
        f"description = {toml_string(html.escape(album.description))}",
        f"image = {toml_string(cover)}",
        "+++",
    ]
    lines.extend(gallery_line(photo) for photo in photos)
    return "\n".join(lines) + "\n"


def compose_photo(photo: TaggedPhoto, today: Optional[dt.date] = None) -> str:
    """Generate a tagged photo page with YAML front matter and its description."""
    date = photo.date_taken or (today or dt.date.today()).strftime("%Y-%m-%d")
    tags = ", ".join(json.dumps(tag, ensure_ascii=False) for tag in parse_tags(photo.tags))
    front_matter_lines = [
        "---",
        f'title: "{escape_title(photo.title)}"',
        f"date: {date}",
        f"flickr_id: {photo.id}",
        f"tags: [{tags}]",
        f"thumbnail: {choose_thumbnail(photo)}",
        f"image: {choose_image(photo)}",
        "---",
    ]
    return "\n".join(front_matter_lines) + "\n\n" + photo.description + "\n"
