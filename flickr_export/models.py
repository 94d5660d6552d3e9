"""Data models decoded from Flickr API responses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List


def _content(value: Any) -> str:
    """Unwrap Flickr's ``{"_content": ...}`` envelope fields."""
    if isinstance(value, dict):
        return str(value.get("_content") or "")
    if value is None:
        return ""
    return str(value)


@dataclass
class Album:
    """A photoset as returned by ``flickr.photosets.getList``."""

    id: str
    title: str
    description: str

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "Album":
        return cls(
            id=str(data.get("id", "")),
            title=_content(data.get("title")),
            description=_content(data.get("description")),
        )


@dataclass
class AlbumPhoto:
    """A photo listed inside an album, with the size variants Flickr exposed."""

    id: str
    title: str
    url_m: str = ""
    url_w: str = ""
    url_b: str = ""
    url_h: str = ""
    url_o: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "AlbumPhoto":
        return cls(
            id=str(data.get("id", "")),
            title=_content(data.get("title")),
            url_m=data.get("url_m") or "",
            url_w=data.get("url_w") or "",
            url_b=data.get("url_b") or "",
            url_h=data.get("url_h") or "",
            url_o=data.get("url_o") or "",
        )


@dataclass
class TaggedPhoto:
    """A photo returned by ``flickr.photos.search``."""

    id: str
    title: str
    description: str = ""
    tags: str = ""
    date_taken: str = ""
    url_q: str = ""
    url_s: str = ""
    url_m: str = ""
    url_l: str = ""

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> "TaggedPhoto":
        return cls(
            id=str(data.get("id", "")),
            title=_content(data.get("title")),
            description=_content(data.get("description")),
            tags=data.get("tags") or "",
            date_taken=data.get("datetaken") or "",
            url_q=data.get("url_q") or "",
            url_s=data.get("url_s") or "",
            url_m=data.get("url_m") or "",
            url_l=data.get("url_l") or "",
        )


@dataclass
class SearchPage:
    """One page of search results plus the server-reported page count."""

    page: int
    pages: int
    photos: List[TaggedPhoto] = field(default_factory=list)


@dataclass
class ExportResult:
    """Summary of a pipeline run."""

    written: List[Path] = field(default_factory=list)
    failed: int = 0
    untagged: int = 0
