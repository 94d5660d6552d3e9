"""Utility helpers for slugs, filenames and output paths."""

from __future__ import annotations

import re
from pathlib import Path

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
FILENAME_PATTERN = re.compile(r"[^a-z0-9\-_]+")


def slugify(value: str, fallback: str = "") -> str:
    """Lower-case ``value`` and collapse every non-alphanumeric run to a hyphen."""
    normalized = SLUG_PATTERN.sub("-", value.lower()).strip("-")
    return normalized or fallback


def sanitize_filename(value: str, fallback: str = "") -> str:
    """Like :func:`slugify` but keeps hyphens and underscores from the title."""
    normalized = FILENAME_PATTERN.sub("-", value.lower()).strip("-")
    return normalized or fallback


def unique_path(directory: Path, stem: str, extension: str = "md") -> Path:
    """Return ``stem.ext`` in ``directory``, or ``stem-N.ext`` for the first free N."""
    candidate = directory / f"{stem}.{extension}"
    counter = 1
    while candidate.exists():
        candidate = directory / f"{stem}-{counter}.{extension}"
        counter += 1
    return candidate
