"""Configuration objects and resolution for the export pipelines."""

from __future__ import annotations

import enum
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional

from dotenv import dotenv_values

logger = logging.getLogger("flickr_export.config")

DEFAULT_ENV_FILE = ".env"
DEFAULT_ALBUM_OUTPUT = "output"
DEFAULT_EXTENSION = "md"
ALLOWED_EXTENSIONS = ("md", "txt")
PHOTOS_SUBDIR = "photos"

API_KEY_VAR = "FLICKR_API_KEY"
USER_ID_VAR = "FLICKR_USER_ID"
CONTENT_DIR_VAR = "CONTENT_DIR"


class ConfigError(Exception):
    """Raised when required settings are missing or invalid."""


class ErrorPolicy(str, enum.Enum):
    """What a pipeline does when a single album or photo fails."""

    SKIP = "skip"
    ABORT = "abort"


@dataclass
class Credentials:
    api_key: str
    user_id: str


@dataclass
class AlbumExportConfig:
    """Settings for writing one document per album."""

    credentials: Credentials
    output_dir: Path
    extension: str = DEFAULT_EXTENSION
    on_error: ErrorPolicy = ErrorPolicy.SKIP
    timeout: Optional[float] = None


@dataclass
class PhotoExportConfig:
    """Settings for writing one document per tagged photo."""

    credentials: Credentials
    content_dir: Path
    on_error: ErrorPolicy = ErrorPolicy.ABORT
    timeout: Optional[float] = None

    @property
    def output_dir(self) -> Path:
        return self.content_dir / PHOTOS_SUBDIR


def load_settings(env_file: Optional[Path] = None) -> Dict[str, str]:
    """Merge the key=value file with the process environment, environment first."""
    path = Path(env_file or DEFAULT_ENV_FILE)
    settings: Dict[str, str] = {}
    if path.is_file():
        settings.update(
            {key: value for key, value in dotenv_values(path).items() if value is not None}
        )
    else:
        logger.debug("No settings file at %s; using the environment only", path)
    settings.update(os.environ)
    return settings


def _pick(override: Optional[str], settings: Mapping[str, str], key: str) -> str:
    if override:
        return override.strip()
    return (settings.get(key) or "").strip()


def resolve_credentials(
    settings: Mapping[str, str],
    api_key: Optional[str] = None,
    user_id: Optional[str] = None,
) -> Credentials:
    """Resolve the API key and user id, preferring explicit overrides."""
    credentials = Credentials(
        api_key=_pick(api_key, settings, API_KEY_VAR),
        user_id=_pick(user_id, settings, USER_ID_VAR),
    )
    if not credentials.api_key or not credentials.user_id:
        raise ConfigError(
            "Missing Flickr credentials. Provide --api-key/--user-id or set "
            f"{API_KEY_VAR} and {USER_ID_VAR} in the environment or a .env file."
        )
    return credentials


def build_album_config(
    settings: Mapping[str, str],
    api_key: Optional[str] = None,
    user_id: Optional[str] = None,
    output: Optional[Path] = None,
    extension: str = DEFAULT_EXTENSION,
    on_error: ErrorPolicy = ErrorPolicy.SKIP,
    timeout: Optional[float] = None,
) -> AlbumExportConfig:
    credentials = resolve_credentials(settings, api_key, user_id)
    extension = extension.lstrip(".").lower()
    if extension not in ALLOWED_EXTENSIONS:
        raise ConfigError(
            f"Unsupported extension {extension!r}; expected one of {', '.join(ALLOWED_EXTENSIONS)}"
        )
    return AlbumExportConfig(
        credentials=credentials,
        output_dir=Path(output or DEFAULT_ALBUM_OUTPUT),
        extension=extension,
        on_error=on_error,
        timeout=timeout,
    )


def build_photo_config(
    settings: Mapping[str, str],
    api_key: Optional[str] = None,
    user_id: Optional[str] = None,
    content_dir: Optional[Path] = None,
    on_error: ErrorPolicy = ErrorPolicy.ABORT,
    timeout: Optional[float] = None,
) -> PhotoExportConfig:
    credentials = resolve_credentials(settings, api_key, user_id)
    directory = content_dir or Path(_pick(None, settings, CONTENT_DIR_VAR) or ".")
    return PhotoExportConfig(
        credentials=credentials,
        content_dir=Path(directory),
        on_error=on_error,
        timeout=timeout,
    )
