"""Command-line entry point for the Flickr exporters."""

from __future__ import annotations

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Iterable, Sequence

import requests

from .albums import export_albums
from .client import FlickrClient, FlickrError
from .config import (
    ALLOWED_EXTENSIONS,
    API_KEY_VAR,
    CONTENT_DIR_VAR,
    DEFAULT_ALBUM_OUTPUT,
    DEFAULT_ENV_FILE,
    DEFAULT_EXTENSION,
    USER_ID_VAR,
    ConfigError,
    ErrorPolicy,
    build_album_config,
    build_photo_config,
    load_settings,
)
from .models import ExportResult
from .photos import export_photos

logger = logging.getLogger("flickr_export.cli")


def _ensure_command_prefix(argv: Sequence[str], commands: Iterable[str]) -> Sequence[str]:
    if not argv:
        return ("albums",)
    first = argv[0]
    if first in commands or first in ("-h", "--help"):
        return argv
    return ("albums", *argv)


def _add_common_arguments(parser: argparse.ArgumentParser, default_policy: ErrorPolicy) -> None:
    parser.add_argument(
        "--api-key",
        default=None,
        help=f"Flickr API key (or set {API_KEY_VAR} in .env)",
    )
    parser.add_argument(
        "--user-id",
        default=None,
        help=f"Flickr user ID (or set {USER_ID_VAR} in .env)",
    )
    parser.add_argument(
        "--env-file",
        default=DEFAULT_ENV_FILE,
        type=Path,
        help="key=value file to read settings from",
    )
    parser.add_argument(
        "--on-error",
        choices=[policy.value for policy in ErrorPolicy],
        default=default_policy.value,
        help=f"What to do when one item fails (default: {default_policy.value})",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=None,
        help="HTTP timeout in seconds (default: none)",
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable verbose logging",
    )


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Export Flickr albums or tagged photos as static-site documents.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    albums_parser = subparsers.add_parser(
        "albums", help="Write one gallery document per album"
    )
    _add_common_arguments(albums_parser, ErrorPolicy.SKIP)
    albums_parser.add_argument(
        "--out",
        default=DEFAULT_ALBUM_OUTPUT,
        type=Path,
        help="Output directory for album files",
    )
    albums_parser.add_argument(
        "--ext",
        default=DEFAULT_EXTENSION,
        choices=ALLOWED_EXTENSIONS,
        help="File extension for output files",
    )

    photos_parser = subparsers.add_parser(
        "photos", help="Write one page per tagged photo"
    )
    _add_common_arguments(photos_parser, ErrorPolicy.ABORT)
    photos_parser.add_argument(
        "--content-dir",
        default=None,
        type=Path,
        help=f"Site content directory; pages go to <dir>/photos (or set {CONTENT_DIR_VAR})",
    )

    argv = list(sys.argv[1:] if argv is None else argv)
    argv = list(_ensure_command_prefix(argv, subparsers.choices.keys()))
    return parser.parse_args(argv)


def _report(result: ExportResult, elapsed: float) -> None:
    logger.info(
        "Finished in %.2fs (%d written, %d failed, %d untagged)",
        elapsed,
        len(result.written),
        result.failed,
        result.untagged,
    )


def _run_albums(args: argparse.Namespace) -> ExportResult:
    config = build_album_config(
        load_settings(args.env_file),
        api_key=args.api_key,
        user_id=args.user_id,
        output=args.out,
        extension=args.ext,
        on_error=ErrorPolicy(args.on_error),
        timeout=args.timeout,
    )
    client = FlickrClient(config.credentials.api_key, timeout=config.timeout)
    return export_albums(client, config)


def _run_photos(args: argparse.Namespace) -> ExportResult:
    config = build_photo_config(
        load_settings(args.env_file),
        api_key=args.api_key,
        user_id=args.user_id,
        content_dir=args.content_dir,
        on_error=ErrorPolicy(args.on_error),
        timeout=args.timeout,
    )
    client = FlickrClient(config.credentials.api_key, timeout=config.timeout)
    return export_photos(client, config)


def main(argv: Sequence[str] | None = None) -> None:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        force=True,
    )

    overall_start = time.perf_counter()
    try:
        if args.command == "albums":
            result = _run_albums(args)
        else:
            result = _run_photos(args)
    except ConfigError as exc:
        logger.error("%s", exc)
        sys.exit(1)
    except (FlickrError, requests.RequestException, OSError) as exc:
        logger.error("Export aborted: %s", exc)
        sys.exit(1)
    _report(result, time.perf_counter() - overall_start)


if __name__ == "__main__":
    main()
