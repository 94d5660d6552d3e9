"""End-to-end tests for the album exporter."""

from pathlib import Path

import pytest
import requests

from conftest import FakeClient
from flickr_export.albums import album_path, export_albums
from flickr_export.client import DecodeError
from flickr_export.config import ErrorPolicy
from flickr_export.models import Album, AlbumPhoto


def _photos():
    return [AlbumPhoto(id="1", title="Sunset Beach", url_m="m.jpg", url_b="b.jpg", url_o="o.jpg")]


def test_album_path_uses_title(album_config):
    path = album_path(Album(id="1", title="Summer 2023: Lake!", description=""), album_config)
    assert path == album_config.output_dir / "summer-2023-lake.md"


def test_album_path_falls_back_to_id(album_config):
    album_config.extension = "txt"
    path = album_path(Album(id="72157", title="???", description=""), album_config)
    assert path.name == "72157.txt"


def test_export_writes_one_file_per_album(album_config):
    client = FakeClient(
        albums=[
            Album(id="a", title="Iceland", description="cold"),
            Album(id="b", title="Road Trip", description=""),
        ],
        album_photos={"a": _photos(), "b": _photos()},
    )
    result = export_albums(client, album_config)
    assert sorted(p.name for p in result.written) == ["iceland.md", "road-trip.md"]
    text = (album_config.output_dir / "iceland.md").read_text()
    assert "title = 'Iceland'" in text
    assert 'gallery_image title="Sunset Beach"' in text
    assert result.failed == 0


def test_failed_album_is_skipped(album_config):
    client = FakeClient(
        albums=[
            Album(id="a", title="Broken", description=""),
            Album(id="b", title="Fine", description=""),
        ],
        album_photos={"a": DecodeError("flickr.photosets.getPhotos", "junk", ValueError("x")), "b": _photos()},
    )
    result = export_albums(client, album_config)
    assert [p.name for p in result.written] == ["fine.md"]
    assert result.failed == 1
    assert not (album_config.output_dir / "broken.md").exists()


def test_abort_policy_reraises(album_config):
    album_config.on_error = ErrorPolicy.ABORT
    client = FakeClient(
        albums=[Album(id="a", title="Broken", description="")],
        album_photos={"a": requests.ConnectionError("down")},
    )
    with pytest.raises(requests.ConnectionError):
        export_albums(client, album_config)


def test_write_failure_is_skipped(album_config, monkeypatch):
    original_write = Path.write_text

    def write_text(self, *args, **kwargs):
        if self.name == "broken.md":
            raise OSError("read-only file system")
        return original_write(self, *args, **kwargs)

    monkeypatch.setattr(Path, "write_text", write_text)
    client = FakeClient(
        albums=[
            Album(id="a", title="Broken", description=""),
            Album(id="b", title="Fine", description=""),
        ],
        album_photos={"a": _photos(), "b": _photos()},
    )
    result = export_albums(client, album_config)
    assert [p.name for p in result.written] == ["fine.md"]
    assert result.failed == 1


def test_write_failure_aborts_when_requested(album_config, monkeypatch):
    def write_text(self, *args, **kwargs):
        raise OSError("read-only file system")

    album_config.on_error = ErrorPolicy.ABORT
    monkeypatch.setattr(Path, "write_text", write_text)
    client = FakeClient(
        albums=[Album(id="a", title="Broken", description="")],
        album_photos={"a": _photos()},
    )
    with pytest.raises(OSError):
        export_albums(client, album_config)
