"""Shared fakes for exercising the exporters without network access."""

import json
from typing import Dict, List

import pytest
import requests

from flickr_export.client import FlickrClient
from flickr_export.config import AlbumExportConfig, Credentials, PhotoExportConfig
from flickr_export.models import Album, SearchPage


class FakeResponse:
    def __init__(self, body, status_code: int = 200):
        self.text = body if isinstance(body, str) else json.dumps(body)
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return json.loads(self.text)


class FakeSession:
    """Returns queued responses and records every query it was given."""

    def __init__(self, responses):
        self.responses = list(responses)
        self.calls: List[Dict] = []

    def get(self, url, params=None, timeout=None):
        self.calls.append(dict(params or {}))
        return self.responses.pop(0)


class FakeClient(FlickrClient):
    """Serves albums and search pages from memory."""

    def __init__(self, albums=None, album_photos=None, pages=None):
        super().__init__("key", session=FakeSession([]))
        self.albums: List[Album] = albums or []
        self.album_photos: Dict[str, object] = album_photos or {}
        self.pages: List[SearchPage] = pages or []
        self.requested_pages: List[int] = []

    def fetch_albums(self, user_id):
        return list(self.albums)

    def fetch_album_photos(self, album_id):
        photos = self.album_photos.get(album_id, [])
        if isinstance(photos, Exception):
            raise photos
        return photos

    def search_photos_page(self, user_id, page):
        self.requested_pages.append(page)
        return self.pages[page - 1]


@pytest.fixture
def credentials():
    return Credentials(api_key="key", user_id="123@N00")


@pytest.fixture
def album_config(tmp_path, credentials):
    return AlbumExportConfig(credentials=credentials, output_dir=tmp_path / "albums")


@pytest.fixture
def photo_config(tmp_path, credentials):
    return PhotoExportConfig(credentials=credentials, content_dir=tmp_path / "content")
