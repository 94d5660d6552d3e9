"""Thin blocking client for the Flickr REST API."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional

import requests

from .models import Album, AlbumPhoto, SearchPage, TaggedPhoto

logger = logging.getLogger("flickr_export.client")

API_URL = "https://api.flickr.com/services/rest/"
SEARCH_PAGE_SIZE = 500
ALBUM_PHOTO_EXTRAS = "url_w,url_h,url_m,url_b,url_o"
SEARCH_EXTRAS = "url_q,url_l,url_m,url_s,tags,description,date_taken"


class FlickrError(Exception):
    """Base class for errors reported while talking to Flickr."""


class DecodeError(FlickrError):
    """The response body was not the JSON envelope we expected."""

    def __init__(self, method: str, body: str, cause: Exception) -> None:
        super().__init__(f"decode error for {method}: {cause}\nBody: {body}")
        self.method = method
        self.body = body


class StatusError(FlickrError):
    """Flickr answered with ``stat`` other than ``ok``."""

    def __init__(self, method: str, payload: Dict[str, Any]) -> None:
        message = payload.get("message") or "Flickr API error"
        super().__init__(f"{method} failed with stat={payload.get('stat')!r}: {message}")
        self.method = method
        self.code = payload.get("code")


def is_last_page(page_number: int, page: SearchPage) -> bool:
    """Stop on an empty page or once the server-reported page count is reached."""
    return not page.photos or page_number >= page.pages


class PhotoPages:
    """Restartable, finite sequence of search pages.

    Every iteration starts again at page 1 and calls ``fetch_page`` lazily.
    Empty pages are not yielded.
    """

    def __init__(self, fetch_page: Callable[[int], SearchPage]) -> None:
        self._fetch_page = fetch_page

    def __iter__(self) -> Iterator[SearchPage]:
        page_number = 1
        while True:
            page = self._fetch_page(page_number)
            logger.debug(
                "Fetched page %d of %d (%d photos)", page.page, page.pages, len(page.photos)
            )
            if page.photos:
                yield page
            if is_last_page(page_number, page):
                return
            page_number += 1

    def photos(self) -> Iterator[TaggedPhoto]:
        for page in self:
            yield from page.photos


class FlickrClient:
    """Issues single-attempt GET requests against the Flickr REST endpoint."""

    def __init__(
        self,
        api_key: str,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
        api_url: str = API_URL,
    ) -> None:
        self.api_key = api_key
        self.session = session or requests.Session()
        self.timeout = timeout
        self.api_url = api_url

    def call(self, method: str, **params: Any) -> Dict[str, Any]:
        """Call a Flickr method and return the decoded JSON envelope."""
        query: Dict[str, Any] = {
            "method": method,
            "api_key": self.api_key,
            "format": "json",
            "nojsoncallback": 1,
        }
        query.update(params)
        logger.debug("GET %s %s", method, params)
        resp = self.session.get(self.api_url, params=query, timeout=self.timeout)
        resp.raise_for_status()
        try:
            payload = resp.json()
        except ValueError as exc:
            raise DecodeError(method, resp.text, exc) from exc
        if not isinstance(payload, dict):
            raise DecodeError(method, resp.text, TypeError("expected a JSON object"))
        return payload

    def fetch_albums(self, user_id: str) -> List[Album]:
        payload = self.call("flickr.photosets.getList", user_id=user_id)
        photosets = payload.get("photosets") or {}
        return [Album.from_api(item) for item in photosets.get("photoset") or []]

    def fetch_album_photos(self, album_id: str) -> List[AlbumPhoto]:
        payload = self.call(
            "flickr.photosets.getPhotos",
            photoset_id=album_id,
            extras=ALBUM_PHOTO_EXTRAS,
        )
        photoset = payload.get("photoset") or {}
        return [AlbumPhoto.from_api(item) for item in photoset.get("photo") or []]

    def search_photos_page(self, user_id: str, page: int) -> SearchPage:
        """Fetch one page of the user's public photos."""
        method = "flickr.photos.search"
        payload = self.call(
            method,
            user_id=user_id,
            privacy_filter=1,
            extras=SEARCH_EXTRAS,
            per_page=SEARCH_PAGE_SIZE,
            page=page,
        )
        if payload.get("stat") != "ok":
            raise StatusError(method, payload)
        photos = payload.get("photos") or {}
        try:
            pages = int(photos.get("pages") or 0)
        except (TypeError, ValueError) as exc:
            raise DecodeError(method, str(payload), exc) from exc
        return SearchPage(
            page=page,
            pages=pages,
            photos=[TaggedPhoto.from_api(item) for item in photos.get("photo") or []],
        )

    def search_pages(self, user_id: str) -> PhotoPages:
        return PhotoPages(lambda page: self.search_photos_page(user_id, page))

    def fetch_photos_paged(self, user_id: str) -> Iterator[TaggedPhoto]:
        """Lazily yield every photo of the user, page by page."""
        return self.search_pages(user_id).photos()
