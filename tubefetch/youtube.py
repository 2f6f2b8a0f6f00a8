"""Client for the YouTube Data API search endpoint with API-key rotation."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Iterable

import requests

logger = logging.getLogger(__name__)

SEARCH_URL = "https://www.googleapis.com/youtube/v3/search"
MAX_RESULTS = 10
LOOKBACK = timedelta(hours=24)
REQUEST_TIMEOUT = 30

_RFC3339 = re.compile(
    r"^(\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2})(?:\.(\d+))?(Z|z|[+-]\d{2}:\d{2})$"
)


class YouTubeError(Exception):
    """Raised when videos cannot be fetched."""


class QuotaExceededError(YouTubeError):
    """Raised when every API key has run out of quota."""


class _KeyQuotaExceeded(Exception):
    """The current key has run out of quota."""


@dataclass
class FetchedVideo:
    """A video as returned by a search."""

    id: str
    title: str
    description: str
    published_at: datetime
    thumbnail_url: str


def _parse_rfc3339(text: str) -> datetime:
    match = _RFC3339.match(text)
    if match is None:
        raise ValueError(f"not an RFC 3339 timestamp: {text!r}")
    base, fraction, zone = match.groups()
    micro = (fraction or "").ljust(6, "0")[:6]
    zone = "+00:00" if zone in ("Z", "z") else zone
    return datetime.fromisoformat(f"{base}.{micro}{zone}")


class Client:
    """Searches for recent videos matching a query, rotating keys on quota errors."""

    def __init__(
        self,
        api_keys: Iterable[str],
        search_query: str,
        session: Any = None,
    ) -> None:
        keys = list(api_keys)
        if not keys:
            raise YouTubeError("no API keys provided")
        self.api_keys = keys
        self.current_key = 0
        self.search_query = search_query
        self._session = session if session is not None else requests.Session()

    def fetch_latest_videos(self) -> list[FetchedVideo]:
        """Return up to ten videos published in the last 24 hours, newest first."""
        while True:
            try:
                return self._search(self.api_keys[self.current_key])
            except _KeyQuotaExceeded:
                logger.warning(
                    "Quota exceeded for API key %d, trying next key", self.current_key
                )
                self.current_key = (self.current_key + 1) % len(self.api_keys)
                if self.current_key == 0:
                    raise QuotaExceededError(
                        "all API keys have exceeded their quota"
                    ) from None
                logger.info("Switching to API key %d", self.current_key)

    def _search(self, api_key: str) -> list[FetchedVideo]:
        published_after = (datetime.now(timezone.utc) - LOOKBACK).strftime(
            "%Y-%m-%dT%H:%M:%SZ"
        )
        params = {
            "part": "snippet",
            "q": self.search_query,
            "type": "video",
            "order": "date",
            "maxResults": MAX_RESULTS,
            "publishedAfter": published_after,
            "key": api_key,
        }
        try:
            response = self._session.get(SEARCH_URL, params=params, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise YouTubeError(f"error fetching videos: {exc}") from exc

        if response.status_code >= 400:
            body = response.text or ""
            if "quotaExceeded" in body:
                raise _KeyQuotaExceeded()
            raise YouTubeError(
                f"error fetching videos: HTTP {response.status_code}: {body.strip()}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise YouTubeError(f"error fetching videos: {exc}") from exc

        return list(self._videos_from(payload.get("items") or []))

    @staticmethod
    def _videos_from(items: list[dict[str, Any]]) -> Iterable[FetchedVideo]:
        for item in items:
            video_id = (item.get("id") or {}).get("videoId", "")
            snippet = item.get("snippet") or {}
            try:
                published_at = _parse_rfc3339(snippet.get("publishedAt", ""))
            except ValueError as exc:
                logger.warning(
                    "Error parsing published date for video %s: %s", video_id, exc
                )
                continue
            thumbnail = ((snippet.get("thumbnails") or {}).get("default") or {}).get(
                "url", ""
            )
            yield FetchedVideo(
                id=video_id,
                title=snippet.get("title", ""),
                description=snippet.get("description", ""),
                published_at=published_at,
                thumbnail_url=thumbnail,
            )