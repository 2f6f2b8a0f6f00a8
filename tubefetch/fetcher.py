"""Background service that periodically fetches videos and stores them."""

from __future__ import annotations

import logging
import threading
from datetime import timedelta
from typing import Any

from .database import DatabaseError
from .models import Video
from .youtube import YouTubeError

logger = logging.getLogger(__name__)


class Fetcher:
    """Fetches the latest videos on a fixed interval and saves them."""

    def __init__(self, client: Any, db: Any, interval: float | timedelta) -> None:
        seconds = (
            interval.total_seconds() if isinstance(interval, timedelta) else float(interval)
        )
        if seconds <= 0:
            raise ValueError("interval must be positive")
        self.client = client
        self.db = db
        self.interval = seconds
        self._stopped = threading.Event()

    def start(self) -> None:
        """Run the fetch loop until :meth:`stop` is called. Blocks the caller."""
        while not self._stopped.wait(self.interval):
            try:
                self.fetch_and_store()
            except YouTubeError as exc:
                logger.error("Error fetching videos: %s", exc)

    def stop(self) -> None:
        """Ask the fetch loop to finish."""
        if self._stopped.is_set():
            raise RuntimeError("fetcher already stopped")
        self._stopped.set()

    def fetch_and_store(self) -> int:
        """Fetch the latest videos and save each one; return how many were saved."""
        saved = 0
        for fetched in self.client.fetch_latest_videos():
            video = Video(
                id=fetched.id,
                title=fetched.title,
                description=fetched.description,
                published_at=fetched.published_at,
                thumbnail_url=fetched.thumbnail_url,
            )
            try:
                self.db.save_video(video)
            except DatabaseError as exc:
                logger.error("Error saving video %s: %s", fetched.id, exc)
                continue
            saved += 1
        return saved