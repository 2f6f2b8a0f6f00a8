"""Stored video records and the paginated listing returned by the API."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any

_ZERO_TIME = "0001-01-01T00:00:00Z"


def _format_time(value: datetime | None) -> str:
    """Format a timestamp as RFC 3339 with trailing fraction zeros trimmed."""
    if value is None:
        return _ZERO_TIME
    text = value.strftime("%Y-%m-%dT%H:%M:%S")
    if value.microsecond:
        text += "." + f"{value.microsecond:06d}".rstrip("0")
    offset = value.utcoffset()
    if offset is None:
        return text
    total = int(offset.total_seconds())
    if total == 0:
        return text + "Z"
    sign = "+" if total > 0 else "-"
    hours, minutes = divmod(abs(total) // 60, 60)
    return f"{text}{sign}{hours:02d}:{minutes:02d}"


@dataclass
class Video:
    """A YouTube video as kept in the database."""

    id: str
    title: str
    description: str
    published_at: datetime
    thumbnail_url: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "published_at": _format_time(self.published_at),
            "thumbnail_url": self.thumbnail_url,
            "created_at": _format_time(self.created_at),
            "updated_at": _format_time(self.updated_at),
        }


@dataclass
class PaginatedResponse:
    """One page of videos together with paging totals."""

    videos: list[Video] = field(default_factory=list)
    page: int = 1
    limit: int = 10
    total_count: int = 0
    total_pages: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "videos": [video.to_dict() for video in self.videos],
            "page": self.page,
            "limit": self.limit,
            "total_count": self.total_count,
            "total_pages": self.total_pages,
        }