"""Request handling for the paginated video listing."""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, Mapping

from .database import SORT_FIELDS, SORT_ORDERS, DatabaseError

logger = logging.getLogger(__name__)

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 50
DEFAULT_SORT_BY = "published_at"
DEFAULT_SORT_ORDER = "desc"

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1


def _parse_int(text: str) -> int | None:
    """Parse a plain decimal integer, or return None if ``text`` is not one."""
    if _INTEGER.fullmatch(text) is None:
        return None
    value = int(text)
    if not _INT64_MIN <= value <= _INT64_MAX:
        return None
    return value


@dataclass(frozen=True)
class VideoQuery:
    """Validated paging and sorting options for a video listing."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    sort_by: str = DEFAULT_SORT_BY
    sort_order: str = DEFAULT_SORT_ORDER


def parse_video_query(params: Mapping[str, str]) -> VideoQuery:
    """Read paging and sorting options, replacing invalid values with defaults."""
    page = _parse_int(params.get("page", str(DEFAULT_PAGE)))
    if page is None or page < 1:
        page = DEFAULT_PAGE

    limit = _parse_int(params.get("limit", str(DEFAULT_LIMIT)))
    if limit is None or limit < 1 or limit > MAX_LIMIT:
        limit = DEFAULT_LIMIT

    sort_by = params.get("sort_by", DEFAULT_SORT_BY).lower()
    if sort_by not in SORT_FIELDS:
        sort_by = DEFAULT_SORT_BY

    sort_order = params.get("sort_order", DEFAULT_SORT_ORDER).lower()
    if sort_order not in SORT_ORDERS:
        sort_order = DEFAULT_SORT_ORDER

    return VideoQuery(page=page, limit=limit, sort_by=sort_by, sort_order=sort_order)


class VideoHandler:
    """Serves pages of stored videos."""

    def __init__(self, db: Any) -> None:
        self.db = db

    def get_videos(self, params: Mapping[str, str]) -> tuple[int, dict[str, Any]]:
        """Return the HTTP status and JSON body for a listing request."""
        query = parse_video_query(params)
        try:
            result = self.db.get_videos(
                query.page, query.limit, query.sort_by, query.sort_order
            )
        except DatabaseError as exc:
            logger.error("Error fetching videos: %s", exc)
            return HTTPStatus.INTERNAL_SERVER_ERROR, {"error": "Failed to fetch videos"}
        return HTTPStatus.OK, result.to_dict()