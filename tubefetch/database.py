"""Video storage backed by a DB-API connection (SQLite by default)."""

from __future__ import annotations

import sqlite3
import threading
from datetime import datetime, timezone
from typing import Any

from .models import PaginatedResponse, Video

SORT_FIELDS = frozenset({"published_at", "title", "created_at"})
SORT_ORDERS = frozenset({"asc", "desc"})

_UPSERT = """
    INSERT INTO videos (id, title, description, published_at, thumbnail_url, created_at, updated_at)
    VALUES (?, ?, ?, ?, ?, ?, ?)
    ON CONFLICT (id) DO UPDATE
    SET title = excluded.title,
        description = excluded.description,
        published_at = excluded.published_at,
        thumbnail_url = excluded.thumbnail_url,
        updated_at = excluded.updated_at
"""

_SELECT = """
    SELECT id, title, description, published_at, thumbnail_url, created_at, updated_at
    FROM videos
    ORDER BY {sort_by} {sort_order}
    LIMIT ? OFFSET ?
"""


class DatabaseError(Exception):
    """Raised when a database operation fails."""


def _sqlite_path(dsn: str) -> str:
    """Take the database file from a key=value DSN, or use the DSN as a path."""
    if "=" not in dsn:
        return dsn
    fields = dict(part.split("=", 1) for part in dsn.split() if "=" in part)
    name = fields.get("dbname")
    if not name:
        raise DatabaseError("error opening database: no dbname in connection string")
    return name


def _to_text(value: datetime | None) -> str | None:
    return None if value is None else value.isoformat()


def _from_text(value: Any) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        return value
    return datetime.fromisoformat(value)


class Database:
    """Stores and lists videos."""

    def __init__(self, connection: Any) -> None:
        self._connection = connection
        self._lock = threading.Lock()

    @classmethod
    def open(cls, dsn: str) -> Database:
        """Open the database named by ``dsn`` and check that it answers."""
        path = _sqlite_path(dsn)
        try:
            connection = sqlite3.connect(path, check_same_thread=False)
        except sqlite3.Error as exc:
            raise DatabaseError(f"error opening database: {exc}") from exc
        try:
            connection.execute("SELECT 1").fetchone()
        except sqlite3.Error as exc:
            connection.close()
            raise DatabaseError(f"error connecting to the database: {exc}") from exc
        return cls(connection)

    def __enter__(self) -> Database:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def save_video(self, video: Video) -> None:
        """Insert ``video``, or update it if a video with its id already exists."""
        now = datetime.now(timezone.utc)
        params = (
            video.id,
            video.title,
            video.description,
            _to_text(video.published_at),
            video.thumbnail_url,
            _to_text(now),
            _to_text(now),
        )
        try:
            with self._lock:
                self._connection.execute(_UPSERT, params)
                self._connection.commit()
        except Exception as exc:
            raise DatabaseError(f"error saving video: {exc}") from exc

    def get_videos(
        self, page: int, limit: int, sort_by: str, sort_order: str
    ) -> PaginatedResponse:
        """Return one page of videos ordered by ``sort_by`` in ``sort_order``."""
        if sort_by not in SORT_FIELDS:
            raise DatabaseError(f"error querying videos: invalid sort field {sort_by!r}")
        if sort_order not in SORT_ORDERS:
            raise DatabaseError(f"error querying videos: invalid sort order {sort_order!r}")
        if limit < 1:
            raise ValueError("limit must be at least 1")
        offset = (page - 1) * limit

        with self._lock:
            try:
                (total_count,) = self._connection.execute(
                    "SELECT COUNT(*) FROM videos"
                ).fetchone()
            except Exception as exc:
                raise DatabaseError(f"error getting total count: {exc}") from exc

            query = _SELECT.format(sort_by=sort_by, sort_order=sort_order)
            try:
                rows = self._connection.execute(query, (limit, offset)).fetchall()
            except Exception as exc:
                raise DatabaseError(f"error querying videos: {exc}") from exc

        try:
            videos = [
                Video(
                    id=row[0],
                    title=row[1],
                    description=row[2],
                    published_at=_from_text(row[3]),
                    thumbnail_url=row[4],
                    created_at=_from_text(row[5]),
                    updated_at=_from_text(row[6]),
                )
                for row in rows
            ]
        except (TypeError, ValueError, IndexError) as exc:
            raise DatabaseError(f"error scanning video: {exc}") from exc

        return PaginatedResponse(
            videos=videos,
            page=page,
            limit=limit,
            total_count=total_count,
            total_pages=(total_count + limit - 1) // limit,
        )

    def execute_script(self, script: str) -> None:
        """Run a block of SQL statements, such as a migration."""
        try:
            with self._lock:
                run = getattr(self._connection, "executescript", None)
                if run is not None:
                    run(script)
                else:
                    cursor = self._connection.cursor()
                    try:
                        cursor.execute(script)
                    finally:
                        cursor.close()
                self._connection.commit()
        except Exception as exc:
            raise DatabaseError(f"error executing script: {exc}") from exc

    def close(self) -> None:
        with self._lock:
            self._connection.close()