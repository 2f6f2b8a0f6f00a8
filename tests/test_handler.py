import sqlite3
from datetime import datetime, timezone

import pytest

from tubefetch.database import Database, DatabaseError
from tubefetch.handler import VideoHandler, VideoQuery, parse_video_query
from tubefetch.models import PaginatedResponse, Video

SCHEMA = """
CREATE TABLE videos (
    id TEXT PRIMARY KEY,
    title TEXT NOT NULL,
    description TEXT,
    published_at TEXT NOT NULL,
    thumbnail_url TEXT,
    created_at TEXT,
    updated_at TEXT
);
"""


@pytest.fixture
def db():
    database = Database(sqlite3.connect(":memory:", check_same_thread=False))
    database.execute_script(SCHEMA)
    yield database
    database.close()


def _video(video_id, title, hour):
    return Video(
        id=video_id,
        title=title,
        description="",
        published_at=datetime(2024, 1, 1, hour, tzinfo=timezone.utc),
        thumbnail_url="",
    )


class _FailingDB:
    def get_videos(self, page, limit, sort_by, sort_order):
        raise DatabaseError("error getting total count: boom")


class _RecordingDB:
    def __init__(self):
        self.calls = []
        self.response = PaginatedResponse(videos=[], page=2, limit=10)

    def get_videos(self, page, limit, sort_by, sort_order):
        self.calls.append((page, limit, sort_by, sort_order))
        return self.response


def test_defaults_when_no_parameters():
    assert parse_video_query({}) == VideoQuery(
        page=1, limit=10, sort_by="published_at", sort_order="desc"
    )


@pytest.mark.parametrize(
    "raw, expected",
    [("0", 1), ("-4", 1), ("abc", 1), ("", 1), (" 2", 1), ("2.5", 1), ("7", 7), ("+3", 3)],
)
def test_page_parsing(raw, expected):
    assert parse_video_query({"page": raw}).page == expected


@pytest.mark.parametrize(
    "raw, expected",
    [("51", 10), ("50", 50), ("1", 1), ("0", 10), ("x", 10), ("-5", 10)],
)
def test_limit_parsing(raw, expected):
    assert parse_video_query({"limit": raw}).limit == expected


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("TITLE", "title"),
        ("created_at", "created_at"),
        ("id", "published_at"),
        ("published_at; DROP TABLE videos", "published_at"),
    ],
)
def test_sort_by_parsing(raw, expected):
    assert parse_video_query({"sort_by": raw}).sort_by == expected


@pytest.mark.parametrize(
    "raw, expected", [("ASC", "asc"), ("Desc", "desc"), ("up", "desc")]
)
def test_sort_order_parsing(raw, expected):
    assert parse_video_query({"sort_order": raw}).sort_order == expected


def test_get_videos_default_order_is_newest_first(db):
    for video in (_video("a", "one", 1), _video("b", "two", 2), _video("c", "three", 3)):
        db.save_video(video)
    status, body = VideoHandler(db).get_videos({})
    assert status == 200
    assert [v["id"] for v in body["videos"]] == ["c", "b", "a"]
    assert body["total_count"] == 3


def test_get_videos_sorted_by_title(db):
    for video in (_video("b", "beta", 1), _video("a", "alpha", 2), _video("g", "gamma", 3)):
        db.save_video(video)
    status, body = VideoHandler(db).get_videos({"sort_by": "title", "sort_order": "asc"})
    assert status == 200
    assert [v["title"] for v in body["videos"]] == ["alpha", "beta", "gamma"]


def test_get_videos_second_page(db):
    for video in (_video("a", "one", 1), _video("b", "two", 2), _video("c", "three", 3)):
        db.save_video(video)
    _, body = VideoHandler(db).get_videos({"page": "2", "limit": "2"})
    assert [v["id"] for v in body["videos"]] == ["a"]
    assert body["page"] == 2
    assert body["limit"] == 2
    assert body["total_pages"] == 2


def test_get_videos_reports_database_failure():
    status, body = VideoHandler(_FailingDB()).get_videos({})
    assert status == 500
    assert body == {"error": "Failed to fetch videos"}


def test_get_videos_passes_validated_query():
    fake = _RecordingDB()
    status, body = VideoHandler(fake).get_videos(
        {"page": "2", "limit": "99", "sort_by": "TITLE", "sort_order": "ASC"}
    )
    assert fake.calls == [(2, 10, "title", "asc")]
    assert status == 200
    assert body == fake.response.to_dict()