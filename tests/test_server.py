import sqlite3
from datetime import datetime, timezone

import pytest

from tubefetch.database import Database, DatabaseError
from tubefetch.models import Video
from tubefetch.server import create_app

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


class _FailingDB:
    def get_videos(self, page, limit, sort_by, sort_order):
        raise DatabaseError("error querying videos: boom")


def _video(video_id, title, hour):
    return Video(
        id=video_id,
        title=title,
        description="",
        published_at=datetime(2024, 3, 1, hour, tzinfo=timezone.utc),
        thumbnail_url="",
    )


def test_empty_listing(db):
    response = create_app(db).test_client().get("/api/videos?limit=5")
    assert response.status_code == 200
    body = response.get_json()
    assert body["videos"] == []
    assert body["page"] == 1
    assert body["limit"] == 5
    assert body["total_count"] == 0


def test_listing_sorted_by_title(db):
    for video in (_video("z", "zulu", 1), _video("a", "alpha", 2)):
        db.save_video(video)
    response = create_app(db).test_client().get(
        "/api/videos", query_string={"sort_by": "title", "sort_order": "asc"}
    )
    assert response.status_code == 200
    assert [v["id"] for v in response.get_json()["videos"]] == ["a", "z"]


def test_listing_serialises_timestamps(db):
    db.save_video(_video("a", "alpha", 2))
    body = create_app(db).test_client().get("/api/videos").get_json()
    assert body["videos"][0]["published_at"] == "2024-03-01T02:00:00Z"


def test_database_failure_gives_500():
    response = create_app(_FailingDB()).test_client().get("/api/videos")
    assert response.status_code == 500
    assert response.get_json() == {"error": "Failed to fetch videos"}


def test_swagger_document_served(db):
    response = create_app(db).test_client().get("/swagger/doc.json")
    assert response.status_code == 200
    body = response.get_json()
    assert body["swagger"] == "2.0"
    assert "/api/videos" in body["paths"]


def test_unknown_route_is_404(db):
    assert create_app(db).test_client().get("/api/unknown").status_code == 404


def test_post_not_allowed(db):
    assert create_app(db).test_client().post("/api/videos").status_code == 405