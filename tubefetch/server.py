"""HTTP server exposing stored videos, with a background fetcher."""

from __future__ import annotations

import argparse
import logging
import signal
import threading
from typing import Any

from flask import Flask, jsonify, request

from . import config
from .apidocs import swagger_spec
from .database import Database, DatabaseError
from .fetcher import Fetcher
from .handler import VideoHandler
from .youtube import Client, YouTubeError

logger = logging.getLogger(__name__)

FETCH_INTERVAL = 10.0


def create_app(db: Any) -> Flask:
    """Build the web application serving videos from ``db``."""
    app = Flask(__name__)
    video_handler = VideoHandler(db)

    @app.get("/api/videos")
    def get_videos():
        status, body = video_handler.get_videos(request.args)
        return jsonify(body), int(status)

    @app.get("/swagger/doc.json")
    def swagger_document():
        return jsonify(swagger_spec())

    return app


def main(argv: list[str] | None = None) -> int:
    """Start the fetcher and the HTTP server, and run until interrupted."""
    parser = argparse.ArgumentParser(
        prog="tubefetch-server",
        description="Fetch recent YouTube videos and serve them over HTTP.",
    )
    parser.parse_args(argv)
    logging.basicConfig(level=logging.INFO)

    cfg = config.load()
    try:
        port = int(cfg.server_port)
    except ValueError:
        logger.error("Error starting server: invalid port %r", cfg.server_port)
        return 1

    try:
        db = Database.open(cfg.database_url())
    except DatabaseError as exc:
        logger.error("Error connecting to database: %s", exc)
        return 1

    try:
        client = Client(cfg.youtube_api_keys, cfg.search_query)
    except YouTubeError as exc:
        logger.error("Error creating YouTube client: %s", exc)
        db.close()
        return 1

    fetcher = Fetcher(client, db, FETCH_INTERVAL)
    threading.Thread(target=fetcher.start, name="fetcher", daemon=True).start()

    app = create_app(db)
    threading.Thread(
        target=app.run,
        kwargs={"host": "0.0.0.0", "port": port, "use_reloader": False},
        name="http-server",
        daemon=True,
    ).start()

    quit_event = threading.Event()

    def _request_quit(signum: int, frame: Any) -> None:
        quit_event.set()

    signal.signal(signal.SIGINT, _request_quit)
    signal.signal(signal.SIGTERM, _request_quit)
    quit_event.wait()

    logger.info("Shutting down server...")
    fetcher.stop()
    db.close()
    return 0