"""Application configuration read from the environment and an optional .env file."""

from __future__ import annotations

import logging
import os
from dataclasses import MISSING, dataclass, field, fields
from pathlib import Path

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

ENV_FILE = ".env"

_EMPTY = ""
_KEY_SEPARATOR = ","


def get_env(key: str, default: str) -> str:
    """Return the environment variable ``key``, or ``default`` when unset or empty."""
    value = os.environ.get(key, _EMPTY)
    return value if value else default


@dataclass
class Config:
    """Settings for the database, the YouTube client and the HTTP server."""

    db_host: str = "localhost"
    db_port: str = "5432"
    db_user: str = "postgres"
    db_password: str = _EMPTY
    db_name: str = "youtube_videos"
    youtube_api_keys: list[str] = field(default_factory=lambda: [_EMPTY])
    search_query: str = "cricket"
    server_port: str = "8080"

    def database_url(self) -> str:
        """Return the key=value connection string for the database."""
        return (
            f"host={self.db_host} port={self.db_port} user={self.db_user} "
            f"password={self.db_password} dbname={self.db_name} sslmode=disable"
        )


def load() -> Config:
    """Build a Config from ``.env`` in the working directory and the environment.

    Each plain setting is read from the environment variable named after the
    field in upper case (``db_host`` from ``DB_HOST`` and so on).
    """
    env_path = Path(ENV_FILE)
    if env_path.is_file():
        load_dotenv(dotenv_path=env_path, override=False)
    else:
        logger.warning("Error loading .env file, using environment variables")

    settings = {
        setting.name: get_env(setting.name.upper(), setting.default)
        for setting in fields(Config)
        if setting.default is not MISSING
    }
    raw_keys = get_env("YOUTUBE_API_KEYS", _EMPTY)
    return Config(youtube_api_keys=raw_keys.split(_KEY_SEPARATOR), **settings)