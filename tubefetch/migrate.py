"""Apply the schema migration to the configured database."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path

from . import config
from .database import Database, DatabaseError

logger = logging.getLogger(__name__)

DEFAULT_MIGRATION = Path("migrations") / "001_create_videos_table.sql"


def run_migration(db: Database, path: str | Path) -> None:
    """Read the SQL file at ``path`` and run it against ``db``."""
    script = Path(path).read_text(encoding="utf-8")
    db.execute_script(script)


def main(argv: list[str] | None = None) -> int:
    """Run the migration; return 0 on success and 1 on failure."""
    parser = argparse.ArgumentParser(
        prog="tubefetch-migrate", description="Create the videos table."
    )
    parser.add_argument(
        "migration",
        nargs="?",
        default=str(DEFAULT_MIGRATION),
        help="path of the SQL migration file",
    )
    args = parser.parse_args(argv)

    cfg = config.load()
    try:
        db = Database.open(cfg.database_url())
    except DatabaseError as exc:
        logger.error("Error connecting to database: %s", exc)
        return 1

    with db:
        try:
            run_migration(db, args.migration)
        except OSError as exc:
            logger.error("Error reading migration file: %s", exc)
            return 1
        except DatabaseError as exc:
            logger.error("Error executing migration: %s", exc)
            return 1

    print("Migration completed successfully")
    return 0