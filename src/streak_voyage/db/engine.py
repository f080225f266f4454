"""Database engine setup and initialization."""

import logging
from pathlib import Path

import aiosqlite

from ..config import DB_FILENAME, get_data_dir

logger = logging.getLogger(__name__)


def get_db_path(data_dir: Path | None = None) -> Path:
    """Get the database file path."""
    if data_dir is None:
        data_dir = get_data_dir()
    data_dir.mkdir(parents=True, exist_ok=True)
    return data_dir / DB_FILENAME


async def init_db(db_path: Path | None = None) -> None:
    """Initialize the database schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        # Single-record snapshots (progress, reminder settings, scheduler state)
        await db.execute("""
            CREATE TABLE IF NOT EXISTS key_value_store (
                key TEXT PRIMARY KEY,
                value TEXT NOT NULL,
                updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        """)

        await db.commit()

    logger.debug("Database schema ready at %s", db_path)


async def reset_db(db_path: Path | None = None) -> None:
    """Wipe all persisted state and recreate an empty schema."""
    if db_path is None:
        db_path = get_db_path()

    async with aiosqlite.connect(db_path) as db:
        await db.execute("DROP TABLE IF EXISTS key_value_store")
        await db.commit()

    logger.info("Persisted state wiped at %s", db_path)
    await init_db(db_path)
