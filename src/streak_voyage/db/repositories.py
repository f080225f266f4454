"""Data access layer for StreakVoyage."""

import json
import logging
from pathlib import Path

import aiosqlite

from ..config import PROGRESS_SNAPSHOT_KEY, REMINDER_SETTINGS_KEY
from ..exceptions import SnapshotDecodeError
from ..models.progress import DashboardProgressSnapshot
from ..models.reminder import ReminderSettingsSnapshot
from .engine import get_db_path

logger = logging.getLogger(__name__)


class KeyValueRepository:
    """Repository for raw string values keyed by a stable name."""

    def __init__(self, db_path: Path | None = None):
        self.db_path = db_path or get_db_path()

    async def get(self, key: str) -> str | None:
        """Get the stored value for a key."""
        async with aiosqlite.connect(self.db_path) as db:
            cursor = await db.execute(
                "SELECT value FROM key_value_store WHERE key = ?", (key,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return row[0]

    async def set(self, key: str, value: str) -> None:
        """Store a value, overwriting any previous one."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute(
                """
                INSERT INTO key_value_store (key, value, updated_at)
                VALUES (?, ?, CURRENT_TIMESTAMP)
                ON CONFLICT(key) DO UPDATE SET
                    value = excluded.value,
                    updated_at = CURRENT_TIMESTAMP
                """,
                (key, value),
            )
            await db.commit()

    async def delete(self, key: str) -> None:
        """Delete a key (no-op if missing)."""
        async with aiosqlite.connect(self.db_path) as db:
            await db.execute("DELETE FROM key_value_store WHERE key = ?", (key,))
            await db.commit()


class _JSONSnapshotRepository:
    """Stores one JSON-encoded snapshot under a single key.

    Unreadable data is treated as missing so callers fall back to defaults.
    """

    def __init__(self, db_path: Path | None, snapshot_key: str):
        self.snapshot_key = snapshot_key
        self._kv = KeyValueRepository(db_path)

    @property
    def db_path(self) -> Path:
        return self._kv.db_path

    async def _load_dict(self) -> dict | None:
        raw = await self._kv.get(self.snapshot_key)
        if raw is None:
            return None
        try:
            data = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Discarding corrupt snapshot stored under %r", self.snapshot_key)
            return None
        if not isinstance(data, dict):
            logger.warning("Discarding non-object snapshot stored under %r", self.snapshot_key)
            return None
        return data

    async def _save_dict(self, data: dict) -> None:
        await self._kv.set(self.snapshot_key, json.dumps(data))


class DashboardProgressRepository(_JSONSnapshotRepository):
    """Repository for the dashboard progress snapshot."""

    def __init__(
        self, db_path: Path | None = None, snapshot_key: str = PROGRESS_SNAPSHOT_KEY
    ):
        super().__init__(db_path, snapshot_key)

    async def load(self) -> DashboardProgressSnapshot | None:
        """Load the stored snapshot, or None if absent or undecodable."""
        data = await self._load_dict()
        if data is None:
            return None
        try:
            return DashboardProgressSnapshot.from_dict(data)
        except SnapshotDecodeError as e:
            logger.warning("Ignoring stored progress snapshot: %s", e)
            return None

    async def save(self, snapshot: DashboardProgressSnapshot) -> None:
        """Persist the snapshot, replacing the previous one."""
        await self._save_dict(snapshot.to_dict())


class ReminderSettingsRepository(_JSONSnapshotRepository):
    """Repository for the daily reminder settings."""

    def __init__(
        self, db_path: Path | None = None, snapshot_key: str = REMINDER_SETTINGS_KEY
    ):
        super().__init__(db_path, snapshot_key)

    async def load(self) -> ReminderSettingsSnapshot | None:
        """Load the stored settings, or None if absent or undecodable."""
        data = await self._load_dict()
        if data is None:
            return None
        try:
            return ReminderSettingsSnapshot.from_dict(data)
        except SnapshotDecodeError as e:
            logger.warning("Ignoring stored reminder settings: %s", e)
            return None

    async def save(self, snapshot: ReminderSettingsSnapshot) -> None:
        """Persist the settings, replacing the previous ones."""
        await self._save_dict(snapshot.to_dict())
