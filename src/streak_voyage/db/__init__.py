"""Database layer for StreakVoyage."""

from .engine import get_db_path, init_db, reset_db
from .repositories import (
    DashboardProgressRepository,
    KeyValueRepository,
    ReminderSettingsRepository,
)

__all__ = [
    "DashboardProgressRepository",
    "get_db_path",
    "init_db",
    "KeyValueRepository",
    "ReminderSettingsRepository",
    "reset_db",
]
