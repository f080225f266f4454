"""Application defaults and paths."""

import os
from pathlib import Path

# Default data directory (overridable with STREAK_VOYAGE_DATA_DIR)
DATA_DIR = Path(__file__).parent.parent.parent / "data"
DATA_DIR_ENV = "STREAK_VOYAGE_DATA_DIR"
DB_FILENAME = "streak_voyage.db"

XP_PER_LEVEL = 100
DEFAULT_REST_SECONDS = 30

DEFAULT_REMINDER_HOUR = 20
DEFAULT_REMINDER_MINUTE = 0

PROGRESS_SNAPSHOT_KEY = "dashboardProgressSnapshot"
REMINDER_SETTINGS_KEY = "dailyReminderSettingsSnapshot"


def get_data_dir() -> Path:
    """Get the data directory path."""
    override = os.environ.get(DATA_DIR_ENV)
    if override:
        return Path(override).expanduser()
    return DATA_DIR
