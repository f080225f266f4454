"""Daily reminder settings model."""

from dataclasses import dataclass, replace
from datetime import time
from enum import Enum

from ..config import DEFAULT_REMINDER_HOUR, DEFAULT_REMINDER_MINUTE
from ..exceptions import SnapshotDecodeError


class ReminderPermissionStatus(str, Enum):
    """Notification permission as reported by the scheduler."""

    NOT_DETERMINED = "not_determined"
    DENIED = "denied"
    AUTHORIZED = "authorized"

    @property
    def allows_scheduling(self) -> bool:
        return self is ReminderPermissionStatus.AUTHORIZED


@dataclass
class ReminderSettingsSnapshot:
    """Persisted reminder preference."""

    DEFAULT_HOUR = DEFAULT_REMINDER_HOUR
    DEFAULT_MINUTE = DEFAULT_REMINDER_MINUTE

    is_enabled: bool = False
    hour: int = DEFAULT_REMINDER_HOUR
    minute: int = DEFAULT_REMINDER_MINUTE

    @property
    def has_valid_time(self) -> bool:
        return 0 <= self.hour <= 23 and 0 <= self.minute <= 59

    @property
    def reminder_time(self) -> time:
        return time(self.hour, self.minute)

    def normalized(self) -> "ReminderSettingsSnapshot":
        """Return a copy with an out-of-range time reset to the default."""
        if self.has_valid_time:
            return replace(self)
        return replace(self, hour=self.DEFAULT_HOUR, minute=self.DEFAULT_MINUTE)

    def get_time_display(self) -> str:
        return f"{self.hour:02d}:{self.minute:02d}"

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "is_enabled": self.is_enabled,
            "hour": self.hour,
            "minute": self.minute,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ReminderSettingsSnapshot":
        """Create from dictionary.

        Range checks are left to `normalized()`; only the types are
        validated here.
        """
        try:
            is_enabled = data.get("is_enabled", False)
            hour = data.get("hour", DEFAULT_REMINDER_HOUR)
            minute = data.get("minute", DEFAULT_REMINDER_MINUTE)
        except AttributeError as e:
            raise SnapshotDecodeError(f"Invalid reminder settings: {e}") from e

        if not isinstance(is_enabled, bool):
            raise SnapshotDecodeError("is_enabled must be a boolean")
        for name, value in (("hour", hour), ("minute", minute)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise SnapshotDecodeError(f"{name} must be an integer")

        return cls(is_enabled=is_enabled, hour=hour, minute=minute)
