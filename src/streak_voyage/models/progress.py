"""Dashboard progress tracking models."""

from dataclasses import dataclass, field, replace
from datetime import datetime

from ..config import XP_PER_LEVEL
from ..exceptions import SnapshotDecodeError


def _parse_timestamp(value: str | None) -> datetime | None:
    if value is None:
        return None
    return datetime.fromisoformat(value)


@dataclass
class DashboardProgressSnapshot:
    """Lifetime and per-day workout progress.

    `daily_completed_workout_ids` holds the workouts finished on
    `daily_completed_date`, in completion order. It is only meaningful
    once the snapshot has been normalized against the current day.
    """

    total_workouts: int = 0
    total_xp: int = 0
    current_streak: int = 0
    longest_streak: int = 0
    last_workout_at: datetime | None = None
    daily_completed_date: datetime | None = None
    daily_completed_workout_ids: list[str] = field(default_factory=list)

    @property
    def current_level(self) -> int:
        """Level derived from lifetime XP (starts at 1)."""
        return self.total_xp // XP_PER_LEVEL + 1

    @property
    def level_xp_progress(self) -> int:
        """XP earned inside the current level."""
        return self.total_xp % XP_PER_LEVEL

    @property
    def xp_to_next_level(self) -> int:
        return XP_PER_LEVEL - self.level_xp_progress

    @property
    def today_completed_count(self) -> int:
        return len(self.daily_completed_workout_ids)

    def copy(self) -> "DashboardProgressSnapshot":
        """Return an independent copy (the id list is not shared)."""
        return replace(
            self, daily_completed_workout_ids=list(self.daily_completed_workout_ids)
        )

    def to_dict(self) -> dict:
        """Convert to dictionary for storage."""
        return {
            "total_workouts": self.total_workouts,
            "total_xp": self.total_xp,
            "current_streak": self.current_streak,
            "longest_streak": self.longest_streak,
            "last_workout_at": (
                self.last_workout_at.isoformat() if self.last_workout_at else None
            ),
            "daily_completed_date": (
                self.daily_completed_date.isoformat()
                if self.daily_completed_date
                else None
            ),
            "daily_completed_workout_ids": list(self.daily_completed_workout_ids),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DashboardProgressSnapshot":
        """Create from dictionary.

        Raises:
            SnapshotDecodeError: If the data is not a valid snapshot
        """
        try:
            ids = data.get("daily_completed_workout_ids", [])
            if not isinstance(ids, list) or not all(isinstance(i, str) for i in ids):
                raise SnapshotDecodeError("daily_completed_workout_ids must be a list of strings")

            counters = {}
            for name in ("total_workouts", "total_xp", "current_streak", "longest_streak"):
                value = data.get(name, 0)
                if isinstance(value, bool) or not isinstance(value, int) or value < 0:
                    raise SnapshotDecodeError(f"{name} must be a non-negative integer")
                counters[name] = value

            return cls(
                last_workout_at=_parse_timestamp(data.get("last_workout_at")),
                daily_completed_date=_parse_timestamp(data.get("daily_completed_date")),
                daily_completed_workout_ids=list(ids),
                **counters,
            )
        except (AttributeError, TypeError, ValueError) as e:
            raise SnapshotDecodeError(f"Invalid progress snapshot: {e}") from e


@dataclass(frozen=True)
class WorkoutCompletionEvent:
    """Emitted once when a workout session reaches its completed phase."""

    workout_id: str
    xp_awarded: int
    completed_at: datetime

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "workout_id": self.workout_id,
            "xp_awarded": self.xp_awarded,
            "completed_at": self.completed_at.isoformat(),
        }
