"""Progress, session and reminder engines."""

from .progress import DashboardProgressEngine, apply_streak_update, normalize_snapshot
from .reminder import ReminderCoordinator
from .session import WorkoutPhase, WorkoutSession
from .timer import AsyncioRestTicker

__all__ = [
    "apply_streak_update",
    "AsyncioRestTicker",
    "DashboardProgressEngine",
    "normalize_snapshot",
    "ReminderCoordinator",
    "WorkoutPhase",
    "WorkoutSession",
]
