"""Data models for StreakVoyage."""

from .progress import DashboardProgressSnapshot, WorkoutCompletionEvent
from .reminder import ReminderPermissionStatus, ReminderSettingsSnapshot
from .workout import WORKOUT_CATALOG, WorkoutPlan, get_workout_plan

__all__ = [
    "DashboardProgressSnapshot",
    "get_workout_plan",
    "ReminderPermissionStatus",
    "ReminderSettingsSnapshot",
    "WORKOUT_CATALOG",
    "WorkoutCompletionEvent",
    "WorkoutPlan",
]
