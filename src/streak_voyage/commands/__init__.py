"""CLI commands for StreakVoyage."""

from .dashboard import refresh, status
from .init import init
from .reminder import reminder
from .workouts import workouts

__all__ = [
    "init",
    "refresh",
    "reminder",
    "status",
    "workouts",
]
