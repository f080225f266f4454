"""StreakVoyage: workout streaks, XP levels and daily reminders."""

__version__ = "0.1.0"
