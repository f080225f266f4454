"""Exception types for StreakVoyage."""


class StreakVoyageError(Exception):
    """Base class for all StreakVoyage errors."""


class SnapshotDecodeError(StreakVoyageError):
    """Raised when a persisted snapshot cannot be decoded."""


class ReminderSchedulingError(StreakVoyageError):
    """Raised when the scheduler fails to register the daily reminder."""
