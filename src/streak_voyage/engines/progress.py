"""Dashboard progress engine: streaks, XP and daily completions."""

import asyncio
import logging
from datetime import datetime
from typing import Callable, Protocol

from ..clock import Clock, DayCalendar, SystemClock
from ..models.progress import DashboardProgressSnapshot, WorkoutCompletionEvent

logger = logging.getLogger(__name__)


class ProgressSnapshotStore(Protocol):
    """Durable storage for the single progress snapshot."""

    async def load(self) -> DashboardProgressSnapshot | None:
        ...

    async def save(self, snapshot: DashboardProgressSnapshot) -> None:
        ...


def normalize_snapshot(
    snapshot: DashboardProgressSnapshot,
    reference: datetime,
    calendar: DayCalendar,
) -> DashboardProgressSnapshot:
    """Bring a stored snapshot up to date with the reference time.

    Clears the daily completion list once its day has passed, and breaks
    the streak when the last workout is older than yesterday. Applying it
    twice with the same reference gives the same result as once.
    """
    normalized = snapshot.copy()

    if normalized.daily_completed_date is not None and not calendar.is_same_day(
        normalized.daily_completed_date, reference
    ):
        normalized.daily_completed_date = None
        normalized.daily_completed_workout_ids = []

    last = normalized.last_workout_at
    if (
        last is not None
        and not calendar.is_same_day(last, reference)
        and not calendar.is_day_before(last, reference)
    ):
        normalized.current_streak = 0

    return normalized


def apply_streak_update(
    snapshot: DashboardProgressSnapshot,
    completed_at: datetime,
    calendar: DayCalendar,
) -> None:
    """Update `current_streak` in place for a newly accepted completion."""
    last = snapshot.last_workout_at
    if last is None:
        snapshot.current_streak = 1
        return

    if calendar.is_same_day(last, completed_at):
        return

    if calendar.is_day_before(last, completed_at):
        snapshot.current_streak = max(1, snapshot.current_streak + 1)
        return

    snapshot.current_streak = 1


class DashboardProgressEngine:
    """Owns the authoritative progress snapshot.

    Every state change is persisted in full before `on_change` is
    notified. Load-modify-persist sequences run under a lock so that
    concurrent callers cannot lose updates.
    """

    def __init__(
        self,
        store: ProgressSnapshotStore,
        clock: Clock | None = None,
        calendar: DayCalendar | None = None,
        on_change: Callable[[DashboardProgressSnapshot], None] | None = None,
    ):
        self.store = store
        self.clock = clock or SystemClock()
        self.calendar = calendar or DayCalendar()
        self.on_change = on_change
        self._snapshot = DashboardProgressSnapshot()
        self._lock = asyncio.Lock()

    @property
    def snapshot(self) -> DashboardProgressSnapshot:
        return self._snapshot.copy()

    @property
    def total_workouts(self) -> int:
        return self._snapshot.total_workouts

    @property
    def total_xp(self) -> int:
        return self._snapshot.total_xp

    @property
    def current_streak(self) -> int:
        return self._snapshot.current_streak

    @property
    def longest_streak(self) -> int:
        return self._snapshot.longest_streak

    @property
    def current_level(self) -> int:
        return self._snapshot.current_level

    @property
    def level_xp_progress(self) -> int:
        return self._snapshot.level_xp_progress

    @property
    def xp_to_next_level(self) -> int:
        return self._snapshot.xp_to_next_level

    @property
    def today_completed_count(self) -> int:
        return self._snapshot.today_completed_count

    def is_workout_completed_today(self, workout_id: str) -> bool:
        return workout_id in self._snapshot.daily_completed_workout_ids

    async def load(self) -> DashboardProgressSnapshot:
        """Load the stored snapshot and normalize it against now."""
        async with self._lock:
            stored = await self.store.load() or DashboardProgressSnapshot()
            normalized = normalize_snapshot(stored, self.clock.now(), self.calendar)
            await self._set_snapshot(normalized, persist=normalized != stored)
            return self.snapshot

    async def refresh_for_current_date(self) -> bool:
        """Re-normalize against now (call when the app comes to the foreground).

        Returns:
            True if the day rollover changed the snapshot
        """
        async with self._lock:
            normalized = normalize_snapshot(self._snapshot, self.clock.now(), self.calendar)
            changed = normalized != self._snapshot
            await self._set_snapshot(normalized, persist=changed)
            return changed

    async def record_completion(self, event: WorkoutCompletionEvent) -> bool:
        """Fold a finished workout into the snapshot.

        Each workout counts at most once per calendar day; repeats are
        ignored without persisting.

        Returns:
            True if the completion was recorded, False if it was a repeat
        """
        async with self._lock:
            completed_at = event.completed_at
            updated = normalize_snapshot(self._snapshot, completed_at, self.calendar)

            if updated.daily_completed_date is None or not self.calendar.is_same_day(
                updated.daily_completed_date, completed_at
            ):
                updated.daily_completed_date = completed_at
                updated.daily_completed_workout_ids = []

            if event.workout_id in updated.daily_completed_workout_ids:
                logger.debug(
                    "Workout %s already completed today, ignoring", event.workout_id
                )
                return False

            updated.daily_completed_workout_ids.append(event.workout_id)
            updated.total_workouts += 1
            updated.total_xp += event.xp_awarded
            apply_streak_update(updated, completed_at, self.calendar)
            updated.last_workout_at = completed_at
            updated.longest_streak = max(updated.longest_streak, updated.current_streak)

            await self._set_snapshot(updated, persist=True)
            logger.info(
                "Recorded %s (+%d XP), streak is now %d",
                event.workout_id,
                event.xp_awarded,
                updated.current_streak,
            )
            return True

    async def _set_snapshot(
        self, snapshot: DashboardProgressSnapshot, persist: bool
    ) -> None:
        self._snapshot = snapshot
        if not persist:
            return
        await self.store.save(snapshot.copy())
        if self.on_change is not None:
            self.on_change(self.snapshot)
