"""Pytest configuration and fixtures."""

import asyncio
import tempfile
from datetime import datetime, timezone
from pathlib import Path

import pytest

from streak_voyage.clock import DayCalendar, FixedClock
from streak_voyage.db import init_db
from streak_voyage.exceptions import ReminderSchedulingError
from streak_voyage.models.progress import DashboardProgressSnapshot
from streak_voyage.models.reminder import ReminderPermissionStatus, ReminderSettingsSnapshot
from streak_voyage.models.workout import WorkoutPlan


def make_date(raw: str) -> datetime:
    """Parse an ISO-8601 UTC timestamp like 2026-02-19T10:00:00Z."""
    return datetime.fromisoformat(raw.replace("Z", "+00:00"))


class InMemoryProgressStore:
    """Progress store that counts saves."""

    def __init__(self, snapshot: DashboardProgressSnapshot | None = None):
        self.snapshot = snapshot
        self.save_call_count = 0

    async def load(self):
        return self.snapshot.copy() if self.snapshot is not None else None

    async def save(self, snapshot):
        self.save_call_count += 1
        self.snapshot = snapshot.copy()


class InMemoryReminderSettingsStore:
    """Reminder settings store that counts saves."""

    def __init__(self, snapshot: ReminderSettingsSnapshot | None = None):
        self.snapshot = snapshot
        self.save_call_count = 0

    async def load(self):
        return self.snapshot

    async def save(self, snapshot):
        self.save_call_count += 1
        self.snapshot = snapshot


class FakeReminderScheduler:
    """Scheduler double with scripted permission answers."""

    def __init__(
        self,
        fallback_authorization_status: ReminderPermissionStatus,
        authorization_statuses: list[ReminderPermissionStatus] | None = None,
        request_authorization_result: bool = True,
        schedule_error: Exception | None = None,
    ):
        self.authorization_statuses = list(authorization_statuses or [])
        self.fallback_authorization_status = fallback_authorization_status
        self.request_authorization_result = request_authorization_result
        self.schedule_error = schedule_error
        self.schedule_calls: list[tuple[int, int]] = []
        self.cancel_call_count = 0
        self.request_authorization_call_count = 0

    async def authorization_status(self):
        if self.authorization_statuses:
            return self.authorization_statuses.pop(0)
        return self.fallback_authorization_status

    async def request_authorization(self):
        self.request_authorization_call_count += 1
        return self.request_authorization_result

    async def schedule_daily_reminder(self, hour, minute):
        self.schedule_calls.append((hour, minute))
        if self.schedule_error is not None:
            raise self.schedule_error

    async def cancel_daily_reminder(self):
        self.cancel_call_count += 1


class FakeTicker:
    """Ticker double that records start/stop without real time."""

    def __init__(self):
        self.callback = None
        self.start_count = 0
        self.stop_count = 0

    @property
    def is_running(self):
        return self.callback is not None

    def start(self, callback):
        self.start_count += 1
        self.callback = callback

    def stop(self):
        self.stop_count += 1
        self.callback = None

    def fire(self):
        if self.callback is not None:
            self.callback()


@pytest.fixture
def temp_db_path():
    """Create a temporary, initialized database path."""
    with tempfile.TemporaryDirectory() as tmpdir:
        db_path = Path(tmpdir) / "test.db"
        asyncio.run(init_db(db_path))
        yield db_path


@pytest.fixture
def utc_calendar():
    return DayCalendar(timezone.utc)


@pytest.fixture
def day_one():
    return make_date("2026-02-19T10:00:00Z")


@pytest.fixture
def fixed_clock(day_one):
    return FixedClock(day_one)


@pytest.fixture
def schedule_failure():
    return ReminderSchedulingError("schedule failed")


@pytest.fixture
def two_set_plan():
    """Short plan used by the rest countdown tests."""
    return WorkoutPlan(
        id="pushups",
        name="Push-ups",
        subtitle="Strengthen chest, arms and core",
        form_tip="Keep your body straight.",
        reps_by_set=(8, 10),
        xp_reward=50,
    )
