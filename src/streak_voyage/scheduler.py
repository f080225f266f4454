"""Daily reminder scheduler boundary and a local SQLite-backed implementation."""

import json
import logging
from datetime import datetime, timedelta
from pathlib import Path
from typing import Awaitable, Callable, Protocol, runtime_checkable

import aiosqlite

from .db.repositories import KeyValueRepository
from .exceptions import ReminderSchedulingError
from .models.reminder import ReminderPermissionStatus

logger = logging.getLogger(__name__)

REMINDER_IDENTIFIER = "streakvoyage.dailyWorkoutReminder"
REMINDER_TITLE = "Time to train"
REMINDER_BODY = "Protect your streak with today's workout."

PERMISSION_KEY = "notificationPermission"


@runtime_checkable
class DailyReminderScheduler(Protocol):
    """Protocol for whatever delivers the daily reminder."""

    async def authorization_status(self) -> ReminderPermissionStatus:
        ...

    async def request_authorization(self) -> bool:
        ...

    async def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        """Replace any pending reminder with one repeating daily at hour:minute.

        Raises:
            ReminderSchedulingError: If the reminder could not be registered
        """
        ...

    async def cancel_daily_reminder(self) -> None:
        ...


PermissionPrompt = Callable[[], Awaitable[bool]]


class LocalReminderScheduler:
    """Keeps the permission decision and the pending reminder in the local database.

    The permission is asked once through `prompt`; until then the status
    is `NOT_DETERMINED`. Without a prompt, requests are declined.
    """

    def __init__(
        self,
        db_path: Path | None = None,
        prompt: PermissionPrompt | None = None,
        identifier: str = REMINDER_IDENTIFIER,
    ):
        self.identifier = identifier
        self.prompt = prompt
        self._kv = KeyValueRepository(db_path)

    async def authorization_status(self) -> ReminderPermissionStatus:
        raw = await self._kv.get(PERMISSION_KEY)
        if raw is None:
            return ReminderPermissionStatus.NOT_DETERMINED
        try:
            return ReminderPermissionStatus(raw)
        except ValueError:
            logger.warning("Unknown stored permission %r, treating as denied", raw)
            return ReminderPermissionStatus.DENIED

    async def request_authorization(self) -> bool:
        granted = False
        if self.prompt is not None:
            granted = bool(await self.prompt())

        status = (
            ReminderPermissionStatus.AUTHORIZED
            if granted
            else ReminderPermissionStatus.DENIED
        )
        await self._kv.set(PERMISSION_KEY, status.value)
        return granted

    async def set_authorization_status(self, status: ReminderPermissionStatus) -> None:
        """Change the stored permission (e.g. revoked from settings)."""
        if status is ReminderPermissionStatus.NOT_DETERMINED:
            await self._kv.delete(PERMISSION_KEY)
        else:
            await self._kv.set(PERMISSION_KEY, status.value)

    async def schedule_daily_reminder(self, hour: int, minute: int) -> None:
        if not (0 <= hour <= 23 and 0 <= minute <= 59):
            raise ReminderSchedulingError(f"Invalid reminder time {hour}:{minute}")

        request = {
            "identifier": self.identifier,
            "title": REMINDER_TITLE,
            "body": REMINDER_BODY,
            "hour": hour,
            "minute": minute,
            "repeats": True,
        }
        try:
            await self._kv.set(self.identifier, json.dumps(request))
        except aiosqlite.Error as e:
            raise ReminderSchedulingError(f"Could not store reminder: {e}") from e

        logger.info("Daily reminder scheduled for %02d:%02d", hour, minute)

    async def cancel_daily_reminder(self) -> None:
        await self._kv.delete(self.identifier)

    async def pending_reminder(self) -> dict | None:
        """Return the scheduled reminder request, if any."""
        raw = await self._kv.get(self.identifier)
        if raw is None:
            return None
        return json.loads(raw)

    async def next_fire_time(self, now: datetime) -> datetime | None:
        """Next time the reminder would fire after `now`."""
        request = await self.pending_reminder()
        if request is None:
            return None
        return next_occurrence(now, request["hour"], request["minute"])


def next_occurrence(now: datetime, hour: int, minute: int) -> datetime:
    """Next datetime strictly after `now` at hour:minute."""
    candidate = now.replace(hour=hour, minute=minute, second=0, microsecond=0)
    if candidate <= now:
        candidate += timedelta(days=1)
    return candidate
