"""Reminder coordinator: permission-aware daily reminder policy."""

import asyncio
import logging
from datetime import datetime, time
from typing import Callable, Protocol

from ..models.reminder import ReminderPermissionStatus, ReminderSettingsSnapshot
from ..scheduler import DailyReminderScheduler

logger = logging.getLogger(__name__)


class ReminderSettingsStore(Protocol):
    """Durable storage for the reminder settings."""

    async def load(self) -> ReminderSettingsSnapshot | None:
        ...

    async def save(self, snapshot: ReminderSettingsSnapshot) -> None:
        ...


class ReminderCoordinator:
    """Keeps the stored reminder preference consistent with permission state.

    Permission denial and scheduling failures never raise to the caller;
    they leave the reminder disabled, which is visible through
    `reminder_enabled` and `reminder_permission_status`. Operations are
    serialized with a lock.
    """

    def __init__(
        self,
        store: ReminderSettingsStore,
        scheduler: DailyReminderScheduler,
        on_change: Callable[[ReminderSettingsSnapshot], None] | None = None,
    ):
        self.store = store
        self.scheduler = scheduler
        self.on_change = on_change
        self.reminder_permission_status = ReminderPermissionStatus.NOT_DETERMINED
        self._settings = ReminderSettingsSnapshot()
        self._status_known = False
        self._lock = asyncio.Lock()

    @property
    def settings(self) -> ReminderSettingsSnapshot:
        return ReminderSettingsSnapshot(
            is_enabled=self._settings.is_enabled,
            hour=self._settings.hour,
            minute=self._settings.minute,
        )

    @property
    def reminder_enabled(self) -> bool:
        return self._settings.is_enabled

    @property
    def reminder_time(self) -> time:
        return self._settings.reminder_time

    async def load(self) -> ReminderSettingsSnapshot:
        """Load stored settings, correcting an invalid time to the default."""
        async with self._lock:
            stored = await self.store.load()
            if stored is None:
                self._settings = ReminderSettingsSnapshot()
                return self.settings

            normalized = stored.normalized()
            if normalized != stored:
                logger.info(
                    "Stored reminder time %s:%s out of range, reset to %s",
                    stored.hour,
                    stored.minute,
                    normalized.get_time_display(),
                )
                await self._persist(normalized)
            else:
                self._settings = normalized
            return self.settings

    async def set_reminder_enabled(self, enabled: bool) -> None:
        async with self._lock:
            if not enabled:
                await self._persist_enabled(False)
                await self.scheduler.cancel_daily_reminder()
                return

            status = await self._refresh_permission_status()

            if status is ReminderPermissionStatus.NOT_DETERMINED:
                granted = await self.scheduler.request_authorization()
                status = await self._refresh_permission_status()
                if not (granted and status.allows_scheduling):
                    logger.info("Reminder permission not granted")
                    await self._persist_enabled(False)
                    return
            elif not status.allows_scheduling:
                logger.info("Reminder permission denied, leaving reminder off")
                await self._persist_enabled(False)
                return

            await self._persist_enabled(True)
            await self._schedule_reminder_if_possible()

    async def set_reminder_time(self, value: time | datetime) -> None:
        """Store a new reminder time and reschedule if the reminder is on."""
        async with self._lock:
            updated = ReminderSettingsSnapshot(
                is_enabled=self._settings.is_enabled,
                hour=value.hour,
                minute=value.minute,
            )
            await self._persist(updated)
            if updated.is_enabled:
                await self._schedule_reminder_if_possible()

    async def refresh_reminder_status(self) -> ReminderPermissionStatus:
        """Re-check permission (call when the app comes to the foreground)."""
        async with self._lock:
            status = await self._refresh_permission_status()
            if not self._settings.is_enabled:
                return status

            if not status.allows_scheduling:
                logger.info("Reminder permission revoked, disabling reminder")
                await self._persist_enabled(False)
                await self.scheduler.cancel_daily_reminder()
            else:
                await self._schedule_reminder_if_possible()
            return status

    async def _schedule_reminder_if_possible(self) -> None:
        if not self._settings.is_enabled:
            return
        if not self._status_known:
            await self._refresh_permission_status()
        if not self.reminder_permission_status.allows_scheduling:
            return

        try:
            await self.scheduler.schedule_daily_reminder(
                self._settings.hour, self._settings.minute
            )
        except Exception as e:
            logger.warning("Scheduling daily reminder failed, disabling it: %s", e)
            await self._persist_enabled(False)

    async def _refresh_permission_status(self) -> ReminderPermissionStatus:
        self.reminder_permission_status = await self.scheduler.authorization_status()
        self._status_known = True
        return self.reminder_permission_status

    async def _persist_enabled(self, enabled: bool) -> None:
        await self._persist(
            ReminderSettingsSnapshot(
                is_enabled=enabled,
                hour=self._settings.hour,
                minute=self._settings.minute,
            )
        )

    async def _persist(self, snapshot: ReminderSettingsSnapshot) -> None:
        self._settings = snapshot
        await self.store.save(self.settings)
        if self.on_change is not None:
            self.on_change(self.settings)
