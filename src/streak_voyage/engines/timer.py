"""Periodic tick sources for the rest countdown."""

import asyncio
from typing import Callable, Protocol


class RestTicker(Protocol):
    """Calls a callback periodically until stopped."""

    @property
    def is_running(self) -> bool:
        ...

    def start(self, callback: Callable[[], None]) -> None:
        ...

    def stop(self) -> None:
        ...


class AsyncioRestTicker:
    """Ticks on the running asyncio loop via `call_later`.

    Each tick reschedules the next one, so `stop()` cancels the single
    pending handle and no late tick can fire afterwards. `start()` while
    running restarts the period.
    """

    def __init__(self, interval: float = 1.0):
        self.interval = interval
        self._handle: asyncio.TimerHandle | None = None
        self._callback: Callable[[], None] | None = None

    @property
    def is_running(self) -> bool:
        return self._handle is not None

    def start(self, callback: Callable[[], None]) -> None:
        self.stop()
        self._callback = callback
        self._schedule()

    def stop(self) -> None:
        if self._handle is not None:
            self._handle.cancel()
            self._handle = None
        self._callback = None

    def _schedule(self) -> None:
        loop = asyncio.get_running_loop()
        self._handle = loop.call_later(self.interval, self._fire)

    def _fire(self) -> None:
        callback = self._callback
        self._handle = None
        if callback is None:
            return
        # Reschedule first: the callback may stop (or restart) the ticker.
        self._schedule()
        callback()
