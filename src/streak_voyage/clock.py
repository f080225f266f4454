"""Injectable clock and calendar-day comparisons."""

from datetime import datetime, timedelta, tzinfo
from typing import Protocol, runtime_checkable


@runtime_checkable
class Clock(Protocol):
    """Supplies the current time."""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in a fixed zone (the local zone by default)."""

    def __init__(self, tz: tzinfo | None = None):
        self.tz = tz

    def now(self) -> datetime:
        if self.tz is None:
            return datetime.now().astimezone()
        return datetime.now(self.tz)


class FixedClock:
    """Clock that only moves when told to."""

    def __init__(self, moment: datetime):
        self.moment = moment

    def now(self) -> datetime:
        return self.moment

    def set(self, moment: datetime) -> None:
        self.moment = moment

    def advance(self, **kwargs) -> datetime:
        """Move forward by a timedelta built from kwargs (days=1, hours=2, ...)."""
        self.moment = self.moment + timedelta(**kwargs)
        return self.moment


class DayCalendar:
    """Calendar-day arithmetic in a single time zone.

    Aware datetimes are converted into the calendar's zone before their
    date is taken; naive datetimes are assumed to already be local to it.
    Without a zone, the system local zone is used.
    """

    def __init__(self, tz: tzinfo | None = None):
        self.tz = tz

    def _localize(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment
        if self.tz is None:
            return moment.astimezone()
        return moment.astimezone(self.tz)

    def start_of_day(self, moment: datetime) -> datetime:
        local = self._localize(moment)
        return local.replace(hour=0, minute=0, second=0, microsecond=0)

    def is_same_day(self, first: datetime, second: datetime) -> bool:
        return self._localize(first).date() == self._localize(second).date()

    def is_day_before(self, moment: datetime, reference: datetime) -> bool:
        """True if `moment` falls on the calendar day before `reference`."""
        yesterday = self._localize(reference).date() - timedelta(days=1)
        return self._localize(moment).date() == yesterday
