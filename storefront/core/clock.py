"""Clock capability used for deal validity checks"""

from datetime import datetime, timedelta, timezone
from typing import Optional, Protocol


class Clock(Protocol):
    """Anything that can tell the current time"""

    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in UTC"""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """
    Clock that only moves when told to.

    Used to make deal expiry deterministic.
    """

    def __init__(self, current: Optional[datetime] = None):
        self._current = as_utc(current or datetime(2024, 1, 1, tzinfo=timezone.utc))

    def now(self) -> datetime:
        return self._current

    def set(self, current: datetime) -> None:
        self._current = as_utc(current)

    def advance(self, **delta) -> datetime:
        """Move forward by a timedelta spec, e.g. advance(minutes=5)"""
        self._current = self._current + timedelta(**delta)
        return self._current


def as_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value
