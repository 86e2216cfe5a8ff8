"""Injectable time sources for date-sensitive aggregation."""

from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime:
        ...


class SystemClock:
    """Wall clock in a fixed IANA timezone."""

    def __init__(self, tz: str | tzinfo = "UTC") -> None:
        self.tz = ZoneInfo(tz) if isinstance(tz, str) else tz

    def now(self) -> datetime:
        return datetime.now(self.tz)


class FixedClock:
    """Always returns the same instant. Naive datetimes are read as UTC."""

    def __init__(self, instant: datetime) -> None:
        self._instant = ensure_aware(instant)

    def now(self) -> datetime:
        return self._instant

    def advance(self, **delta: float) -> None:
        self._instant = self._instant + timedelta(**delta)


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def calendar_day(value: datetime, tz: tzinfo | None) -> date:
    """Calendar date of ``value`` as seen from ``tz``."""

    return ensure_aware(value).astimezone(tz).date()


__all__ = ["Clock", "FixedClock", "SystemClock", "calendar_day", "ensure_aware"]
