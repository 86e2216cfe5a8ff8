from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import List, Sequence

from waki.libs.clock import calendar_day, ensure_aware
from waki.libs.schemas import JournalEntry, Streaks

ONE_DAY = timedelta(days=1)


def current_streak(days_desc: Sequence[date], today: date) -> int:
    streak = 0
    check = today
    for day in days_desc:
        if day == check:
            streak += 1
            check -= ONE_DAY
        elif day < check:
            break
    return streak


def longest_streak(days_asc: Sequence[date]) -> int:
    best = 0
    running = 0
    previous: date | None = None
    for day in days_asc:
        running = running + 1 if previous is not None and day - previous == ONE_DAY else 1
        best = max(best, running)
        previous = day
    return best


def build_streaks(entries: Sequence[JournalEntry], now: datetime) -> Streaks:
    if not entries:
        return Streaks(current_streak=0, longest_streak=0, last_entry_date=now)

    latest = max(ensure_aware(entry.created_at) for entry in entries)
    days: List[date] = sorted(
        {calendar_day(entry.created_at, now.tzinfo) for entry in entries},
        reverse=True,
    )

    current = current_streak(days, now.date())
    longest = max(longest_streak(days[::-1]), current)
    return Streaks(current_streak=current, longest_streak=longest, last_entry_date=latest)


__all__ = ["build_streaks", "current_streak", "longest_streak"]
