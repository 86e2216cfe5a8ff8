from __future__ import annotations

from datetime import datetime, timedelta
from collections import Counter
from typing import Dict, Iterable, List

from waki.libs.clock import calendar_day, ensure_aware
from waki.libs.schemas import JournalEntry, MoodStats, MoodTrend

DEFAULT_MOOD = "neutral"


def build_mood_trends(
    entries: Iterable[JournalEntry],
    now: datetime,
    window_days: int = 30,
) -> List[MoodTrend]:
    """Bucket entries from the trailing window by calendar day, oldest day first.

    A later entry on an already-seen day halves against the bucket's current
    sentiment rather than re-weighting by count.
    """

    cutoff = now - timedelta(days=window_days)
    buckets: Dict[str, MoodTrend] = {}

    for entry in entries:
        created_at = ensure_aware(entry.created_at)
        if created_at <= cutoff:
            continue
        day = calendar_day(created_at, now.tzinfo).isoformat()
        sentiment = entry.sentiment or 0.0
        existing = buckets.get(day)
        if existing is None:
            buckets[day] = MoodTrend(
                date=day,
                mood=entry.mood or DEFAULT_MOOD,
                sentiment=sentiment,
                entry_count=1,
            )
            continue
        existing.sentiment = (existing.sentiment + sentiment) / 2
        existing.entry_count += 1

    return sorted(buckets.values(), key=lambda trend: trend.date)


def build_mood_stats(entries: Iterable[JournalEntry], now: datetime, days: int = 30) -> MoodStats:
    cutoff = now - timedelta(days=days)
    moods = Counter(
        entry.mood or DEFAULT_MOOD for entry in entries if ensure_aware(entry.created_at) > cutoff
    )
    return MoodStats(days=days, total_entries=sum(moods.values()), moods=dict(moods.most_common()))


__all__ = ["DEFAULT_MOOD", "build_mood_stats", "build_mood_trends"]
