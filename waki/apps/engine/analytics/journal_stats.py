from __future__ import annotations

from collections import Counter
from datetime import datetime, timedelta
from typing import Sequence

from waki.libs.clock import ensure_aware
from waki.libs.schemas import JournalEntry, JournalStats

from .mood import DEFAULT_MOOD

TOP_TAGS = 5


def build_journal_stats(entries: Sequence[JournalEntry], now: datetime) -> JournalStats:
    week_ago = now - timedelta(days=7)
    month_ago = now - timedelta(days=30)

    created = [ensure_aware(entry.created_at) for entry in entries]
    this_week = sum(1 for ts in created if ts > week_ago)
    this_month = sum(1 for ts in created if ts > month_ago)

    total_length = sum(len(entry.content or "") for entry in entries)
    average_length = total_length // len(entries) if entries else 0

    # Counter keeps first-seen order, and most_common() sorts stably, so ties go to the earliest.
    moods = Counter(entry.mood for entry in entries if entry.mood)
    most_common_mood = moods.most_common(1)[0][0] if moods else DEFAULT_MOOD

    tags = Counter(tag for entry in entries for tag in entry.tags or [])
    most_used_tags = [tag for tag, _ in tags.most_common(TOP_TAGS)]

    return JournalStats(
        total_entries=len(entries),
        this_week=this_week,
        this_month=this_month,
        average_length=average_length,
        most_common_mood=most_common_mood,
        most_used_tags=most_used_tags,
    )


__all__ = ["build_journal_stats"]
