from datetime import datetime, timedelta, timezone
from zoneinfo import ZoneInfo

import pytest

from waki.apps.engine.analytics import build_mood_trends


def test_groups_by_day_and_sorts_ascending(now, make_entry):
    entries = [
        make_entry(now - timedelta(hours=2), mood="happy", sentiment=0.4),
        make_entry(now - timedelta(hours=4), mood="calm", sentiment=0.8),
        make_entry(days_ago=1, mood="anxious", sentiment=-0.2),
        make_entry(days_ago=40, mood="sad", sentiment=-0.9),
    ]

    trends = build_mood_trends(entries, now, window_days=30)

    assert [t.date for t in trends] == ["2026-10-18", "2026-10-19"]
    today = trends[-1]
    assert today.mood == "happy"
    assert today.entry_count == 2
    assert today.sentiment == pytest.approx(0.6)
    assert sum(t.entry_count for t in trends) == 3


def test_same_day_sentiment_halves_against_previous_average(now, make_entry):
    entries = [
        make_entry(now - timedelta(hours=1), sentiment=1.0),
        make_entry(now - timedelta(hours=2), sentiment=0.0),
        make_entry(now - timedelta(hours=3), sentiment=0.0),
    ]

    (trend,) = build_mood_trends(entries, now)

    assert trend.entry_count == 3
    assert trend.sentiment == pytest.approx(0.25)


def test_window_boundary_is_exclusive(now, make_entry):
    entries = [
        make_entry(now - timedelta(days=30)),
        make_entry(now - timedelta(days=30) + timedelta(seconds=1)),
    ]

    trends = build_mood_trends(entries, now, window_days=30)

    assert sum(t.entry_count for t in trends) == 1


def test_missing_mood_and_sentiment_default(now, make_entry):
    (trend,) = build_mood_trends([make_entry(mood=None, sentiment=None)], now)

    assert trend.mood == "neutral"
    assert trend.sentiment == 0


def test_calendar_day_follows_clock_timezone(make_entry):
    local_now = datetime(2026, 10, 19, 8, 0, tzinfo=ZoneInfo("America/New_York"))
    entry = make_entry(datetime(2026, 10, 19, 2, 0, tzinfo=timezone.utc))

    (trend,) = build_mood_trends([entry], local_now)

    assert trend.date == "2026-10-18"


def test_empty_input(now):
    assert build_mood_trends([], now) == []
