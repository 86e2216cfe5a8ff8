"""Derived dashboard payloads. Computed per request, never persisted."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from .base import CamelModel

InsightType = Literal["mood", "productivity", "wellbeing", "achievement"]


class MoodTrend(CamelModel):
    date: str
    mood: str
    sentiment: float
    entry_count: int


class JournalStats(CamelModel):
    total_entries: int = 0
    this_week: int = 0
    this_month: int = 0
    average_length: int = 0
    most_common_mood: str = "neutral"
    most_used_tags: list[str] = Field(default_factory=list)


class MoodStats(CamelModel):
    """Per-mood entry counts over a trailing window of days."""

    days: int
    total_entries: int = 0
    moods: dict[str, int] = Field(default_factory=dict)


class UpcomingDeadline(CamelModel):
    title: str
    days_left: int


class GoalProgressSummary(CamelModel):
    active_goals: int = 0
    completed_this_month: int = 0
    overall_progress: int = 0
    upcoming_deadlines: list[UpcomingDeadline] = Field(default_factory=list)


class Streaks(CamelModel):
    current_streak: int = 0
    longest_streak: int = 0
    last_entry_date: datetime


class Insight(CamelModel):
    type: InsightType
    title: str
    description: str
    icon: str


class DashboardData(CamelModel):
    mood_trends: list[MoodTrend]
    journal_stats: JournalStats
    goal_progress: GoalProgressSummary
    streaks: Streaks
    insights: list[Insight]
    recommendations: list[str]


__all__ = [
    "DashboardData",
    "GoalProgressSummary",
    "Insight",
    "InsightType",
    "JournalStats",
    "MoodStats",
    "MoodTrend",
    "Streaks",
    "UpcomingDeadline",
]
