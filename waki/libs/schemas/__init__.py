"""Pydantic models and schema utilities."""

from .alarms import Alarm, AlarmCreate, AlarmUpdate, Location, PreferencesUpdate, UserPreferences
from .analytics import (
    DashboardData,
    GoalProgressSummary,
    Insight,
    JournalStats,
    MoodStats,
    MoodTrend,
    Streaks,
    UpcomingDeadline,
)
from .goals import Goal, GoalCreate, GoalProgressUpdate, GoalStats, LinkJournalEntry, Milestone
from .journal import JournalEntry, JournalEntryCreate
from .settings import AppSettings, get_settings

__all__ = [
    "Alarm",
    "AlarmCreate",
    "AlarmUpdate",
    "AppSettings",
    "DashboardData",
    "Goal",
    "GoalCreate",
    "GoalProgressSummary",
    "GoalProgressUpdate",
    "GoalStats",
    "Insight",
    "JournalEntry",
    "JournalEntryCreate",
    "JournalStats",
    "LinkJournalEntry",
    "Location",
    "Milestone",
    "MoodStats",
    "MoodTrend",
    "PreferencesUpdate",
    "Streaks",
    "UpcomingDeadline",
    "UserPreferences",
    "get_settings",
]
