from .engine import (
    AnalyticsService,
    AnalyticsUnavailableError,
    DashboardUnavailableError,
    GoalSource,
    JournalSource,
)
from .goals import apply_progress_update, build_goal_summary, compute_goal_stats
from .insights import generate_insights, generate_recommendations
from .journal_stats import build_journal_stats
from .mood import build_mood_stats, build_mood_trends
from .streaks import build_streaks

__all__ = [
    "AnalyticsService",
    "AnalyticsUnavailableError",
    "DashboardUnavailableError",
    "GoalSource",
    "JournalSource",
    "apply_progress_update",
    "build_goal_summary",
    "build_journal_stats",
    "build_mood_stats",
    "build_mood_trends",
    "build_streaks",
    "compute_goal_stats",
    "generate_insights",
    "generate_recommendations",
]
