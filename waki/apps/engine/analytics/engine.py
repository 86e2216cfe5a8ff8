"""Per-user analytics dashboard, computed fresh on every request."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, List, Literal, Protocol, Sequence, TypeVar

from waki.libs.clock import Clock
from waki.libs.schemas import (
    DashboardData,
    Goal,
    GoalProgressSummary,
    JournalEntry,
    JournalStats,
    MoodStats,
    MoodTrend,
    Streaks,
)

from .goals import build_goal_summary
from .insights import generate_insights, generate_recommendations
from .journal_stats import build_journal_stats
from .mood import build_mood_stats, build_mood_trends
from .streaks import build_streaks

LOGGER = logging.getLogger(__name__)

ExportFormat = Literal["json", "csv"]
CSV_HEADER = "Date,Mood,Sentiment,Entries"
MOOD_STATS_FETCH_LIMIT = 500

T = TypeVar("T")


class JournalSource(Protocol):
    async def fetch_entries(self, user_id: str, limit: int) -> Sequence[JournalEntry]:
        ...


class GoalSource(Protocol):
    async def fetch_goals(self, user_id: str, include_completed: bool = False) -> Sequence[Goal]:
        ...


class AnalyticsUnavailableError(RuntimeError):
    """An analytics read could not be served."""


class DashboardUnavailableError(AnalyticsUnavailableError):
    """Raised only when the dashboard fan-out itself fails."""


class AnalyticsService:
    def __init__(
        self,
        journal: JournalSource,
        goals: GoalSource,
        clock: Clock,
        *,
        fetch_timeout: float = 5.0,
        mood_window_days: int = 30,
        recent_limit: int = 100,
        streak_limit: int = 365,
    ) -> None:
        self._journal = journal
        self._goals = goals
        self._clock = clock
        self._fetch_timeout = fetch_timeout
        self._mood_window_days = mood_window_days
        self._recent_limit = recent_limit
        self._streak_limit = streak_limit

    async def _fetch(self, fetch: Awaitable[T]) -> T:
        return await asyncio.wait_for(fetch, timeout=self._fetch_timeout)

    async def _degrade(
        self,
        name: str,
        user_id: str,
        compute: Callable[[], Awaitable[T]],
        fallback: Callable[[], T],
    ) -> T:
        try:
            return await compute()
        except asyncio.TimeoutError:
            LOGGER.warning(
                "[Analytics] %s fetch timed out", name, extra={"user_id": user_id, "aggregate": name}
            )
        except Exception:
            LOGGER.exception(
                "[Analytics] %s failed", name, extra={"user_id": user_id, "aggregate": name}
            )
        return fallback()

    async def get_mood_trends(self, user_id: str) -> List[MoodTrend]:
        async def compute() -> List[MoodTrend]:
            entries = await self._fetch(self._journal.fetch_entries(user_id, self._recent_limit))
            return build_mood_trends(entries, self._clock.now(), self._mood_window_days)

        return await self._degrade("mood_trends", user_id, compute, list)

    async def get_journal_stats(self, user_id: str) -> JournalStats:
        async def compute() -> JournalStats:
            entries = await self._fetch(self._journal.fetch_entries(user_id, self._recent_limit))
            return build_journal_stats(entries, self._clock.now())

        return await self._degrade("journal_stats", user_id, compute, JournalStats)

    async def get_goal_summary(self, user_id: str) -> GoalProgressSummary:
        async def compute() -> GoalProgressSummary:
            goals = await self._fetch(self._goals.fetch_goals(user_id, True))
            return build_goal_summary(goals, self._clock.now())

        return await self._degrade("goal_progress", user_id, compute, GoalProgressSummary)

    async def get_streaks(self, user_id: str) -> Streaks:
        async def compute() -> Streaks:
            entries = await self._fetch(self._journal.fetch_entries(user_id, self._streak_limit))
            return build_streaks(entries, self._clock.now())

        def fallback() -> Streaks:
            return Streaks(current_streak=0, longest_streak=0, last_entry_date=self._clock.now())

        return await self._degrade("streaks", user_id, compute, fallback)

    async def get_mood_stats(self, user_id: str, days: int = 30) -> MoodStats:
        """Per-mood counts over the last ``days``. Unlike the dashboard, failures propagate."""

        try:
            entries = await self._fetch(self._journal.fetch_entries(user_id, MOOD_STATS_FETCH_LIMIT))
        except Exception as exc:
            LOGGER.exception("[Analytics] mood stats fetch failed", extra={"user_id": user_id, "days": days})
            raise AnalyticsUnavailableError("Failed to fetch mood statistics") from exc
        return build_mood_stats(entries, self._clock.now(), days)

    async def compute_dashboard(self, user_id: str) -> DashboardData:
        try:
            mood_trends, journal_stats, goal_progress, streaks = await asyncio.gather(
                self.get_mood_trends(user_id),
                self.get_journal_stats(user_id),
                self.get_goal_summary(user_id),
                self.get_streaks(user_id),
            )
        except Exception as exc:
            LOGGER.exception("[Analytics] dashboard fan-out failed", extra={"user_id": user_id})
            raise DashboardUnavailableError("Failed to get dashboard data") from exc

        insights = generate_insights(mood_trends, journal_stats)
        recommendations = generate_recommendations(insights)
        LOGGER.debug(
            "[Analytics] dashboard computed",
            extra={"user_id": user_id, "insights": len(insights), "trend_days": len(mood_trends)},
        )
        return DashboardData(
            mood_trends=mood_trends,
            journal_stats=journal_stats,
            goal_progress=goal_progress,
            streaks=streaks,
            insights=insights,
            recommendations=recommendations,
        )

    async def export_dashboard(self, user_id: str, fmt: ExportFormat = "json") -> str:
        if fmt not in ("json", "csv"):
            raise ValueError(f"Unsupported export format: {fmt}")
        dashboard = await self.compute_dashboard(user_id)
        if fmt == "json":
            return json.dumps(dashboard.to_wire(), indent=2, ensure_ascii=False)
        return render_mood_csv(dashboard.mood_trends)


def _format_number(value: Any) -> str:
    number = float(value)
    if number.is_integer():
        return str(int(number))
    return repr(number)


def render_mood_csv(trends: Sequence[MoodTrend]) -> str:
    lines = [CSV_HEADER]
    for trend in trends:
        lines.append(f"{trend.date},{trend.mood},{_format_number(trend.sentiment)},{trend.entry_count}")
    return "\n".join(lines)


__all__ = [
    "AnalyticsService",
    "AnalyticsUnavailableError",
    "CSV_HEADER",
    "MOOD_STATS_FETCH_LIMIT",
    "DashboardUnavailableError",
    "ExportFormat",
    "GoalSource",
    "JournalSource",
    "render_mood_csv",
]
