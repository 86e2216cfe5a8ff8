"""Goal progress summaries and the progress update rules."""

from __future__ import annotations

import math
from collections import Counter
from datetime import datetime, timedelta, timezone
from typing import Optional, Sequence

from waki.libs.clock import ensure_aware
from waki.libs.schemas import Goal, GoalProgressSummary, GoalStats, UpcomingDeadline

DEADLINE_HORIZON_DAYS = 30
MAX_DEADLINES = 3
_DAY_SECONDS = 24 * 60 * 60


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def days_left(target: datetime, now: datetime) -> int:
    return math.ceil((ensure_aware(target) - now).total_seconds() / _DAY_SECONDS)


def build_goal_summary(goals: Sequence[Goal], now: datetime) -> GoalProgressSummary:
    month_ago = now - timedelta(days=30)
    active = [goal for goal in goals if not goal.is_completed]

    # Keyed on created_at, not on when the goal was finished.
    completed_this_month = sum(
        1 for goal in goals if goal.is_completed and ensure_aware(goal.created_at) > month_ago
    )

    overall_progress = round_half_up(sum(goal.progress for goal in active) / len(active)) if active else 0

    deadlines = []
    for goal in active:
        if goal.target_date is None:
            continue
        remaining = days_left(goal.target_date, now)
        if 0 < remaining <= DEADLINE_HORIZON_DAYS:
            deadlines.append(UpcomingDeadline(title=goal.title, days_left=remaining))
    deadlines.sort(key=lambda item: item.days_left)

    return GoalProgressSummary(
        active_goals=len(active),
        completed_this_month=completed_this_month,
        overall_progress=overall_progress,
        upcoming_deadlines=deadlines[:MAX_DEADLINES],
    )


def compute_goal_stats(goals: Sequence[Goal]) -> GoalStats:
    completed = sum(1 for goal in goals if goal.is_completed)
    return GoalStats(
        total_goals=len(goals),
        completed_goals=completed,
        in_progress_goals=len(goals) - completed,
        completion_rate=round_half_up(completed / len(goals) * 100) if goals else 0,
        categories_breakdown=dict(Counter(goal.category for goal in goals)),
    )


def apply_progress_update(
    goal: Goal,
    progress: int,
    milestone_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> Goal:
    """Return a copy of ``goal`` with the new progress applied.

    Progress is clamped to 0..100. Completing a milestone recomputes progress
    from the milestone ratio. The goal is completed exactly when progress is 100,
    so lowering a finished goal reopens it.
    """

    now = now or datetime.now(timezone.utc)
    updated = goal.model_copy(deep=True)
    updated.progress = min(100, max(0, progress))

    if milestone_id and updated.milestones:
        for milestone in updated.milestones:
            if milestone.id == milestone_id and not milestone.completed:
                milestone.completed = True
                milestone.completed_at = now
        done = sum(1 for milestone in updated.milestones if milestone.completed)
        updated.progress = round_half_up(done / len(updated.milestones) * 100)

    updated.is_completed = updated.progress == 100
    return updated


__all__ = [
    "apply_progress_update",
    "build_goal_summary",
    "compute_goal_stats",
    "days_left",
    "round_half_up",
]
