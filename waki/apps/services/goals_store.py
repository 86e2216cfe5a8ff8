"""Storage abstraction for the goals table."""

from __future__ import annotations

import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

import asyncpg

from waki.apps.engine.analytics.goals import apply_progress_update
from waki.libs.clock import ensure_aware
from waki.libs.schemas import Goal, GoalCreate
from waki.libs.schemas.db import execute, fetch_all, fetch_one

from .errors import RecordAccessError, RecordNotFoundError

LOGGER = logging.getLogger(__name__)

_GOAL_COLUMNS = (
    "id, user_id, title, description, category, target_date, created_at, progress, "
    "milestones, is_completed, reminder_time, linked_journal_entries"
)
_FAR_FUTURE = datetime.max.replace(tzinfo=timezone.utc)


def _row_to_goal(row: Dict[str, Any]) -> Goal:
    payload = dict(row)
    payload["id"] = str(payload.get("id"))
    milestones = payload.get("milestones") or []
    if isinstance(milestones, str):
        milestones = json.loads(milestones)
    payload["milestones"] = milestones
    payload["linked_journal_entries"] = list(payload.get("linked_journal_entries") or [])
    payload["description"] = payload.get("description") or ""
    return Goal.model_validate(payload)


def _milestones_json(goal: Goal) -> str:
    return json.dumps([m.model_dump(mode="json") for m in goal.milestones], ensure_ascii=False)


class GoalRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_goals(self, user_id: str, include_completed: bool = False) -> List[Goal]:
        """Goals ordered by target date, undated goals last."""

        sql = f"SELECT {_GOAL_COLUMNS} FROM goals WHERE user_id = $1"
        if not include_completed:
            sql += " AND is_completed = false"
        rows = await fetch_all(self._pool, sql, user_id)
        goals = [_row_to_goal(row) for row in rows]
        goals.sort(key=lambda g: ensure_aware(g.target_date) if g.target_date else _FAR_FUTURE)
        return goals

    async def get_goal(self, user_id: str, goal_id: str) -> Goal:
        row = await fetch_one(
            self._pool,
            f"SELECT {_GOAL_COLUMNS} FROM goals WHERE id::text = $1",
            goal_id,
        )
        if row is None:
            raise RecordNotFoundError("goal", goal_id)
        goal = _row_to_goal(row)
        if goal.user_id != user_id:
            raise RecordAccessError("goal", goal_id)
        return goal

    async def create_goal(self, user_id: str, payload: GoalCreate) -> str:
        goal_id = str(uuid.uuid4())
        goal = Goal(
            id=goal_id,
            user_id=user_id,
            title=payload.title,
            description=payload.description,
            category=payload.category,
            target_date=payload.target_date,
            created_at=datetime.now(timezone.utc),
            milestones=[{"id": str(uuid.uuid4()), "title": m.title} for m in payload.milestones],
            reminder_time=payload.reminder_time,
        )
        await execute(
            self._pool,
            """
            INSERT INTO goals (id, user_id, title, description, category, target_date, created_at,
                               progress, milestones, is_completed, reminder_time, linked_journal_entries)
            VALUES ($1, $2, $3, $4, $5, $6, $7, 0, $8::jsonb, false, $9, $10)
            """,
            goal.id,
            goal.user_id,
            goal.title,
            goal.description,
            goal.category,
            goal.target_date,
            goal.created_at,
            _milestones_json(goal),
            goal.reminder_time,
            [],
        )
        LOGGER.info("[Goals] goal created", extra={"user_id": user_id, "goal_id": goal_id})
        return goal_id

    async def update_progress(
        self,
        user_id: str,
        goal_id: str,
        progress: int,
        milestone_id: str | None = None,
    ) -> Goal:
        goal = await self.get_goal(user_id, goal_id)
        updated = apply_progress_update(goal, progress, milestone_id)
        await execute(
            self._pool,
            """
            UPDATE goals
            SET progress = $2, milestones = $3::jsonb, is_completed = $4
            WHERE id::text = $1
            """,
            goal_id,
            updated.progress,
            _milestones_json(updated),
            updated.is_completed,
        )
        LOGGER.info(
            "[Goals] progress updated",
            extra={"user_id": user_id, "goal_id": goal_id, "progress": updated.progress},
        )
        return updated

    async def link_journal_entry(self, user_id: str, goal_id: str, journal_entry_id: str) -> None:
        goal = await self.get_goal(user_id, goal_id)
        if journal_entry_id in goal.linked_journal_entries:
            return
        await execute(
            self._pool,
            "UPDATE goals SET linked_journal_entries = $2 WHERE id::text = $1",
            goal_id,
            [*goal.linked_journal_entries, journal_entry_id],
        )

    async def delete_goal(self, user_id: str, goal_id: str) -> None:
        await self.get_goal(user_id, goal_id)
        await execute(self._pool, "DELETE FROM goals WHERE id::text = $1", goal_id)
        LOGGER.info("[Goals] goal deleted", extra={"user_id": user_id, "goal_id": goal_id})


__all__ = ["GoalRepository"]
