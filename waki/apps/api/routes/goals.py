from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.deps.services import get_goal_repository
from waki.apps.engine.analytics import compute_goal_stats
from waki.apps.services.errors import RecordAccessError, RecordNotFoundError
from waki.apps.services.goals_store import GoalRepository
from waki.libs.schemas import GoalCreate, GoalProgressUpdate, LinkJournalEntry

router = APIRouter(prefix="/goals", tags=["goals"])


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=404, detail="Goal not found")
    return HTTPException(status_code=403, detail="Unauthorized to modify this goal")


@router.post("", status_code=201)
async def create_goal(
    payload: GoalCreate,
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    goal_id = await goals.create_goal(user_id, payload)
    return {"id": goal_id}


@router.get("")
async def list_goals(
    include_completed: bool = False,
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    items = await goals.fetch_goals(user_id, include_completed)
    return {"goals": [goal.to_wire() for goal in items]}


@router.get("/progress")
async def goal_stats(
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    items = await goals.fetch_goals(user_id, True)
    return compute_goal_stats(items).to_wire()


@router.put("/{goal_id}/progress")
async def update_progress(
    goal_id: str,
    payload: GoalProgressUpdate,
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    try:
        goal = await goals.update_progress(user_id, goal_id, payload.progress, payload.milestone_id)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return {"goal": goal.to_wire()}


@router.post("/{goal_id}/link-journal")
async def link_journal_entry(
    goal_id: str,
    payload: LinkJournalEntry,
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    try:
        await goals.link_journal_entry(user_id, goal_id, payload.journal_entry_id)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return {"linked": True}


@router.delete("/{goal_id}")
async def delete_goal(
    goal_id: str,
    user_id: str = Depends(get_current_user_id),
    goals: GoalRepository = Depends(get_goal_repository),
) -> Dict[str, Any]:
    try:
        await goals.delete_goal(user_id, goal_id)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return {"deleted": True}


__all__ = ["router"]
