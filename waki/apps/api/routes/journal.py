from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Query

from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.deps.services import get_analytics_service, get_journal_repository
from waki.apps.engine.analytics import AnalyticsService, AnalyticsUnavailableError
from waki.apps.services.errors import RecordAccessError, RecordNotFoundError
from waki.apps.services.journal_store import JournalRepository
from waki.libs.schemas import JournalEntryCreate

router = APIRouter(prefix="/journal", tags=["journal"])


@router.post("/entries", status_code=201)
async def create_entry(
    payload: JournalEntryCreate,
    user_id: str = Depends(get_current_user_id),
    journal: JournalRepository = Depends(get_journal_repository),
) -> Dict[str, Any]:
    entry_id = await journal.create_entry(user_id, payload)
    return {"id": entry_id}


@router.get("/entries")
async def list_entries(
    limit: int = Query(default=10, ge=1, le=500),
    user_id: str = Depends(get_current_user_id),
    journal: JournalRepository = Depends(get_journal_repository),
) -> Dict[str, Any]:
    entries = await journal.fetch_entries(user_id, limit)
    return {"entries": [entry.to_wire() for entry in entries]}


@router.delete("/entries/{entry_id}")
async def delete_entry(
    entry_id: str,
    user_id: str = Depends(get_current_user_id),
    journal: JournalRepository = Depends(get_journal_repository),
) -> Dict[str, Any]:
    try:
        await journal.delete_entry(user_id, entry_id)
    except RecordNotFoundError as exc:
        raise HTTPException(status_code=404, detail="Journal entry not found") from exc
    except RecordAccessError as exc:
        raise HTTPException(status_code=403, detail="Unauthorized to delete this entry") from exc
    return {"deleted": True}


@router.get("/mood-stats")
async def mood_stats(
    days: int = Query(default=30, ge=1, le=365),
    user_id: str = Depends(get_current_user_id),
    analytics: AnalyticsService = Depends(get_analytics_service),
) -> Dict[str, Any]:
    try:
        stats = await analytics.get_mood_stats(user_id, days)
    except AnalyticsUnavailableError as exc:
        raise HTTPException(status_code=500, detail="Failed to fetch mood statistics") from exc
    return stats.to_wire()


__all__ = ["router"]
