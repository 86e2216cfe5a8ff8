from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends

from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.deps.services import get_preferences_repository
from waki.apps.services.preferences_store import PreferencesRepository
from waki.libs.schemas import PreferencesUpdate

router = APIRouter(prefix="/preferences", tags=["preferences"])


@router.get("")
async def get_preferences(
    user_id: str = Depends(get_current_user_id),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
) -> Dict[str, Any]:
    current = await preferences.get_preferences(user_id)
    return current.to_wire()


@router.put("")
async def update_preferences(
    payload: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    preferences: PreferencesRepository = Depends(get_preferences_repository),
) -> Dict[str, Any]:
    updated = await preferences.update_preferences(user_id, payload)
    return updated.to_wire()


__all__ = ["router"]
