from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException, Response

from waki.apps.api.deps.auth import get_current_user_id
from waki.apps.api.deps.services import get_alarm_repository
from waki.apps.services.alarms_store import AlarmRepository
from waki.apps.services.errors import RecordAccessError, RecordNotFoundError
from waki.libs.schemas import AlarmCreate, AlarmUpdate

router = APIRouter(prefix="/alarms", tags=["alarms"])


def _to_http(exc: Exception) -> HTTPException:
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=404, detail="Alarm not found")
    return HTTPException(status_code=403, detail="Forbidden")


@router.post("", status_code=201)
async def create_alarm(
    payload: AlarmCreate,
    user_id: str = Depends(get_current_user_id),
    alarms: AlarmRepository = Depends(get_alarm_repository),
) -> Dict[str, Any]:
    alarm = await alarms.create_alarm(user_id, payload)
    return alarm.to_wire()


@router.get("")
async def list_alarms(
    user_id: str = Depends(get_current_user_id),
    alarms: AlarmRepository = Depends(get_alarm_repository),
) -> Dict[str, Any]:
    items = await alarms.list_alarms(user_id)
    return {"alarms": [alarm.to_wire() for alarm in items]}


@router.get("/{alarm_id}")
async def get_alarm(
    alarm_id: str,
    user_id: str = Depends(get_current_user_id),
    alarms: AlarmRepository = Depends(get_alarm_repository),
) -> Dict[str, Any]:
    try:
        alarm = await alarms.get_alarm(user_id, alarm_id)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return alarm.to_wire()


@router.put("/{alarm_id}")
async def update_alarm(
    alarm_id: str,
    payload: AlarmUpdate,
    user_id: str = Depends(get_current_user_id),
    alarms: AlarmRepository = Depends(get_alarm_repository),
) -> Dict[str, Any]:
    try:
        alarm = await alarms.update_alarm(user_id, alarm_id, payload)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return alarm.to_wire()


@router.delete("/{alarm_id}", status_code=204)
async def delete_alarm(
    alarm_id: str,
    user_id: str = Depends(get_current_user_id),
    alarms: AlarmRepository = Depends(get_alarm_repository),
) -> Response:
    try:
        await alarms.delete_alarm(user_id, alarm_id)
    except (RecordNotFoundError, RecordAccessError) as exc:
        raise _to_http(exc) from exc
    return Response(status_code=204)


__all__ = ["router"]
