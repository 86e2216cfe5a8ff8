"""Storage abstraction for the alarms table."""

from __future__ import annotations

import logging
import uuid
from datetime import datetime, timezone
from typing import Any, Dict, List

import asyncpg

from waki.libs.schemas import Alarm, AlarmCreate, AlarmUpdate
from waki.libs.schemas.db import execute, fetch_all, fetch_one

from .errors import RecordAccessError, RecordNotFoundError

LOGGER = logging.getLogger(__name__)

_ALARM_COLUMNS = (
    "id, user_id, time, days, enabled, label, snooze_enabled, snooze_duration, created_at, updated_at"
)


def _row_to_alarm(row: Dict[str, Any]) -> Alarm:
    payload = dict(row)
    payload["id"] = str(payload.get("id"))
    payload["days"] = list(payload.get("days") or [])
    return Alarm.model_validate(payload)


class AlarmRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def list_alarms(self, user_id: str) -> List[Alarm]:
        """Alarms ordered by time of day."""

        rows = await fetch_all(
            self._pool,
            f"SELECT {_ALARM_COLUMNS} FROM alarms WHERE user_id = $1 ORDER BY time ASC",
            user_id,
        )
        return [_row_to_alarm(row) for row in rows]

    async def get_alarm(self, user_id: str, alarm_id: str) -> Alarm:
        row = await fetch_one(
            self._pool,
            f"SELECT {_ALARM_COLUMNS} FROM alarms WHERE id::text = $1",
            alarm_id,
        )
        if row is None:
            raise RecordNotFoundError("alarm", alarm_id)
        alarm = _row_to_alarm(row)
        if alarm.user_id != user_id:
            raise RecordAccessError("alarm", alarm_id)
        return alarm

    async def create_alarm(self, user_id: str, payload: AlarmCreate) -> Alarm:
        now = datetime.now(timezone.utc)
        alarm = Alarm(
            id=str(uuid.uuid4()),
            user_id=user_id,
            created_at=now,
            updated_at=now,
            **payload.model_dump(),
        )
        await execute(
            self._pool,
            f"""
            INSERT INTO alarms ({_ALARM_COLUMNS})
            VALUES ($1, $2, $3, $4, $5, $6, $7, $8, $9, $10)
            """,
            alarm.id,
            alarm.user_id,
            alarm.time,
            alarm.days,
            alarm.enabled,
            alarm.label,
            alarm.snooze_enabled,
            alarm.snooze_duration,
            alarm.created_at,
            alarm.updated_at,
        )
        LOGGER.info("[Alarms] alarm created", extra={"user_id": user_id, "alarm_id": alarm.id})
        return alarm

    async def update_alarm(self, user_id: str, alarm_id: str, updates: AlarmUpdate) -> Alarm:
        """Apply the fields present in ``updates`` and bump ``updated_at``."""

        alarm = await self.get_alarm(user_id, alarm_id)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        updated = alarm.model_copy(update={**changes, "updated_at": datetime.now(timezone.utc)})
        await execute(
            self._pool,
            """
            UPDATE alarms
            SET time = $2, days = $3, enabled = $4, label = $5,
                snooze_enabled = $6, snooze_duration = $7, updated_at = $8
            WHERE id::text = $1
            """,
            alarm_id,
            updated.time,
            updated.days,
            updated.enabled,
            updated.label,
            updated.snooze_enabled,
            updated.snooze_duration,
            updated.updated_at,
        )
        LOGGER.info(
            "[Alarms] alarm updated",
            extra={"user_id": user_id, "alarm_id": alarm_id, "fields": sorted(changes)},
        )
        return updated

    async def delete_alarm(self, user_id: str, alarm_id: str) -> None:
        await self.get_alarm(user_id, alarm_id)
        await execute(self._pool, "DELETE FROM alarms WHERE id::text = $1", alarm_id)
        LOGGER.info("[Alarms] alarm deleted", extra={"user_id": user_id, "alarm_id": alarm_id})


__all__ = ["AlarmRepository"]
