"""Storage abstraction for per-user preferences."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict

import asyncpg

from waki.libs.schemas import PreferencesUpdate, UserPreferences
from waki.libs.schemas.db import fetch_one

LOGGER = logging.getLogger(__name__)

_PREFERENCE_COLUMNS = (
    "user_id, name, location, voice_style, include_weather, include_news, news_topics, "
    "created_at, updated_at"
)


def _row_to_preferences(row: Dict[str, Any]) -> UserPreferences:
    payload = dict(row)
    location = payload.get("location")
    if isinstance(location, str):
        payload["location"] = json.loads(location)
    payload["news_topics"] = list(payload.get("news_topics") or [])
    return UserPreferences.model_validate(payload)


class PreferencesRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def _load(self, user_id: str) -> UserPreferences | None:
        row = await fetch_one(
            self._pool,
            f"SELECT {_PREFERENCE_COLUMNS} FROM user_preferences WHERE user_id = $1",
            user_id,
        )
        return _row_to_preferences(row) if row else None

    async def get_preferences(self, user_id: str) -> UserPreferences:
        """Stored preferences, or unsaved defaults for a user who never set any."""

        stored = await self._load(user_id)
        return stored if stored is not None else UserPreferences(user_id=user_id)

    async def update_preferences(self, user_id: str, updates: PreferencesUpdate) -> UserPreferences:
        now = datetime.now(timezone.utc)
        current = await self._load(user_id) or UserPreferences(user_id=user_id, created_at=now)
        changes = updates.model_dump(exclude_unset=True, exclude_none=True)
        if updates.location is not None:
            changes["location"] = updates.location
        merged = current.model_copy(update={**changes, "updated_at": now})

        row = await fetch_one(
            self._pool,
            f"""
            INSERT INTO user_preferences ({_PREFERENCE_COLUMNS})
            VALUES ($1, $2, $3::jsonb, $4, $5, $6, $7, $8, $9)
            ON CONFLICT (user_id) DO UPDATE SET
                name = EXCLUDED.name,
                location = EXCLUDED.location,
                voice_style = EXCLUDED.voice_style,
                include_weather = EXCLUDED.include_weather,
                include_news = EXCLUDED.include_news,
                news_topics = EXCLUDED.news_topics,
                updated_at = EXCLUDED.updated_at
            RETURNING {_PREFERENCE_COLUMNS}
            """,
            user_id,
            merged.name,
            json.dumps(merged.location.model_dump(mode="json"), ensure_ascii=False),
            merged.voice_style,
            merged.include_weather,
            merged.include_news,
            merged.news_topics,
            merged.created_at,
            merged.updated_at,
        )
        LOGGER.info(
            "[Preferences] preferences saved",
            extra={"user_id": user_id, "fields": sorted(changes)},
        )
        return _row_to_preferences(row) if row else merged


__all__ = ["PreferencesRepository"]
