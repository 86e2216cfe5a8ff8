"""Storage abstraction for the journal_entries table."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, List

import asyncpg

from waki.libs.schemas import JournalEntry, JournalEntryCreate
from waki.libs.schemas.db import execute, fetch_all, fetch_one

from .errors import RecordAccessError, RecordNotFoundError

LOGGER = logging.getLogger(__name__)

MAX_FETCH_LIMIT = 500

_ENTRY_COLUMNS = "id, user_id, content, mood, tags, sentiment, audio_url, created_at"


def _row_to_entry(row: Dict[str, Any]) -> JournalEntry:
    payload = dict(row)
    payload["id"] = str(payload.get("id"))
    payload["tags"] = list(payload.get("tags") or [])
    return JournalEntry.model_validate(payload)


class JournalRepository:
    def __init__(self, pool: asyncpg.Pool) -> None:
        self._pool = pool

    async def fetch_entries(self, user_id: str, limit: int = 10) -> List[JournalEntry]:
        """Most recent entries first."""

        rows = await fetch_all(
            self._pool,
            f"""
            SELECT {_ENTRY_COLUMNS}
            FROM journal_entries
            WHERE user_id = $1
            ORDER BY created_at DESC
            LIMIT $2
            """,
            user_id,
            max(1, min(limit, MAX_FETCH_LIMIT)),
        )
        return [_row_to_entry(row) for row in rows]

    async def create_entry(self, user_id: str, payload: JournalEntryCreate) -> str:
        created_at = payload.created_at or datetime.now(timezone.utc)
        row = await fetch_one(
            self._pool,
            """
            INSERT INTO journal_entries (id, user_id, content, mood, tags, sentiment, audio_url, created_at)
            VALUES (gen_random_uuid(), $1, $2, $3, $4, $5, $6, $7)
            RETURNING id
            """,
            user_id,
            payload.content,
            payload.mood or "neutral",
            payload.tags or [],
            payload.sentiment if payload.sentiment is not None else 0.0,
            payload.audio_url or "",
            created_at,
        )
        entry_id = str(row["id"]) if row else ""
        LOGGER.info("[Journal] entry created", extra={"user_id": user_id, "entry_id": entry_id})
        return entry_id

    async def delete_entry(self, user_id: str, entry_id: str) -> None:
        row = await fetch_one(
            self._pool,
            "SELECT user_id FROM journal_entries WHERE id::text = $1",
            entry_id,
        )
        if row is None:
            raise RecordNotFoundError("journal entry", entry_id)
        if row.get("user_id") != user_id:
            raise RecordAccessError("journal entry", entry_id)
        await execute(self._pool, "DELETE FROM journal_entries WHERE id::text = $1", entry_id)
        LOGGER.info("[Journal] entry deleted", extra={"user_id": user_id, "entry_id": entry_id})


__all__ = ["JournalRepository"]
