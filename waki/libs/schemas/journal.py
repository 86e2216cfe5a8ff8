"""Journal entry schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class JournalEntry(CamelModel):
    """A captured journal entry as stored in ``journal_entries``."""

    id: str
    user_id: str
    content: str = ""
    mood: str | None = None
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    sentiment: float | None = Field(default=None, ge=-1.0, le=1.0)
    audio_url: str | None = None


class JournalEntryCreate(CamelModel):
    content: str = Field(min_length=1)
    mood: str | None = None
    tags: list[str] | None = None
    sentiment: float | None = Field(default=None, ge=-1.0, le=1.0)
    audio_url: str | None = None
    created_at: datetime | None = None


__all__ = ["JournalEntry", "JournalEntryCreate"]
