from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, List, Optional

import pytest

from waki.libs.clock import FixedClock
from waki.libs.schemas import Goal, JournalEntry

NOW = datetime(2026, 10, 19, 12, 0, tzinfo=timezone.utc)
USER_ID = "00000000-0000-0000-0000-000000000001"


class FakeJournalSource:
    """In-memory stand-in for JournalRepository.fetch_entries."""

    def __init__(self, entries: Optional[List[JournalEntry]] = None, *, error: Exception | None = None,
                 delay: float = 0.0) -> None:
        self.entries = list(entries or [])
        self.error = error
        self.delay = delay
        self.calls: List[Dict[str, Any]] = []

    async def fetch_entries(self, user_id: str, limit: int) -> List[JournalEntry]:
        self.calls.append({"user_id": user_id, "limit": limit})
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        ordered = sorted(self.entries, key=lambda e: e.created_at, reverse=True)
        return ordered[:limit]


class FakeGoalSource:
    def __init__(self, goals: Optional[List[Goal]] = None, *, error: Exception | None = None) -> None:
        self.goals = list(goals or [])
        self.error = error
        self.calls: List[Dict[str, Any]] = []

    async def fetch_goals(self, user_id: str, include_completed: bool = False) -> List[Goal]:
        self.calls.append({"user_id": user_id, "include_completed": include_completed})
        if self.error is not None:
            raise self.error
        if include_completed:
            return list(self.goals)
        return [goal for goal in self.goals if not goal.is_completed]


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def make_entry() -> Callable[..., JournalEntry]:
    counter = {"n": 0}

    def _make(
        created_at: datetime | None = None,
        *,
        days_ago: float = 0,
        content: str = "morning pages",
        mood: str | None = "calm",
        sentiment: float | None = 0.0,
        tags: List[str] | None = None,
    ) -> JournalEntry:
        counter["n"] += 1
        return JournalEntry(
            id=f"entry-{counter['n']}",
            user_id=USER_ID,
            content=content,
            mood=mood,
            sentiment=sentiment,
            tags=tags or [],
            created_at=created_at or NOW - timedelta(days=days_ago),
        )

    return _make


@pytest.fixture
def make_goal() -> Callable[..., Goal]:
    counter = {"n": 0}

    def _make(
        title: str = "Run a 10k",
        *,
        progress: int = 0,
        is_completed: bool = False,
        target_in_days: float | None = None,
        created_days_ago: float = 1,
        category: str = "health",
        milestones: List[Dict[str, Any]] | None = None,
    ) -> Goal:
        counter["n"] += 1
        return Goal(
            id=f"goal-{counter['n']}",
            user_id=USER_ID,
            title=title,
            category=category,
            progress=progress,
            is_completed=is_completed,
            target_date=NOW + timedelta(days=target_in_days) if target_in_days is not None else None,
            created_at=NOW - timedelta(days=created_days_ago),
            milestones=milestones or [],
        )

    return _make
