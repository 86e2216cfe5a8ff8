"""Goal schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from .base import CamelModel

GoalCategory = Literal["health", "career", "personal", "learning", "financial", "relationship"]


class Milestone(CamelModel):
    id: str
    title: str
    completed: bool = False
    completed_at: datetime | None = None


class Goal(CamelModel):
    """A user goal. ``is_completed`` implies ``progress == 100``."""

    id: str
    user_id: str
    title: str
    description: str = ""
    category: GoalCategory = "personal"
    target_date: datetime | None = None
    created_at: datetime
    progress: int = Field(default=0, ge=0, le=100)
    milestones: list[Milestone] = Field(default_factory=list)
    is_completed: bool = False
    reminder_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")
    linked_journal_entries: list[str] = Field(default_factory=list)


class MilestoneCreate(CamelModel):
    title: str = Field(min_length=1)


class GoalCreate(CamelModel):
    title: str = Field(min_length=1)
    description: str = ""
    category: GoalCategory = "personal"
    target_date: datetime | None = None
    milestones: list[MilestoneCreate] = Field(default_factory=list)
    reminder_time: str | None = Field(default=None, pattern=r"^\d{2}:\d{2}$")


class GoalProgressUpdate(CamelModel):
    progress: int
    milestone_id: str | None = None


class LinkJournalEntry(CamelModel):
    journal_entry_id: str = Field(min_length=1)


class GoalStats(CamelModel):
    total_goals: int = 0
    completed_goals: int = 0
    in_progress_goals: int = 0
    completion_rate: int = 0
    categories_breakdown: dict[str, int] = Field(default_factory=dict)


__all__ = [
    "Goal",
    "GoalCategory",
    "GoalCreate",
    "GoalProgressUpdate",
    "GoalStats",
    "LinkJournalEntry",
    "Milestone",
    "MilestoneCreate",
]
