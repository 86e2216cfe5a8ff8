"""Accessors for the per-process service instances built at start-up."""

from __future__ import annotations

from fastapi import Request

from waki.apps.engine.analytics import AnalyticsService
from waki.apps.services.alarms_store import AlarmRepository
from waki.apps.services.goals_store import GoalRepository
from waki.apps.services.journal_store import JournalRepository
from waki.apps.services.preferences_store import PreferencesRepository


def get_analytics_service(request: Request) -> AnalyticsService:
    return request.app.state.analytics


def get_journal_repository(request: Request) -> JournalRepository:
    return request.app.state.journal


def get_goal_repository(request: Request) -> GoalRepository:
    return request.app.state.goals


def get_alarm_repository(request: Request) -> AlarmRepository:
    return request.app.state.alarms


def get_preferences_repository(request: Request) -> PreferencesRepository:
    return request.app.state.preferences


__all__ = [
    "get_alarm_repository",
    "get_analytics_service",
    "get_goal_repository",
    "get_journal_repository",
    "get_preferences_repository",
]
