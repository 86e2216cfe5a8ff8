"""FastAPI application entrypoint for Waki."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import asyncpg
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette_exporter import PrometheusMiddleware, handle_metrics

from waki.apps.api.routes import (
    alarms_router,
    analytics_router,
    goals_router,
    journal_router,
    preferences_router,
)
from waki.apps.engine.analytics import AnalyticsService
from waki.apps.services.alarms_store import AlarmRepository
from waki.apps.services.goals_store import GoalRepository
from waki.apps.services.journal_store import JournalRepository
from waki.apps.services.preferences_store import PreferencesRepository
from waki.libs.clock import SystemClock
from waki.libs.logging_utils import colorize, configure_logging
from waki.libs.schemas import AppSettings, get_settings
from waki.libs.schemas.db import create_async_pool

configure_logging()

LOGGER = logging.getLogger("waki.api")


def install_services(app: FastAPI, pool: asyncpg.Pool, settings: AppSettings) -> None:
    """Build the per-process service graph and hang it off ``app.state``."""

    journal = JournalRepository(pool)
    goals = GoalRepository(pool)
    app.state.journal = journal
    app.state.goals = goals
    app.state.alarms = AlarmRepository(pool)
    app.state.preferences = PreferencesRepository(pool)
    app.state.analytics = AnalyticsService(
        journal,
        goals,
        SystemClock(settings.timezone),
        fetch_timeout=settings.upstream_timeout_seconds,
        mood_window_days=settings.mood_window_days,
        recent_limit=settings.recent_entries_limit,
        streak_limit=settings.streak_entries_limit,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings = get_settings()
    pool = await create_async_pool(settings)
    install_services(app, pool, settings)
    LOGGER.info(colorize("Waki API ready", "green"), extra={"environment": settings.environment})
    try:
        yield
    finally:
        await pool.close()


_settings = get_settings()

app = FastAPI(title="Waki API", version="0.1.0", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=_settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(PrometheusMiddleware, app_name="waki")
app.add_route("/metrics", handle_metrics)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(analytics_router)
app.include_router(journal_router)
app.include_router(goals_router)
app.include_router(alarms_router)
app.include_router(preferences_router)


def run() -> None:
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "waki.apps.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.environment.lower() in {"local", "dev", "development"},
    )


if __name__ == "__main__":
    run()
