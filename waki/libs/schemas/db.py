"""Async database helpers backed by asyncpg connection pooling."""

from __future__ import annotations

import uuid
from typing import Any

import asyncpg

from .settings import AppSettings


def normalize_arg(val: Any) -> Any:
    if isinstance(val, uuid.UUID):
        return str(val)
    return val


async def create_async_pool(settings: AppSettings) -> asyncpg.Pool:
    """Create the process-wide pool; the caller owns and closes it."""

    return await asyncpg.create_pool(
        dsn=settings.database_url,
        min_size=settings.db_pool_min_size,
        max_size=settings.db_pool_max_size,
        command_timeout=60,
        statement_cache_size=0,
        max_inactive_connection_lifetime=300,
    )


async def fetch_one(pool: asyncpg.Pool, query: str, *args: Any) -> dict[str, Any] | None:
    """Run a parametrised query and return at most a single row."""

    async with pool.acquire() as connection:
        row = await connection.fetchrow(query, *(normalize_arg(arg) for arg in args))
    return dict(row) if row else None


async def fetch_all(pool: asyncpg.Pool, query: str, *args: Any) -> list[dict[str, Any]]:
    """Run a parametrised query and return all resulting rows."""

    async with pool.acquire() as connection:
        records = await connection.fetch(query, *(normalize_arg(arg) for arg in args))
    return [dict(record) for record in records]


async def execute(pool: asyncpg.Pool, query: str, *args: Any) -> str:
    """Execute a data-modifying statement and return the asyncpg status."""

    async with pool.acquire() as connection:
        return await connection.execute(query, *(normalize_arg(arg) for arg in args))


__all__ = ["create_async_pool", "execute", "fetch_all", "fetch_one", "normalize_arg"]
