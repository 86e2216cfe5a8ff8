"""Apply SQL migrations sequentially over a single pooled connection."""

from __future__ import annotations

import asyncio
import logging
import re
from pathlib import Path

from waki.libs.logging_utils import configure_logging
from waki.libs.schemas import get_settings
from waki.libs.schemas.db import create_async_pool

LOGGER = logging.getLogger(__name__)

MIGRATIONS_DIR = Path(__file__).resolve().parent.parent / "migrations"
_COMMENT_RE = re.compile(r"--.*?$|/\*.*?\*/", re.MULTILINE | re.DOTALL)


def split_sql(sql: str) -> list[str]:
    """Return individual statements stripped of comments and whitespace."""

    cleaned = _COMMENT_RE.sub("", sql)
    return [chunk.strip() for chunk in cleaned.split(";") if chunk.strip()]


def sorted_migration_paths(directory: Path = MIGRATIONS_DIR) -> list[Path]:
    if not directory.exists():
        return []
    return sorted(p for p in directory.iterdir() if p.suffix == ".sql")


async def apply_migrations() -> None:
    migration_files = sorted_migration_paths()
    if not migration_files:
        return

    pool = await create_async_pool(get_settings())
    try:
        async with pool.acquire() as connection:
            for path in migration_files:
                statements = split_sql(path.read_text(encoding="utf-8"))
                if not statements:
                    continue
                async with connection.transaction():
                    for statement in statements:
                        await connection.execute(statement)
                LOGGER.info("applied migration %s (%d statements)", path.name, len(statements))
    finally:
        await pool.close()


def main() -> None:  # pragma: no cover - CLI entrypoint
    configure_logging()
    asyncio.run(apply_migrations())


if __name__ == "__main__":  # pragma: no cover
    main()
