"""
Async database access helpers (raw SQL) using asyncpg.

`Database` owns one connection pool. The app builds it once in its lifespan
(see `api/main.py`), pings it, and hands it to the feature repositories.
There is no module-level pool.

SQL parameter style:
- asyncpg uses positional placeholders: $1, $2, $3, ...
"""

from __future__ import annotations

import logging
from typing import Any
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import asyncpg

from . import config

logger = logging.getLogger(__name__)


def _sanitize_database_url(url: str) -> str:
    parts = urlsplit(url)
    if not parts.query:
        return url

    params = [(k, v) for (k, v) in parse_qsl(parts.query, keep_blank_values=True) if k != "sslmode"]
    query = urlencode(params)
    return urlunsplit((parts.scheme, parts.netloc, parts.path, query, parts.fragment))


def _redact(url: str) -> str:
    parts = urlsplit(url)
    if parts.password is None:
        return url
    netloc = parts.netloc.replace(f":{parts.password}@", ":***@", 1)
    return urlunsplit((parts.scheme, netloc, parts.path, parts.query, parts.fragment))


def _record_to_dict(record: asyncpg.Record) -> dict[str, Any]:
    return dict(record)


class Database:
    """
    Thin wrapper over an asyncpg pool.

    The pool is safe for concurrent use; every call checks a connection out
    for exactly one statement.
    """

    def __init__(self, pool: asyncpg.Pool):
        self._pool = pool

    @classmethod
    async def connect(
        cls,
        dsn: str | None = None,
        *,
        min_size: int | None = None,
        max_size: int | None = None,
        command_timeout: float | None = None,
    ) -> Database:
        dsn = _sanitize_database_url(dsn or config.database_url())
        pool = await asyncpg.create_pool(
            dsn=dsn,
            min_size=config.pool_min_size() if min_size is None else min_size,
            max_size=config.pool_max_size() if max_size is None else max_size,
            command_timeout=config.command_timeout() if command_timeout is None else command_timeout,
        )
        logger.info("db_pool_opened dsn=%s", _redact(dsn))
        return cls(pool)

    async def close(self) -> None:
        await self._pool.close()
        logger.info("db_pool_closed")

    async def ping(self) -> None:
        """
        Fail fast when the database is unreachable.
        """
        await self._pool.fetchval("SELECT 1")

    async def fetch_one(self, sql: str, *args: Any) -> dict[str, Any] | None:
        """
        Run a query and return a single row as a dict (or None).
        """
        row = await self._pool.fetchrow(sql, *args)
        return _record_to_dict(row) if row is not None else None

    async def fetch_all(self, sql: str, *args: Any) -> list[dict[str, Any]]:
        """
        Run a query and return all rows as a list of dicts.
        """
        rows = await self._pool.fetch(sql, *args)
        return [_record_to_dict(r) for r in rows]

    async def execute(self, sql: str, *args: Any) -> str:
        """
        Run a statement (INSERT/UPDATE/DELETE/DDL) and return its status tag.
        """
        return await self._pool.execute(sql, *args)
