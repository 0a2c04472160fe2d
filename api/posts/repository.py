"""
Post persistence.
This module is where post-related SQL lives.

Every method runs exactly one parameterized statement. Driver failures are
re-raised as `StoreFault` carrying the driver's message.
"""

from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Any, Iterator

import asyncpg

from core.db import Database
from core.errors import StoreFault

POST_COLUMNS = "id, title, content, category, status"

_STORE_ERRORS = (asyncpg.PostgresError, asyncpg.InterfaceError, OSError, asyncio.TimeoutError)


@contextmanager
def _store_errors() -> Iterator[None]:
    try:
        yield
    except _STORE_ERRORS as exc:
        raise StoreFault(str(exc)) from exc


class PostRepository:
    def __init__(self, db: Database):
        self._db = db

    async def list_posts(self) -> list[dict[str, Any]]:
        """
        All posts, oldest id first.
        """
        with _store_errors():
            return await self._db.fetch_all(
                f"""
                SELECT {POST_COLUMNS}
                FROM posts
                ORDER BY id ASC
                """
            )

    async def get_post(self, post_id: int) -> dict[str, Any] | None:
        with _store_errors():
            return await self._db.fetch_one(
                f"""
                SELECT {POST_COLUMNS}
                FROM posts
                WHERE id = $1
                """,
                post_id,
            )

    async def insert_post(self, *, title: str, content: str, category: str, status: str) -> int:
        """
        Insert a post and return its store-assigned id.

        created_date/updated_date come from column defaults.
        """
        with _store_errors():
            row = await self._db.fetch_one(
                """
                INSERT INTO posts (title, content, category, status)
                VALUES ($1, $2, $3, $4)
                RETURNING id
                """,
                title,
                content,
                category,
                status,
            )
        if row is None or "id" not in row:
            raise StoreFault("Failed to insert post.")
        return int(row["id"])

    async def update_post(
        self,
        post_id: int,
        *,
        title: str,
        content: str,
        category: str,
        status: str,
    ) -> bool:
        """
        Overwrite all mutable fields. Returns False when no row matched.
        """
        with _store_errors():
            row = await self._db.fetch_one(
                """
                UPDATE posts
                SET title = $2,
                    content = $3,
                    category = $4,
                    status = $5,
                    updated_date = now()
                WHERE id = $1
                RETURNING id
                """,
                post_id,
                title,
                content,
                category,
                status,
            )
        return row is not None

    async def delete_post(self, post_id: int) -> bool:
        """
        Hard delete. Returns False when no row matched.
        """
        with _store_errors():
            row = await self._db.fetch_one(
                """
                DELETE FROM posts
                WHERE id = $1
                RETURNING id
                """,
                post_id,
            )
        return row is not None
