from __future__ import annotations

from typing import Any

import pytest
from fastapi.testclient import TestClient

from core.errors import StoreFault
from posts.dependencies import get_post_store
from posts.service import PostStore

VALID_TITLE = "A very long valid title!!"
VALID_CONTENT = "x" * 200


class InMemoryPostRepository:
    """
    Dict-backed stand-in for `PostRepository` with the same method surface.

    Set `fault` to make every call raise `StoreFault(fault)`.
    """

    def __init__(self):
        self.rows: dict[int, dict[str, Any]] = {}
        self.next_id = 1
        self.fault: str | None = None
        self.calls: list[str] = []

    def _check(self, operation: str) -> None:
        self.calls.append(operation)
        if self.fault is not None:
            raise StoreFault(self.fault)

    async def list_posts(self) -> list[dict[str, Any]]:
        self._check("list")
        return [dict(self.rows[key]) for key in sorted(self.rows)]

    async def get_post(self, post_id: int) -> dict[str, Any] | None:
        self._check("get")
        row = self.rows.get(post_id)
        return dict(row) if row is not None else None

    async def insert_post(self, *, title: str, content: str, category: str, status: str) -> int:
        self._check("create")
        post_id = self.next_id
        self.next_id += 1
        self.rows[post_id] = {
            "id": post_id,
            "title": title,
            "content": content,
            "category": category,
            "status": status,
        }
        return post_id

    async def update_post(self, post_id: int, *, title: str, content: str, category: str, status: str) -> bool:
        self._check("update")
        if post_id not in self.rows:
            return False
        self.rows[post_id].update(title=title, content=content, category=category, status=status)
        return True

    async def delete_post(self, post_id: int) -> bool:
        self._check("delete")
        return self.rows.pop(post_id, None) is not None


@pytest.fixture
def valid_payload() -> dict[str, str]:
    return {
        "title": VALID_TITLE,
        "content": VALID_CONTENT,
        "category": "tech",
        "status": "draft",
    }


@pytest.fixture
def repository() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def store(repository: InMemoryPostRepository) -> PostStore:
    return PostStore(repository)


@pytest.fixture
def client(store: PostStore):
    """
    HTTP client against a fresh app. The lifespan (real DB pool) is not run;
    the store is injected through the dependency override instead.
    """
    from main import create_app

    app = create_app()
    app.dependency_overrides[get_post_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()
