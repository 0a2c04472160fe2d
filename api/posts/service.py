"""
Post business logic.

`PostStore` is the only component with decision logic: it validates the
request body, runs one repository call per operation, and turns "no row"
outcomes into `NotFoundError`.

Validation order is fixed and short-circuits, so a body that breaks several
rules always gets the message of the first broken rule:
1. any field empty
2. title length
3. content length
4. category length
5. status not a known value
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from core.errors import NotFoundError, ValidationError

from . import schemas
from .repository import PostRepository

MIN_TITLE_LENGTH = 20
MIN_CONTENT_LENGTH = 200
MIN_CATEGORY_LENGTH = 3

MISSING_INPUT_MESSAGE = "missing or invalid input"
TITLE_TOO_SHORT_MESSAGE = f"Title must be at least {MIN_TITLE_LENGTH} characters"
CONTENT_TOO_SHORT_MESSAGE = f"Content must be at least {MIN_CONTENT_LENGTH} characters"
CATEGORY_TOO_SHORT_MESSAGE = f"Category must be at least {MIN_CATEGORY_LENGTH} characters"
INVALID_STATUS_MESSAGE = "Status must be either publish, draft, or trash"
NOT_FOUND_MESSAGE = "post not found"
DELETED_MESSAGE = "post deleted"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PostFields:
    title: str
    content: str
    category: str
    status: schemas.PostStatus


def validate_post_input(payload: schemas.PostInput) -> PostFields:
    title = payload.title or ""
    content = payload.content or ""
    category = payload.category or ""
    status = payload.status or ""

    if not title or not content or not category or not status:
        raise ValidationError(MISSING_INPUT_MESSAGE)
    if len(title) < MIN_TITLE_LENGTH:
        raise ValidationError(TITLE_TOO_SHORT_MESSAGE)
    if len(content) < MIN_CONTENT_LENGTH:
        raise ValidationError(CONTENT_TOO_SHORT_MESSAGE)
    if len(category) < MIN_CATEGORY_LENGTH:
        raise ValidationError(CATEGORY_TOO_SHORT_MESSAGE)

    try:
        parsed_status = schemas.PostStatus(status)
    except ValueError as exc:
        raise ValidationError(INVALID_STATUS_MESSAGE) from exc

    return PostFields(title=title, content=content, category=category, status=parsed_status)


def _to_post(row: dict) -> schemas.Post:
    return schemas.Post(
        id=int(row["id"]),
        title=str(row["title"]),
        content=str(row["content"]),
        category=str(row["category"]),
        status=schemas.PostStatus(str(row["status"])),
    )


def _from_fields(post_id: int, fields: PostFields) -> schemas.Post:
    return schemas.Post(
        id=post_id,
        title=fields.title,
        content=fields.content,
        category=fields.category,
        status=fields.status,
    )


class PostStore:
    def __init__(self, repository: PostRepository):
        self._repository = repository

    async def list_posts(self) -> list[schemas.Post]:
        rows = await self._repository.list_posts()
        return [_to_post(row) for row in rows]

    async def get_post(self, post_id: int) -> schemas.Post:
        row = await self._repository.get_post(post_id)
        if row is None:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        return _to_post(row)

    async def create_post(self, payload: schemas.PostInput) -> schemas.Post:
        fields = validate_post_input(payload)
        post_id = await self._repository.insert_post(
            title=fields.title,
            content=fields.content,
            category=fields.category,
            status=fields.status.value,
        )
        logger.info("post_created post_id=%s status=%s", post_id, fields.status.value)
        return _from_fields(post_id, fields)

    async def update_post(self, post_id: int, payload: schemas.PostInput) -> schemas.Post:
        """
        Full replace of the four mutable fields.

        The response echoes the submitted values with the path id; the row is
        not read back.
        """
        fields = validate_post_input(payload)
        updated = await self._repository.update_post(
            post_id,
            title=fields.title,
            content=fields.content,
            category=fields.category,
            status=fields.status.value,
        )
        if not updated:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("post_updated post_id=%s status=%s", post_id, fields.status.value)
        return _from_fields(post_id, fields)

    async def delete_post(self, post_id: int) -> schemas.MessageResponse:
        deleted = await self._repository.delete_post(post_id)
        if not deleted:
            raise NotFoundError(NOT_FOUND_MESSAGE)
        logger.info("post_deleted post_id=%s", post_id)
        return schemas.MessageResponse(message=DELETED_MESSAGE)
