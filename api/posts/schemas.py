"""
Pydantic schemas and the status enum for the /article endpoints.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class PostStatus(str, Enum):
    PUBLISH = "publish"
    DRAFT = "draft"
    TRASH = "trash"


class PostInput(BaseModel):
    """
    Body for create/update.

    Fields are deliberately loose (optional, no length limits): the ordered
    checks in `service.validate_post_input` decide which message a bad body
    gets. Non-string values still fail decoding. `id` and unknown keys are
    ignored.
    """

    model_config = ConfigDict(extra="ignore")

    title: str | None = None
    content: str | None = None
    category: str | None = None
    status: str | None = None


class Post(BaseModel):
    id: int
    title: str
    content: str
    category: str
    status: PostStatus


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    error: str
