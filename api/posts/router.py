"""
Article API endpoints.

Path ids are parsed as integers on every route; a malformed id is answered
with 400 `invalid post ID` before the body is examined.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, status

from . import schemas
from .dependencies import get_post_store
from .service import PostStore

router = APIRouter(
    prefix="/article",
    responses={
        400: {"model": schemas.ErrorResponse},
        500: {"model": schemas.ErrorResponse},
    },
)

_NOT_FOUND = {404: {"model": schemas.ErrorResponse}}


@router.get("", response_model=list[schemas.Post])
async def list_posts(store: PostStore = Depends(get_post_store)) -> list[schemas.Post]:
    return await store.list_posts()


@router.get("/{post_id}", response_model=schemas.Post, responses=_NOT_FOUND)
async def get_post(post_id: int, store: PostStore = Depends(get_post_store)) -> schemas.Post:
    return await store.get_post(post_id)


@router.post("", response_model=schemas.Post, status_code=status.HTTP_201_CREATED)
async def create_post(
    payload: schemas.PostInput,
    store: PostStore = Depends(get_post_store),
) -> schemas.Post:
    return await store.create_post(payload)


@router.put("/{post_id}", response_model=schemas.Post, responses=_NOT_FOUND)
async def update_post(
    post_id: int,
    payload: schemas.PostInput,
    store: PostStore = Depends(get_post_store),
) -> schemas.Post:
    return await store.update_post(post_id, payload)


@router.delete("/{post_id}", response_model=schemas.MessageResponse, responses=_NOT_FOUND)
async def delete_post(post_id: int, store: PostStore = Depends(get_post_store)) -> schemas.MessageResponse:
    return await store.delete_post(post_id)
