"""
Post dependencies for FastAPI routes.
"""

from __future__ import annotations

from fastapi import Request

from .service import PostStore


def get_post_store(request: Request) -> PostStore:
    store = getattr(request.app.state, "post_store", None)
    if store is None:
        raise RuntimeError("PostStore is not initialized. It is built in the app lifespan.")
    return store
