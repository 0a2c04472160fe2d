from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from core import config
from core.db import Database
from core.errors import register_exception_handlers
from core.log import configure_logging
from posts import router as posts_router
from posts.repository import PostRepository
from posts.service import PostStore

config.load_env()
configure_logging()


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Open and ping the DB pool once per process; refuse to start without it.
    database = await Database.connect()
    try:
        await database.ping()
        app.state.post_store = PostStore(PostRepository(database))
        yield
    finally:
        app.state.post_store = None
        await database.close()


def create_app() -> FastAPI:
    app = FastAPI(title="article-api", lifespan=lifespan)

    # Browsers on any origin may call the API (no cookies involved).
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins(),
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(posts_router.router, tags=["posts"])

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host=config.app_host(), port=config.app_port())
