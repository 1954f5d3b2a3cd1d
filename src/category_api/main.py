"""
Category API application factory and entry point.

Request path through the app:

    RequestIDMiddleware -> UnhandledErrorMiddleware -> APIKeyMiddleware -> /api router
        -> CategoryService -> transaction() -> CategoryRepository -> database

Failures raised anywhere below the router are turned into envelope responses by
the handlers registered in api/v1/error_handlers.py.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from .api.v1 import categories
from .api.v1.error_handlers import UnhandledErrorMiddleware, register_exception_handlers
from .config.settings import Settings, get_settings
from .core.auth import APIKeyMiddleware
from .core.logging import RequestIDMiddleware, setup_logging
from .database.session import build_engine, build_session_factory, init_models

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the engine/session factory on startup unless one was injected; dispose on shutdown."""
    settings: Settings = app.state.settings
    engine = None

    if getattr(app.state, "session_factory", None) is None:
        engine = build_engine(settings)
        if settings.DB_CREATE_TABLES:
            await init_models(engine)
        app.state.session_factory = build_session_factory(engine)

    logger.info("app.started", extra={"env": settings.ENV})
    try:
        yield
    finally:
        if engine is not None:
            await engine.dispose()
            app.state.session_factory = None
        logger.info("app.stopped")


def create_app(
    settings: Settings | None = None,
    *,
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(title="Category API", version="0.1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.session_factory = session_factory

    app.include_router(categories.router, prefix="/api")
    register_exception_handlers(app)

    # Last added runs first: RequestIDMiddleware -> UnhandledErrorMiddleware -> APIKeyMiddleware
    app.add_middleware(APIKeyMiddleware, api_key=settings.API_KEY)
    app.add_middleware(UnhandledErrorMiddleware)
    app.add_middleware(RequestIDMiddleware)

    return app


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.APP_HOST,
        port=settings.APP_PORT,
        log_config=None,  # logging is configured by create_app
    )


if __name__ == "__main__":
    run()
