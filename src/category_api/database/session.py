"""
Engine and session factory construction.

The engine owns the connection pool, the only state shared between requests.
Pool limits come from settings: `DB_POOL_SIZE` idle connections kept, up to
`DB_POOL_SIZE + DB_MAX_OVERFLOW` open at once, recycled after `DB_POOL_RECYCLE`
seconds (there is no idle-time limit; recycling plus pre-ping covers stale
connections). Requests beyond capacity wait up to `DB_POOL_TIMEOUT` seconds for a
free connection.
"""

import logging
from typing import Any

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from ..config.settings import Settings
from .base import Base

logger = logging.getLogger(__name__)


def build_engine(settings: Settings) -> AsyncEngine:
    """Create the AsyncEngine for `settings.DATABASE_URL`."""
    url = make_url(settings.DATABASE_URL)

    engine_kwargs: dict[str, Any] = {
        "echo": settings.SQLALCHEMY_ECHO,
        "pool_pre_ping": True,  # Enables connection health checks
    }

    # SQLite pools do not accept sizing arguments
    if url.get_backend_name() != "sqlite":
        engine_kwargs.update(
            pool_size=settings.DB_POOL_SIZE,
            max_overflow=settings.DB_MAX_OVERFLOW,
            pool_recycle=settings.DB_POOL_RECYCLE,
            pool_timeout=settings.DB_POOL_TIMEOUT,
        )

    logger.info(
        "db.engine.created",
        extra={"backend": url.get_backend_name(), "database": url.database},
    )
    return create_async_engine(url, **engine_kwargs)


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """
    Return the session factory handed to the transaction wrapper.

    expire_on_commit=False keeps returned entities readable after commit.
    """
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def init_models(engine: AsyncEngine) -> None:
    """Create missing tables (`categories`) on the engine's database."""
    # Import models so they register with Base.metadata
    from .. import models  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("db.schema.ready", extra={"tables": sorted(Base.metadata.tables)})
