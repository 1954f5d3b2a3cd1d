"""
Core pytest configuration for the entire test suite.

Provides the database and application fixtures shared by every test type
(repositories, services, API, auth). Domain-specific fixtures live in:
- tests/test_fixtures/category_fixtures.py
"""

from __future__ import annotations

# -------------------------------
# Standard library imports
# -------------------------------
import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# -------------------------------
# Early logging tuning
# -------------------------------
# Silence noisy third-party loggers before importing modules that initialize them.
NOISY_LOGGERS = (
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "httpcore",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)

# -------------------------------
# Third-party / project imports
# -------------------------------
import httpx
import pytest
from fastapi import FastAPI
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from category_api.config.settings import Settings
from category_api.database.base import Base
from category_api.database.session import build_engine, build_session_factory, init_models
from category_api.main import create_app

logger = logging.getLogger(__name__)

API_KEY = "AUTH"


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for logging."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


# ------------------------------------------------------------------------------------------------
# SETTINGS
# ------------------------------------------------------------------------------------------------


@pytest.fixture
def database_url(tmp_path) -> str:
    """
    Test database URL.

    1. `TEST_DATABASE_URL` environment variable (CI override, e.g. a Postgres test DB)
    2. otherwise a throwaway SQLite file under the test's tmp_path
    """
    url = os.getenv("TEST_DATABASE_URL") or f"sqlite+aiosqlite:///{tmp_path / 'test_categories.db'}"
    logger.debug("Using test DB: %s", safe_log_db_url(url))
    return url


@pytest.fixture
def settings(database_url: str) -> Settings:
    return Settings(
        ENV="testing",
        TESTING=True,
        DATABASE_URL_OVERRIDE=database_url,
        API_KEY=API_KEY,
        LOG_LEVEL="INFO",
        LOG_FORMAT="json",
        LOG_TO_STDOUT=True,
    )


# ------------------------------------------------------------------------------------------------
# DATABASE FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
async def async_engine(settings: Settings) -> AsyncGenerator[AsyncEngine, None]:
    engine = build_engine(settings)
    await init_models(engine)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
def session_factory(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return build_session_factory(async_engine)


@pytest.fixture
async def db_session(session_factory: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    """
    A plain session for arranging and inspecting data directly.

    Nothing is committed unless the test commits; the session is rolled back
    and closed afterwards.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


# ------------------------------------------------------------------------------------------------
# APPLICATION FIXTURES
# ------------------------------------------------------------------------------------------------


@pytest.fixture
def app(settings: Settings, session_factory: async_sessionmaker[AsyncSession]) -> FastAPI:
    return create_app(settings, session_factory=session_factory)


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client sending the valid X-API-KEY header on every request."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(
        transport=transport, base_url="http://testserver", headers={"X-API-KEY": API_KEY}
    ) as c:
        yield c


@pytest.fixture
async def anonymous_client(app: FastAPI) -> AsyncGenerator[httpx.AsyncClient, None]:
    """HTTP client without any API key header."""
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as c:
        yield c


# Category fixtures
from .test_fixtures.category_fixtures import (  # noqa: E402,F401
    category_repository,
    create_category,
    created_category,
    multiple_categories,
    count_categories,
    category_service,
)
