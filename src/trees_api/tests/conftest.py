"""
Core pytest configuration for the entire test suite.

Only the database and logging setup shared by every test lives here. Domain
fixtures are in:
- tests/test_fixtures/repository_fixtures.py
- tests/test_fixtures/api_fixtures.py

Database: `TEST_DATABASE_URL` when set (CI against Postgres), otherwise a
private in-memory SQLite database per test. Every test gets freshly created
tables, so code under test may `commit()` freely.
"""

from __future__ import annotations

import os
import logging
from urllib.parse import urlparse
from typing import AsyncGenerator

# Silence noisy third-party loggers before anything configures logging
NOISY_LOGGERS = (
    "faker",
    "faker.factory",
    "sqlalchemy",
    "sqlalchemy.engine",
    "sqlalchemy.engine.Engine",
    "aiosqlite",
    "asyncio",
    "httpx",
    "alembic",
)
for _name in NOISY_LOGGERS:
    logging.getLogger(_name).setLevel(logging.WARNING)


import pytest
from pytest import FixtureRequest
from sqlalchemy.pool import StaticPool
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    AsyncEngine,
)

from trees_api.database.base import Base
from trees_api.database.session import build_engine
from trees_api import models  # noqa: F401 – import to register models with Base.metadata
from trees_api.config import get_settings
from trees_api.core.logging.builder import setup_logging

settings = get_settings()
logger = logging.getLogger(__name__)


@pytest.fixture(scope="session", autouse=True)
def configure_logging(request: FixtureRequest):
    """
    Install application logging for the whole session, then re-attach pytest's
    capture handler (dictConfig may have removed it) so `caplog` keeps working.
    """
    setup_logging(settings)

    caplog_plugin = request.config.pluginmanager.getplugin("logging-plugin")
    handler = getattr(caplog_plugin, "caplog_handler", None)
    if handler is not None:
        logging.getLogger().addHandler(handler)

    yield


def safe_log_db_url(db_url: str) -> str:
    """Database URL without credentials, for log lines."""
    parsed = urlparse(db_url)
    return f"{parsed.scheme}://{parsed.hostname or ''}:{parsed.port or ''}/{parsed.path.lstrip('/')}"


def get_test_database_url() -> str:
    """
    1. `TEST_DATABASE_URL` environment variable (CI override)
    2. in-memory SQLite
    """
    return os.getenv("TEST_DATABASE_URL") or "sqlite+aiosqlite:///:memory:"


TEST_DATABASE_URL = get_test_database_url()
logger.info(f"Using test DB: {safe_log_db_url(TEST_DATABASE_URL)}")


@pytest.fixture()
async def async_engine() -> AsyncGenerator[AsyncEngine, None]:
    """
    Engine with the schema created. In-memory SQLite needs a StaticPool so every
    session shares the one connection (and therefore the one database).
    """
    if TEST_DATABASE_URL.startswith("sqlite"):
        engine = build_engine(
            TEST_DATABASE_URL,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    else:
        engine = build_engine(TEST_DATABASE_URL)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest.fixture()
def session_maker(async_engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(bind=async_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture()
async def db_session(session_maker: async_sessionmaker[AsyncSession]) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


from .test_fixtures.repository_fixtures import (  # noqa: E402,F401
    tree_repository,
    insect_repository,
    sample_tree_data,
    create_tree,
    seeded,
)
from .test_fixtures.api_fixtures import (  # noqa: E402,F401
    app,
    client,
    fetch_tree,
)
