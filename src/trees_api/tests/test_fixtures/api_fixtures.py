"""Fixtures for HTTP tests: an app wired to the test database and an httpx client."""

from typing import AsyncGenerator

import pytest
from fastapi import FastAPI
from httpx import AsyncClient, ASGITransport
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from trees_api.database.session import get_async_session
from trees_api.main import create_app
from trees_api.models import Tree


@pytest.fixture
def app(session_maker: async_sessionmaker[AsyncSession]) -> FastAPI:
    """
    Fresh application whose session dependency yields sessions from the test engine.
    Each request still gets its own session, as in production.
    """
    application = create_app()

    async def _override_get_async_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    application.dependency_overrides[get_async_session] = _override_get_async_session
    return application


@pytest.fixture
async def client(app: FastAPI) -> AsyncGenerator[AsyncClient, None]:
    # raise_app_exceptions=False: the 500 handler response is what clients see
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def fetch_tree(session_maker: async_sessionmaker[AsyncSession]):
    """
    Read a tree row through a new session, bypassing anything the app cached.

    Usage:
        row = await fetch_tree(3)
    """
    async def _fetch(tree_id: int) -> Tree | None:
        async with session_maker() as session:
            return await session.get(Tree, tree_id)

    return _fetch
