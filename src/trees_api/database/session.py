from typing import AsyncGenerator
from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    create_async_engine,
    async_sessionmaker,
    AsyncSession,
)

from trees_api.config import get_settings

settings = get_settings()


def enable_sqlite_foreign_keys(engine: AsyncEngine) -> None:
    """
    Turn on foreign key enforcement for every new SQLite DBAPI connection.

    SQLite ignores `ON DELETE CASCADE` unless `PRAGMA foreign_keys=ON` runs on the
    connection, so deleting a Tree would otherwise leave its InsectTrees rows behind.
    No-op for other backends.
    """
    if engine.dialect.name != "sqlite":
        return

    @event.listens_for(engine.sync_engine, "connect")
    def _set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


def build_engine(database_url: str, *, echo: bool = False, **kwargs) -> AsyncEngine:
    """Create an AsyncEngine with the project's connection defaults."""
    engine = create_async_engine(
        database_url,
        echo=echo,
        pool_pre_ping=True,              # Enables connection health checks
        **kwargs,
    )
    enable_sqlite_foreign_keys(engine)
    return engine


# Create the AsyncEngine.
engine: AsyncEngine = build_engine(settings.DATABASE_URL, echo=settings.SQLALCHEMY_ECHO)

# `async_sessionmaker` returns an async session factory.
AsyncSessionMaker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


# Dependency to get DB session
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency. Yields a session and ensures it's closed after the request.

    Handlers commit explicitly after a successful mutation; anything left
    uncommitted is rolled back when the session closes.

    Usage:
        async def endpoint(db: AsyncSession = Depends(get_async_session)):
            await db.execute(...)
    """
    async with AsyncSessionMaker() as session:
        yield session
