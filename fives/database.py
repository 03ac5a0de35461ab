"""
database.py — Engines, sessions and the declarative base.

Routes take a session through Depends(get_db). Tests and Alembic build their
own engines with build_engine(url); a sqlite+aiosqlite URL gives a single
shared connection with working savepoints:

    engine = build_engine("sqlite+aiosqlite://")
    async with build_session_factory(engine)() as session: ...
"""
from collections.abc import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from fives.config import settings


class Base(DeclarativeBase):
    """Declarative base for fives/models/. Lives here so alembic/env.py can import it alone."""


# ---------------------------------------------------------------------------
# Engine factory
# ---------------------------------------------------------------------------
def _enable_sqlite_savepoints(engine: AsyncEngine) -> None:
    """
    Let the sqlite driver emit BEGIN itself so SAVEPOINT / begin_nested() work.
    Daily action generation and review upserts rely on savepoints.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _do_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _do_begin(conn):
        conn.exec_driver_sql("BEGIN")


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Create an async engine for the given URL.

    SQLite (local dev / tests) shares one connection through StaticPool so an
    in-memory database survives across sessions. Everything else gets a pool.
    """
    if url.startswith("sqlite"):
        engine = create_async_engine(url, echo=echo, poolclass=StaticPool)
        _enable_sqlite_savepoints(engine)
        return engine

    return create_async_engine(
        url,
        echo=echo,
        pool_size=5,              # Core connection pool size
        max_overflow=10,          # Extra connections under peak load
        pool_pre_ping=True,       # Detect and discard stale connections before each use
    )


def build_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        bind=engine,
        class_=AsyncSession,
        expire_on_commit=False,   # Keep objects usable after commit without re-querying
    )


# ---------------------------------------------------------------------------
# Process-wide engine and session factory
# ---------------------------------------------------------------------------
# echo follows debug: logs only carry ids, never entry text in WHERE clauses
async_engine = build_engine(settings.database_url, echo=settings.debug)
AsyncSessionLocal = build_session_factory(async_engine)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    One AsyncSession per request, committed when the route returns and rolled
    back if it raises. Store functions only flush; this is the single commit point.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
