"""
Database wiring for the transcript table.

One async engine per process, chosen by ``configure_engine`` (or lazily
from ``DATABASE_URL``).  ``get_session()`` hands out a session whose
transaction commits when the block exits cleanly.
"""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from transcriber.core.config import get_settings


class Base(DeclarativeBase):
    pass


_engine: AsyncEngine | None = None
_sessions: async_sessionmaker[AsyncSession] | None = None


def bind_engine(engine: AsyncEngine) -> AsyncEngine:
    """Make ``engine`` the process engine and rebuild the session maker."""
    global _engine, _sessions
    _engine = engine
    _sessions = async_sessionmaker(engine, expire_on_commit=False)
    return engine


def configure_engine(url: str | None = None, pooled: bool = True) -> AsyncEngine:
    """Create and bind the engine for ``url`` (default: ``DATABASE_URL``).

    With ``pooled=False`` every checkout opens a fresh connection, which is
    what callers running each action in its own ``asyncio.run`` loop need:
    a pooled aiosqlite/asyncpg connection stays tied to the loop that made it.
    """
    kwargs = {} if pooled else {"poolclass": NullPool}
    return bind_engine(create_async_engine(url or get_settings().database_url, **kwargs))


def get_engine() -> AsyncEngine:
    return _engine if _engine is not None else configure_engine()


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Yield a session; commit on exit, roll back if the block raises."""
    if _sessions is None:
        configure_engine()
    async with _sessions() as session, session.begin():
        yield session


async def init_db(engine: AsyncEngine | None = None) -> None:
    """Create the ``audioTranscription`` table when missing."""
    from transcriber.services.storage import models_db  # noqa: F401

    async with (engine or get_engine()).begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


def reset_engine() -> None:
    """Forget the bound engine without disposing it."""
    global _engine, _sessions
    _engine = None
    _sessions = None
