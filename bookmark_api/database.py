"""Async engine, request sessions and the declarative base.

The schema itself belongs to Alembic (``alembic upgrade head``); nothing
here creates tables.
"""

from collections.abc import AsyncGenerator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncConnection,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase

from bookmark_api.config import settings


class Base(DeclarativeBase):
    """SQLAlchemy declarative base."""

    pass


engine = create_async_engine(
    settings.database_url,
    echo=settings.sql_echo,
    # Keeps emails and password digests out of IntegrityError messages
    hide_parameters=not settings.debug,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)

# Test hook to override session maker
_test_session_maker = None


def set_test_session_maker(
    maker: async_sessionmaker[AsyncSession] | None,
) -> async_sessionmaker[AsyncSession] | None:
    """Swap the session factory used by ``get_db``; returns the previous one."""
    global _test_session_maker
    previous = _test_session_maker
    _test_session_maker = maker
    return previous


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database session.

    One session (and so one transaction) per request. Handlers commit
    explicitly; a handler that raises has its work rolled back.
    """
    maker = _test_session_maker or async_session_maker
    async with maker() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def ping(target: AsyncSession | AsyncConnection) -> None:
    """Round-trip ``SELECT 1``; raises whatever the driver raises."""
    await target.execute(text("SELECT 1"))
