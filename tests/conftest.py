"""Test fixtures and configuration."""

import logging
import os
import sys
from unittest.mock import patch

# Settings are read once at import time, so the environment must be in place
# before anything from bookmark_api is imported.
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")
os.environ.setdefault("SECRET_KEY", "test-secret-key-with-enough-length-for-hs256")
os.environ["ENVIRONMENT"] = "testing"

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
import structlog  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy import event  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import NullPool  # noqa: E402

from bookmark_api.logger import get_logger  # noqa: E402

logger = get_logger(__name__)


def auth_headers(user_id: int) -> dict[str, str]:
    """Authorization header carrying a fresh token for ``user_id``."""
    from bookmark_api.security import create_access_token

    return {"Authorization": f"Bearer {create_access_token(user_id)}"}


# --- Bootloader Mock ---
@pytest.fixture(autouse=True)
def mock_bootloader_db_check():
    """Mock Bootloader._check_database so no test opens a second engine."""
    from bookmark_api.boot import ServiceStatus

    async def mock_check():
        return ServiceStatus("database", "ok", "Mocked for tests", 0.0)

    with patch("bookmark_api.boot.Bootloader._check_database", new=mock_check):
        yield


# --- Structlog Configuration for Tests ---
@pytest.fixture(autouse=True, scope="session")
def configure_structlog_for_tests():
    """Configure structlog for proper capsys/caplog capture in tests."""
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.format_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
    ]

    structlog.configure(
        processors=processors,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=processors[:-1],
    )

    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.DEBUG)

    yield

    structlog.reset_defaults()


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


@pytest_asyncio.fixture
async def db_engine(tmp_path):
    """Create a fresh SQLite database file with the full schema for one test.

    NullPool gives every session its own connection, so the app's
    per-request sessions and the test's ``db`` session see each other's
    data only after a commit, as they would against Postgres.
    """
    from bookmark_api import models  # noqa: F401
    from bookmark_api.database import Base

    engine = create_async_engine(
        f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        echo=False,
        hide_parameters=True,
        poolclass=NullPool,
    )
    event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest_asyncio.fixture(autouse=True)
async def patch_database_connection(db_engine):
    """Point the app's ``get_db`` dependency at the test engine."""
    from bookmark_api import database

    test_maker = async_sessionmaker(
        db_engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )
    previous = database.set_test_session_maker(test_maker)
    yield
    database.set_test_session_maker(previous)


@pytest_asyncio.fixture
async def db(db_engine):
    """Session for arranging and asserting on data directly.

    Commit before calling the API so request sessions can see the rows.
    """
    async with AsyncSession(db_engine, expire_on_commit=False) as session:
        yield session


@pytest_asyncio.fixture
async def test_user(db):
    """A committed user whose password is ``factories.DEFAULT_PASSWORD``."""
    from tests.factories import UserFactory

    user = await UserFactory.create_async(db, email="owner@example.com")
    await db.commit()
    return user


@pytest_asyncio.fixture
async def other_user(db):
    """A second committed user, for ownership checks."""
    from tests.factories import UserFactory

    user = await UserFactory.create_async(db, email="intruder@example.com")
    await db.commit()
    return user


@pytest_asyncio.fixture
async def public_client():
    """Async test client without auth headers."""
    from bookmark_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client_instance:
        yield client_instance


@pytest_asyncio.fixture
async def client(test_user):
    """Async test client authenticated as ``test_user``."""
    from bookmark_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers(test_user.id),
    ) as client_instance:
        yield client_instance


@pytest_asyncio.fixture
async def other_client(other_user):
    """Async test client authenticated as ``other_user``."""
    from bookmark_api.main import app

    transport = ASGITransport(app=app)
    async with AsyncClient(
        transport=transport,
        base_url="http://test",
        headers=auth_headers(other_user.id),
    ) as client_instance:
        yield client_instance
