"""
Pytest configuration and fixtures for testing.

This module provides the in-memory database, sessions, an HTTP client wired
to the application and helpers for seeding authors and courses.
"""

import os

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy import event
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from sqlmodel.ext.asyncio.session import AsyncSession

# Set required environment variables for testing before importing app modules
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")
os.environ.setdefault("LOG_FILE_PATH", os.devnull)
os.environ.setdefault("ENV", "production")

from course_library import app  # noqa: E402
from course_library.storage.db import (  # noqa: E402
    configure_sqlite_connection,
    get_session,
    init_db,
)


@pytest.fixture
async def db_engine():
    """
    Provides a fresh in-memory SQLite engine with all tables created.

    StaticPool keeps a single connection so every session sees the same
    in-memory database.
    """
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    event.listen(engine.sync_engine, "connect", configure_sqlite_connection)

    await init_db(engine)
    yield engine
    await engine.dispose()


@pytest.fixture
def session_factory(db_engine):
    return sessionmaker(db_engine, expire_on_commit=False, class_=AsyncSession)


@pytest.fixture
async def db_session(session_factory):
    """Provides a database session for repository tests."""
    async with session_factory() as session:
        yield session


@pytest.fixture
async def client(session_factory):
    """
    Provides an HTTP client talking to the application in-process.

    Each request gets its own session on the shared in-memory database.
    """

    async def override_get_session():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_session] = override_get_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac
    app.dependency_overrides.clear()


@pytest.fixture
def seed(session_factory):
    """
    Provides a helper storing authors (and their courses) directly.

    Example:
        author = await seed(make_author("Berry", "Griffin Beak Eldritch"))
    """

    async def _seed(*entities):
        async with session_factory() as session:
            session.add_all(entities)
            await session.commit()
        return entities[0] if len(entities) == 1 else entities

    return _seed
