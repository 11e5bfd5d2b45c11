# File: tests/conftest.py
"""Pytest configuration and fixtures."""

import os
import uuid

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from lessonbook.api.auth import get_current_user_id
from lessonbook.core.db import Base, get_db
from lessonbook.main import create_app

# Import all models so metadata knows every table
from lessonbook.models import Booking, ClassSession, Profile  # noqa: F401

# In-memory SQLite by default; point at Postgres with
# TEST_DATABASE_URL=postgresql+asyncpg://user:pass@db:5432/lessonbook_test
TEST_DATABASE_URL = os.getenv("TEST_DATABASE_URL", "sqlite+aiosqlite:///:memory:")


def _engine_kwargs(url: str) -> dict:
    if url.startswith("sqlite"):
        # One shared connection, otherwise each checkout sees an empty database
        return {"poolclass": StaticPool, "connect_args": {"check_same_thread": False}}
    return {}


@pytest_asyncio.fixture(scope="function")
async def db_session():
    """Create fresh DB session (and schema) for each test."""
    engine = create_async_engine(TEST_DATABASE_URL, echo=False, **_engine_kwargs(TEST_DATABASE_URL))
    async_session_maker = async_sessionmaker(
        engine, class_=AsyncSession, expire_on_commit=False
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session_maker() as session:
        yield session
        await session.rollback()

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def user_id() -> uuid.UUID:
    """Id of the authenticated user for API tests."""
    return uuid.uuid4()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession, user_id: uuid.UUID):
    """Async test client authenticated as ``user_id`` and bound to the test session."""
    app = create_app()

    async def override_get_db():
        yield db_session

    async def override_get_current_user_id():
        return user_id

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_current_user_id] = override_get_current_user_id

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        ac.user_id = user_id
        ac.db_session = db_session
        yield ac


@pytest_asyncio.fixture
async def unauthenticated_client(db_session: AsyncSession):
    """AsyncClient without authentication overrides (for testing auth failures)."""
    app = create_app()

    async def override_get_db():
        yield db_session

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test"
    ) as ac:
        yield ac
