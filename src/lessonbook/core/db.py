"""Async engine, session factory and the per-request session dependency."""

import os
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

DEFAULT_DATABASE_URL = (
    "postgresql+asyncpg://lessonbook:dev_password_change_in_prod@db:5432/lessonbook_dev"
)
ASYNC_POSTGRES_SCHEME = "postgresql+asyncpg://"


def normalize_database_url(url: str | None) -> str:
    """Point plain Postgres DSNs at the asyncpg driver; other URLs pass through."""
    if not url:
        return DEFAULT_DATABASE_URL
    for scheme in ("postgres://", "postgresql://"):
        if url.startswith(scheme):
            return ASYNC_POSTGRES_SCHEME + url[len(scheme):]
    return url


DATABASE_URL = normalize_database_url(os.getenv("DATABASE_URL"))

engine = create_async_engine(
    DATABASE_URL,
    echo=os.getenv("DB_ECHO", "false").lower() == "true",
    pool_pre_ping=True,
)

AsyncSessionLocal = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


class Base(DeclarativeBase):
    pass


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """One session per request: committed when the handler returns, rolled back if it raises.

    Services only flush, so a booking and its seat update land in the same
    transaction.
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
