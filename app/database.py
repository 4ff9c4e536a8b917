# python
"""Database engine and session utilities.

One async engine per process, built from ``DATABASE_URL`` (or
``TEST_DATABASE_URL`` when ``TESTING=true``). Request handlers receive an
``AsyncSession`` through the ``get_db`` dependency; scripts open their own
with ``AsyncSessionLocal``.
"""
import os
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from app.core.config import settings
from models import Base


def resolve_database_url() -> str:
    """Pick the connection URL for the current mode."""
    if os.getenv("TESTING") == "true":
        url = os.getenv("TEST_DATABASE_URL") or settings.test_database_url
    else:
        url = settings.database_url

    url = (url or "").strip()
    if not url:
        raise RuntimeError(
            "DATABASE_URL is not configured. Set it in the environment or .env file "
            "(e.g., DATABASE_URL=postgresql+asyncpg://<user>:<pass>@<host>/<db>)."
        )
    return url


DB_URL = resolve_database_url()

engine = create_async_engine(
    DB_URL,
    echo=settings.debug,
    # SQLite has no server side to drop idle connections
    pool_pre_ping=not DB_URL.startswith("sqlite"),
)

AsyncSessionLocal = async_sessionmaker(bind=engine, expire_on_commit=False)


async def get_db() -> AsyncGenerator[AsyncSession, Any]:
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_models() -> None:
    """Create missing tables. Only used in development."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
