"""
Async database engine and session factories.

Requests get their session from ``get_db``; startup code and scripts use
``get_db_context``. Both commit on success and roll back on any error.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool

from commission_api.config import settings

logger = logging.getLogger(__name__)

# statement_cache_size is an asyncpg option; other drivers reject it
connect_args = {}
if "+asyncpg" in settings.database_url:
    connect_args["statement_cache_size"] = 0  # transaction-mode poolers (PgBouncer, Supabase)

# Connections are pooled outside the process, see connect_args
engine = create_async_engine(
    settings.database_url,
    poolclass=NullPool,
    echo=settings.log_level.upper() == "DEBUG",
    connect_args=connect_args,
)

AsyncSessionLocal = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: one session per request, committed at the end."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def get_db_context() -> AsyncGenerator[AsyncSession, None]:
    """
    Session outside a request (startup, seed scripts).

    Usage:
        async with get_db_context() as db:
            db.add(...)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def dispose_engine() -> None:
    """Close pooled driver resources on shutdown."""
    await engine.dispose()
    logger.info("Database engine disposed")
