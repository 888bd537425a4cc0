"""Async SQLAlchemy engine, session factory and schema bootstrap.

The engine is created once in the application lifespan and kept on
``app.state``; handlers receive sessions through ``get_db_session``.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from config.settings import Settings

logger = logging.getLogger("ps.db")

POSTS_DDL = """
    CREATE TABLE IF NOT EXISTS posts (
        id          SERIAL          PRIMARY KEY,
        title       VARCHAR(255)    NOT NULL,
        content     TEXT            NOT NULL,
        created_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW()
    )
"""


def create_engine(settings: Settings) -> AsyncEngine:
    return create_async_engine(
        settings.DATABASE_URL,
        echo=settings.DEBUG,
        pool_size=settings.DB_POOL_SIZE,
        max_overflow=settings.DB_MAX_OVERFLOW,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


async def create_schema(engine: AsyncEngine) -> None:
    """Create the posts table if it does not exist yet."""
    async with engine.begin() as conn:
        await conn.execute(text(POSTS_DDL))
    logger.info("Schema ready: posts")


async def get_db_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency: yields an AsyncSession, auto-closes after request."""
    session_factory: async_sessionmaker[AsyncSession] = request.app.state.session_factory
    async with session_factory() as session:
        yield session
