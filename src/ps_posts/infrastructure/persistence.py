"""PostRepository — concrete implementation of PostRepositoryProtocol.

All queries use raw text() SQL (no ORM). Any driver or connection error is
logged and re-raised as StorageError; nothing is retried here.
"""

import logging

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ps_common.errors import StorageError
from src.ps_posts.domain.models import Post

logger = logging.getLogger("ps.db")

_STORAGE_ERRORS = (SQLAlchemyError, OSError)

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_LIST_POSTS_SQL = text("""
    SELECT id, title, content, created_at
    FROM posts
    ORDER BY id DESC
""")

_GET_POST_SQL = text("""
    SELECT id, title, content, created_at
    FROM posts
    WHERE id = :post_id
""")

_INSERT_POST_SQL = text("""
    INSERT INTO posts (title, content)
    VALUES (:title, :content)
    RETURNING id, title, content, created_at
""")

_PING_SQL = text("SELECT 1")

# posts.id is SERIAL (int4); larger ids cannot exist and asyncpg rejects them
MAX_POST_ID = 2**31 - 1

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_post(row: object) -> Post:
    return Post(
        id=row.id,  # type: ignore[attr-defined]
        title=row.title,  # type: ignore[attr-defined]
        content=row.content,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PostRepository:
    """Store client for the posts table."""

    async def list_posts(self, db: AsyncSession) -> list[Post]:
        try:
            result = await db.execute(_LIST_POSTS_SQL)
            rows = result.fetchall()
        except _STORAGE_ERRORS as exc:
            logger.error("list_posts failed: %s", exc)
            raise StorageError("list_posts", str(exc)) from exc
        return [_row_to_post(row) for row in rows]

    async def get_post_by_id(self, db: AsyncSession, post_id: int) -> Post | None:
        if not 1 <= post_id <= MAX_POST_ID:
            return None
        try:
            result = await db.execute(_GET_POST_SQL, {"post_id": post_id})
            row = result.fetchone()
        except _STORAGE_ERRORS as exc:
            logger.error("get_post_by_id failed post_id=%s: %s", post_id, exc)
            raise StorageError("get_post_by_id", str(exc)) from exc
        return _row_to_post(row) if row else None

    async def create_post(self, db: AsyncSession, title: str, content: str) -> Post:
        """Insert and commit a post; returns the row with its generated id and created_at."""
        try:
            result = await db.execute(
                _INSERT_POST_SQL, {"title": title, "content": content}
            )
            row = result.fetchone()
            await db.commit()
        except _STORAGE_ERRORS as exc:
            # the session rolls back when it is closed at the end of the request
            logger.error("create_post failed title=%r: %s", title, exc)
            raise StorageError("create_post", str(exc)) from exc
        return _row_to_post(row)

    async def ping(self, db: AsyncSession) -> None:
        try:
            await db.execute(_PING_SQL)
        except _STORAGE_ERRORS as exc:
            logger.error("Database ping failed: %s", exc)
            raise StorageError("ping", str(exc)) from exc
