"""Repository Protocol — dependency inversion for testability.

Unit tests inject an in-memory fake that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.ps_posts.domain.models import Post


class PostRepositoryProtocol(Protocol):
    async def list_posts(self, db: AsyncSession) -> list[Post]: ...

    async def get_post_by_id(self, db: AsyncSession, post_id: int) -> Post | None: ...

    async def create_post(self, db: AsyncSession, title: str, content: str) -> Post: ...

    async def ping(self, db: AsyncSession) -> None: ...
