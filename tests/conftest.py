"""Shared test fixtures.

Unit tests never touch PostgreSQL or Redis: the service runs against an
in-memory repository and cache, and the HTTP client swaps both in through
FastAPI dependency overrides. ASGITransport does not run the lifespan, so
no real connections are opened.
"""

from datetime import UTC, datetime
from unittest.mock import MagicMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.main import app
from src.ps_common.database import get_db_session
from src.ps_common.errors import CacheError, StorageError
from src.ps_posts.api.dependencies import get_post_service
from src.ps_posts.application.service import PostApplicationService
from src.ps_posts.domain.models import Post


class InMemoryCache:
    """Dict-backed stand-in for RedisCache; ``down=True`` simulates an outage."""

    def __init__(self) -> None:
        self.data: dict[str, str] = {}
        self.down = False
        self.sets: list[str] = []
        self.deletes: list[str] = []

    def _check(self, operation: str) -> None:
        if self.down:
            raise CacheError(operation, "Connection refused")

    async def get(self, key: str) -> str | None:
        self._check("get")
        return self.data.get(key)

    async def set(self, key: str, value: str) -> None:
        self._check("set")
        self.sets.append(key)
        self.data[key] = value

    async def delete(self, key: str) -> None:
        self._check("delete")
        self.deletes.append(key)
        self.data.pop(key, None)

    async def ping(self) -> None:
        self._check("ping")


class InMemoryPostRepository:
    """List-backed stand-in for PostRepository with SERIAL-like ids."""

    def __init__(self) -> None:
        self.posts: list[Post] = []
        self.down = False
        self.queries = 0

    def _check(self, operation: str) -> None:
        if self.down:
            raise StorageError(operation, "could not connect to server")

    async def list_posts(self, db) -> list[Post]:
        self._check("list_posts")
        self.queries += 1
        return sorted(self.posts, key=lambda p: p.id, reverse=True)

    async def get_post_by_id(self, db, post_id: int) -> Post | None:
        self._check("get_post_by_id")
        self.queries += 1
        return next((p for p in self.posts if p.id == post_id), None)

    async def create_post(self, db, title: str, content: str) -> Post:
        self._check("create_post")
        post = Post(
            id=len(self.posts) + 1,
            title=title,
            content=content,
            created_at=datetime.now(UTC),
        )
        self.posts.append(post)
        return post

    async def ping(self, db) -> None:
        self._check("ping")


@pytest.fixture
def db() -> MagicMock:
    return MagicMock()


@pytest.fixture
def cache() -> InMemoryCache:
    return InMemoryCache()


@pytest.fixture
def repo() -> InMemoryPostRepository:
    return InMemoryPostRepository()


@pytest.fixture
def service(cache: InMemoryCache, repo: InMemoryPostRepository) -> PostApplicationService:
    return PostApplicationService(cache=cache, repo=repo)


@pytest.fixture
async def client(service: PostApplicationService, db: MagicMock) -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints against in-memory backends."""

    async def _db_session():
        yield db

    app.dependency_overrides[get_post_service] = lambda: service
    app.dependency_overrides[get_db_session] = _db_session
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
