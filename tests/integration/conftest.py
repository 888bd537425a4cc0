"""Integration-test fixtures.

Requires PostgreSQL and Redis reachable with the configured settings
(docker compose up). Run with: pytest -m integration

The real lifespan runs once per session, so the engine pool and Redis
client stay bound to the single session event loop.
"""

import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import text

from src.main import app, lifespan
from src.ps_posts.domain.cache import LIST_KEY


@pytest_asyncio.fixture(loop_scope="session", scope="session")
async def client() -> AsyncClient:  # type: ignore[override]
    """Session-scoped async HTTP client over the fully started app."""
    async with lifespan(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac


@pytest_asyncio.fixture(loop_scope="session")
async def clean_state(client: AsyncClient) -> AsyncClient:
    """Empty the posts table and drop the list key before a test."""
    async with app.state.engine.begin() as conn:
        await conn.execute(text("TRUNCATE posts RESTART IDENTITY"))
    await app.state.cache.delete(LIST_KEY)
    return client
