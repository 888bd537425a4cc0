"""Startup/shutdown behaviour of the application lifespan (backends mocked)."""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from config.settings import Settings
from src.main import create_app, lifespan
from src.ps_common.errors import CacheError
from src.ps_posts.application.service import PostApplicationService


@pytest.fixture
def engine() -> MagicMock:
    engine = MagicMock()
    engine.dispose = AsyncMock()
    return engine


@pytest.fixture
def redis_mock() -> AsyncMock:
    return AsyncMock()


@pytest.fixture
def app():
    return create_app(Settings(_env_file=None))


class TestStartup:
    async def test_ready_app_gets_service_and_releases_on_shutdown(self, app, engine, redis_mock):
        with (
            patch("src.main.create_engine", return_value=engine),
            patch("src.main.create_redis", return_value=redis_mock),
            patch("src.main.create_schema", new=AsyncMock()) as create_schema,
        ):
            async with lifespan(app):
                assert isinstance(app.state.post_service, PostApplicationService)
                create_schema.assert_awaited_once_with(engine)

        engine.dispose.assert_awaited_once()
        redis_mock.aclose.assert_awaited_once()

    async def test_cache_unreachable_aborts_startup(self, app, engine, redis_mock):
        redis_mock.ping.side_effect = RedisConnectionError("Connection refused")

        with (
            patch("src.main.create_engine", return_value=engine),
            patch("src.main.create_redis", return_value=redis_mock),
            patch("src.main.create_schema", new=AsyncMock()),
        ):
            with pytest.raises(CacheError):
                async with lifespan(app):
                    pytest.fail("app must not start")

        engine.dispose.assert_awaited_once()
        redis_mock.aclose.assert_awaited_once()

    async def test_database_unreachable_aborts_startup(self, app, engine, redis_mock):
        with (
            patch("src.main.create_engine", return_value=engine),
            patch("src.main.create_redis", return_value=redis_mock),
            patch(
                "src.main.create_schema",
                new=AsyncMock(side_effect=ConnectionRefusedError("refused")),
            ),
        ):
            with pytest.raises(ConnectionRefusedError):
                async with lifespan(app):
                    pytest.fail("app must not start")

        assert not hasattr(app.state, "post_service")
        engine.dispose.assert_awaited_once()
