"""Redis cache client used by the posts cache-aside layer.

Values are JSON text (the client decodes responses). Entries never expire;
they live until deleted or the Redis database is flushed externally.
Every Redis or socket error surfaces as ``CacheError``; nothing is retried.
"""

import logging

import redis.asyncio as aioredis
from redis.exceptions import RedisError

from config.settings import Settings
from src.ps_common.errors import CacheError

logger = logging.getLogger("ps.cache")

_CACHE_ERRORS = (RedisError, OSError)


def create_redis(settings: Settings) -> aioredis.Redis:
    """Build a Redis client backed by a connection pool."""
    return aioredis.from_url(
        settings.REDIS_URL,
        decode_responses=True,
    )


class RedisCache:
    """Thin get/set/delete wrapper that maps client failures to CacheError."""

    def __init__(self, client: aioredis.Redis) -> None:
        self._client = client

    async def get(self, key: str) -> str | None:
        try:
            return await self._client.get(key)
        except _CACHE_ERRORS as exc:
            logger.error("Cache get failed key=%s: %s", key, exc)
            raise CacheError("get", str(exc)) from exc

    async def set(self, key: str, value: str) -> None:
        try:
            await self._client.set(key, value)
        except _CACHE_ERRORS as exc:
            logger.error("Cache set failed key=%s: %s", key, exc)
            raise CacheError("set", str(exc)) from exc

    async def delete(self, key: str) -> None:
        # DEL on a missing key returns 0, not an error
        try:
            await self._client.delete(key)
        except _CACHE_ERRORS as exc:
            logger.error("Cache delete failed key=%s: %s", key, exc)
            raise CacheError("delete", str(exc)) from exc

    async def ping(self) -> None:
        try:
            await self._client.ping()
        except _CACHE_ERRORS as exc:
            logger.error("Cache ping failed: %s", exc)
            raise CacheError("ping", str(exc)) from exc

    async def close(self) -> None:
        await self._client.aclose()
