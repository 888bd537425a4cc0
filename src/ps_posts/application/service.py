"""PostApplicationService — cache-aside reads, invalidate-on-write creates.

Read path: cache first, store on miss, then populate the cache. Misses are
not coordinated: two concurrent misses may both query the store and both
write the key, and the last write wins.

Write path: validate, insert (committed by the repository), then delete
the list key and the new post's key. The insert and the invalidation are
not atomic; if invalidation fails the post stays persisted and the error
propagates.

Not-found results are never cached. An empty list is cached like any other.
"""

import logging

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from src.ps_common.errors import (
    CacheError,
    PostNotFoundError,
    StorageError,
    ValidationError,
)
from src.ps_posts.application.schemas import (
    POST_LIST_ADAPTER,
    HealthReport,
    PostDetailResponse,
    PostListResponse,
    PostOut,
)
from src.ps_posts.domain.cache import LIST_KEY, PostCacheProtocol, post_key
from src.ps_posts.domain.repository import PostRepositoryProtocol
from src.ps_posts.infrastructure.persistence import PostRepository

logger = logging.getLogger("ps.posts")


class PostApplicationService:
    def __init__(
        self,
        cache: PostCacheProtocol,
        repo: PostRepositoryProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._repo: PostRepositoryProtocol = repo or PostRepository()

    async def list_posts(self, db: AsyncSession) -> PostListResponse:
        cached = await self._cache.get(LIST_KEY)
        if cached is not None:
            logger.info("Cache HIT: %s", LIST_KEY)
            return PostListResponse(source="cache", data=_decode_list(cached))

        logger.info("Cache MISS: %s", LIST_KEY)
        posts = [PostOut.from_domain(p) for p in await self._repo.list_posts(db)]
        await self._cache.set(LIST_KEY, POST_LIST_ADAPTER.dump_json(posts).decode())
        return PostListResponse(source="database", data=posts)

    async def get_post(self, db: AsyncSession, post_id: int) -> PostDetailResponse:
        key = post_key(post_id)
        cached = await self._cache.get(key)
        if cached is not None:
            logger.info("Cache HIT: %s", key)
            return PostDetailResponse(source="cache", data=_decode_post(key, cached))

        logger.info("Cache MISS: %s", key)
        post = await self._repo.get_post_by_id(db, post_id)
        if post is None:
            raise PostNotFoundError(post_id)

        out = PostOut.from_domain(post)
        await self._cache.set(key, out.model_dump_json())
        return PostDetailResponse(source="database", data=out)

    async def create_post(
        self, db: AsyncSession, title: str | None, content: str | None
    ) -> PostOut:
        if not title or not content:
            raise ValidationError()

        post = await self._repo.create_post(db, title, content)

        # posts:{id} cannot exist yet for a fresh id; the delete is idempotent
        logger.info("Invalidating cache after create post_id=%s", post.id)
        try:
            await self._cache.delete(LIST_KEY)
            await self._cache.delete(post_key(post.id))
        except CacheError:
            logger.error("Post %s persisted but cache invalidation failed", post.id)
            raise
        return PostOut.from_domain(post)

    async def check_health(self, db: AsyncSession) -> HealthReport:
        """Ping store and cache independently; the first failure sets ``error``."""
        errors: list[str] = []

        db_status = "ok"
        try:
            await self._repo.ping(db)
        except StorageError as exc:
            db_status = "error"
            errors.append(exc.message)

        cache_status = "ok"
        try:
            await self._cache.ping()
        except CacheError as exc:
            cache_status = "error"
            errors.append(exc.message)

        if errors:
            return HealthReport(
                status="error", db=db_status, cache=cache_status, error=errors[0]
            )
        return HealthReport(status="ok", db=db_status, cache=cache_status)


def _decode_list(raw: str) -> list[PostOut]:
    try:
        return POST_LIST_ADAPTER.validate_json(raw)
    except PydanticValidationError as exc:
        logger.error("Corrupt cache entry key=%s: %s", LIST_KEY, exc)
        raise CacheError("decode", f"corrupt entry {LIST_KEY}") from exc


def _decode_post(key: str, raw: str) -> PostOut:
    try:
        return PostOut.model_validate_json(raw)
    except PydanticValidationError as exc:
        logger.error("Corrupt cache entry key=%s: %s", key, exc)
        raise CacheError("decode", f"corrupt entry {key}") from exc
