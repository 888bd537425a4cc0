"""Post cache port and key layout.

Two key families share the ``posts`` prefix:
  - ``posts:all``   the full list, newest first
  - ``posts:{id}``  a single post

Entries carry no TTL. Writes invalidate by deleting keys; readers
repopulate on the next miss.
"""

from typing import Protocol

KEY_PREFIX = "posts"
LIST_KEY = f"{KEY_PREFIX}:all"


def post_key(post_id: int) -> str:
    return f"{KEY_PREFIX}:{post_id}"


class PostCacheProtocol(Protocol):
    async def get(self, key: str) -> str | None: ...

    async def set(self, key: str, value: str) -> None: ...

    async def delete(self, key: str) -> None: ...

    async def ping(self) -> None: ...
