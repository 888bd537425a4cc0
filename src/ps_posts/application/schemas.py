"""Pydantic schemas for ps_posts requests, responses and cache payloads.

The cache stores exactly what the API returns under ``data``: one
``PostOut`` as JSON for ``posts:{id}``, a JSON array of them for
``posts:all``. ``created_at`` is serialized as ISO-8601.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, TypeAdapter

from src.ps_common.response import Source
from src.ps_posts.domain.models import Post

# ---------------------------------------------------------------------------
# Post
# ---------------------------------------------------------------------------


class PostOut(BaseModel):
    id: int
    title: str
    content: str
    created_at: datetime

    @classmethod
    def from_domain(cls, p: Post) -> "PostOut":
        return cls(id=p.id, title=p.title, content=p.content, created_at=p.created_at)


POST_LIST_ADAPTER: TypeAdapter[list[PostOut]] = TypeAdapter(list[PostOut])

# ---------------------------------------------------------------------------
# Requests
# ---------------------------------------------------------------------------


class CreatePostRequest(BaseModel):
    # Presence and emptiness are checked by the service so that both
    # failures map to the same 400 response.
    title: str | None = None
    content: str | None = None


# ---------------------------------------------------------------------------
# Responses
# ---------------------------------------------------------------------------


class PostListResponse(BaseModel):
    source: Source
    data: list[PostOut]


class PostDetailResponse(BaseModel):
    source: Source
    data: PostOut


class PostCreatedResponse(BaseModel):
    message: str = "Post created"
    data: PostOut


BackendStatus = Literal["ok", "error"]


class HealthReport(BaseModel):
    status: BackendStatus
    db: BackendStatus
    cache: BackendStatus
    error: str | None = None

    @property
    def healthy(self) -> bool:
        return self.status == "ok"
