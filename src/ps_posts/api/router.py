"""ps_posts REST endpoints.

GET  /health        — pings database and cache
GET  /posts         — all posts, newest first (cache-aside)
GET  /posts/{id}    — single post (cache-aside, 404 never cached)
POST /posts         — create, then invalidate cache
"""

from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from src.ps_common.database import get_db_session
from src.ps_posts.api.dependencies import get_post_service
from src.ps_posts.application.schemas import (
    CreatePostRequest,
    HealthReport,
    PostCreatedResponse,
    PostDetailResponse,
    PostListResponse,
)
from src.ps_posts.application.service import PostApplicationService

router = APIRouter(prefix="/posts", tags=["posts"])
health_router = APIRouter(tags=["health"])

DbSession = Annotated[AsyncSession, Depends(get_db_session)]
PostService = Annotated[PostApplicationService, Depends(get_post_service)]


@health_router.get("/health", response_model=HealthReport, response_model_exclude_none=True)
async def health(db: DbSession, service: PostService) -> HealthReport | JSONResponse:
    report = await service.check_health(db)
    if not report.healthy:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=report.model_dump(exclude_none=True),
        )
    return report


@router.get("")
async def list_posts(db: DbSession, service: PostService) -> PostListResponse:
    return await service.list_posts(db)


@router.get("/{post_id}")
async def get_post(post_id: int, db: DbSession, service: PostService) -> PostDetailResponse:
    return await service.get_post(db, post_id)


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_post(
    body: CreatePostRequest, db: DbSession, service: PostService
) -> PostCreatedResponse:
    post = await service.create_post(db, body.title, body.content)
    return PostCreatedResponse(data=post)
