"""FastAPI dependencies for the posts endpoints.

The service is built in the application lifespan and kept on app.state;
tests replace it through ``app.dependency_overrides``.
"""

from fastapi import Request

from src.ps_posts.application.service import PostApplicationService


def get_post_service(request: Request) -> PostApplicationService:
    return request.app.state.post_service
