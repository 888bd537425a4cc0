"""FastAPI application entry point.

Run with: uvicorn src.main:app --loop uvloop --port 5000
      or: python -m src.main   (reads HOST/PORT from settings)
"""

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config.settings import Settings, settings
from src.ps_common.database import create_engine, create_schema, create_session_factory
from src.ps_common.errors import AppError, InternalError, ValidationError
from src.ps_common.logging_config import configure_logging
from src.ps_common.middleware import RequestLogMiddleware
from src.ps_common.redis_client import RedisCache, create_redis
from src.ps_common.response import error_response
from src.ps_posts.api.router import health_router
from src.ps_posts.api.router import router as posts_router
from src.ps_posts.application.service import PostApplicationService

logger = logging.getLogger("ps.app")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: connect DB + Redis, create schema. Shutdown: dispose.

    Any failure before ``yield`` aborts startup.
    """
    cfg: Settings = app.state.settings
    engine = create_engine(cfg)
    cache = RedisCache(create_redis(cfg))
    try:
        await cache.ping()
        await create_schema(engine)
    except Exception:
        logger.exception("Startup failed: database or cache unreachable")
        await engine.dispose()
        await cache.close()
        raise

    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    app.state.cache = cache
    app.state.post_service = PostApplicationService(cache=cache)
    logger.info("DB ready, Redis ready")
    yield
    await engine.dispose()
    await cache.close()
    logger.info("Shutdown complete")


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.http_status >= 500:
        logger.error("[%s] %s failed: %s", request.method, request.url.path, exc.message)
    resp = error_response(exc.code, exc.message, exc.http_status)
    return JSONResponse(status_code=exc.http_status, content=resp.model_dump())


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Missing fields, wrong types and non-integer ids are all 400s
    errors = exc.errors()
    if not errors:
        return await app_error_handler(request, ValidationError("invalid request"))
    first = errors[0]
    loc = ".".join(str(part) for part in first.get("loc", ()))
    return await app_error_handler(request, ValidationError(f"{loc}: {first.get('msg')}"))


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on [%s] %s", request.method, request.url.path)
    return await app_error_handler(request, InternalError())


def create_app(cfg: Settings = settings) -> FastAPI:
    configure_logging(cfg.LOG_LEVEL, cfg.LOG_FORMAT)

    app = FastAPI(
        title=cfg.APP_NAME,
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = cfg

    app.add_middleware(RequestLogMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cfg.CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(AppError, app_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(RequestValidationError, request_validation_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(health_router)
    app.include_router(posts_router)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.main:app",
        host=settings.HOST,
        port=settings.PORT,
        loop="uvloop",
        log_config=None,
    )
