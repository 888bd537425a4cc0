"""Request logging middleware.

Logs every HTTP request with method, path, status code, latency, and
a short request ID for correlation. The request_id is stored on
request.state and echoed back in the X-Request-ID response header.

Exceptions that escape the route's own handlers are turned into the
generic 500 body here, so those responses still get the header, the log
line and the outer CORS headers.

Log format:
    INFO [POST] /posts → 201 (23ms) req_a1b2c3d4e5f6
"""

import logging
import time
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response

from src.ps_common.errors import InternalError
from src.ps_common.response import error_response

logger = logging.getLogger("ps.request")

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLogMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request.state.request_id = f"req_{uuid.uuid4().hex[:12]}"

        start = time.perf_counter()
        try:
            response: Response = await call_next(request)
        except Exception:
            logger.exception(
                "Unhandled error on [%s] %s %s",
                request.method,
                request.url.path,
                request.state.request_id,
            )
            err = InternalError()
            response = JSONResponse(
                status_code=err.http_status,
                content=error_response(err.code, err.message, err.http_status).model_dump(),
            )
        elapsed_ms = (time.perf_counter() - start) * 1000

        response.headers[REQUEST_ID_HEADER] = request.state.request_id
        logger.info(
            "[%s] %s → %d (%.0fms) %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            request.state.request_id,
        )
        return response
