"""Shared response pieces.

Success bodies are typed per endpoint and carry a provenance tag:
    {"source": "cache" | "database", "data": ...}
Error bodies always look like:
    {"error": "Post not found: 7", "code": 2001}

5xx errors never expose internal detail; see ``error_response``.
"""

from typing import Literal

from pydantic import BaseModel

Source = Literal["cache", "database"]

INTERNAL_ERROR_MESSAGE = "Internal server error"


class ErrorResponse(BaseModel):
    error: str
    code: int


def error_response(code: int, message: str, http_status: int) -> ErrorResponse:
    if http_status >= 500:
        message = INTERNAL_ERROR_MESSAGE
    return ErrorResponse(error=message, code=code)
