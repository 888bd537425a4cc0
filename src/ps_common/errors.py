"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Request validation
  2xxx: Posts
  9xxx: System (store, cache, unexpected)
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Validation ---

class ValidationError(AppError):
    def __init__(self, detail: str = "title and content required") -> None:
        super().__init__(1001, detail, 400)


# --- 2xxx: Posts ---

class PostNotFoundError(AppError):
    def __init__(self, post_id: int) -> None:
        super().__init__(2001, f"Post not found: {post_id}", 404)
        self.post_id = post_id


# --- 9xxx: System ---

class StorageError(AppError):
    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(9001, f"Storage failure during {operation}: {detail}", 500)
        self.operation = operation


class CacheError(AppError):
    def __init__(self, operation: str, detail: str) -> None:
        super().__init__(9002, f"Cache failure during {operation}: {detail}", 500)
        self.operation = operation


class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9099, detail, 500)
