# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error leaves the API as {"error": "<code or upstream message>"}.
# =============================================================================

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse


class PhotoShareException(Exception):
    """
    Base exception for the photo-sharing API.

    All custom exceptions inherit from this class. `error` is the value
    placed in the response body: a fixed machine-readable code for
    validation failures, the upstream message for store failures.
    """

    def __init__(
        self,
        message: str,
        code: str = "internal_error",
        status_code: int = 500,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.details = details or {}

    @property
    def error(self) -> str:
        return self.code

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        return {"error": self.error}


# =============================================================================
# Validation Exceptions
# =============================================================================

class MissingFileError(PhotoShareException):
    """Raised when a post upload carries no image file."""

    def __init__(self):
        super().__init__(
            message="No image file attached to the upload",
            code="no_file",
            status_code=400,
        )


class FileTooLargeError(PhotoShareException):
    """Raised when uploaded image exceeds size limit."""

    def __init__(self, size_mb: float, max_mb: int):
        super().__init__(
            message=f"File too large: {size_mb:.1f}MB (max: {max_mb}MB)",
            code="file_too_large",
            status_code=413,
            details={"size_mb": size_mb, "max_mb": max_mb}
        )


class EmptyCommentError(PhotoShareException):
    """Raised when a comment body is empty after trimming."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Empty comment for post: {post_id}",
            code="empty",
            status_code=400,
            details={"post_id": post_id}
        )


# =============================================================================
# Lookup / Upstream Exceptions
# =============================================================================

class PostNotFoundError(PhotoShareException):
    """Raised when a post ID doesn't exist."""

    def __init__(self, post_id: str):
        super().__init__(
            message=f"Post not found: {post_id}",
            code="not_found",
            status_code=404,
            details={"post_id": post_id}
        )


class UpstreamError(PhotoShareException):
    """
    Raised when the record store or object store rejects a call.

    The upstream message is passed through to the client verbatim.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            message=message,
            code="upstream_error",
            status_code=500,
            details=details,
        )

    @property
    def error(self) -> str:
        return self.message


# =============================================================================
# Exception Handlers
# =============================================================================

async def photoshare_exception_handler(
    request: Request,
    exc: PhotoShareException
) -> JSONResponse:
    """Convert PhotoShareException to JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle request validation errors.

    Keeps the {"error": ...} shape used by every other failure.
    """
    return JSONResponse(
        status_code=422,
        content={
            "error": "validation_error",
        }
    )
