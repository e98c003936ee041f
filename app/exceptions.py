# =============================================================================
# app/exceptions.py - Custom Exception Handlers
# =============================================================================
# Centralized exception handling for the API.
# Every error response is JSON of the form {"error": ..., "code": ...}.
# Persistence failures are reported with a generic message; the underlying
# error is logged, never returned to the client.
# =============================================================================

import logging
from typing import Any

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class EditAPIException(Exception):
    """
    Base exception for the Edit API.

    All custom exceptions inherit from this class.
    Provides structured error responses with optional suggestions.
    """

    def __init__(
        self,
        message: str,
        code: str = "EDIT_API_ERROR",
        status_code: int = 500,
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.status_code = status_code
        self.suggestion = suggestion
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to API response dict."""
        result = {
            "error": self.message,
            "code": self.code,
        }
        if self.suggestion:
            result["suggestion"] = self.suggestion
        if self.details:
            result["details"] = self.details
        return result


# =============================================================================
# Activity Exceptions
# =============================================================================

class InvalidActivityActionError(EditAPIException):
    """Raised when the activity action is not 'start' or 'end'."""

    def __init__(self):
        super().__init__(
            message="Invalid action",
            code="INVALID_ACTION",
            status_code=400,
            suggestion="Send {\"action\": \"start\"} or {\"action\": \"end\"}",
        )


class ActivityStoreError(EditAPIException):
    """
    Raised when the activity store cannot be read or written.

    Deliberately carries no details: the cause is logged server-side.
    """

    def __init__(self, message: str):
        super().__init__(
            message=message,
            code="ACTIVITY_STORE_ERROR",
            status_code=500,
        )


# =============================================================================
# Exception Handlers
# =============================================================================

async def edit_api_exception_handler(
    request: Request,
    exc: EditAPIException
) -> JSONResponse:
    """
    Convert EditAPIException to JSON response.

    Returns structured error with:
    - error: Human-readable message
    - code: Machine-readable error code
    - suggestion: How to fix (if available)
    - details: Additional context
    """
    return JSONResponse(
        status_code=exc.status_code,
        content=exc.to_dict()
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """
    Handle request validation errors (malformed JSON, wrong types).

    Reported as a client error, in the same shape as every other error.
    """
    logger.debug(f"Request validation failed on {request.url.path}: {exc.errors()}")
    return JSONResponse(
        status_code=400,
        content={
            "error": "Validation error",
            "code": "VALIDATION_ERROR",
            "details": {"errors": str(exc)},
        }
    )


async def http_exception_handler(
    request: Request,
    exc: StarletteHTTPException
) -> JSONResponse:
    """
    Render framework HTTP errors (401 from auth, 404 for unknown routes)
    in the API's error shape.
    """
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.detail,
            "code": f"HTTP_{exc.status_code}",
        },
        headers=getattr(exc, "headers", None),
    )
