# core/exceptions.py
from datetime import datetime, timezone
from typing import Any, Optional
import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


# ========================================
# ❗ Domain errors
# ========================================
class CmsError(Exception):
    """Base class for errors reported to API callers."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    error: str = "Internal error"

    def __init__(self, message: str, details: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class InvalidArgument(CmsError):
    status_code = status.HTTP_400_BAD_REQUEST
    error = "Invalid argument"


class NotFound(CmsError):
    status_code = status.HTTP_404_NOT_FOUND
    error = "Resource not found"


class Conflict(CmsError):
    status_code = status.HTTP_409_CONFLICT
    error = "Conflict"


class ValidationFailed(CmsError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error = "Validation failed"


# ========================================
# 🧯 Exception handlers
# ========================================
def error_body(exc: CmsError) -> dict:
    return {
        "status": exc.status_code,
        "error": exc.error,
        "message": exc.message,
        "details": exc.details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def cms_error_handler(request: Request, exc: CmsError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("%s %s -> %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_body(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(CmsError, cms_error_handler)
