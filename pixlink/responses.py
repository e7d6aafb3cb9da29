"""
Pixlink API Response Utilities
Standardized response format and error handling
"""
from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse
from typing import Any, Dict, Optional
from datetime import datetime, timezone

from .exceptions import (
    PixlinkError,
    ShortUrlExhaustedError,
    UniquenessViolationError,
    UserNotFoundError,
)
from .logging_config import api_logger


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


# ============================================================
# SUCCESS RESPONSES
# ============================================================

def success(data: Any = None, message: str = None) -> Dict:
    """Create success response"""
    response = {
        "ok": True,
        "timestamp": utc_timestamp(),
    }

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def deleted(message: str = "Deleted successfully") -> Dict:
    """200 Deleted response"""
    return success(message=message)


# ============================================================
# ERROR RESPONSES
# ============================================================

class ApiException(HTTPException):
    """Custom API exception with error codes"""

    def __init__(
        self,
        status_code: int,
        message: str,
        error_code: str = None,
        details: Dict = None,
    ):
        self.error_code = error_code or f"ERR_{status_code}"
        self.details = details
        super().__init__(status_code=status_code, detail=message)


def not_found(resource: str = "Resource", id: Optional[Any] = None):
    message = f"{resource} not found" if id is None else f"{resource} '{id}' not found"
    raise ApiException(404, message, "NOT_FOUND")


# Domain error -> (status code, error code)
ERROR_STATUS = {
    UserNotFoundError: (404, "NOT_FOUND"),
    UniquenessViolationError: (409, "CONFLICT"),
    ShortUrlExhaustedError: (503, "SHORT_URL_EXHAUSTED"),
}


def _error_body(message: str, error_code: str, details: Dict = None) -> Dict:
    return {
        "ok": False,
        "error": message,
        "error_code": error_code,
        "details": details,
        "timestamp": utc_timestamp(),
    }


# ============================================================
# EXCEPTION HANDLER
# ============================================================

async def api_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Global exception handler for API and domain errors"""

    if isinstance(exc, ApiException):
        api_logger.warning(
            f"API Error: {exc.detail}",
            status_code=exc.status_code,
            error_code=exc.error_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.detail, exc.error_code, exc.details),
        )

    if isinstance(exc, PixlinkError):
        status_code, error_code = ERROR_STATUS.get(type(exc), (400, "BAD_REQUEST"))
        log = api_logger.error if status_code >= 500 else api_logger.warning
        log(
            f"Domain Error: {exc}",
            status_code=status_code,
            error_code=error_code,
            path=request.url.path,
        )
        return JSONResponse(
            status_code=status_code,
            content=_error_body(str(exc), error_code),
        )

    api_logger.error(
        f"Unexpected error: {exc}",
        error=exc,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content=_error_body("An unexpected error occurred", "INTERNAL_ERROR"),
    )
