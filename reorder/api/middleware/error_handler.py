"""
Error handling middleware.

Every error leaves the API in the same JSON shape (ErrorResponse): a
machine-readable error_code, a message, a recovery hint and the path.
Domain exceptions carry their own code; framework exceptions get one
inferred from the status code and detail text.
"""

from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from reorder.application.dto.responses import ErrorResponse
from reorder.config import get_logger
from reorder.core.exceptions import (
    ConfigurationError,
    PartNotFoundError,
    ReorderError,
    StorageError,
    ValidationError,
)

logger = get_logger(__name__)


# Checked in order; the first isinstance match decides the status
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    PartNotFoundError: status.HTTP_404_NOT_FOUND,
    StorageError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ConfigurationError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ValueError: status.HTTP_400_BAD_REQUEST,
    KeyError: status.HTTP_404_NOT_FOUND,
}

CODE_HINTS: dict[str, str] = {
    "PART_NOT_FOUND": "List parts with GET /api/parts and retry with an existing id.",
    "VALIDATION_ERROR": "Numbers must be non-negative and name must not be blank.",
    "MISSING_QUERY": "Pass a non-empty search term, e.g. /api/parts/search?q=belt.",
    "DATABASE_ERROR": "The parts database could not be read or written. See server logs.",
}

STATUS_HINTS: dict[int, str] = {
    400: "Check the request parameters.",
    404: "Nothing exists at this path or id.",
    422: "Check the request body fields and types.",
    500: "Unexpected server error. See server logs.",
}

# (status, lowercase fragment of detail) -> code, for HTTPException
DETAIL_CODES: tuple[tuple[int, str, str], ...] = (
    (404, "part", "PART_NOT_FOUND"),
    (400, "query parameter", "MISSING_QUERY"),
)

STATUS_CODES: dict[int, str] = {
    400: "BAD_REQUEST",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    422: "UNPROCESSABLE_ENTITY",
}


def _status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def _infer_error_code(status_code: int, detail: str) -> str:
    detail = detail.lower()
    for code_status, fragment, code in DETAIL_CODES:
        if status_code == code_status and fragment in detail:
            return code
    return STATUS_CODES.get(status_code, "HTTP_ERROR")


def error_response(
    request: Request,
    status_code: int,
    error_code: str,
    message: str,
    detail: str | None = None,
) -> JSONResponse:
    """Build the standard error body for a request."""
    body = ErrorResponse(
        error_code=error_code,
        message=message,
        hint=CODE_HINTS.get(error_code) or STATUS_HINTS.get(status_code),
        detail=detail,
        path=request.url.path,
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Turns exceptions escaping a route into error responses."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return self._handle_exception(request, e)

    def _handle_exception(self, request: Request, exc: Exception) -> JSONResponse:
        status_code = _status_for(exc)
        if isinstance(exc, ReorderError):
            error_code, message = exc.code, exc.message
        else:
            error_code, message = type(exc).__name__, str(exc)

        event = dict(
            request_id=getattr(request.state, "request_id", None),
            path=request.url.path,
            error_code=error_code,
            error=message,
        )
        if status_code >= 500:
            logger.exception("request_exception", **event)
        else:
            logger.warning("request_exception", **event)

        return error_response(request, status_code, error_code, message)


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for FastAPI's own validation and HTTP errors."""

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        )
        return error_response(
            request,
            status.HTTP_422_UNPROCESSABLE_ENTITY,
            "VALIDATION_ERROR",
            "Request validation failed",
            detail=problems,
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        message = str(exc.detail) if exc.detail else "An error occurred"
        return error_response(
            request,
            exc.status_code,
            _infer_error_code(exc.status_code, message),
            message,
        )
