"""Central mapping from failures to HTTP responses.

Every error body has the shape ``{"status": "error", "message": ..., "errors"?: [...]}``.
Classified domain errors are expected client mistakes and are not logged as
server errors; anything unclassified becomes a 500 and is logged with the
request context.
"""

from __future__ import annotations

import json
from typing import Any

import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from invoicing.core import messages
from invoicing.core.exceptions import (
    ConflictError,
    DomainError,
    ResourceNotFoundError,
    UnauthorizedError,
    ValidationError,
)

logger = structlog.get_logger(__name__)

STATUS_BY_ERROR: dict[type[DomainError], int] = {
    ValidationError: 422,
    ResourceNotFoundError: 404,
    UnauthorizedError: 401,
    ConflictError: 409,
}


def status_for(exc: BaseException) -> int:
    """Total mapping from an exception to a status code; unknown kinds are 500."""
    for cls in type(exc).__mro__:
        if cls in STATUS_BY_ERROR:
            return STATUS_BY_ERROR[cls]
    return 500


def error_body(message: str, errors: list[dict[str, str]] | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"status": "error", "message": message}
    if errors:
        body["errors"] = errors
    return body


def _field_name(loc: tuple[Any, ...]) -> str:
    # ("body", "amount") -> "amount"; ("query", "take") -> "take"; ("body",) -> "body"
    parts = [str(p) for p in loc[1:]] if len(loc) > 1 else [str(p) for p in loc]
    return ".".join(parts)


def _request_body(request: Request) -> Any:
    raw = getattr(request.state, "raw_body", None)
    if not raw:
        return None
    try:
        return json.loads(raw)
    except ValueError:
        return raw.decode("utf-8", errors="replace")


async def _domain_error_handler(_: Request, exc: DomainError) -> JSONResponse:
    status_code = status_for(exc)
    errors = None
    headers = None
    if isinstance(exc, ValidationError):
        errors = [e.as_dict() for e in exc.errors]
        logger.warning("validation_failed", code=exc.code, message=exc.message, errors=errors)
    elif isinstance(exc, UnauthorizedError):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=status_code, content=error_body(exc.message, errors), headers=headers
    )


async def _validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [
        {"field": _field_name(tuple(e.get("loc", ()))), "message": e.get("msg", "")}
        for e in exc.errors()
    ]
    logger.warning("validation_failed", errors=errors)
    return JSONResponse(status_code=422, content=error_body(messages.VALIDATION_ERROR, errors))


async def _http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    message = exc.detail if isinstance(exc.detail, str) else messages.NOT_FOUND
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(message),
        headers=getattr(exc, "headers", None),
    )


def log_unhandled(request: Request, exc: BaseException) -> None:
    logger.error(
        "unhandled_exception",
        path=request.url.path,
        method=request.method,
        body=_request_body(request),
        error=repr(exc),
        exc_info=exc,
    )


def internal_error_response() -> JSONResponse:
    # Hide internal details
    return JSONResponse(status_code=500, content=error_body(messages.INTERNAL_ERROR))


async def _unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    # Reached only for failures raised outside the request-id middleware
    log_unhandled(request, exc)
    return internal_error_response()


def install(app) -> None:
    # Register centralized exception handlers
    app.add_exception_handler(DomainError, _domain_error_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _unhandled_exception_handler)
