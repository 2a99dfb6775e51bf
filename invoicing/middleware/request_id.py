from __future__ import annotations

import time
import uuid
from collections.abc import Callable

import sentry_sdk
import structlog
from fastapi import Request, Response

from invoicing.api import errors

REQUEST_ID_HEADER = "X-Request-ID"
# Bodies are kept for the 500 log line; secrets are masked by the log processor
_BODY_METHODS = frozenset({"POST", "PUT", "PATCH", "DELETE"})

logger = structlog.get_logger(__name__)


def _elapsed_ms(start_ns: int) -> float:
    return round((time.perf_counter_ns() - start_ns) / 1_000_000.0, 3)


async def request_id_middleware(request: Request, call_next: Callable) -> Response:
    """Correlate every log line of a request and write one access log entry.

    The inbound ``X-Request-ID`` is reused when present, otherwise a UUID4 is
    minted. It is bound into structlog's contextvars together with the path and
    method, tagged on the Sentry scope, and echoed on every response, the
    generic 500 included.
    """
    rid = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
    path, method = request.url.path, request.method
    client_ip = request.client.host if request.client else "-"

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=rid, path=path, method=method)
    sentry_sdk.set_tag("request_id", rid)
    sentry_sdk.set_tag("path", path)
    sentry_sdk.set_tag("method", method)

    if method in _BODY_METHODS:
        # Starlette replays the cached body to the route handler
        request.state.raw_body = await request.body()

    start_ns = time.perf_counter_ns()
    try:
        try:
            response = await call_next(request)
        except Exception as exc:
            # Logged here while the request context is still bound
            sentry_sdk.capture_exception(exc)
            errors.log_unhandled(request, exc)
            response = errors.internal_error_response()

        log = logger.warning if response.status_code >= 500 else logger.info
        log(
            "http_request",
            status=response.status_code,
            duration_ms=_elapsed_ms(start_ns),
            client_ip=client_ip,
        )
        response.headers[REQUEST_ID_HEADER] = rid
        return response
    finally:
        structlog.contextvars.clear_contextvars()
