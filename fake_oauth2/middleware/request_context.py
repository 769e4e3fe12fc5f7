"""Request context middleware: a request ID and one summary line per request.

When a client test suite hammers the server with parallel token requests,
the log lines interleave.  Every record emitted while handling a request
carries that request's ID, so the lines for one exchange can be pulled
back out.  Clients may pass their own X-Request-ID to correlate the
server's log with their test output; otherwise a UUID is generated.

The ID lives in a ContextVar rather than a thread-local: Starlette runs
the middleware on the event loop and the sync endpoints on a threadpool,
and contextvars are copied into both.
"""

from __future__ import annotations

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

request_id_var: ContextVar[str] = ContextVar("request_id", default="-")


class _RequestContextFilter(logging.Filter):
    """Stamps request_id from the ContextVar onto every LogRecord."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get("-")  # type: ignore[attr-defined]
        return True


def install_request_context_filter() -> None:
    """Attach the filter to the root logger's handlers, once each.

    Filters on a logger only see records logged directly to it, so the
    filter goes on the handlers, which see records from every logger.
    """
    for handler in logging.getLogger().handlers:
        if not any(isinstance(f, _RequestContextFilter) for f in handler.filters):
            handler.addFilter(_RequestContextFilter())


# Longer client-supplied IDs are replaced with a generated one.
MAX_REQUEST_ID_LENGTH = 128


def _incoming_request_id(request: Request) -> str:
    supplied = request.headers.get("x-request-id", "").strip()
    if supplied and len(supplied) <= MAX_REQUEST_ID_LENGTH:
        return supplied
    return str(uuid.uuid4())


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Binds a request ID for the duration of the request and logs a summary.

    The ID is echoed back in the X-Request-ID response header.  5xx
    summaries are logged at WARNING, everything else (including the 400s
    client test suites provoke on purpose) at INFO.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        req_id = _incoming_request_id(request)
        token = request_id_var.set(req_id)
        start = time.perf_counter()
        try:
            response = await call_next(request)
            elapsed_ms = (time.perf_counter() - start) * 1000

            path = request.url.path
            logger.log(
                logging.WARNING if response.status_code >= 500 else logging.INFO,
                "%s %s → %d (%.1fms)",
                request.method,
                path,
                response.status_code,
                elapsed_ms,
                extra={
                    "request_id": req_id,
                    "method": request.method,
                    "path": path,
                    "status_code": response.status_code,
                    "duration_ms": round(elapsed_ms, 1),
                },
            )
        finally:
            request_id_var.reset(token)

        response.headers["X-Request-ID"] = req_id
        return response
