"""Prometheus middleware: counts and times every HTTP request.

The endpoint label is the matched route's path template when there is
one, so every static asset shares the catch-all's label instead of
minting a series per URL.  Unmatched paths (the plain 404s) are labelled
with the raw path.
"""

from __future__ import annotations

import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from fake_oauth2.core.metrics import ACTIVE_REQUESTS, REQUEST_COUNT, REQUEST_DURATION

# The scraper's own requests are not counted.
_UNCOUNTED_PATHS = frozenset({"/metrics"})


def _endpoint_label(request: Request) -> str:
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


class MetricsMiddleware(BaseHTTPMiddleware):
    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        if request.url.path in _UNCOUNTED_PATHS:
            return await call_next(request)

        status_code = 500
        start = time.perf_counter()
        with ACTIVE_REQUESTS.track_inprogress():
            try:
                response = await call_next(request)
                status_code = response.status_code
            finally:
                endpoint = _endpoint_label(request)
                REQUEST_COUNT.labels(request.method, endpoint, str(status_code)).inc()
                REQUEST_DURATION.labels(request.method, endpoint).observe(
                    time.perf_counter() - start
                )
        return response
