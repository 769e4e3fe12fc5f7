"""Prometheus metrics for the fake OAuth2 server.

Every metric the server exports is declared here; other modules import
the one they need and increment/observe it where the event happens.

HTTP-level (fed by MetricsMiddleware):
  http_requests_total            counter   method, endpoint, status_code
  http_request_duration_seconds  histogram method, endpoint
  http_active_requests           gauge

OAuth-level (fed by the token endpoint):
  oauth_tokens_issued_total           counter  grant_type
  oauth_token_request_errors_total    counter  grant_type

A test suite pointed at this server can scrape /metrics afterwards to
check, say, that it really did exercise the refresh path.
"""

from __future__ import annotations

from prometheus_client import Counter, Gauge, Histogram

REQUEST_COUNT = Counter(
    "http_requests_total",
    "HTTP requests served, by method, route and status",
    ["method", "endpoint", "status_code"],
)

REQUEST_DURATION = Histogram(
    "http_request_duration_seconds",
    "Time from request received to response started, in seconds",
    ["method", "endpoint"],
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 1.0],
)

ACTIVE_REQUESTS = Gauge(
    "http_active_requests",
    "HTTP requests in flight",
)

TOKENS_ISSUED = Counter(
    "oauth_tokens_issued_total",
    "Access tokens issued by the token endpoint",
    ["grant_type"],  # "authorization_code" or "refresh_token"
)

TOKEN_REQUEST_ERRORS = Counter(
    "oauth_token_request_errors_total",
    "Token requests rejected with 400",
    ["grant_type"],  # "authorization_code", "refresh_token" or "invalid"
)
