"""GET /metrics: Prometheus text exposition of the process-global registry."""

from __future__ import annotations

from fastapi import APIRouter, Response
from prometheus_client import CONTENT_TYPE_LATEST, REGISTRY, generate_latest

from fake_oauth2.api.responses import typed_response

router = APIRouter(tags=["observability"])


@router.get("/metrics", include_in_schema=False)
def metrics() -> Response:
    return typed_response(generate_latest(REGISTRY), CONTENT_TYPE_LATEST)
