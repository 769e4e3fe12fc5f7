"""Liveness endpoint.

Test harnesses that start this server in the background (docker-compose,
a CI service container) poll GET /health until it answers before running
the client's suite.  There are no backing services to check, so if the
process can answer, it is healthy.
"""

from __future__ import annotations

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
def health() -> dict:
    return {"status": "ok"}
