from __future__ import annotations

import logging

from fastapi import FastAPI, Request, Response
from fastapi.exception_handlers import http_exception_handler
from starlette.exceptions import HTTPException as StarletteHTTPException

from fake_oauth2.api.responses import not_found, plain_text
from fake_oauth2.core.errors import TokenRequestError
from fake_oauth2.core.metrics import TOKEN_REQUEST_ERRORS

logger = logging.getLogger(__name__)


async def token_request_error_handler(
    request: Request, exc: TokenRequestError
) -> Response:
    TOKEN_REQUEST_ERRORS.labels(grant_type=exc.grant_type).inc()
    logger.warning(
        "Token request rejected  grant_type=%s reason=%s",
        exc.grant_type,
        exc.message,
        extra={"grant_type": exc.grant_type},
    )
    return plain_text(exc.message, 400)


async def not_found_handler(
    request: Request, exc: StarletteHTTPException
) -> Response:
    """Unknown path, or known path with the wrong method: plain 404 either way."""
    if exc.status_code in (404, 405):
        return not_found()
    return await http_exception_handler(request, exc)


def install_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(TokenRequestError, token_request_error_handler)
    app.add_exception_handler(StarletteHTTPException, not_found_handler)
