from __future__ import annotations

import logging
from urllib.parse import urlencode, urlsplit, urlunsplit

from fastapi import APIRouter, Form, Query, Response, status
from fastapi.responses import RedirectResponse

from fake_oauth2.api.dependencies import ServerConfigDep, SigningKeyDep
from fake_oauth2.api.login_page import render_login_page
from fake_oauth2.api.responses import typed_response
from fake_oauth2.core.metrics import TOKENS_ISSUED
from fake_oauth2.models.token import TokenRequest, TokenResponse
from fake_oauth2.services import grant_service, token_service

# ---------------------------------------------------------------------------
# Fake Authorization Server - authorization code + refresh token grants
#
# Endpoints:
#   GET  /oauth/authorize  - login form, or redirect to the callback with code
#   POST /oauth/token      - exchange a code or refresh token for tokens
#
# Nothing is stored between requests.  The "code" is the email itself and
# the refresh token is derived from it, so both endpoints are pure functions
# of their input plus the app's config.
# ---------------------------------------------------------------------------

logger = logging.getLogger(__name__)

router = APIRouter(tags=["oauth"])


def build_callback_url(callback_url: str, code: str, state: str | None) -> str:
    """Append code (and state, if given) to the callback URL's query.

    The callback URL's own query is kept byte-for-byte in front.
    """
    parts = urlsplit(callback_url)
    params = [("code", code)]
    if state is not None:
        params.append(("state", state))
    query = "&".join(q for q in (parts.query, urlencode(params)) if q)
    return urlunsplit(parts._replace(query=query))


# ========================== GET /oauth/authorize ==========================
# The client sends the user's browser here.  Without an email we show the
# login form; with one we bounce straight back to the client.


@router.get("/oauth/authorize", response_model=None)
def authorize(
    config: ServerConfigDep,
    email: str | None = Query(None),
    state: str | None = Query(None),
) -> Response:
    if not email:
        logger.info("Authorize: no email, rendering login form  state=%s", state)
        return typed_response(render_login_page(state), "text/html")

    location = build_callback_url(config.callback_url, email, state)
    logger.info("Authorize: redirecting to callback  email=%s", email)
    return RedirectResponse(url=location, status_code=status.HTTP_302_FOUND)


# ========================== POST /oauth/token =============================
# Server-to-server.  Validation failures raise TokenRequestError, which the
# app-level handler turns into a 400 text/plain response.


@router.post("/oauth/token", response_model=TokenResponse)
def exchange_token(
    config: ServerConfigDep,
    signing_key: SigningKeyDep,
    grant_type: str = Form(""),
    code: str = Form(""),
    client_id: str = Form(""),
    client_secret: str = Form(""),
    refresh_token: str = Form(""),
    scope: str = Form(""),
) -> TokenResponse:
    # NOTE: never log client_secret or the issued access token.
    request = TokenRequest(
        grant_type=grant_type,
        code=code,
        client_id=client_id,
        client_secret=client_secret,
        refresh_token=refresh_token,
        scope=scope,
    )
    grant = grant_service.resolve_grant(request)
    response = token_service.build_token_response(grant, request, config, signing_key)

    TOKENS_ISSUED.labels(grant_type=grant.grant_type).inc()
    logger.info(
        "Token issued  grant_type=%s client_id=%s identity=%s jti=%s",
        grant.grant_type,
        client_id,
        grant.identity,
        response.jti,
        extra={"grant_type": grant.grant_type, "client_id": client_id},
    )
    return response
