from __future__ import annotations

from fake_oauth2.core.errors import TokenRequestError
from fake_oauth2.models.token import (
    GRANT_AUTHORIZATION_CODE,
    GRANT_REFRESH_TOKEN,
    ResolvedGrant,
    TokenRequest,
)
from fake_oauth2.services.token_service import make_refresh_token, parse_refresh_token

# Error bodies are matched byte-for-byte by client test suites.
INVALID_GRANT_TYPE = "'grant_type' must be 'authorization_code' or 'refresh_token'"
MISSING_CODE = "'code' is missing or empty"
MISSING_CLIENT_ID = "'client_id' is missing or empty"
MALFORMED_REFRESH_TOKEN = "'refresh_token' is missing or malformed"


def resolve_grant(request: TokenRequest) -> ResolvedGrant:
    """Validate a token request and work out whose token it is.

    Raises TokenRequestError with one of the fixed messages above.
    """
    if request.grant_type == GRANT_AUTHORIZATION_CODE:
        return _resolve_authorization_code(request)
    if request.grant_type == GRANT_REFRESH_TOKEN:
        return _resolve_refresh_token(request)
    raise TokenRequestError(INVALID_GRANT_TYPE, grant_type="invalid")


def _resolve_authorization_code(request: TokenRequest) -> ResolvedGrant:
    if not request.code:
        raise TokenRequestError(MISSING_CODE, grant_type=GRANT_AUTHORIZATION_CODE)
    if not request.client_id:
        raise TokenRequestError(MISSING_CLIENT_ID, grant_type=GRANT_AUTHORIZATION_CODE)
    # client_secret is accepted as-is: there is no client registry to check against.
    return ResolvedGrant(
        grant_type=GRANT_AUTHORIZATION_CODE,
        identity=request.code,
        refresh_token=make_refresh_token(request.code),
    )


def _resolve_refresh_token(request: TokenRequest) -> ResolvedGrant:
    identity = parse_refresh_token(request.refresh_token)
    if identity is None:
        raise TokenRequestError(MALFORMED_REFRESH_TOKEN, grant_type=GRANT_REFRESH_TOKEN)
    return ResolvedGrant(
        grant_type=GRANT_REFRESH_TOKEN,
        identity=identity,
        refresh_token=request.refresh_token,
    )
