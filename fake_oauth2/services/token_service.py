"""Access/refresh token construction.

Shared by both grant types: whatever path resolved the identity, the
access token is built and signed here, and the JSON body comes out of
build_token_response().
"""

from __future__ import annotations

from fake_oauth2.models.server_config import ServerConfig
from fake_oauth2.models.token import (
    REFRESH_TOKEN_PREFIX,
    AccessTokenClaims,
    ResolvedGrant,
    TokenRequest,
    TokenResponse,
)
from fake_oauth2.services.signing import SigningKey


def make_refresh_token(identity: str) -> str:
    return f"{REFRESH_TOKEN_PREFIX}{identity}"


def parse_refresh_token(token: str) -> str | None:
    """Return the identity inside a refresh token, or None if malformed.

    The identity is everything after the prefix, untouched.
    """
    if not token.startswith(REFRESH_TOKEN_PREFIX):
        return None
    identity = token[len(REFRESH_TOKEN_PREFIX) :]
    return identity or None


def create_access_token(claims: AccessTokenClaims, signing_key: SigningKey) -> str:
    return signing_key.sign(claims.to_payload())


def decode_access_token(
    token: str, signing_key: SigningKey, *, audience: str | None = None
) -> dict:
    """Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure."""
    return signing_key.verify(token, audience=audience)


def build_token_response(
    grant: ResolvedGrant,
    request: TokenRequest,
    config: ServerConfig,
    signing_key: SigningKey,
) -> TokenResponse:
    claims = AccessTokenClaims.new(
        identity=grant.identity,
        client_id=request.client_id,
        scope=request.scopes,
        lifetime_seconds=config.access_token_lifetime,
    )
    return TokenResponse(
        access_token=create_access_token(claims, signing_key),
        expires_in=config.access_token_lifetime,
        jti=claims.jti,
        refresh_token=grant.refresh_token,
        scope=request.scope,
        token_type="bearer",
    )
