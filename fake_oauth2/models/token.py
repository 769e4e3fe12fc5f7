from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from pydantic import BaseModel

GRANT_AUTHORIZATION_CODE = "authorization_code"
GRANT_REFRESH_TOKEN = "refresh_token"

# Shape: fake_oauth2_refresh_token:<email>.  Clients compare against this
# literally, so it must never change.
REFRESH_TOKEN_PREFIX = "fake_oauth2_refresh_token:"


@dataclass(frozen=True, slots=True)
class TokenRequest:
    """The form fields of a POST /oauth/token, missing ones as ""."""

    grant_type: str = ""
    code: str = ""
    client_id: str = ""
    client_secret: str = ""
    refresh_token: str = ""
    scope: str = ""

    @property
    def scopes(self) -> list[str]:
        return self.scope.split()


@dataclass(frozen=True, slots=True)
class ResolvedGrant:
    """Outcome of a valid grant: who the token is for, and the refresh token to hand back."""

    grant_type: str
    identity: str
    refresh_token: str


@dataclass(frozen=True, slots=True)
class AccessTokenClaims:
    aud: list[str]
    scope: list[str]
    user_name: str
    email: str
    issued_at: datetime
    expires_at: datetime
    jti: str = field(default_factory=lambda: str(uuid.uuid4()))

    @staticmethod
    def new(
        *,
        identity: str,
        client_id: str,
        scope: list[str],
        lifetime_seconds: int,
        now: datetime | None = None,
    ) -> AccessTokenClaims:
        issued_at = now or datetime.now(UTC)
        return AccessTokenClaims(
            aud=[client_id],
            scope=list(scope),
            user_name=identity,
            email=identity,
            issued_at=issued_at,
            expires_at=issued_at + timedelta(seconds=lifetime_seconds),
        )

    def to_payload(self) -> dict:
        return {
            "aud": self.aud,
            "scope": self.scope,
            "user_name": self.user_name,
            "email": self.email,
            "iat": int(self.issued_at.timestamp()),
            "exp": int(self.expires_at.timestamp()),
            "jti": self.jti,
        }


class TokenResponse(BaseModel):
    access_token: str
    expires_in: int
    jti: str
    refresh_token: str
    scope: str
    token_type: str = "bearer"
