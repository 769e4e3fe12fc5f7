from __future__ import annotations

import pytest

from fake_oauth2.core.errors import TokenRequestError
from fake_oauth2.models.token import TokenRequest
from fake_oauth2.services.grant_service import (
    INVALID_GRANT_TYPE,
    MALFORMED_REFRESH_TOKEN,
    MISSING_CLIENT_ID,
    MISSING_CODE,
    resolve_grant,
)


def _reject(request: TokenRequest) -> TokenRequestError:
    with pytest.raises(TokenRequestError) as exc_info:
        resolve_grant(request)
    return exc_info.value


def test_authorization_code_resolves_identity_and_refresh_token() -> None:
    grant = resolve_grant(
        TokenRequest(
            grant_type="authorization_code", code="foo@bar.gov", client_id="baz"
        )
    )
    assert grant.grant_type == "authorization_code"
    assert grant.identity == "foo@bar.gov"
    assert grant.refresh_token == "fake_oauth2_refresh_token:foo@bar.gov"


def test_refresh_token_passes_token_through() -> None:
    token = "fake_oauth2_refresh_token:foo@bar.com"
    grant = resolve_grant(TokenRequest(grant_type="refresh_token", refresh_token=token))
    assert grant.grant_type == "refresh_token"
    assert grant.identity == "foo@bar.com"
    assert grant.refresh_token == token


def test_unknown_grant_type() -> None:
    err = _reject(TokenRequest(grant_type="password", code="x", client_id="y"))
    assert err.message == INVALID_GRANT_TYPE
    assert err.grant_type == "invalid"


def test_missing_code_reported_before_missing_client_id() -> None:
    err = _reject(TokenRequest(grant_type="authorization_code"))
    assert err.message == MISSING_CODE
    assert err.grant_type == "authorization_code"


def test_missing_client_id() -> None:
    err = _reject(TokenRequest(grant_type="authorization_code", code="foo@bar.gov"))
    assert err.message == MISSING_CLIENT_ID


def test_client_secret_is_ignored() -> None:
    grant = resolve_grant(
        TokenRequest(
            grant_type="authorization_code",
            code="foo@bar.gov",
            client_id="baz",
            client_secret="",
        )
    )
    assert grant.identity == "foo@bar.gov"


@pytest.mark.parametrize("token", ["", "blarg:foo", "fake_oauth2_refresh_token:"])
def test_bad_refresh_tokens(token: str) -> None:
    err = _reject(TokenRequest(grant_type="refresh_token", refresh_token=token))
    assert err.message == MALFORMED_REFRESH_TOKEN
    assert err.grant_type == "refresh_token"


def test_refresh_grant_ignores_code_field() -> None:
    grant = resolve_grant(
        TokenRequest(
            grant_type="refresh_token",
            code="someone-else@bar.gov",
            refresh_token="fake_oauth2_refresh_token:foo@bar.gov",
        )
    )
    assert grant.identity == "foo@bar.gov"
