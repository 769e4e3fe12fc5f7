from __future__ import annotations

import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Ensure repo root is on sys.path so `import fake_oauth2` works under pytest.
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from fake_oauth2.main import create_app  # noqa: E402
from fake_oauth2.models.server_config import ServerConfig  # noqa: E402
from fake_oauth2.services import token_service  # noqa: E402
from fake_oauth2.services.signing import SigningKey, hs256_key  # noqa: E402

CALLBACK_URL = "http://client/callback"
VERIFICATION_SECRET = "unused secret key (for verification)"


@pytest.fixture
def server_config() -> ServerConfig:
    return ServerConfig(callback_url=CALLBACK_URL, access_token_lifetime=600)


@pytest.fixture
def signing_key() -> SigningKey:
    return hs256_key(VERIFICATION_SECRET)


@pytest.fixture
def app(server_config: ServerConfig, signing_key: SigningKey) -> FastAPI:
    return create_app(server_config, signing_key=signing_key)


@pytest.fixture
def client(app: FastAPI) -> TestClient:
    return TestClient(app, follow_redirects=False)


def request_token(client: TestClient, form: dict[str, str]):
    """POST /oauth/token as a form-encoded body."""
    return client.post("/oauth/token", data=form)


def decode(access_token: str, key: SigningKey | None = None) -> dict:
    """Verify an issued access token with the fixed test key."""
    return token_service.decode_access_token(
        access_token, key or hs256_key(VERIFICATION_SECRET)
    )
