from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from fake_oauth2.models.server_config import ServerConfig
from fake_oauth2.services.signing import SigningKey


def get_server_config(request: Request) -> ServerConfig:
    """The config captured by create_app() for this app instance."""
    return request.app.state.server_config


def get_signing_key(request: Request) -> SigningKey:
    return request.app.state.signing_key


ServerConfigDep = Annotated[ServerConfig, Depends(get_server_config)]
SigningKeyDep = Annotated[SigningKey, Depends(get_signing_key)]
