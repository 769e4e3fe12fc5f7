from __future__ import annotations

import logging

from fastapi import FastAPI

from fake_oauth2.api.error_handlers import install_error_handlers
from fake_oauth2.api.health import router as health_router
from fake_oauth2.api.metrics_endpoint import router as metrics_router
from fake_oauth2.api.oauth import router as oauth_router
from fake_oauth2.api.static import router as static_router
from fake_oauth2.core.config import SETTINGS
from fake_oauth2.core.errors import ConfigError
from fake_oauth2.core.logging import setup_logging
from fake_oauth2.middleware.metrics import MetricsMiddleware
from fake_oauth2.middleware.request_context import (
    RequestContextMiddleware,
    install_request_context_filter,
)
from fake_oauth2.models.server_config import ServerConfig
from fake_oauth2.services.signing import (
    SigningKey,
    hs256_key,
    signing_key_from_settings,
)

logger = logging.getLogger(__name__)


def create_app(
    config: ServerConfig | None, *, signing_key: SigningKey | None = None
) -> FastAPI:
    """Validate config and build the ASGI app that serves every route.

    The validated config and the signing key are pinned on app.state and
    never change afterwards.  signing_key defaults to the fixed HS256 key.

    Raises ConfigError if config is missing or invalid.
    """
    if config is None:
        raise ConfigError("config must be non-nil")
    config = config.validated()

    app = FastAPI(title="fake-oauth2-server", docs_url=None, redoc_url=None)
    app.state.server_config = config
    app.state.signing_key = signing_key or hs256_key()

    # Last-added runs first: RequestContext → Metrics → route handler
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestContextMiddleware)

    install_error_handlers(app)

    app.include_router(metrics_router)
    app.include_router(health_router)
    app.include_router(oauth_router)
    # static has a catch-all path and must come last
    app.include_router(static_router)

    logger.debug(
        "App created  callback_url=%s access_token_lifetime=%d alg=%s",
        config.callback_url,
        config.access_token_lifetime,
        app.state.signing_key.algorithm,
    )
    return app


def create_app_from_settings() -> FastAPI:
    """Entry point for ``uvicorn --factory fake_oauth2.main:create_app_from_settings``."""
    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    install_request_context_filter()
    return create_app(
        ServerConfig(
            callback_url=SETTINGS.callback_url,
            access_token_lifetime=SETTINGS.access_token_lifetime,
        ),
        signing_key=signing_key_from_settings(SETTINGS),
    )
