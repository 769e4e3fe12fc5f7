"""Run the fake OAuth2 server.

    python -m fake_oauth2 [--port 8080] [--callback-url URL] [--no-color]

Defaults come from the environment (PORT, CALLBACK_URL,
ACCESS_TOKEN_LIFETIME, ...; see fake_oauth2.core.config).
"""

from __future__ import annotations

import argparse
import logging
import os
import sys

import uvicorn

from fake_oauth2.core.config import SETTINGS
from fake_oauth2.core.logging import setup_logging
from fake_oauth2.main import create_app
from fake_oauth2.middleware.request_context import install_request_context_filter
from fake_oauth2.models.server_config import ServerConfig
from fake_oauth2.services.signing import public_key_pem, signing_key_from_settings

logger = logging.getLogger(__name__)

AUTHORIZE_PATH = "/oauth/authorize"
TOKEN_PATH = "/oauth/token"


def _use_color(no_color_flag: bool) -> bool:
    if no_color_flag or os.environ.get("NO_COLOR"):
        return False
    return sys.stdout.isatty()


def _cyan(text: object, enabled: bool) -> str:
    return f"\033[36m{text}\033[0m" if enabled else str(text)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fake-oauth2-server",
        description="Fake OAuth2 authorization server for tests and local development",
    )
    parser.add_argument(
        "--host",
        default="127.0.0.1",
        help="Host to bind to (default: 127.0.0.1)",
    )
    parser.add_argument(
        "--port",
        type=int,
        default=SETTINGS.port,
        help=f"Port to listen on (default: {SETTINGS.port})",
    )
    parser.add_argument(
        "--callback-url",
        default=SETTINGS.callback_url,
        help=f"OAuth2 callback URL of the client (default: {SETTINGS.callback_url})",
    )
    parser.add_argument(
        "--access-token-lifetime",
        type=int,
        default=SETTINGS.access_token_lifetime,
        help="Access token lifetime in seconds "
        f"(default: {SETTINGS.access_token_lifetime})",
    )
    parser.add_argument(
        "--no-color",
        action="store_true",
        help="Disable color output",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(SETTINGS.log_level, json_format=SETTINGS.log_json)
    install_request_context_filter()

    try:
        signing_key = signing_key_from_settings(SETTINGS)
        app = create_app(
            ServerConfig(
                callback_url=args.callback_url,
                access_token_lifetime=args.access_token_lifetime,
            ),
            signing_key=signing_key,
        )
    except (ValueError, OSError) as e:
        # ConfigError, or an unreadable / non-EC SIGNING_KEY_FILE
        print(f"fake-oauth2-server: {e}", file=sys.stderr)
        return 2

    color = _use_color(args.no_color)
    base_url = f"http://localhost:{args.port}"
    print(f"My OAuth2 authorize URL is {_cyan(base_url + AUTHORIZE_PATH, color)}.")
    print(f"My OAuth2 token URL is {_cyan(base_url + TOKEN_PATH, color)}.")
    print(f"Your client's callback URL is {_cyan(args.callback_url, color)}.")
    if signing_key.algorithm == "ES256":
        print("Access tokens are signed with ES256; verification key:")
        print(public_key_pem(signing_key))
    print("To change settings, call me with the --help flag.\n")
    print(f"Starting fake OAuth2 server on port {_cyan(args.port, color)}.")

    uvicorn.run(app, host=args.host, port=args.port, log_config=None)
    return 0


if __name__ == "__main__":
    sys.exit(main())
