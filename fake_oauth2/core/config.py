from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Literal

LogLevel = Literal["debug", "info", "warning", "error"]
SigningAlgorithm = Literal["HS256", "ES256"]

DEFAULT_CALLBACK_URL = "http://localhost:8000/auth/callback"
DEFAULT_PORT = 8080
DEFAULT_ACCESS_TOKEN_LIFETIME = 600

_TRUE_WORDS = ("1", "true", "yes", "on")
_FALSE_WORDS = ("0", "false", "no", "off", "")


def _getenv(name: str, default: str) -> str:
    return os.environ.get(name, default).strip()


@dataclass(frozen=True)
class Settings:
    log_level: LogLevel
    log_json: bool
    port: int
    callback_url: str
    access_token_lifetime: int
    signing_algorithm: SigningAlgorithm
    signing_secret: str | None
    signing_key_file: str | None


def _parse_int(name: str, raw: str) -> int:
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer (got {raw!r})") from None


def load_settings() -> Settings:
    log_level_raw = _getenv("LOG_LEVEL", "info").lower()
    log_json_raw = _getenv("LOG_JSON", "false").lower()
    port_raw = _getenv("PORT", str(DEFAULT_PORT))
    lifetime_raw = _getenv("ACCESS_TOKEN_LIFETIME", str(DEFAULT_ACCESS_TOKEN_LIFETIME))
    algorithm_raw = _getenv("SIGNING_ALGORITHM", "HS256").upper()

    if log_level_raw not in ("debug", "info", "warning", "error"):
        raise ValueError(
            f"LOG_LEVEL must be debug|info|warning|error (got {log_level_raw!r})"
        )

    if log_json_raw in _TRUE_WORDS:
        log_json = True
    elif log_json_raw in _FALSE_WORDS:
        log_json = False
    else:
        raise ValueError(f"LOG_JSON must be true|false (got {log_json_raw!r})")

    port = _parse_int("PORT", port_raw)
    access_token_lifetime = _parse_int("ACCESS_TOKEN_LIFETIME", lifetime_raw)
    if access_token_lifetime < 0:
        raise ValueError(
            f"ACCESS_TOKEN_LIFETIME must be non-negative (got {lifetime_raw!r})"
        )

    if algorithm_raw not in ("HS256", "ES256"):
        raise ValueError(f"SIGNING_ALGORITHM must be HS256|ES256 (got {algorithm_raw!r})")

    return Settings(  # type: ignore[arg-type]
        log_level=log_level_raw,
        log_json=log_json,
        port=port,
        callback_url=_getenv("CALLBACK_URL", DEFAULT_CALLBACK_URL),
        access_token_lifetime=access_token_lifetime,
        signing_algorithm=algorithm_raw,
        signing_secret=_getenv("SIGNING_SECRET", "") or None,
        signing_key_file=_getenv("SIGNING_KEY_FILE", "") or None,
    )


SETTINGS = load_settings()
