from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import urlsplit

from fake_oauth2.core.errors import ConfigError

DEFAULT_ACCESS_TOKEN_LIFETIME = 600  # seconds


@dataclass(frozen=True, slots=True)
class ServerConfig:
    """Construction-time settings for one app instance.

    access_token_lifetime of 0 means "use the default" (600s).
    """

    callback_url: str | None
    access_token_lifetime: int = 0

    def validated(self) -> ServerConfig:
        """Check the fields and return a copy with defaults filled in.

        Raises ConfigError with a fixed message on the first problem found.
        """
        if not self.callback_url:
            raise ConfigError("config.CallbackUrl must be non-nil")
        parts = urlsplit(self.callback_url)
        if not parts.scheme or not parts.netloc:
            raise ConfigError("config.CallbackUrl must be an absolute URL")
        if self.access_token_lifetime < 0:
            raise ConfigError("config.AccessTokenLifetime must be non-negative")
        return ServerConfig(
            callback_url=self.callback_url,
            access_token_lifetime=self.access_token_lifetime
            or DEFAULT_ACCESS_TOKEN_LIFETIME,
        )
