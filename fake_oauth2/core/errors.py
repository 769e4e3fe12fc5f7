"""Error types shared by the app factory and the OAuth endpoints.

Two families, matching the two places things can go wrong:

  ConfigError       - raised by create_app() before any request is served.
                      Fatal to startup; the message is a fixed literal so
                      callers (and their tests) can match on it.

  TokenRequestError - raised while validating a POST /oauth/token form.
                      Rendered as a 400 text/plain response whose body is
                      exactly the message.
"""

from __future__ import annotations


class ConfigError(ValueError):
    """Invalid server configuration handed to create_app()."""


class TokenRequestError(Exception):
    """A token request failed validation.

    grant_type is carried along only for logging and metrics labels.
    """

    def __init__(self, message: str, *, grant_type: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.grant_type = grant_type
