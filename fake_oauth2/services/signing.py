"""Signing keys for access tokens.

The token endpoint only needs "something that signs a claims dict" and
tests only need "something that verifies it".  SigningKey bundles both
halves plus the algorithm, so the app factory can take one as an
argument and nothing in the OAuth logic cares where the key came from.

Two flavours:

  HS256 (default) - a fixed shared secret.  Client test suites can verify
    our tokens with the same well-known string, no key exchange needed.

  ES256 - an EC P-256 key pair, either loaded from a PEM file or
    generated fresh at startup.  Useful when the client under test insists
    on asymmetric verification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jwt
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec

from fake_oauth2.core.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_SIGNING_SECRET = "unused secret key (for verification)"


@dataclass(frozen=True)
class SigningKey:
    algorithm: str
    private_key: Any
    public_key: Any

    def sign(self, payload: dict) -> str:
        return jwt.encode(payload, self.private_key, algorithm=self.algorithm)

    def verify(self, token: str, *, audience: str | None = None) -> dict:
        """Check signature and exp, return the claims.

        Pins the algorithm to this key's, so alg:none and alg-switching
        tokens are rejected.  Audience is only checked when given.

        Raises jwt.ExpiredSignatureError, jwt.InvalidTokenError on failure.
        """
        options: dict[str, Any] = {"require": ["exp", "iat", "jti"]}
        if audience is None:
            options["verify_aud"] = False
        return jwt.decode(
            token,
            self.public_key,
            algorithms=[self.algorithm],
            audience=audience,
            options=options,
        )


def hs256_key(secret: str = DEFAULT_SIGNING_SECRET) -> SigningKey:
    return SigningKey(algorithm="HS256", private_key=secret, public_key=secret)


def es256_key(private_key: ec.EllipticCurvePrivateKey | None = None) -> SigningKey:
    """ES256 key; a new P-256 key pair is generated when none is given."""
    if private_key is None:
        private_key = ec.generate_private_key(ec.SECP256R1())
    return SigningKey(
        algorithm="ES256",
        private_key=private_key,
        public_key=private_key.public_key(),
    )


def load_es256_key(path: str | Path) -> SigningKey:
    pem = Path(path).read_bytes()
    private_key = serialization.load_pem_private_key(pem, password=None)
    if not isinstance(private_key, ec.EllipticCurvePrivateKey):
        raise ValueError(f"{path} does not contain an EC private key")
    return es256_key(private_key)


def signing_key_from_settings(settings: Settings) -> SigningKey:
    if settings.signing_algorithm == "ES256":
        if settings.signing_key_file:
            logger.info("Loading ES256 signing key  file=%s", settings.signing_key_file)
            return load_es256_key(settings.signing_key_file)
        logger.info("Generating ephemeral ES256 signing key")
        return es256_key()
    return hs256_key(settings.signing_secret or DEFAULT_SIGNING_SECRET)


def public_key_pem(key: SigningKey) -> str:
    """PEM of the verification key, for printing at startup (ES256 only)."""
    return (
        key.public_key.public_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PublicFormat.SubjectPublicKeyInfo,
        )
        .decode("ascii")
    )
