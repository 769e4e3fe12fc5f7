from __future__ import annotations

from pathlib import Path

import jwt as pyjwt
import pytest
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import ec, rsa

from fake_oauth2.core.config import Settings
from fake_oauth2.services.signing import (
    DEFAULT_SIGNING_SECRET,
    es256_key,
    hs256_key,
    load_es256_key,
    public_key_pem,
    signing_key_from_settings,
)

PAYLOAD = {
    "email": "foo@bar.gov",
    "iat": 1_700_000_000,
    "exp": 4_000_000_000,
    "jti": "j",
}


def _settings(**overrides: object) -> Settings:
    values: dict[str, object] = {
        "log_level": "info",
        "log_json": False,
        "port": 8080,
        "callback_url": "http://client/callback",
        "access_token_lifetime": 600,
        "signing_algorithm": "HS256",
        "signing_secret": None,
        "signing_key_file": None,
    }
    values.update(overrides)
    return Settings(**values)  # type: ignore[arg-type]


def _write_pem(path: Path, private_key) -> Path:
    path.write_bytes(
        private_key.private_bytes(
            encoding=serialization.Encoding.PEM,
            format=serialization.PrivateFormat.PKCS8,
            encryption_algorithm=serialization.NoEncryption(),
        )
    )
    return path


def test_default_hs256_key_uses_well_known_secret() -> None:
    token = hs256_key().sign(PAYLOAD)
    decoded = pyjwt.decode(token, DEFAULT_SIGNING_SECRET, algorithms=["HS256"])
    assert decoded["email"] == "foo@bar.gov"


def test_verify_pins_algorithm() -> None:
    forged = pyjwt.encode(PAYLOAD, None, algorithm="none")
    with pytest.raises(pyjwt.InvalidTokenError):
        hs256_key().verify(forged)


def test_verify_requires_jti() -> None:
    key = hs256_key()
    token = key.sign({"iat": 1_700_000_000, "exp": 4_000_000_000})
    with pytest.raises(pyjwt.MissingRequiredClaimError):
        key.verify(token)


def test_es256_round_trip() -> None:
    key = es256_key()
    assert key.algorithm == "ES256"
    assert key.verify(key.sign(PAYLOAD))["email"] == "foo@bar.gov"


def test_es256_keys_are_distinct() -> None:
    token = es256_key().sign(PAYLOAD)
    with pytest.raises(pyjwt.InvalidSignatureError):
        es256_key().verify(token)


def test_load_es256_key_from_pem(tmp_path: Path) -> None:
    private_key = ec.generate_private_key(ec.SECP256R1())
    pem = _write_pem(tmp_path / "signing.pem", private_key)

    key = load_es256_key(pem)
    token = key.sign(PAYLOAD)
    pyjwt.decode(token, private_key.public_key(), algorithms=["ES256"])


def test_load_es256_key_rejects_rsa(tmp_path: Path) -> None:
    rsa_key = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pem = _write_pem(tmp_path / "rsa.pem", rsa_key)
    with pytest.raises(ValueError, match="does not contain an EC private key"):
        load_es256_key(pem)


def test_signing_key_from_settings_hs256_secret() -> None:
    key = signing_key_from_settings(
        _settings(signing_secret="a-custom-secret-that-is-long-enough")
    )
    assert key.algorithm == "HS256"
    assert key.private_key == "a-custom-secret-that-is-long-enough"


def test_signing_key_from_settings_defaults_to_fixed_secret() -> None:
    assert signing_key_from_settings(_settings()).private_key == DEFAULT_SIGNING_SECRET


def test_signing_key_from_settings_es256_file(tmp_path: Path) -> None:
    pem = _write_pem(tmp_path / "k.pem", ec.generate_private_key(ec.SECP256R1()))
    key = signing_key_from_settings(
        _settings(signing_algorithm="ES256", signing_key_file=str(pem))
    )
    assert key.algorithm == "ES256"
    assert public_key_pem(key).startswith("-----BEGIN PUBLIC KEY-----")


def test_signing_key_from_settings_es256_ephemeral() -> None:
    key = signing_key_from_settings(_settings(signing_algorithm="ES256"))
    assert key.verify(key.sign(PAYLOAD))["jti"] == "j"
