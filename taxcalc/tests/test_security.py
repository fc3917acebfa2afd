"""
Password hashing and access-token tests.
"""
from __future__ import annotations

from datetime import timedelta

import jwt
import pytest

from taxcalc.auth.security import (
    InvalidTokenError,
    create_access_token,
    decode_access_token,
    hash_password,
    verify_password,
)
from taxcalc.config import settings


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def test_hash_format() -> None:
    stored = hash_password("secret123", iterations=1_000)
    scheme, iterations, salt_b64, key_b64 = stored.split("$")
    assert scheme == "pbkdf2_sha256"
    assert iterations == "1000"
    assert salt_b64 and key_b64


def test_hash_uses_configured_iterations() -> None:
    stored = hash_password("secret123")
    assert stored.split("$")[1] == str(settings.password_hash_iterations)


def test_verify_round_trip() -> None:
    stored = hash_password("secret123", iterations=1_000)
    assert verify_password("secret123", stored) is True
    assert verify_password("secret124", stored) is False


def test_same_password_gets_different_salts() -> None:
    assert hash_password("secret123", iterations=1_000) != hash_password("secret123", iterations=1_000)


@pytest.mark.parametrize(
    "stored",
    [
        "",
        "plaintext",
        "md5$1000$abc$def",
        "pbkdf2_sha256$notanumber$c2FsdA==$a2V5",
        "pbkdf2_sha256$0$c2FsdA==$a2V5",
        "pbkdf2_sha256$1000$***$a2V5",
        "pbkdf2_sha256$1000$c2FsdA==",
    ],
)
def test_malformed_hash_never_verifies(stored: str) -> None:
    assert verify_password("secret123", stored) is False


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def test_token_round_trip() -> None:
    token = create_access_token("user-123")
    assert decode_access_token(token) == "user-123"


def test_token_payload_shape() -> None:
    token = create_access_token("user-123")
    payload = jwt.decode(token, settings.secret_key, algorithms=[settings.jwt_algorithm])
    assert payload["user"] == {"id": "user-123"}
    assert payload["exp"] - payload["iat"] == settings.access_token_expire_minutes * 60


def test_expired_token_rejected() -> None:
    token = create_access_token("user-123", expires_delta=timedelta(seconds=-1))
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_wrong_signature_rejected() -> None:
    token = jwt.encode({"user": {"id": "user-123"}}, "some-other-secret-of-enough-length", algorithm="HS256")
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_token_without_user_id_rejected() -> None:
    token = jwt.encode({"sub": "user-123"}, settings.secret_key, algorithm=settings.jwt_algorithm)
    with pytest.raises(InvalidTokenError):
        decode_access_token(token)


def test_garbage_token_rejected() -> None:
    with pytest.raises(InvalidTokenError):
        decode_access_token("not-a-jwt")
