"""
security.py — password hashing and access tokens.

Passwords: PBKDF2-HMAC-SHA256 with a random 32-byte salt.
    Stored format: pbkdf2_sha256$iterations$salt_b64$hash_b64
Tokens: HS256 JWT signed with settings.secret_key.
    Payload: {"user": {"id": <user_id>}, "iat": ..., "exp": ...}

Nothing here logs the password, the hash or the token.
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from fastapi import Header, HTTPException

from taxcalc.config import settings

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Password hashing parameters
# ---------------------------------------------------------------------------
SALT_SIZE = 32
_SCHEME = "pbkdf2_sha256"

TOKEN_HEADER = "x-auth-token"


class InvalidTokenError(Exception):
    """Token is malformed, expired, badly signed, or has no user id."""


# ---------------------------------------------------------------------------
# Passwords
# ---------------------------------------------------------------------------

def hash_password(password: str, iterations: Optional[int] = None) -> str:
    if iterations is None:
        iterations = settings.password_hash_iterations
    salt = os.urandom(SALT_SIZE)
    key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    salt_b64 = base64.b64encode(salt).decode("ascii")
    key_b64 = base64.b64encode(key).decode("ascii")
    return f"{_SCHEME}${iterations}${salt_b64}${key_b64}"


def verify_password(password: str, stored_hash: str) -> bool:
    """
    Check password against a stored hash in constant time.
    Unknown or corrupted hash formats never verify.
    """
    parts = stored_hash.split("$")
    if len(parts) != 4 or parts[0] != _SCHEME:
        return False
    try:
        iterations = int(parts[1])
        salt = base64.b64decode(parts[2], validate=True)
        expected_key = base64.b64decode(parts[3], validate=True)
        derived_key = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, iterations)
    except (ValueError, binascii.Error):
        return False
    return hmac.compare_digest(derived_key, expected_key)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------

def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    payload = {
        "user": {"id": user_id},
        "iat": now,
        "exp": now + expires_delta,
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str:
    """Return the user id carried by token, or raise InvalidTokenError."""
    try:
        payload = jwt.decode(
            token,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except jwt.PyJWTError as exc:
        raise InvalidTokenError(str(exc)) from exc

    user = payload.get("user")
    user_id = user.get("id") if isinstance(user, dict) else None
    if not isinstance(user_id, str) or not user_id:
        raise InvalidTokenError("Token payload has no user id")
    return user_id


# ---------------------------------------------------------------------------
# FastAPI dependency
# ---------------------------------------------------------------------------

async def get_current_user_id(
    token: Optional[str] = Header(default=None, alias=TOKEN_HEADER),
) -> str:
    """
    Resolve the caller from the x-auth-token header.

    Missing header → 401. Present but invalid/expired → 400.
    """
    if not token:
        raise HTTPException(status_code=401, detail="No token, authorization denied")
    try:
        return decode_access_token(token)
    except InvalidTokenError as exc:
        logger.info("Rejected access token: %s", exc)
        raise HTTPException(status_code=400, detail="Token is not valid") from exc
