"""JWT utilities for authentication."""

import hashlib
import secrets
from datetime import datetime, timedelta
from typing import Any

import jwt

from src.config.settings import settings
from src.database.base import utcnow

REFRESH_TOKEN_TYPE = "refresh"


def create_access_token(user_id: str, now: datetime | None = None, expires_delta: timedelta | None = None) -> str:
    """Create a JWT access token.

    Args:
        user_id: Subject of the token, stored in the ``userId`` claim
        now: Issuance time (defaults to current UTC time)
        expires_delta: Optional lifetime override

    Returns:
        Encoded JWT token string

    """
    now = now or utcnow()
    expire = now + (expires_delta or timedelta(minutes=settings.access_token_expire_minutes))
    to_encode = {"userId": user_id, "exp": expire}
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def create_refresh_token(user_id: str, now: datetime | None = None, expires_delta: timedelta | None = None) -> str:
    """Create a JWT refresh token (longer expiration).

    The ``payload`` claim carries 256 random bits, so two tokens issued to
    the same user in the same second still serialize differently.

    Args:
        user_id: Subject of the token, stored in the ``userId`` claim
        now: Issuance time (defaults to current UTC time)
        expires_delta: Optional lifetime override

    Returns:
        Encoded JWT token string

    """
    now = now or utcnow()
    expire = now + (expires_delta or timedelta(days=settings.refresh_token_expire_days))
    to_encode = {
        "userId": user_id,
        "payload": secrets.token_hex(32),
        "type": REFRESH_TOKEN_TYPE,
        "iat": now,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> dict[str, Any]:
    """Decode and verify a JWT token.

    Args:
        token: JWT token string

    Returns:
        Decoded token payload

    Raises:
        InvalidTokenError: If the signature is bad, the token is malformed,
            or ``exp`` is missing or in the past

    """
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp"]},
    )


def verify_token_type(payload: dict[str, Any], expected_type: str) -> bool:
    """Verify the token type matches expected."""
    return payload.get("type") == expected_type


def hash_token(token: str) -> str:
    """SHA-256 hex digest of a serialized token."""
    return hashlib.sha256(token.encode()).hexdigest()
