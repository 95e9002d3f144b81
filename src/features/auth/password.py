"""Password hashing and verification.

Uses pwdlib's recommended hasher (Argon2). The salt is generated per call and
embedded in the returned hash, so no separate salt storage is needed.
"""

import logging

from pwdlib import PasswordHash
from pwdlib.exceptions import UnknownHashError

logger = logging.getLogger(__name__)

pwd_hasher = PasswordHash.recommended()

# Verified against when no user matches, so that a login for an unknown
# email costs the same as a login with a wrong password.
DUMMY_PASSWORD_HASH = pwd_hasher.hash("dummy-password-for-timing-protection")


def hash_password(password: str) -> str:
    """Hash a password using Argon2."""
    return pwd_hasher.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a password against a stored hash.

    Returns False for a hash pwdlib cannot identify instead of raising.
    """
    try:
        return pwd_hasher.verify(password, password_hash)
    except UnknownHashError:
        logger.warning("Stored password hash has an unknown format")
        return False
