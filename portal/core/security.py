"""Password hashing and verification."""

from functools import lru_cache

import bcrypt

from portal.core.config import settings

# bcrypt only looks at the first 72 bytes of the secret.
BCRYPT_MAX_BYTES = 72


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    salt = bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
    return bcrypt.hashpw(pw_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash (constant-time in bcrypt)."""
    pw_bytes = plain_password.encode("utf-8")[:BCRYPT_MAX_BYTES]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


@lru_cache(maxsize=1)
def _dummy_hash() -> str:
    return hash_password("not-a-real-password-0")


def burn_password_check(plain_password: str) -> None:
    """
    Spend the same bcrypt work as a real verification without a stored hash.

    Used when the email is unknown so that response time does not reveal
    whether an account exists.
    """
    verify_password(plain_password, _dummy_hash())
