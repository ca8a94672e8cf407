"""
Password hashing and session tokens.
"""

import secrets
from datetime import datetime, timedelta, timezone

from passlib.context import CryptContext

from core.config import PASSWORD_HASH_ITERATIONS, SESSION_TTL_HOURS


def make_password_context(rounds: int = PASSWORD_HASH_ITERATIONS) -> CryptContext:
    """PBKDF2-SHA256 context with the given iteration count."""
    return CryptContext(schemes=["pbkdf2_sha256"], pbkdf2_sha256__rounds=rounds)


pwd_context = make_password_context()


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(password: str, stored_hash: str) -> bool:
    """Check a password against a stored hash. Unrecognized hashes never match."""
    try:
        return pwd_context.verify(password, stored_hash)
    except ValueError:
        return False


def new_session_token() -> str:
    return secrets.token_urlsafe(32)


def session_expiry(now: datetime | None = None) -> str:
    """Expiry timestamp (ISO 8601 UTC) for a session created now."""
    now = now or datetime.now(timezone.utc)
    return (now + timedelta(hours=SESSION_TTL_HOURS)).isoformat()
