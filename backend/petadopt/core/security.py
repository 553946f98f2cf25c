"""Password hashing and access tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

import bcrypt
from jose import JWTError, jwt

from petadopt.core.config import get_settings

# bcrypt only looks at the first 72 bytes of a secret.
_BCRYPT_MAX_BYTES = 72


def _secret_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:_BCRYPT_MAX_BYTES]


def hash_password(password: str) -> str:
    return bcrypt.hashpw(_secret_bytes(password), bcrypt.gensalt()).decode("ascii")


def verify_password(password: str, hashed_password: str) -> bool:
    """Return True when ``password`` matches the stored bcrypt hash.

    Malformed or empty hashes never match.
    """
    if not hashed_password:
        return False
    try:
        return bcrypt.checkpw(_secret_bytes(password), hashed_password.encode("ascii"))
    except (ValueError, TypeError, UnicodeEncodeError):
        return False


def create_access_token(
    user_id: int, role: str, expires_delta: timedelta | None = None
) -> str:
    """Sign a bearer token carrying the user id as ``sub`` and the role."""
    settings = get_settings()
    lifetime = expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    issued = datetime.now(UTC)
    claims = {
        "sub": str(user_id),
        "role": role,
        "iat": issued,
        "exp": issued + lifetime,
    }
    return jwt.encode(claims, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> dict[str, Any]:
    """Return the verified claims; raises ``JWTError`` on a bad or expired token."""
    settings = get_settings()
    return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])


def token_subject(token: str) -> int | None:
    """Return the user id a token was issued for, or None if it is unusable."""
    try:
        claims = decode_access_token(token)
    except JWTError:
        return None
    subject = claims.get("sub")
    if isinstance(subject, str) and subject.isdigit():
        return int(subject)
    return None
