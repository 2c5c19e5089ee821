"""Token and credential helpers."""

import hmac
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt

from projektmester.config import get_settings


def verify_password(plain_password: str, stored_password: str) -> bool:
    """Compare a submitted credential with the stored one.

    Credentials are stored as given; the comparison is constant-time.
    """
    return hmac.compare_digest(
        (plain_password or "").encode("utf-8"),
        (stored_password or "").encode("utf-8"),
    )


def create_access_token(user_id: str, expires_delta: Optional[timedelta] = None) -> str:
    """Create a signed JWT carrying the user id."""
    settings = get_settings()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.access_token_expire_minutes)
    to_encode = {
        "user_id": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(to_encode, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(token: str) -> Optional[dict]:
    """Decode a JWT. Returns None if the token is invalid or expired."""
    settings = get_settings()
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[settings.algorithm])
    except JWTError:
        return None
