# File: inventory/core/security.py

"""
Security helpers for the inventory API.

Passwords are hashed with bcrypt; sessions are signed JWTs (python-jose)
carrying ``userId`` and ``username``. Nothing about a session is stored
server side.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import bcrypt
from jose import JWTError, jwt

from inventory.core.config import settings
from inventory.core.errors import AuthError


ALGORITHM = settings.algorithm
ACCESS_TOKEN_EXPIRE_MINUTES = settings.access_token_expire_minutes
SECRET_KEY = settings.secret_key

# bcrypt only looks at the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72

INVALID_TOKEN_MESSAGE = "Invalid or expired token"


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def get_password_hash(password: str) -> str:
    salt = bcrypt.gensalt(rounds=settings.bcrypt_rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    try:
        return bcrypt.checkpw(_password_bytes(plain_password), hashed_password.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a token for ``data`` (expected keys: ``userId``, ``username``).

    Expiry defaults to ACCESS_TOKEN_EXPIRE_MINUTES (24h).
    """
    to_encode: dict[str, Any] = data.copy()
    now = datetime.now(timezone.utc)
    expire = now + (expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"iat": now, "exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry and return ``{"userId", "username"}``.

    Raises AuthError (403) for anything that does not check out.
    """
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise AuthError(INVALID_TOKEN_MESSAGE, status_code=403) from exc

    user_id = payload.get("userId")
    username = payload.get("username")
    if user_id is None or not username:
        raise AuthError(INVALID_TOKEN_MESSAGE, status_code=403)

    return {"userId": user_id, "username": username}
