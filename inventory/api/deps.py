# File: inventory/api/deps.py

from typing import Optional

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from inventory.core.errors import AuthError
from inventory.core.security import decode_access_token
from inventory.db.session import get_db  # noqa: F401  (re-exported for routes)
from inventory.schemas.user import TokenUser

# auto_error=False so a missing header goes through our own AuthError
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> TokenUser:
    """
    Gate for every product/category route.

    Usage in route functions:
        user: TokenUser = Depends(get_current_user)

    The decoded user is also left on ``request.state.user``.
    """
    if credentials is None or not credentials.credentials:
        raise AuthError("Authentication required")

    user = TokenUser(**decode_access_token(credentials.credentials))
    request.state.user = user
    return user
