# File: inventory/services/auth_service.py

"""
Authentication service.

  - User registration (hash + insert)
  - Credential check
  - Token issuance

Token verification for incoming requests lives in ``api.deps``.
"""

from typing import Optional

from loguru import logger
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from inventory.core.errors import AuthError, ConflictError, ValidationError
from inventory.core.security import create_access_token, get_password_hash, verify_password
from inventory.models.user import User

INVALID_CREDENTIALS = "Invalid credentials"


def _require_credentials(username: Optional[str], password: Optional[str]) -> None:
    if not username or not password:
        raise ValidationError("Username and password are required")


def get_user_by_username(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def register_user(
    db: Session,
    *,
    username: Optional[str],
    password: Optional[str],
) -> User:
    """
    Create a user. No token is issued; the caller logs in separately.
    """
    _require_credentials(username, password)

    if get_user_by_username(db, username) is not None:
        raise ConflictError("Username already exists")

    user = User(username=username, password=get_password_hash(password))
    db.add(user)
    try:
        db.commit()
    except IntegrityError:
        # lost a race with a concurrent registration
        db.rollback()
        raise ConflictError("Username already exists")
    db.refresh(user)

    logger.info("Registered user {} (id={})", user.username, user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    username: str,
    password: str,
) -> User:
    """
    Look up the user and check the password hash.

    Unknown user and wrong password raise the same AuthError so the
    response cannot be used to probe for usernames.
    """
    user = get_user_by_username(db, username)
    if user is None or not verify_password(password, user.password):
        logger.warning("Failed login for username {!r}", username)
        raise AuthError(INVALID_CREDENTIALS)
    return user


def login(
    db: Session,
    *,
    username: Optional[str],
    password: Optional[str],
) -> dict:
    _require_credentials(username, password)
    user = authenticate_user(db, username=username, password=password)

    token = create_access_token({"userId": user.id, "username": user.username})
    logger.info("User {} logged in", user.username)
    return {"token": token, "username": user.username}
