# File: inventory/api/routes_auth.py

"""
Auth API routes: register, login, profile.

Register and login are open; profile requires a bearer token.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from inventory.api.deps import get_current_user, get_db
from inventory.schemas.user import (
    LoginResponse,
    MessageResponse,
    ProfileResponse,
    TokenUser,
    UserCredentials,
)
from inventory.services import auth_service

router = APIRouter()


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
def register(payload: UserCredentials, db: Session = Depends(get_db)):
    auth_service.register_user(db, username=payload.username, password=payload.password)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse, summary="Log in and get a token")
def login(payload: UserCredentials, db: Session = Depends(get_db)):
    return auth_service.login(db, username=payload.username, password=payload.password)


@router.get("/profile", response_model=ProfileResponse, summary="Current token's user")
def profile(user: TokenUser = Depends(get_current_user)):
    return {"user": user}
