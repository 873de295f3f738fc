# File: inventory/schemas/user.py

from typing import Optional

from pydantic import BaseModel


class UserCredentials(BaseModel):
    # Optional so that absent fields reach the service's own check
    username: Optional[str] = None
    password: Optional[str] = None


class TokenUser(BaseModel):
    userId: int
    username: str


class LoginResponse(BaseModel):
    token: str
    username: str


class ProfileResponse(BaseModel):
    user: TokenUser


class MessageResponse(BaseModel):
    message: str
