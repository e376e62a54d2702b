# portfolio/schemas/auth.py
from __future__ import annotations
from typing import Optional, Literal

from pydantic import BaseModel, Field

from .base import Entity

Role = Literal["admin", "user"]


class User(Entity):
    username: str = ""
    email: str = ""
    role: Role = "user"
    email_verified: bool = False
    first_name: str = ""
    last_name: str = ""
    avatar: Optional[str] = None
    bio: Optional[str] = None
    password_hash: str = Field("", exclude=True)

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: User


class SessionOut(BaseModel):
    authenticated: bool
    user: Optional[User] = None
