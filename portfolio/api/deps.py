# portfolio/api/deps.py
from __future__ import annotations

import logging
from typing import Iterator, Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError

from portfolio.db.session import SessionLocal, engine
from portfolio.schemas.auth import User
from portfolio.security.jwt import decode_token
from portfolio.storage.base import Storage
from portfolio.storage.memory import MemoryStorage
from portfolio.storage.sql import SqlStorage

logger = logging.getLogger(__name__)

# Reusable HTTP bearer scheme (non-fatal if header is missing)
_bearer = HTTPBearer(auto_error=False)

_memory_storage: Optional[MemoryStorage] = None


def get_memory_storage() -> MemoryStorage:
    global _memory_storage
    if _memory_storage is None:
        logger.warning("DATABASE_URL not set: using in-memory storage, data is lost on restart")
        _memory_storage = MemoryStorage()
    return _memory_storage


def get_storage() -> Iterator[Storage]:
    if engine is None:
        yield get_memory_storage()
        return
    storage = SqlStorage(SessionLocal())
    try:
        yield storage
    finally:
        storage.close()


# -----------------------------
# Auth
# -----------------------------
def _user_from_token(storage: Storage, token: str) -> User:
    try:
        payload = decode_token(token)
    except ExpiredSignatureError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Token expired")
    except JWTError:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")

    try:
        uid = int(payload.get("sub"))
    except (TypeError, ValueError):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid token")
    user = storage.find_by_id("users", uid)
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="User not found")
    return user


def get_current_user_optional(
    request: Request,
    storage: Storage = Depends(get_storage),
    creds: Optional[HTTPAuthorizationCredentials] = Depends(_bearer),
) -> Optional[User]:
    """Bearer token first, then the signed session cookie set by /api/login."""
    if creds and creds.credentials:
        return _user_from_token(storage, creds.credentials)
    uid = request.session.get("uid")
    if not uid:
        return None
    return storage.find_by_id("users", int(uid))


def get_current_user(user: Optional[User] = Depends(get_current_user_optional)) -> User:
    if user is None:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Authentication required")
    return user


def require_admin(user: User = Depends(get_current_user)) -> User:
    if user.role != "admin":
        raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Admin role required")
    return user
