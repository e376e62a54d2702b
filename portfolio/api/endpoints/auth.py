# portfolio/api/endpoints/auth.py
# Login de admin: cookie de sesión firmada + bearer token para el cliente
from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, status

from portfolio.api.deps import get_current_user_optional, get_storage
from portfolio.schemas.auth import LoginIn, SessionOut, TokenOut, User
from portfolio.security.jwt import create_access_token
from portfolio.services.auth_service import authenticate
from portfolio.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/login", response_model=TokenOut)
def login(payload: LoginIn, request: Request, storage: Storage = Depends(get_storage)):
    user = authenticate(storage, payload.username, payload.password)
    if user is None:
        logger.warning("Failed login for %s", payload.username)
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")

    request.session["uid"] = user.id
    token = create_access_token(user.id, {"role": user.role})
    return TokenOut(access_token=token, user=user)


@router.get("/session", response_model=SessionOut)
def session(user: Optional[User] = Depends(get_current_user_optional)):
    return SessionOut(authenticated=user is not None, user=user)


@router.post("/logout")
def logout(request: Request):
    request.session.clear()
    return {"ok": True}
