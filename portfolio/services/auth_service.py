# portfolio/services/auth_service.py
# Login del admin: hash bcrypt (passlib) + alta/reseteo del usuario admin
from __future__ import annotations

import logging
from typing import Optional

from passlib.context import CryptContext

from portfolio.schemas.auth import User
from portfolio.storage.base import Storage

logger = logging.getLogger(__name__)

_pwd = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__truncate_error=False)


def hash_password(plain: str) -> str:
    return _pwd.hash(plain)


def verify_password(plain: str, hashed: str) -> bool:
    # usuarios importados del proveedor externo no traen hash: nunca entran con password
    if not hashed:
        return False
    try:
        return _pwd.verify(plain, hashed)
    except ValueError:
        # hash con formato desconocido (importado de otro backend)
        return False


def authenticate(storage: Storage, username: str, password: str) -> Optional[User]:
    user = storage.get_user_by_username(username.strip())
    if user is None or not verify_password(password, user.password_hash):
        return None
    return user


def upsert_admin(storage: Storage, username: str, password: str, email: str = "") -> User:
    """Create the admin user, or reset its password and role when it already exists."""
    existing = storage.get_user_by_username(username)
    data = {"password_hash": hash_password(password), "role": "admin"}
    if email:
        data["email"] = email
    if existing is None:
        user = storage.create("users", {"username": username, **data})
        logger.info("Created admin user %s", username)
        return user
    user = storage.update("users", existing.id, data)
    logger.info("Reset admin user %s", username)
    return user
