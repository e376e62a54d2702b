# portfolio/security/jwt.py
from __future__ import annotations
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

from jose import jwt
from portfolio.core.settings import settings

ALGO = settings.JWT_ALGORITHM or "HS256"
SECRET = settings.JWT_SECRET_KEY or "dev-secret"
ACCESS_MIN = settings.ACCESS_MIN


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def create_access_token(subject: int | str, extra: Dict[str, Any] | None = None,
                        minutes: int | None = None) -> str:
    now = _utcnow()
    payload: Dict[str, Any] = {
        "sub": str(subject),
        "type": "access",
        "iat": int(now.timestamp()),
        # exp como entero UNIX (segundos)
        "exp": int((now + timedelta(minutes=minutes or ACCESS_MIN)).timestamp()),
    }
    if extra:
        payload.update(extra)
    return jwt.encode(payload, SECRET, algorithm=ALGO)


def decode_token(token: str) -> Dict[str, Any]:
    # JWTError / ExpiredSignatureError se propagan: el caller responde 401
    return jwt.decode(
        token,
        SECRET,
        algorithms=[ALGO],
        options={"verify_aud": False, "verify_iss": False},
    )
