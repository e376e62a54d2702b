# portfolio/middleware/ratelimit.py
from __future__ import annotations
import time
import threading
from typing import Dict, Tuple
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from portfolio.core.settings import settings

WindowState = Tuple[int, int]  # (window_epoch_sec, count)

# formularios públicos (spam)
SUBMIT_PATHS = (
    "/testimonials/submit",
    "/contact",
    "/blog/subscribe",
)


class RateLimitMiddleware(BaseHTTPMiddleware):
    """
    Límite por minuto con ventanas fijas, por IP:
    - POST /api/login: intentos de login.
    - POST a formularios públicos (testimonios, contacto, suscripción).
    - Resto de /api/*.
    """

    def __init__(self, app, enabled: bool | None = None):
        super().__init__(app)
        self._store: Dict[str, WindowState] = {}
        self._lock = threading.Lock()
        self._enabled = enabled

    @property
    def enabled(self) -> bool:
        return settings.RATELIMIT_ENABLED if self._enabled is None else self._enabled

    def _hit(self, key: str, limit: int) -> bool:
        now = int(time.time())
        window = now - (now % 60)
        with self._lock:
            w, c = self._store.get(key, (window, 0))
            if w != window:
                w, c = window, 0
            c += 1
            self._store[key] = (w, c)
            return c <= limit

    def _classify(self, method: str, path: str, client_ip: str):
        prefix = settings.API_PREFIX
        if not path.startswith(prefix + "/"):
            return None, None
        rest = path[len(prefix):]
        if method == "POST" and rest == "/login":
            return settings.RATELIMIT_LOGIN_PER_MIN, f"login:{client_ip}"
        if method == "POST" and rest in SUBMIT_PATHS:
            return settings.RATELIMIT_SUBMIT_PER_MIN, f"submit:{client_ip}"
        return settings.RATELIMIT_API_PER_MIN, f"api:{client_ip}"

    async def dispatch(self, request: Request, call_next):
        if not self.enabled:
            return await call_next(request)

        client_ip = request.client.host if request.client else "unknown"
        limit, key = self._classify(request.method.upper(), request.url.path or "", client_ip)

        if limit is not None and not self._hit(key, limit):
            return JSONResponse(
                {"detail": "Rate limit exceeded", "limit_per_min": limit},
                status_code=429,
                headers={"Retry-After": "60"},
            )

        return await call_next(request)
