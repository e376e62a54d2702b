from __future__ import annotations

from pathlib import Path

from fastapi.openapi.utils import get_openapi
from fastapi.responses import RedirectResponse
from fastapi.routing import APIRoute
from fastapi.staticfiles import StaticFiles
from starlette.middleware.sessions import SessionMiddleware
from uvicorn.middleware.proxy_headers import ProxyHeadersMiddleware

from portfolio.api.router import api_router
from portfolio.core.config import create_app
from portfolio.core.logging import configure_logging
from portfolio.core.settings import settings
from portfolio.middleware.ratelimit import RateLimitMiddleware
from portfolio.web.pages import router as pages_router

STATIC_DIR = Path(__file__).resolve().parent / "static"

configure_logging(debug=settings.DEBUG)
app = create_app()

app.add_middleware(ProxyHeadersMiddleware, trusted_hosts="*")


def _inject_bearer_security(app):
    """
    Inyecta bearerAuth en OpenAPI solo para /api/admin/*; el resto de la API
    es pública. Solo afecta a la documentación.
    """
    def custom_openapi():
        if app.openapi_schema:
            return app.openapi_schema

        openapi_schema = get_openapi(
            title=settings.APP_NAME,
            version="1.0.0",
            description="Portfolio & blog API",
            routes=app.routes,
        )
        components = openapi_schema.setdefault("components", {})
        components.setdefault("securitySchemes", {})["bearerAuth"] = {
            "type": "http",
            "scheme": "bearer",
            "bearerFormat": "JWT",
        }
        app.openapi_schema = openapi_schema
        return app.openapi_schema

    for route in app.routes:
        if isinstance(route, APIRoute) and route.path.startswith(f"{settings.API_PREFIX}/admin/"):
            extra = dict(route.openapi_extra or {})
            extra["security"] = [{"bearerAuth": []}]
            route.openapi_extra = extra

    app.openapi = custom_openapi


# Sesiones (login admin). Cookie firmada con itsdangerous.
app.add_middleware(
    SessionMiddleware,
    secret_key=settings.SESSION_SECRET,
    session_cookie=settings.SESSION_COOKIE_NAME,
    same_site=settings.SESSION_COOKIE_SAMESITE,
    https_only=settings.SESSION_COOKIE_SECURE,
)

# Rate limit: el middleware consulta RATELIMIT_ENABLED en cada request
app.add_middleware(RateLimitMiddleware)


@app.get("/", include_in_schema=False)
def root():
    return RedirectResponse(url="/blog", status_code=302)


app.include_router(api_router, prefix=settings.API_PREFIX)
app.include_router(pages_router)

app.mount("/static", StaticFiles(directory=str(STATIC_DIR)), name="static")

_inject_bearer_security(app)
