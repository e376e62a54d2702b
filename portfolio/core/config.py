# portfolio/core/config.py
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from portfolio.storage.errors import ConflictError, StorageError
from .settings import settings

logger = logging.getLogger(__name__)


async def _conflict_handler(request: Request, exc: ConflictError) -> JSONResponse:
    return JSONResponse({"detail": str(exc) or "Conflict"}, status_code=409)


async def _storage_error_handler(request: Request, exc: StorageError) -> JSONResponse:
    # el detalle ya quedó en el log de la capa de storage
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse({"detail": "Storage error"}, status_code=500)


def create_app() -> FastAPI:
    app = FastAPI(title=settings.APP_NAME)

    if settings.BACKEND_CORS_ORIGINS:
        origins = settings.CORS_ORIGINS
        allow_credentials = True
        if "*" in origins:
            origins = ["*"]
            allow_credentials = False
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=allow_credentials,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(ConflictError, _conflict_handler)
    app.add_exception_handler(StorageError, _storage_error_handler)
    return app
