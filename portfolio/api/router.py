# portfolio/api/router.py
from fastapi import APIRouter

from portfolio.api.endpoints import admin, auth, blog, public

api_router = APIRouter()
api_router.include_router(public.router)
api_router.include_router(blog.router)
api_router.include_router(auth.router)
api_router.include_router(admin.router)   # /admin/<entidad>, solo admins
