# portfolio/web/pages.py
# Páginas HTML públicas (Jinja2): blog, credenciales y testimonios
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Depends, Form, Query, Request
from fastapi.responses import HTMLResponse, RedirectResponse
from fastapi.templating import Jinja2Templates
from pydantic import ValidationError

from portfolio.api.deps import get_storage
from portfolio.api.endpoints.blog import published_post_detail, published_posts
from portfolio.core.settings import settings
from portfolio.schemas.content import TestimonialSubmit
from portfolio.storage.base import Storage

logger = logging.getLogger(__name__)

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(TEMPLATES_DIR))
router = APIRouter(include_in_schema=False)


def _base_ctx(**extra) -> dict:
    return {"site_name": settings.APP_NAME, "site_url": settings.SITE_URL, **extra}


@router.get("/blog", response_class=HTMLResponse)
def blog_list(
    request: Request,
    category: Optional[str] = Query(None),
    tag: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    categories = sorted(storage.find_all("blog_categories"), key=lambda c: c.name.lower())
    return templates.TemplateResponse(
        request,
        "blog/list.html",
        _base_ctx(
            posts=published_posts(storage, category, tag),
            categories=categories,
            active_category=category,
            active_tag=tag,
        ),
    )


@router.get("/blog/{slug}", response_class=HTMLResponse)
def blog_post(request: Request, slug: str, storage: Storage = Depends(get_storage)):
    detail = published_post_detail(storage, slug)
    if detail is None:
        return templates.TemplateResponse(
            request, "not_found.html", _base_ctx(what="Post"), status_code=404
        )
    return templates.TemplateResponse(request, "blog/post.html", _base_ctx(post=detail))


@router.get("/credentials", response_class=HTMLResponse)
def credentials(request: Request, storage: Storage = Depends(get_storage)):
    return templates.TemplateResponse(
        request, "credentials.html", _base_ctx(certifications=storage.get_certifications())
    )


@router.get("/testimonials", response_class=HTMLResponse)
def testimonials(request: Request, submitted: bool = Query(False), storage: Storage = Depends(get_storage)):
    return templates.TemplateResponse(
        request,
        "testimonials.html",
        _base_ctx(testimonials=storage.get_approved_testimonials(), submitted=submitted, errors=[], form={}),
    )


@router.post("/testimonials", response_class=HTMLResponse)
def testimonials_submit(
    request: Request,
    name: str = Form(""),
    email: str = Form(""),
    role: str = Form(""),
    company: str = Form(""),
    content: str = Form(""),
    rating: Optional[int] = Form(None),
    relationship: Optional[str] = Form(None),
    storage: Storage = Depends(get_storage),
):
    form = {"name": name, "email": email, "role": role, "company": company,
            "content": content, "rating": rating, "relationship": relationship or None}
    try:
        payload = TestimonialSubmit(**form)
    except ValidationError as e:
        errors = [f"{'.'.join(str(p) for p in err['loc'])}: {err['msg']}" for err in e.errors()]
        return templates.TemplateResponse(
            request,
            "testimonials.html",
            _base_ctx(testimonials=storage.get_approved_testimonials(), submitted=False,
                      errors=errors, form=form),
            status_code=422,
        )
    item = storage.create("testimonials", {**payload.model_dump(), "approved": False})
    logger.info("Testimonial %s submitted from web form", item.id)
    return RedirectResponse(url="/testimonials?submitted=true", status_code=303)
