# portfolio/api/endpoints/public.py
# Endpoints públicos de solo lectura + formularios (testimonios, contacto)
from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from portfolio.api.deps import get_storage
from portfolio.schemas.content import (
    Certification, ContactCreate, Experience, Project, Section, Testimonial, TestimonialSubmit,
)
from portfolio.storage.base import Storage

logger = logging.getLogger(__name__)

router = APIRouter(tags=["public"])


@router.get("/health/ping")
def ping():
    return {"status": "ok"}


@router.get("/projects", response_model=List[Project])
def list_projects(
    featured: bool = Query(False),
    category: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    if featured:
        return storage.get_featured_projects()
    if category:
        items = storage.get_projects_by_category(category)
    else:
        items = storage.find_all("projects")
    return sorted(items, key=lambda p: (p.order, p.id or 0))


@router.get("/experiences", response_model=List[Experience])
def list_experiences(storage: Storage = Depends(get_storage)):
    return storage.get_all_experiences()


@router.get("/sections", response_model=List[Section])
def list_sections(type: Optional[str] = Query(None), storage: Storage = Depends(get_storage)):
    if type:
        return [s for s in storage.get_sections_by_type(type) if s.is_visible]
    return storage.get_visible_sections()


@router.get("/credentials", response_model=List[Certification])
def list_credentials(featured: bool = Query(False), storage: Storage = Depends(get_storage)):
    if featured:
        return storage.get_featured_certifications()
    return storage.get_certifications()


@router.get("/testimonials", response_model=List[Testimonial])
def list_testimonials(storage: Storage = Depends(get_storage)):
    return storage.get_approved_testimonials()


@router.post("/testimonials/submit", status_code=status.HTTP_201_CREATED)
def submit_testimonial(payload: TestimonialSubmit, storage: Storage = Depends(get_storage)):
    data = payload.model_dump()
    data["approved"] = False
    item = storage.create("testimonials", data)
    logger.info("Testimonial %s submitted, pending approval", item.id)
    return {"id": item.id, "approved": False}


@router.post("/contact", status_code=status.HTTP_201_CREATED)
def contact(payload: ContactCreate, storage: Storage = Depends(get_storage)):
    item = storage.create("contact_submissions", payload)
    logger.info("Contact submission %s received", item.id)
    return {"id": item.id}
