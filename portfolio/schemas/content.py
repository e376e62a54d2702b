# portfolio/schemas/content.py
# Objetos de dominio + schemas de validación (Create/Update) para el portfolio
from __future__ import annotations
from datetime import date
from typing import Optional, Literal, List, Dict, Any

from pydantic import EmailStr, Field

from .base import DomainModel, Entity, PatchModel

SectionTypeName = Literal[
    "hero",
    "about",
    "professionalProject",
    "personalProject",
    "experience",
    "contact",
    "certification",
    "featuredProject",
    "blog",
]

ProjectCategory = Literal["professional", "personal"]


# ---------- Section ----------
class Section(Entity):
    type: str = "hero"
    title: str = ""
    subtitle: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    order: int = 0
    is_visible: bool = True

class SectionCreate(DomainModel):
    type: SectionTypeName
    title: str = Field(..., min_length=1, max_length=255)
    subtitle: Optional[str] = None
    content: Dict[str, Any] = Field(default_factory=dict)
    order: int = 0
    is_visible: bool = True

class SectionUpdate(PatchModel):
    NULLABLE = frozenset({"subtitle"})

    type: Optional[SectionTypeName] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    subtitle: Optional[str] = None
    content: Optional[Dict[str, Any]] = None
    order: Optional[int] = None
    is_visible: Optional[bool] = None


# ---------- Project ----------
class Project(Entity):
    user_id: Optional[int] = None
    title: str = ""
    slug: str = ""
    description: str = ""
    content: str = ""
    category: str = "personal"
    technologies: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    featured_order: Optional[int] = None
    order: int = 0

class ProjectCreate(DomainModel):
    user_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = ""
    description: str = ""
    content: str = ""
    category: ProjectCategory = "personal"
    technologies: List[str] = Field(default_factory=list)
    tags: List[str] = Field(default_factory=list)
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    featured_order: Optional[int] = Field(None, ge=0)
    order: int = 0

class ProjectUpdate(PatchModel):
    NULLABLE = frozenset({"user_id", "image_url", "project_url", "github_url", "featured_order"})

    user_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = None
    description: Optional[str] = None
    content: Optional[str] = None
    category: Optional[ProjectCategory] = None
    technologies: Optional[List[str]] = None
    tags: Optional[List[str]] = None
    image_url: Optional[str] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: Optional[bool] = None
    featured_order: Optional[int] = Field(None, ge=0)
    order: Optional[int] = None


# ---------- Experience ----------
class Experience(Entity):
    user_id: Optional[int] = None
    company: str = ""
    title: str = ""
    location: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: str = ""
    responsibilities: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    order: int = 0

class ExperienceCreate(DomainModel):
    user_id: Optional[int] = None
    company: str = Field(..., min_length=1, max_length=255)
    title: str = Field(..., min_length=1, max_length=255)
    location: str = ""
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: bool = False
    description: str = ""
    responsibilities: List[str] = Field(default_factory=list)
    technologies: List[str] = Field(default_factory=list)
    order: int = 0

class ExperienceUpdate(PatchModel):
    NULLABLE = frozenset({"user_id", "start_date", "end_date"})

    user_id: Optional[int] = None
    company: Optional[str] = Field(None, min_length=1, max_length=255)
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    location: Optional[str] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    is_current: Optional[bool] = None
    description: Optional[str] = None
    responsibilities: Optional[List[str]] = None
    technologies: Optional[List[str]] = None
    order: Optional[int] = None


# ---------- Certification ----------
class Certification(Entity):
    user_id: Optional[int] = None
    name: str = ""
    issuer: str = ""
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    image_url: Optional[str] = None
    description: str = ""
    skills: List[str] = Field(default_factory=list)
    featured: bool = False
    order: int = 0

class CertificationCreate(DomainModel):
    user_id: Optional[int] = None
    name: str = Field(..., min_length=1, max_length=255)
    issuer: str = Field(..., min_length=1, max_length=255)
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    image_url: Optional[str] = None
    description: str = ""
    skills: List[str] = Field(default_factory=list)
    featured: bool = False
    order: int = 0

class CertificationUpdate(PatchModel):
    NULLABLE = frozenset({
        "user_id", "issue_date", "expiration_date", "credential_id", "credential_url", "image_url",
    })

    user_id: Optional[int] = None
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    issuer: Optional[str] = Field(None, min_length=1, max_length=255)
    issue_date: Optional[date] = None
    expiration_date: Optional[date] = None
    credential_id: Optional[str] = None
    credential_url: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    skills: Optional[List[str]] = None
    featured: Optional[bool] = None
    order: Optional[int] = None


# ---------- Testimonial ----------
class Testimonial(Entity):
    name: str = ""
    email: str = ""
    role: str = ""
    company: str = ""
    content: str = ""
    rating: Optional[int] = None
    avatar_url: Optional[str] = None
    project_type: Optional[str] = None
    relationship: Optional[str] = None
    approved: bool = False

class TestimonialSubmit(DomainModel):
    """Formulario público: nunca llega aprobado."""
    name: str = Field(..., min_length=1, max_length=160)
    email: EmailStr
    role: str = ""
    company: str = ""
    content: str = Field(..., min_length=10, max_length=4000)
    rating: Optional[int] = Field(None, ge=1, le=5)
    project_type: Optional[str] = None
    relationship: Optional[str] = None

class TestimonialCreate(TestimonialSubmit):
    avatar_url: Optional[str] = None
    approved: bool = False

class TestimonialUpdate(PatchModel):
    NULLABLE = frozenset({"rating", "avatar_url", "project_type", "relationship"})

    name: Optional[str] = Field(None, min_length=1, max_length=160)
    email: Optional[EmailStr] = None
    role: Optional[str] = None
    company: Optional[str] = None
    content: Optional[str] = Field(None, min_length=1)
    rating: Optional[int] = Field(None, ge=1, le=5)
    avatar_url: Optional[str] = None
    project_type: Optional[str] = None
    relationship: Optional[str] = None
    approved: Optional[bool] = None


# ---------- ContactSubmission ----------
class ContactSubmission(Entity):
    name: str = ""
    email: str = ""
    subject: Optional[str] = None
    message: str = ""
    is_read: bool = False

class ContactCreate(DomainModel):
    name: str = Field(..., min_length=1, max_length=160)
    email: EmailStr
    subject: Optional[str] = Field(None, max_length=255)
    message: str = Field(..., min_length=1, max_length=8000)

class ContactUpdate(PatchModel):
    is_read: Optional[bool] = None
