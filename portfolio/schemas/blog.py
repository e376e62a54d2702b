# portfolio/schemas/blog.py
from __future__ import annotations
from datetime import datetime
from typing import Optional, Literal, List

from pydantic import EmailStr, Field

from .base import DomainModel, Entity, PatchModel

PostStatus = Literal["draft", "published", "archived"]
SubscriptionStatus = Literal["pending", "subscribed", "unsubscribed"]


# ---------- Category ----------
class BlogCategory(Entity):
    name: str = ""
    slug: str = ""
    description: str = ""

class BlogCategoryCreate(DomainModel):
    name: str = Field(..., min_length=1, max_length=160)
    slug: Optional[str] = Field(None, max_length=160)
    description: str = ""

class BlogCategoryUpdate(PatchModel):
    name: Optional[str] = Field(None, min_length=1, max_length=160)
    slug: Optional[str] = Field(None, min_length=1, max_length=160)
    description: Optional[str] = None


# ---------- Post ----------
class BlogPost(Entity):
    title: str = ""
    slug: str = ""
    excerpt: str = ""
    content: str = ""
    featured_image: Optional[str] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    status: str = "draft"
    publish_date: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None

class BlogPostCreate(DomainModel):
    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)  # se genera desde el título si falta
    excerpt: str = ""
    content: str = ""
    featured_image: Optional[str] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    tags: List[str] = Field(default_factory=list)
    status: PostStatus = "draft"
    publish_date: Optional[datetime] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None

class BlogPostUpdate(PatchModel):
    NULLABLE = frozenset({
        "featured_image", "category_id", "author_id", "publish_date", "meta_title", "meta_description",
    })

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = None
    content: Optional[str] = None
    featured_image: Optional[str] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    tags: Optional[List[str]] = None
    publish_date: Optional[datetime] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None


# ---------- Subscription ----------
class BlogSubscription(Entity):
    email: str = ""
    name: Optional[str] = None
    status: str = "pending"
    confirmed: bool = False
    confirmation_token: Optional[str] = None
    confirmed_at: Optional[datetime] = None

class SubscribeIn(DomainModel):
    email: EmailStr
    name: Optional[str] = Field(None, max_length=160)

class UnsubscribeIn(DomainModel):
    email: EmailStr

class BlogSubscriptionCreate(SubscribeIn):
    status: SubscriptionStatus = "pending"
    confirmed: bool = False

class BlogSubscriptionUpdate(PatchModel):
    NULLABLE = frozenset({"name"})

    name: Optional[str] = None
    status: Optional[SubscriptionStatus] = None
    confirmed: Optional[bool] = None


# ---------- Case study ----------
class CaseStudyTestimonial(DomainModel):
    author: str = ""
    role: str = ""
    company: str = ""
    content: str = ""

class CaseStudyMetric(DomainModel):
    name: str
    value: str
    description: str = ""

class GalleryImage(DomainModel):
    url: str
    alt: str = ""
    caption: Optional[str] = None

class CaseStudyDetail(Entity):
    blog_post_id: Optional[int] = None
    title: str = ""
    slug: str = ""
    client: str = ""
    project_type: str = ""
    role: str = ""
    duration: str = ""
    problem: str = ""
    solution: str = ""
    results: str = ""
    technologies: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    learnings: List[str] = Field(default_factory=list)
    testimonial: Optional[CaseStudyTestimonial] = None
    metrics: List[CaseStudyMetric] = Field(default_factory=list)
    gallery: List[GalleryImage] = Field(default_factory=list)
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    featured_order: Optional[int] = None
    order: int = 0

class CaseStudyCreate(DomainModel):
    blog_post_id: Optional[int] = None
    title: str = Field(..., min_length=1, max_length=255)
    slug: str = ""
    client: str = ""
    project_type: str = ""
    role: str = ""
    duration: str = ""
    problem: str = ""
    solution: str = ""
    results: str = ""
    technologies: List[str] = Field(default_factory=list)
    challenges: List[str] = Field(default_factory=list)
    learnings: List[str] = Field(default_factory=list)
    testimonial: Optional[CaseStudyTestimonial] = None
    metrics: List[CaseStudyMetric] = Field(default_factory=list)
    gallery: List[GalleryImage] = Field(default_factory=list)
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: bool = False
    featured_order: Optional[int] = Field(None, ge=0)
    order: int = 0

class CaseStudyUpdate(PatchModel):
    NULLABLE = frozenset({"blog_post_id", "testimonial", "project_url", "github_url", "featured_order"})

    blog_post_id: Optional[int] = None
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = None
    client: Optional[str] = None
    project_type: Optional[str] = None
    role: Optional[str] = None
    duration: Optional[str] = None
    problem: Optional[str] = None
    solution: Optional[str] = None
    results: Optional[str] = None
    technologies: Optional[List[str]] = None
    challenges: Optional[List[str]] = None
    learnings: Optional[List[str]] = None
    testimonial: Optional[CaseStudyTestimonial] = None
    metrics: Optional[List[CaseStudyMetric]] = None
    gallery: Optional[List[GalleryImage]] = None
    project_url: Optional[str] = None
    github_url: Optional[str] = None
    featured: Optional[bool] = None
    featured_order: Optional[int] = Field(None, ge=0)
    order: Optional[int] = None


# ---------- Public views ----------
class BlogPostDetail(BlogPost):
    category: Optional[BlogCategory] = None
    case_study: Optional[CaseStudyDetail] = None
