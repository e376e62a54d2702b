# portfolio/storage/base.py
"""
Generic storage interface.

Backends implement the six primitives (``find_by_id``, ``find_all``,
``find_all_by_field``, ``create``, ``update``, ``delete``). Everything else in
this class is built on top of them so every backend answers the same way.

Absence is ``None`` (or ``False`` for ``delete``); unique violations raise
``ConflictError``; any other backend failure raises ``StorageError``.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, List, Mapping, Optional, Union

from pydantic import BaseModel

from portfolio.schemas.auth import User
from portfolio.schemas.blog import BlogCategory, BlogPost, BlogSubscription, CaseStudyDetail
from portfolio.schemas.content import Certification, Experience, Project, Section
from portfolio.schemas.content import Testimonial
from .tables import TableName

Payload = Union[BaseModel, Mapping[str, Any]]


def _ts(dt: Optional[datetime]) -> float:
    if dt is None:
        return float("-inf")
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def _newest_first(items: list, attr: str) -> list:
    return sorted(items, key=lambda x: _ts(getattr(x, attr)), reverse=True)


class Storage(ABC):

    # ---------- primitives ----------
    @abstractmethod
    def find_by_id(self, table: TableName, id: int) -> Optional[BaseModel]: ...

    @abstractmethod
    def find_all(self, table: TableName) -> List[BaseModel]: ...

    @abstractmethod
    def find_all_by_field(self, table: TableName, field: str, value: Any) -> List[BaseModel]: ...

    @abstractmethod
    def create(self, table: TableName, data: Payload) -> BaseModel: ...

    @abstractmethod
    def update(self, table: TableName, id: int, data: Payload) -> Optional[BaseModel]: ...

    @abstractmethod
    def delete(self, table: TableName, id: int) -> bool: ...

    def ping(self) -> bool:
        return True

    def close(self) -> None:
        pass

    def _first(self, table: TableName, field: str, value: Any):
        found = self.find_all_by_field(table, field, value)
        return found[0] if found else None

    # ---------- users ----------
    def get_user_by_username(self, username: str) -> Optional[User]:
        return self._first("users", "username", username)

    # ---------- sections ----------
    def get_sections_by_type(self, section_type: str) -> List[Section]:
        items = self.find_all_by_field("sections", "type", section_type)
        return sorted(items, key=lambda s: (s.order, s.id or 0))

    def get_visible_sections(self) -> List[Section]:
        items = self.find_all_by_field("sections", "is_visible", True)
        return sorted(items, key=lambda s: (s.order, s.id or 0))

    # ---------- projects ----------
    def get_projects_by_user_id(self, user_id: int) -> List[Project]:
        return self.find_all_by_field("projects", "user_id", user_id)

    def get_projects_by_category(self, category: str) -> List[Project]:
        return self.find_all_by_field("projects", "category", category)

    def get_featured_projects(self) -> List[Project]:
        items = self.find_all_by_field("projects", "featured", True)
        # featured_order sin definir va al final
        return sorted(items, key=lambda p: (p.featured_order is None, p.featured_order or 0, p.order))

    # ---------- experiences / certifications ----------
    def get_all_experiences(self) -> List[Experience]:
        items = sorted(
            self.find_all("experiences"),
            key=lambda e: e.start_date.toordinal() if e.start_date else 0,
            reverse=True,
        )
        return sorted(items, key=lambda e: e.order)

    def get_certifications(self) -> List[Certification]:
        items = sorted(
            self.find_all("certifications"),
            key=lambda c: c.issue_date.toordinal() if c.issue_date else 0,
            reverse=True,
        )
        return sorted(items, key=lambda c: c.order)

    def get_featured_certifications(self) -> List[Certification]:
        return [c for c in self.get_certifications() if c.featured]

    # ---------- blog ----------
    def get_blog_category_by_slug(self, slug: str) -> Optional[BlogCategory]:
        return self._first("blog_categories", "slug", slug)

    def get_blog_post_by_slug(self, slug: str) -> Optional[BlogPost]:
        return self._first("blog_posts", "slug", slug)

    def get_published_blog_posts(self) -> List[BlogPost]:
        items = self.find_all_by_field("blog_posts", "status", "published")
        return _newest_first(items, "publish_date")

    def get_blog_posts_by_category(self, category_id: int, published_only: bool = False) -> List[BlogPost]:
        items = self.find_all_by_field("blog_posts", "category_id", category_id)
        if published_only:
            items = [p for p in items if p.status == "published"]
        return _newest_first(items, "publish_date")

    def get_blog_posts_by_tag(self, tag: str, published_only: bool = False) -> List[BlogPost]:
        wanted = tag.strip().lower()
        items = self.get_published_blog_posts() if published_only else self.find_all("blog_posts")
        return [p for p in items if wanted in (t.lower() for t in p.tags)]

    # ---------- subscriptions ----------
    def get_blog_subscription_by_email(self, email: str) -> Optional[BlogSubscription]:
        return self._first("blog_subscriptions", "email", email.strip().lower())

    def get_active_blog_subscriptions(self) -> List[BlogSubscription]:
        items = self.find_all_by_field("blog_subscriptions", "status", "subscribed")
        return [s for s in items if s.confirmed]

    def confirm_blog_subscription(self, token: str) -> Optional[BlogSubscription]:
        if not token:
            return None
        sub = self._first("blog_subscriptions", "confirmation_token", token)
        if sub is None:
            return None
        return self.update("blog_subscriptions", sub.id, {
            "status": "subscribed",
            "confirmed": True,
            "confirmed_at": datetime.now(timezone.utc),
            "confirmation_token": None,
        })

    def unsubscribe(self, email: str) -> Optional[BlogSubscription]:
        sub = self.get_blog_subscription_by_email(email)
        if sub is None:
            return None
        return self.update("blog_subscriptions", sub.id, {"status": "unsubscribed"})

    # ---------- case studies ----------
    def get_case_study_detail_by_blog_post_id(self, blog_post_id: int) -> Optional[CaseStudyDetail]:
        return self._first("case_study_details", "blog_post_id", blog_post_id)

    def get_case_study_details_by_project_type(self, project_type: str) -> List[CaseStudyDetail]:
        items = self.find_all_by_field("case_study_details", "project_type", project_type)
        return sorted(items, key=lambda c: c.order)

    # ---------- testimonials ----------
    def get_approved_testimonials(self) -> List[Testimonial]:
        return _newest_first(self.find_all_by_field("testimonials", "approved", True), "created_at")
