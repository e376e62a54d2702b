# portfolio/models/blog.py
# Blog: categorías, posts, suscripciones y casos de estudio (1:1 con un post)
from __future__ import annotations
from datetime import datetime
from typing import Optional

from sqlalchemy import (
    String, Integer, Boolean, DateTime, Enum, ForeignKey, Index, Text,
    UniqueConstraint, func
)
from sqlalchemy.orm import Mapped, mapped_column

from portfolio.db.base import Base, JSONType

PostStatus = Enum(
    "draft", "published", "archived",
    name="post_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)

SubscriptionStatus = Enum(
    "pending", "subscribed", "unsubscribed",
    name="subscription_status",
    create_constraint=True,
    validate_strings=True,
    native_enum=False,
)


class BlogCategory(Base):
    __tablename__ = "blog_categories"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(160))
    slug: Mapped[str] = mapped_column(String(160))
    description: Mapped[str] = mapped_column(Text, default="")

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("slug", name="uq_blog_categories_slug"),
    )


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id: Mapped[int] = mapped_column(primary_key=True)
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255))
    excerpt: Mapped[str] = mapped_column(Text, default="")
    content: Mapped[str] = mapped_column(Text, default="")  # HTML
    featured_image: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    category_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("blog_categories.id", ondelete="SET NULL"), nullable=True, index=True
    )
    author_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    tags: Mapped[list] = mapped_column(JSONType, default=list)
    status: Mapped[str] = mapped_column(PostStatus, default="draft", index=True)
    published_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
    meta_title: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    meta_description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("slug", name="uq_blog_posts_slug"),
        Index("ix_blog_posts_status_published", "status", "published_at"),
    )


class BlogSubscription(Base):
    __tablename__ = "blog_subscriptions"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(String(160))
    name: Mapped[Optional[str]] = mapped_column(String(160), nullable=True)
    status: Mapped[str] = mapped_column(SubscriptionStatus, default="pending")
    is_confirmed: Mapped[bool] = mapped_column(Boolean, default=False)
    confirmation_token: Mapped[Optional[str]] = mapped_column(String(128), nullable=True, index=True)
    confirmed_at: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    __table_args__ = (
        UniqueConstraint("email", name="uq_blog_subscriptions_email"),
    )


class CaseStudyDetail(Base):
    __tablename__ = "case_study_details"

    id: Mapped[int] = mapped_column(primary_key=True)
    # enlace 1:1 sin cascada: borrar el post deja el caso huérfano
    blog_post_id: Mapped[Optional[int]] = mapped_column(
        ForeignKey("blog_posts.id", ondelete="SET NULL"), nullable=True, index=True
    )
    title: Mapped[str] = mapped_column(String(255))
    slug: Mapped[str] = mapped_column(String(255), default="")
    client: Mapped[str] = mapped_column(String(255), default="")
    project_type: Mapped[str] = mapped_column(String(120), default="")
    role: Mapped[str] = mapped_column(String(160), default="")
    duration: Mapped[str] = mapped_column(String(120), default="")
    problem: Mapped[str] = mapped_column(Text, default="")
    solution: Mapped[str] = mapped_column(Text, default="")
    results: Mapped[str] = mapped_column(Text, default="")
    technologies: Mapped[list] = mapped_column(JSONType, default=list)
    challenges: Mapped[list] = mapped_column(JSONType, default=list)
    learnings: Mapped[list] = mapped_column(JSONType, default=list)
    testimonial: Mapped[Optional[dict]] = mapped_column(JSONType, nullable=True)
    metrics: Mapped[list] = mapped_column(JSONType, default=list)
    gallery_images: Mapped[list] = mapped_column(JSONType, default=list)
    project_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    github_url: Mapped[Optional[str]] = mapped_column(String(512), nullable=True)
    featured: Mapped[bool] = mapped_column(Boolean, default=False)
    featured_order: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, default=0)

    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())
