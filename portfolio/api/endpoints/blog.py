# portfolio/api/endpoints/blog.py
# Blog público: posts publicados, categorías y suscripciones
from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from portfolio.api.deps import get_storage
from portfolio.schemas.blog import (
    BlogCategory, BlogPost, BlogPostDetail, SubscribeIn, UnsubscribeIn,
)
from portfolio.services import blog_service
from portfolio.storage.base import Storage

router = APIRouter(prefix="/blog", tags=["blog"])


def published_post_detail(storage: Storage, slug: str) -> Optional[BlogPostDetail]:
    post = storage.get_blog_post_by_slug(slug)
    if post is None or post.status != "published":
        return None
    category = storage.find_by_id("blog_categories", post.category_id) if post.category_id else None
    case_study = storage.get_case_study_detail_by_blog_post_id(post.id)
    return BlogPostDetail.model_construct(**dict(post), category=category, case_study=case_study)


def published_posts(storage: Storage, category: Optional[str] = None, tag: Optional[str] = None) -> List[BlogPost]:
    if category:
        cat = storage.get_blog_category_by_slug(category)
        if cat is None:
            return []
        posts = storage.get_blog_posts_by_category(cat.id, published_only=True)
    else:
        posts = storage.get_published_blog_posts()
    if tag:
        wanted = tag.strip().lower()
        posts = [p for p in posts if wanted in (t.lower() for t in p.tags)]
    return posts


@router.get("/posts", response_model=List[BlogPost])
def list_posts(
    category: Optional[str] = Query(None, description="Category slug"),
    tag: Optional[str] = Query(None),
    storage: Storage = Depends(get_storage),
):
    return published_posts(storage, category, tag)


@router.get("/posts/{slug}", response_model=BlogPostDetail)
def get_post(slug: str, storage: Storage = Depends(get_storage)):
    detail = published_post_detail(storage, slug)
    if detail is None:
        raise HTTPException(status_code=404, detail="Post not found")
    return detail


@router.get("/categories", response_model=List[BlogCategory])
def list_categories(storage: Storage = Depends(get_storage)):
    return sorted(storage.find_all("blog_categories"), key=lambda c: c.name.lower())


# -----------------------------
# Subscriptions
# -----------------------------
@router.post("/subscribe", status_code=status.HTTP_202_ACCEPTED)
def subscribe(payload: SubscribeIn, storage: Storage = Depends(get_storage)):
    sub = blog_service.subscribe(storage, payload.email, payload.name)
    # el token nunca sale en la respuesta: llega por correo
    return {"status": sub.status}


@router.get("/subscriptions/confirm")
def confirm_subscription(token: str = Query(..., min_length=8), storage: Storage = Depends(get_storage)):
    sub = storage.confirm_blog_subscription(token)
    if sub is None:
        raise HTTPException(status_code=404, detail="Invalid or already used token")
    return {"status": sub.status, "email": sub.email}


@router.post("/unsubscribe")
def unsubscribe(payload: UnsubscribeIn, storage: Storage = Depends(get_storage)):
    sub = storage.unsubscribe(payload.email)
    if sub is None:
        raise HTTPException(status_code=404, detail="Subscription not found")
    return {"status": sub.status}
