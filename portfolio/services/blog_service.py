# portfolio/services/blog_service.py
# ⟶ Slugs, transiciones de estado de posts y flujo de suscripción
from __future__ import annotations

import logging
import re
import secrets
import unicodedata
from datetime import datetime, timezone
from typing import Literal, Optional

from portfolio.core.settings import settings
from portfolio.schemas.blog import BlogPost, BlogPostCreate, BlogSubscription
from portfolio.storage.base import Storage

logger = logging.getLogger(__name__)

Status = Literal["draft", "published", "archived"]


class InvalidTransition(ValueError):
    pass


def _now_utc() -> datetime:
    return datetime.now(timezone.utc)


# -----------------------------
# Slugs
# -----------------------------
def slugify(text: str, max_length: int = 200) -> str:
    normalized = unicodedata.normalize("NFKD", text or "").encode("ascii", "ignore").decode("ascii")
    slug = re.sub(r"[^a-z0-9]+", "-", normalized.lower()).strip("-")
    return slug[:max_length].rstrip("-") or "post"


def unique_slug(storage: Storage, base: str, *, exclude_id: Optional[int] = None) -> str:
    candidate, n = base, 2
    while True:
        existing = storage.get_blog_post_by_slug(candidate)
        if existing is None or existing.id == exclude_id:
            return candidate
        candidate = f"{base}-{n}"
        n += 1


def create_post(storage: Storage, payload: BlogPostCreate) -> BlogPost:
    data = payload.model_dump()
    if not data.get("slug"):
        data["slug"] = unique_slug(storage, slugify(payload.title))
    if data.get("status") == "published" and not data.get("publish_date"):
        data["publish_date"] = _now_utc()
    return storage.create("blog_posts", data)


# -----------------------------
# Transiciones de estado
# -----------------------------
def can_transition(src: str, dst: str) -> bool:
    if src == dst:
        return True
    if src == "draft" and dst in ("published", "archived"):
        return True
    if src == "published" and dst in ("draft", "archived"):
        return True
    if src == "archived" and dst in ("draft",):  # volver a borrador antes de publicar
        return True
    return False


def transition_post(storage: Storage, post: BlogPost, dst: Status) -> BlogPost:
    src = post.status
    if not can_transition(src, dst):
        raise InvalidTransition(f"Invalid transition {src} → {dst}")
    if src == dst:
        return post

    changes: dict = {"status": dst}
    if dst == "published":
        changes["publish_date"] = _now_utc()
    elif dst == "draft":
        # “unpublish”: limpiamos la fecha de publicación
        changes["publish_date"] = None
    # archived conserva publish_date como histórico
    updated = storage.update("blog_posts", post.id, changes)
    logger.info("Blog post %s: %s -> %s", post.id, src, dst)
    return updated


# -----------------------------
# Suscripciones
# -----------------------------
def new_confirmation_token() -> str:
    return secrets.token_urlsafe(32)


def confirmation_url(token: str) -> str:
    return f"{settings.SITE_URL.rstrip('/')}{settings.API_PREFIX}/blog/subscriptions/confirm?token={token}"


def subscribe(storage: Storage, email: str, name: Optional[str] = None) -> BlogSubscription:
    """
    New addresses start ``pending`` with a confirmation token. Addresses that
    confirmed once are simply re-activated.
    """
    email = email.strip().lower()
    existing = storage.get_blog_subscription_by_email(email)

    if existing is not None and existing.confirmed:
        if existing.status == "subscribed":
            return existing
        return storage.update("blog_subscriptions", existing.id, {"status": "subscribed"})

    token = new_confirmation_token()
    if existing is None:
        sub = storage.create("blog_subscriptions", {
            "email": email,
            "name": name,
            "status": "pending",
            "confirmed": False,
            "confirmation_token": token,
        })
    else:
        sub = storage.update("blog_subscriptions", existing.id, {
            "name": name or existing.name,
            "status": "pending",
            "confirmation_token": token,
        })
    # el envío del correo queda fuera; se deja el enlace en el log
    logger.info("Subscription pending for %s: %s", email, confirmation_url(token))
    return sub
