# portfolio/storage/mappers.py
"""
Row <-> domain mappers.

Each entity is described by a table of ``Column`` entries: domain attribute,
row column, deprecated read aliases (legacy Firestore / PocketBase / Supabase
names), a coercer and a default. ``EntityMapper`` walks that table in both
directions:

* ``to_domain(row)`` never raises. Missing or malformed values fall back to the
  column default, and the domain object is built with ``model_construct`` so no
  validation can fail on legacy data.
* ``to_row(data, partial=False)`` accepts a pydantic model or a mapping in
  snake_case / camelCase / column naming. Server-generated columns are never
  written. In partial mode only the keys actually present are emitted.
"""
from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Type

from pydantic import BaseModel, ValidationError
from pydantic.alias_generators import to_camel

from portfolio.schemas import auth as auth_schemas
from portfolio.schemas import blog as blog_schemas
from portfolio.schemas import content as content_schemas
from .errors import UnknownFieldError

_MISSING = object()


# ---------------------------------------------------------------------------
# Coercers
# ---------------------------------------------------------------------------
def _identity(v):
    return v


def to_str(v: Any) -> str:
    if v is None:
        return ""
    return v if isinstance(v, str) else str(v)


def to_text(v: Any) -> str:
    # descripciones antiguas guardadas como lista de párrafos
    if isinstance(v, (list, tuple)):
        return "\n".join(to_str(x) for x in v if _present(x))
    return to_str(v)


def to_opt_str(v: Any) -> Optional[str]:
    if v is None or v == "":
        return None
    return v if isinstance(v, str) else str(v)


def to_int(v: Any) -> int:
    try:
        return int(v)
    except (TypeError, ValueError, OverflowError):
        return 0


def to_opt_int(v: Any) -> Optional[int]:
    if v is None or v == "":
        return None
    try:
        return int(v)
    except (TypeError, ValueError, OverflowError):
        return None


def to_choice(allowed: Iterable[str], default: str) -> Callable[[Any], str]:
    choices = frozenset(allowed)

    def coerce(v):
        s = to_str(v).strip()
        return s if s in choices else default
    return coerce


def to_bool(v: Any) -> bool:
    if isinstance(v, str):
        return v.strip().lower() in ("1", "true", "yes", "on")
    return bool(v)


def to_array(v: Any) -> list:
    """``None`` -> ``[]``; lists and tuples pass through; anything else is wrapped."""
    if v is None:
        return []
    if isinstance(v, (list, tuple)):
        return list(v)
    return [v]


def to_str_list(v: Any) -> List[str]:
    out = []
    for x in to_array(v):
        if isinstance(x, Mapping):
            # formato antiguo: [{"name": "Docker"}, ...]
            x = x.get("name")
        if x is not None and x != "":
            out.append(to_str(x))
    return out


def to_dict(v: Any) -> dict:
    if isinstance(v, Mapping):
        return dict(v)
    if isinstance(v, str) and v.strip().startswith("{"):
        try:
            parsed = json.loads(v)
        except ValueError:
            return {}
        return parsed if isinstance(parsed, dict) else {}
    return {}


def parse_date(v: Any) -> Optional[datetime]:
    """
    Instant from whatever the backend stored: ``datetime``, ``date``, ISO-8601
    text (``Z`` suffix included), epoch seconds/millis or a Firestore
    ``{"_seconds": ...}`` export. Anything unparseable is ``None``.
    """
    if v is None or v == "":
        return None
    if isinstance(v, datetime):
        return v
    if isinstance(v, date):
        return datetime(v.year, v.month, v.day)
    if isinstance(v, Mapping):
        seconds = v.get("_seconds", v.get("seconds"))
        return parse_date(seconds) if isinstance(seconds, (int, float)) else None
    if isinstance(v, bool):
        return None
    if isinstance(v, (int, float)):
        ts = v / 1000 if v > 1e11 else v
        try:
            return datetime.fromtimestamp(ts, tz=timezone.utc)
        except (OverflowError, OSError, ValueError):
            return None
    if isinstance(v, str):
        s = v.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return datetime.fromisoformat(s)
        except ValueError:
            return None
    return None


def parse_day(v: Any) -> Optional[date]:
    if isinstance(v, date) and not isinstance(v, datetime):
        return v
    dt = parse_date(v)
    return dt.date() if dt else None


def to_model(model: Type[BaseModel]) -> Callable[[Any], Optional[BaseModel]]:
    def coerce(v):
        if v is None or v == "" or v == {}:
            return None
        if isinstance(v, model):
            return v
        try:
            return model.model_validate(v)
        except ValidationError:
            return None
    return coerce


def to_model_list(model: Type[BaseModel], from_str: Callable[[str], dict] | None = None):
    """List of sub-objects; invalid items are dropped, bare strings go through ``from_str``."""
    def coerce(v):
        out = []
        for item in to_array(v):
            if isinstance(item, model):
                out.append(item)
                continue
            if isinstance(item, str) and from_str is not None:
                item = from_str(item)
            try:
                out.append(model.model_validate(item))
            except ValidationError:
                continue
        return out
    return coerce


def _plain(v: Any) -> Any:
    # rows only hold JSON-able values (JSON/JSONB columns)
    if isinstance(v, BaseModel):
        return v.model_dump()
    if isinstance(v, list):
        return [_plain(x) for x in v]
    if isinstance(v, dict):
        return {k: _plain(x) for k, x in v.items()}
    return v


# ---------------------------------------------------------------------------
# Column table + mapper
# ---------------------------------------------------------------------------
@dataclass(frozen=True)
class Column:
    attr: str
    name: Optional[str] = None
    aliases: tuple = ()
    coerce: Callable[[Any], Any] = _identity
    default: Any = None
    default_factory: Optional[Callable[[], Any]] = None
    generated: bool = False

    @property
    def column(self) -> str:
        return self.name or self.attr

    def default_value(self) -> Any:
        if self.default_factory is not None:
            return self.default_factory()
        return self.default

    def read_keys(self) -> List[str]:
        """Row keys tried on read: canonical column first, then the legacy aliases."""
        keys: List[str] = []
        for k in (self.column, self.attr, *self.aliases):
            for candidate in (k, to_camel(k)):
                if candidate not in keys:
                    keys.append(candidate)
        return keys


def _present(v: Any) -> bool:
    return v is not None and v != ""


class EntityMapper:
    def __init__(
        self,
        table: str,
        domain: Type[BaseModel],
        columns: Iterable[Column],
        *,
        updated_at: bool = True,
        after_read: Callable[[Mapping, Dict[str, Any]], None] | None = None,
    ):
        cols = [Column("id", coerce=to_opt_int, generated=True), *columns,
                Column("created_at", aliases=("created",), coerce=parse_date, generated=True)]
        if updated_at:
            cols.append(Column("updated_at", aliases=("updated",), coerce=parse_date, generated=True))
        self.table = table
        self.domain = domain
        self.columns = tuple(cols)
        self._after_read = after_read

        self._lookup: Dict[str, Column] = {}
        for col in self.columns:
            for key in (col.attr, to_camel(col.attr), col.column):
                self._lookup.setdefault(key, col)

    # ---------- lookup ----------
    def column_for(self, field: str) -> Column:
        try:
            return self._lookup[field]
        except KeyError:
            raise UnknownFieldError(self.table, field) from None

    @property
    def column_names(self) -> List[str]:
        return [c.column for c in self.columns]

    # ---------- row -> domain ----------
    def to_domain(self, row: Optional[Mapping[str, Any]]):
        if not row:
            return None
        values: Dict[str, Any] = {}
        for col in self.columns:
            raw = _MISSING
            for key in col.read_keys():
                candidate = row.get(key)
                if _present(candidate):
                    raw = candidate
                    break
            values[col.attr] = col.default_value() if raw is _MISSING else col.coerce(raw)
        if self._after_read is not None:
            self._after_read(row, values)
        return self.domain.model_construct(**values)

    # ---------- domain -> row ----------
    def to_row(self, data: Any, partial: bool = False) -> Dict[str, Any]:
        if isinstance(data, BaseModel):
            data = data.model_dump(exclude_unset=partial)
        if not isinstance(data, Mapping):
            return {}

        row: Dict[str, Any] = {}
        for col in self.columns:
            if col.generated:
                continue
            value = _MISSING
            for key in (col.attr, to_camel(col.attr), col.column):
                if key in data:
                    value = data[key]
                    break
            if value is _MISSING:
                if partial:
                    continue
                value = col.default_value()
            else:
                value = col.coerce(value)
            row[col.column] = _plain(value)
        return row


# ---------------------------------------------------------------------------
# Entity tables
# ---------------------------------------------------------------------------
def _gallery_item(url: str) -> dict:
    return {"url": url, "alt": ""}


def _legacy_post_status(row: Mapping, values: Dict[str, Any]) -> None:
    # filas antiguas solo traen un booleano de publicación
    if _present(row.get("status")):
        return
    flags = (row.get("is_published"), row.get("isPublished"), row.get("published"))
    if any(to_bool(f) for f in flags if f is not None):
        values["status"] = "published"


def _legacy_experience_period(row: Mapping, values: Dict[str, Any]) -> None:
    # exports antiguos: solo "period": "2019 - 2021"
    if values.get("start_date") is not None or not _present(row.get("period")):
        return
    first = str(row["period"]).split(" - ")[0].strip()
    if len(first) == 4 and first.isdigit():
        values["start_date"] = date(int(first), 1, 1)
    else:
        values["start_date"] = parse_day(first)


USER_MAPPER = EntityMapper("users", auth_schemas.User, [
    Column("username", coerce=to_str, default=""),
    Column("email", coerce=to_str, default=""),
    Column("role", coerce=to_choice(("admin", "user"), "user"), default="user"),
    Column("email_verified", aliases=("verified",), coerce=to_bool, default=False),
    Column("first_name", coerce=to_str, default=""),
    Column("last_name", coerce=to_str, default=""),
    Column("avatar", "avatar_url", coerce=to_opt_str),
    Column("bio", coerce=to_opt_str),
    Column("password_hash", coerce=to_str, default=""),
])

SECTION_MAPPER = EntityMapper("sections", content_schemas.Section, [
    Column("type", aliases=("section_type",), coerce=to_str, default="hero"),
    Column("title", coerce=to_str, default=""),
    Column("subtitle", coerce=to_opt_str),
    Column("content", coerce=to_dict, default_factory=dict),
    Column("order", "sort_order", aliases=("order", "display_order"), coerce=to_int, default=0),
    Column("is_visible", aliases=("visible",), coerce=to_bool, default=True),
])

PROJECT_MAPPER = EntityMapper("projects", content_schemas.Project, [
    Column("user_id", coerce=to_opt_int),
    Column("title", coerce=to_str, default=""),
    Column("slug", coerce=to_str, default=""),
    Column("description", coerce=to_str, default=""),
    Column("content", coerce=to_str, default=""),
    Column("category", coerce=to_str, default="personal"),
    Column("technologies", coerce=to_str_list, default_factory=list),
    Column("tags", coerce=to_str_list, default_factory=list),
    Column("image_url", aliases=("featured_image",), coerce=to_opt_str),
    Column("project_url", "demo_url", aliases=("project_url", "external_link"), coerce=to_opt_str),
    Column("github_url", aliases=("github_link",), coerce=to_opt_str),
    Column("featured", "is_featured", aliases=("featured",), coerce=to_bool, default=False),
    Column("featured_order", coerce=to_opt_int),
    Column("order", "sort_order", aliases=("order",), coerce=to_int, default=0),
])

EXPERIENCE_MAPPER = EntityMapper("experiences", content_schemas.Experience, [
    Column("user_id", coerce=to_opt_int),
    Column("company", coerce=to_str, default=""),
    Column("title", aliases=("role", "position"), coerce=to_str, default=""),
    Column("location", coerce=to_str, default=""),
    Column("start_date", coerce=parse_day),
    Column("end_date", coerce=parse_day),
    Column("is_current", aliases=("current",), coerce=to_bool, default=False),
    Column("description", coerce=to_text, default=""),
    Column("responsibilities", aliases=("achievements",), coerce=to_str_list, default_factory=list),
    Column("technologies", aliases=("methodologies",), coerce=to_str_list, default_factory=list),
    Column("order", "sort_order", aliases=("order",), coerce=to_int, default=0),
], after_read=_legacy_experience_period)

CERTIFICATION_MAPPER = EntityMapper("certifications", content_schemas.Certification, [
    Column("user_id", coerce=to_opt_int),
    Column("name", aliases=("title",), coerce=to_str, default=""),
    Column("issuer", aliases=("institution",), coerce=to_str, default=""),
    Column("issue_date", aliases=("issued_at",), coerce=parse_day),
    Column("expiration_date", aliases=("expiry_date",), coerce=parse_day),
    Column("credential_id", aliases=("credentialID",), coerce=to_opt_str),
    Column("credential_url", aliases=("credentialURL", "url"), coerce=to_opt_str),
    Column("image_url", aliases=("badge_url", "certificate_file"), coerce=to_opt_str),
    Column("description", coerce=to_str, default=""),
    Column("skills", coerce=to_str_list, default_factory=list),
    Column("featured", "is_featured", aliases=("featured",), coerce=to_bool, default=False),
    Column("order", "sort_order", aliases=("order",), coerce=to_int, default=0),
])

TESTIMONIAL_MAPPER = EntityMapper("testimonials", content_schemas.Testimonial, [
    Column("name", coerce=to_str, default=""),
    Column("email", coerce=to_str, default=""),
    Column("role", aliases=("position",), coerce=to_str, default=""),
    Column("company", coerce=to_str, default=""),
    Column("content", aliases=("message", "text"), coerce=to_str, default=""),
    Column("rating", coerce=to_opt_int),
    Column("avatar_url", aliases=("avatar",), coerce=to_opt_str),
    Column("project_type", coerce=to_opt_str),
    Column("relationship", coerce=to_opt_str),
    Column("approved", aliases=("is_approved",), coerce=to_bool, default=False),
])

CONTACT_MAPPER = EntityMapper("contact_submissions", content_schemas.ContactSubmission, [
    Column("name", coerce=to_str, default=""),
    Column("email", coerce=to_str, default=""),
    Column("subject", coerce=to_opt_str),
    Column("message", coerce=to_str, default=""),
    Column("is_read", aliases=("read",), coerce=to_bool, default=False),
], updated_at=False)

BLOG_CATEGORY_MAPPER = EntityMapper("blog_categories", blog_schemas.BlogCategory, [
    Column("name", coerce=to_str, default=""),
    Column("slug", coerce=to_str, default=""),
    Column("description", coerce=to_str, default=""),
])

BLOG_POST_MAPPER = EntityMapper("blog_posts", blog_schemas.BlogPost, [
    Column("title", coerce=to_str, default=""),
    Column("slug", coerce=to_str, default=""),
    Column("excerpt", aliases=("summary",), coerce=to_str, default=""),
    Column("content", coerce=to_str, default=""),
    Column("featured_image", aliases=("cover_image_url", "image_url"), coerce=to_opt_str),
    Column("category_id", aliases=("category",), coerce=to_opt_int),
    Column("author_id", aliases=("author",), coerce=to_opt_int),
    Column("tags", coerce=to_str_list, default_factory=list),
    Column("status", coerce=to_str, default="draft"),
    Column("publish_date", "published_at", aliases=("publish_date",), coerce=parse_date),
    Column("meta_title", aliases=("seo_title",), coerce=to_opt_str),
    Column("meta_description", aliases=("seo_description",), coerce=to_opt_str),
], after_read=_legacy_post_status)

BLOG_SUBSCRIPTION_MAPPER = EntityMapper("blog_subscriptions", blog_schemas.BlogSubscription, [
    Column("email", coerce=to_str, default=""),
    Column("name", coerce=to_opt_str),
    Column("status", coerce=to_str, default="pending"),
    Column("confirmed", "is_confirmed", aliases=("confirmed",), coerce=to_bool, default=False),
    Column("confirmation_token", coerce=to_opt_str),
    Column("confirmed_at", coerce=parse_date),
])

CASE_STUDY_MAPPER = EntityMapper("case_study_details", blog_schemas.CaseStudyDetail, [
    Column("blog_post_id", aliases=("post_id",), coerce=to_opt_int),
    Column("title", coerce=to_str, default=""),
    Column("slug", coerce=to_str, default=""),
    Column("client", coerce=to_str, default=""),
    Column("project_type", coerce=to_str, default=""),
    Column("role", coerce=to_str, default=""),
    Column("duration", aliases=("timeline",), coerce=to_str, default=""),
    Column("problem", coerce=to_str, default=""),
    Column("solution", coerce=to_str, default=""),
    Column("results", coerce=to_str, default=""),
    Column("technologies", coerce=to_str_list, default_factory=list),
    Column("challenges", coerce=to_str_list, default_factory=list),
    Column("learnings", coerce=to_str_list, default_factory=list),
    Column("testimonial", coerce=to_model(blog_schemas.CaseStudyTestimonial)),
    Column("metrics", coerce=to_model_list(blog_schemas.CaseStudyMetric), default_factory=list),
    Column("gallery", "gallery_images", aliases=("gallery", "images"),
           coerce=to_model_list(blog_schemas.GalleryImage, from_str=_gallery_item), default_factory=list),
    Column("project_url", coerce=to_opt_str),
    Column("github_url", coerce=to_opt_str),
    Column("featured", coerce=to_bool, default=False),
    Column("featured_order", coerce=to_opt_int),
    Column("order", "sort_order", aliases=("order",), coerce=to_int, default=0),
])


# ---------------------------------------------------------------------------
# map_x / map_insert_x
# ---------------------------------------------------------------------------
def map_user(row): return USER_MAPPER.to_domain(row)
def map_insert_user(obj): return USER_MAPPER.to_row(obj)

def map_section(row): return SECTION_MAPPER.to_domain(row)
def map_insert_section(obj): return SECTION_MAPPER.to_row(obj)

def map_project(row): return PROJECT_MAPPER.to_domain(row)
def map_insert_project(obj): return PROJECT_MAPPER.to_row(obj)

def map_experience(row): return EXPERIENCE_MAPPER.to_domain(row)
def map_insert_experience(obj): return EXPERIENCE_MAPPER.to_row(obj)

def map_certification(row): return CERTIFICATION_MAPPER.to_domain(row)
def map_insert_certification(obj): return CERTIFICATION_MAPPER.to_row(obj)

def map_testimonial(row): return TESTIMONIAL_MAPPER.to_domain(row)
def map_insert_testimonial(obj): return TESTIMONIAL_MAPPER.to_row(obj)

def map_contact_submission(row): return CONTACT_MAPPER.to_domain(row)
def map_insert_contact_submission(obj): return CONTACT_MAPPER.to_row(obj)

def map_blog_category(row): return BLOG_CATEGORY_MAPPER.to_domain(row)
def map_insert_blog_category(obj): return BLOG_CATEGORY_MAPPER.to_row(obj)

def map_blog_post(row): return BLOG_POST_MAPPER.to_domain(row)
def map_insert_blog_post(obj): return BLOG_POST_MAPPER.to_row(obj)

def map_blog_subscription(row): return BLOG_SUBSCRIPTION_MAPPER.to_domain(row)
def map_insert_blog_subscription(obj): return BLOG_SUBSCRIPTION_MAPPER.to_row(obj)

def map_case_study_detail(row): return CASE_STUDY_MAPPER.to_domain(row)
def map_insert_case_study_detail(obj): return CASE_STUDY_MAPPER.to_row(obj)
