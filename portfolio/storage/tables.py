# portfolio/storage/tables.py
# Registro nombre de tabla -> (modelo ORM, mapper)
from __future__ import annotations
from typing import Dict, Literal, NamedTuple, Type

from portfolio.db.base import Base
from portfolio.models import (
    User, Section, Project, Experience, Certification, Testimonial, ContactSubmission,
    BlogCategory, BlogPost, BlogSubscription, CaseStudyDetail,
)
from . import mappers as m
from .errors import UnknownTableError

TableName = Literal[
    "users",
    "sections",
    "projects",
    "experiences",
    "certifications",
    "blog_categories",
    "blog_posts",
    "blog_subscriptions",
    "case_study_details",
    "testimonials",
    "contact_submissions",
]


class TableSpec(NamedTuple):
    model: Type[Base]
    mapper: m.EntityMapper


TABLES: Dict[str, TableSpec] = {
    "users": TableSpec(User, m.USER_MAPPER),
    "sections": TableSpec(Section, m.SECTION_MAPPER),
    "projects": TableSpec(Project, m.PROJECT_MAPPER),
    "experiences": TableSpec(Experience, m.EXPERIENCE_MAPPER),
    "certifications": TableSpec(Certification, m.CERTIFICATION_MAPPER),
    "blog_categories": TableSpec(BlogCategory, m.BLOG_CATEGORY_MAPPER),
    "blog_posts": TableSpec(BlogPost, m.BLOG_POST_MAPPER),
    "blog_subscriptions": TableSpec(BlogSubscription, m.BLOG_SUBSCRIPTION_MAPPER),
    "case_study_details": TableSpec(CaseStudyDetail, m.CASE_STUDY_MAPPER),
    "testimonials": TableSpec(Testimonial, m.TESTIMONIAL_MAPPER),
    "contact_submissions": TableSpec(ContactSubmission, m.CONTACT_MAPPER),
}


def table_spec(table: str) -> TableSpec:
    try:
        return TABLES[table]
    except KeyError:
        raise UnknownTableError(table) from None
