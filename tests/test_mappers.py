# tests/test_mappers.py
from __future__ import annotations

from datetime import date, datetime, timezone

import pytest

from portfolio.schemas import auth as auth_schemas
from portfolio.schemas import blog as blog_schemas
from portfolio.schemas import content as content_schemas
from portfolio.schemas.blog import BlogPostCreate, CaseStudyCreate
from portfolio.schemas.content import CertificationCreate, ProjectCreate
from portfolio.storage import mappers as m
from portfolio.storage.errors import UnknownFieldError


# -----------------------------
# Helpers
# -----------------------------
def test_to_array():
    assert m.to_array(None) == []
    assert m.to_array("x") == ["x"]
    assert m.to_array(["a", "b"]) == ["a", "b"]
    assert m.to_array(("a",)) == ["a"]


def test_parse_date_invalid_is_none():
    for bad in ("not-a-date", "", None, {"foo": 1}, True, object()):
        assert m.parse_date(bad) is None


def test_parse_date_iso_and_legacy_shapes():
    dt = m.parse_date("2024-03-01T10:20:30Z")
    assert dt == datetime(2024, 3, 1, 10, 20, 30, tzinfo=timezone.utc)

    assert m.parse_date("2024-03-01") == datetime(2024, 3, 1)
    assert m.parse_date(date(2024, 3, 1)) == datetime(2024, 3, 1)
    # Firestore export
    assert m.parse_date({"_seconds": 0}) == datetime(1970, 1, 1, tzinfo=timezone.utc)
    # epoch en milisegundos
    assert m.parse_date(1_700_000_000_000) == m.parse_date(1_700_000_000)


def test_parse_day():
    assert m.parse_day("2023-05-04T00:00:00Z") == date(2023, 5, 4)
    assert m.parse_day(date(2023, 5, 4)) == date(2023, 5, 4)
    assert m.parse_day("garbage") is None


def test_string_lists_unwrap_legacy_objects():
    assert m.to_str_list([{"name": "Docker"}, "AWS", None, ""]) == ["Docker", "AWS"]


# -----------------------------
# map_x(None) / never raises
# -----------------------------
@pytest.mark.parametrize("fn", [
    m.map_user, m.map_section, m.map_project, m.map_experience, m.map_certification,
    m.map_testimonial, m.map_contact_submission, m.map_blog_category, m.map_blog_post,
    m.map_blog_subscription, m.map_case_study_detail,
])
def test_map_none_and_empty(fn):
    assert fn(None) is None
    assert fn({}) is None


def test_map_degrades_to_defaults_on_garbage():
    cert = m.map_certification({
        "id": "7",
        "name": 123,
        "issue_date": "yesterday",
        "skills": "python",
        "sort_order": "first",
    })
    assert cert.id == 7
    assert cert.name == "123"
    assert cert.issue_date is None
    assert cert.skills == ["python"]
    assert cert.order == 0
    assert cert.featured is False


# -----------------------------
# Insert -> read
# -----------------------------
def test_project_insert_then_read_keeps_fields():
    obj = ProjectCreate(
        title="Homelab",
        slug="homelab",
        description="Self-hosted stack",
        category="personal",
        technologies=["Docker", "Proxmox"],
        featured=True,
        featured_order=2,
        project_url="https://example.com",
    )
    row = m.map_insert_project(obj)
    assert row["is_featured"] is True
    assert row["demo_url"] == "https://example.com"

    back = m.map_project(row)
    for field in ("title", "slug", "description", "category", "technologies",
                  "featured", "featured_order", "project_url"):
        assert getattr(back, field) == getattr(obj, field)


def test_featured_project_without_order_keeps_none():
    row = m.map_insert_project(ProjectCreate(title="X", featured=True))
    assert row["featured_order"] is None
    assert m.map_project(row).featured_order is None


def test_blog_post_insert_then_read():
    obj = BlogPostCreate(title="Hello", slug="hello", content="<p>x</p>", tags=["a"],
                         category_id=3, status="published")
    back = m.map_blog_post(m.map_insert_blog_post(obj))
    assert (back.title, back.slug, back.content, back.tags, back.category_id, back.status) == \
        ("Hello", "hello", "<p>x</p>", ["a"], 3, "published")


def test_case_study_nested_objects_are_plain_in_row():
    obj = CaseStudyCreate(
        title="Migration",
        testimonial={"author": "Ana", "content": "Great"},
        metrics=[{"name": "uptime", "value": "99.9%"}],
        gallery=[{"url": "https://img/1.png", "alt": "one"}],
    )
    row = m.map_insert_case_study_detail(obj)
    assert row["testimonial"] == {"author": "Ana", "role": "", "company": "", "content": "Great"}
    assert row["gallery_images"][0]["url"] == "https://img/1.png"

    back = m.map_case_study_detail(row)
    assert back.testimonial.author == "Ana"
    assert back.metrics[0].value == "99.9%"
    assert back.gallery[0].alt == "one"


def test_insert_fills_defaults_and_skips_generated():
    row = m.map_insert_certification({"name": "CKA", "issuer": "CNCF", "id": 99, "createdAt": "x"})
    assert "id" not in row and "created_at" not in row
    assert row["skills"] == []
    assert row["is_featured"] is False
    assert row["description"] == ""


def test_partial_row_only_has_set_fields():
    row = m.CERTIFICATION_MAPPER.to_row({"description": "new"}, partial=True)
    assert row == {"description": "new"}

    row = m.CERTIFICATION_MAPPER.to_row(CertificationCreate(name="A", issuer="B"), partial=True)
    assert set(row) == {"name", "issuer"}


def test_camel_case_input_accepted():
    row = m.map_insert_blog_post({"title": "T", "categoryId": 4, "featuredImage": "u"})
    assert row["category_id"] == 4
    assert row["featured_image"] == "u"


# -----------------------------
# Legacy aliases (read side only)
# -----------------------------
def test_certification_aliases():
    cert = m.map_certification({
        "id": 1, "title": "AWS SA", "issued_at": "2022-01-02", "expiry_date": "2025-01-02",
        "url": "https://cred", "badge_url": "https://badge", "featured": True,
    })
    assert cert.name == "AWS SA"
    assert cert.issue_date == date(2022, 1, 2)
    assert cert.expiration_date == date(2025, 1, 2)
    assert cert.credential_url == "https://cred"
    assert cert.image_url == "https://badge"
    assert cert.featured is True


def test_canonical_column_wins_over_alias():
    cert = m.map_certification({"id": 1, "name": "New", "title": "Old"})
    assert cert.name == "New"


def test_experience_aliases():
    exp = m.map_experience({
        "id": 1, "company": "ACME", "position": "PM", "methodologies": ["Scrum"],
        "achievements": ["Shipped"], "current": True, "startDate": "2020-01-01",
    })
    assert exp.title == "PM"
    assert exp.technologies == ["Scrum"]
    assert exp.responsibilities == ["Shipped"]
    assert exp.is_current is True
    assert exp.start_date == date(2020, 1, 1)


def test_certification_camel_export_aliases():
    # export de "educationAndCerts": institution / credentialID / credentialURL
    cert = m.map_certification({
        "id": "c1", "name": "CSM", "institution": "Scrum Alliance",
        "credentialID": "AB-123", "credentialURL": "https://verify/AB-123",
    })
    assert cert.issuer == "Scrum Alliance"
    assert cert.credential_id == "AB-123"
    assert cert.credential_url == "https://verify/AB-123"


def test_experience_list_description_is_joined():
    exp = m.map_experience({"id": 1, "company": "ACME", "description": ["Led the team", "", "Built the API"]})
    assert exp.description == "Led the team\nBuilt the API"
    assert m.map_experience({"id": 2, "description": "plain"}).description == "plain"


def test_experience_period_fills_start_date():
    assert m.map_experience({"id": 1, "period": "2019 - 2021"}).start_date == date(2019, 1, 1)
    assert m.map_experience({"id": 2, "period": "2020-03-01 - now"}).start_date == date(2020, 3, 1)
    # la columna real tiene prioridad
    exp = m.map_experience({"id": 3, "start_date": "2018-05-01", "period": "2019 - 2021"})
    assert exp.start_date == date(2018, 5, 1)
    assert m.map_experience({"id": 4, "period": "someday"}).start_date is None


def test_project_aliases():
    p = m.map_project({"id": 1, "external_link": "https://x", "github_link": "https://g",
                       "featured_image": "https://i", "featured": "true"})
    assert p.project_url == "https://x"
    assert p.github_url == "https://g"
    assert p.image_url == "https://i"
    assert p.featured is True


def test_blog_post_aliases_and_legacy_published_flag():
    post = m.map_blog_post({
        "id": 1, "title": "Old", "cover_image_url": "https://c", "category": "5",
        "seo_title": "SEO", "seo_description": "desc", "is_published": True,
    })
    assert post.featured_image == "https://c"
    assert post.category_id == 5
    assert post.meta_title == "SEO"
    assert post.meta_description == "desc"
    assert post.status == "published"

    draft = m.map_blog_post({"id": 2, "title": "D", "published": False})
    assert draft.status == "draft"


def test_section_case_study_and_system_field_aliases():
    s = m.map_section({"id": 1, "section_type": "about", "display_order": 3,
                       "created": "2024-01-01T00:00:00Z"})
    assert s.type == "about"
    assert s.order == 3
    assert s.created_at == datetime(2024, 1, 1, tzinfo=timezone.utc)

    cs = m.map_case_study_detail({"id": 1, "timeline": "3 months",
                                  "images": ["https://a.png", {"url": "https://b.png", "alt": "b"}]})
    assert cs.duration == "3 months"
    assert [g.url for g in cs.gallery] == ["https://a.png", "https://b.png"]
    assert cs.gallery[0].alt == ""


def test_column_lookup_accepts_attr_camel_and_column():
    mapper = m.BLOG_POST_MAPPER
    assert mapper.column_for("category_id").column == "category_id"
    assert mapper.column_for("categoryId").column == "category_id"
    assert mapper.column_for("publish_date").column == "published_at"
    assert mapper.column_for("published_at").column == "published_at"
    with pytest.raises(UnknownFieldError):
        mapper.column_for("nope")


def test_user_password_hash_never_serialized():
    user = m.map_user({"id": 1, "username": "admin", "password_hash": "h", "role": "admin"})
    assert user.password_hash == "h"
    assert user.is_admin
    dumped = user.model_dump(by_alias=True)
    assert "passwordHash" not in dumped and "password_hash" not in dumped


def test_legacy_roles_fall_back_to_user():
    assert m.map_user({"id": 1, "role": "editor"}).role == "user"
    assert m.map_user({"id": 2, "role": " admin "}).role == "admin"


def test_int_coercers_survive_infinite_floats():
    assert m.to_int(float("inf")) == 0
    assert m.to_opt_int(float("-inf")) is None
    assert m.to_int(float("nan")) == 0
    p = m.map_project({"id": 1, "title": "P", "sort_order": float("inf"), "featured_order": float("inf")})
    assert p.order == 0
    assert p.featured_order is None


# -----------------------------
# map_x(map_insert_x(obj)) for every entity
# -----------------------------
WHEN = datetime(2024, 2, 3, 4, 5, 6, tzinfo=timezone.utc)

FULL_OBJECTS = [
    (m.USER_MAPPER, auth_schemas.User(
        username="ana", email="ana@example.com", role="admin", email_verified=True,
        first_name="Ana", last_name="Ruiz", avatar="https://cdn/ana.png", bio="Hi")),
    (m.SECTION_MAPPER, content_schemas.Section(
        type="skills", title="Skills", subtitle="What I do",
        content={"categories": [{"name": "Backend", "skills": ["Python"]}]}, order=3, is_visible=False)),
    (m.PROJECT_MAPPER, content_schemas.Project(
        user_id=7, title="P", slug="p", description="d", content="c", category="client",
        technologies=["FastAPI"], tags=["api"], image_url="https://i", project_url="https://demo",
        github_url="https://gh", featured=True, featured_order=2, order=5)),
    (m.EXPERIENCE_MAPPER, content_schemas.Experience(
        user_id=7, company="ACME", title="PM", location="CDMX", start_date=date(2019, 1, 1),
        end_date=date(2021, 6, 30), is_current=False, description="Led\nShipped",
        responsibilities=["Roadmap"], technologies=["Scrum"], order=1)),
    (m.CERTIFICATION_MAPPER, content_schemas.Certification(
        user_id=7, name="PMP", issuer="PMI", issue_date=date(2022, 1, 2),
        expiration_date=date(2025, 1, 2), credential_id="X1", credential_url="https://cred",
        image_url="https://badge", description="d", skills=["Risk"], featured=True, order=2)),
    (m.TESTIMONIAL_MAPPER, content_schemas.Testimonial(
        name="Bo", email="bo@example.com", role="CTO", company="Co", content="Great work",
        rating=5, avatar_url="https://a", project_type="web", relationship="client", approved=True)),
    (m.CONTACT_MAPPER, content_schemas.ContactSubmission(
        name="Cy", email="cy@example.com", subject="Hola", message="msg", is_read=True)),
    (m.BLOG_CATEGORY_MAPPER, blog_schemas.BlogCategory(name="Tech", slug="tech", description="d")),
    (m.BLOG_POST_MAPPER, blog_schemas.BlogPost(
        title="T", slug="t", excerpt="e", content="c", featured_image="https://f", category_id=1,
        author_id=2, tags=["a", "b"], status="published", publish_date=WHEN,
        meta_title="mt", meta_description="md")),
    (m.BLOG_SUBSCRIPTION_MAPPER, blog_schemas.BlogSubscription(
        email="s@example.com", name="S", status="active", confirmed=True,
        confirmation_token="tok", confirmed_at=WHEN)),
    (m.CASE_STUDY_MAPPER, blog_schemas.CaseStudyDetail(
        blog_post_id=3, title="CS", slug="cs", client="Cl", project_type="web", role="lead",
        duration="3m", problem="p", solution="s", results="r", technologies=["Vue"],
        challenges=["scope"], learnings=["tests"],
        testimonial=blog_schemas.CaseStudyTestimonial(author="A", role="CEO", company="Co", content="Wow"),
        metrics=[blog_schemas.CaseStudyMetric(name="Speed", value="2x", description="faster")],
        gallery=[blog_schemas.GalleryImage(url="https://g/1.png", alt="one", caption="first")],
        project_url="https://demo", github_url="https://gh", featured=True, featured_order=1, order=4)),
]


@pytest.mark.parametrize("mapper,obj", FULL_OBJECTS, ids=lambda v: getattr(v, "table", None))
def test_insert_then_read_keeps_every_field(mapper, obj):
    row = mapper.to_row(obj)
    generated = {c.attr for c in mapper.columns if c.generated}
    assert not generated & set(row)

    back = mapper.to_domain({**row, "id": 1})
    assert back.id == 1
    assert back.model_dump(exclude=generated) == obj.model_dump(exclude=generated)


def test_user_row_uses_avatar_url_column_and_keeps_hash_from_mapping():
    user = auth_schemas.User(username="ana", avatar="https://cdn/ana.png", password_hash="h")
    row = m.map_insert_user(dict(user))
    assert row["avatar_url"] == "https://cdn/ana.png"
    assert "avatar" not in row
    assert row["password_hash"] == "h"
    assert m.map_user({**row, "id": 1}).password_hash == "h"
