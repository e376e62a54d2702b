# tests/test_admin_managers.py
from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from portfolio.core.settings import settings
from portfolio.security.jwt import create_access_token
from portfolio.services.auth_service import hash_password

API = settings.API_PREFIX


# -----------------------------
# Auth gate
# -----------------------------
def test_admin_requires_auth(client: TestClient):
    r = client.get(f"{API}/admin/projects")
    assert r.status_code == 401


def test_admin_rejects_non_admin(client: TestClient, storage):
    user = storage.create("users", {"username": "viewer", "password_hash": hash_password("x" * 10)})
    token = create_access_token(user.id, {"role": "user"})
    r = client.get(f"{API}/admin/projects", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 403


def test_admin_rejects_bad_token(client: TestClient):
    r = client.get(f"{API}/admin/projects", headers={"Authorization": "Bearer not-a-jwt"})
    assert r.status_code == 401


# -----------------------------
# Generic CRUD (projects)
# -----------------------------
def test_project_crud_cycle(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/projects", json={
        "title": "Home Lab",
        "category": "personal",
        "technologies": ["Docker"],
        "featured": True,
    }, headers=admin_headers)
    assert r.status_code == 201, r.text
    body = r.json()
    pid = body["id"]
    assert body["slug"] == "home-lab"
    assert body["featuredOrder"] is None

    r = client.get(f"{API}/admin/projects/{pid}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["technologies"] == ["Docker"]

    r = client.put(f"{API}/admin/projects/{pid}", json={"description": "Proxmox cluster"}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["description"] == "Proxmox cluster"
    assert r.json()["title"] == "Home Lab"

    r = client.get(f"{API}/admin/projects", headers=admin_headers)
    assert [p["id"] for p in r.json()] == [pid]


def test_update_missing_is_404(client: TestClient, admin_headers: dict):
    r = client.put(f"{API}/admin/projects/999", json={"title": "x"}, headers=admin_headers)
    assert r.status_code == 404


def test_delete_requires_confirmation(client: TestClient, admin_headers: dict):
    pid = client.post(f"{API}/admin/projects", json={"title": "Temp"}, headers=admin_headers).json()["id"]

    r = client.delete(f"{API}/admin/projects/{pid}", headers=admin_headers)
    assert r.status_code == 400

    r = client.delete(f"{API}/admin/projects/999?confirm=true", headers=admin_headers)
    assert r.status_code == 404

    r = client.delete(f"{API}/admin/projects/{pid}?confirm=true", headers=admin_headers)
    assert r.status_code == 204
    assert client.get(f"{API}/admin/projects/{pid}", headers=admin_headers).status_code == 404


def test_validation_error_is_422(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/projects", json={"title": "", "category": "other"}, headers=admin_headers)
    assert r.status_code == 422


def test_certification_partial_update(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/certifications", json={
        "name": "CKA", "issuer": "CNCF", "issueDate": "2023-01-10", "skills": ["k8s"],
    }, headers=admin_headers)
    cid = r.json()["id"]
    r = client.put(f"{API}/admin/certifications/{cid}", json={"description": "new"}, headers=admin_headers)
    body = r.json()
    assert body["description"] == "new"
    assert (body["name"], body["issuer"], body["issueDate"], body["skills"]) == ("CKA", "CNCF", "2023-01-10", ["k8s"])


# -----------------------------
# Sections
# -----------------------------
def test_section_content_schema_violation_is_422(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/sections", json={
        "type": "about", "title": "About", "content": {"skills": "not-a-list"},
    }, headers=admin_headers)
    assert r.status_code == 422
    assert "skills" in r.json()["detail"]


def test_section_update_revalidates_content(client: TestClient, admin_headers: dict):
    sid = client.post(f"{API}/admin/sections", json={
        "type": "hero", "title": "Hi", "content": {"ctaText": "Go"},
    }, headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/sections/{sid}", json={"content": {"ctaText": 5}}, headers=admin_headers)
    assert r.status_code == 422
    r = client.put(f"{API}/admin/sections/{sid}", json={"content": {"ctaText": "View"}}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["content"] == {"ctaText": "View"}


def test_section_content_too_large_is_413(client: TestClient, admin_headers: dict, monkeypatch):
    monkeypatch.setattr(settings, "MAX_CONTENT_KB", 1)
    r = client.post(f"{API}/admin/sections", json={
        "type": "blog", "title": "Big", "content": {"blob": "x" * 4096},
    }, headers=admin_headers)
    assert r.status_code == 413
    assert "Payload too large" in r.text


# -----------------------------
# Blog posts
# -----------------------------
def _create_post(client, headers, **extra):
    payload = {"title": "Hello World", "content": "<p>Hi</p>", **extra}
    r = client.post(f"{API}/admin/blog-posts", json=payload, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()


def test_blog_post_slug_generated_and_deduplicated(client: TestClient, admin_headers: dict):
    first = _create_post(client, admin_headers)
    second = _create_post(client, admin_headers)
    assert first["slug"] == "hello-world"
    assert second["slug"] == "hello-world-2"
    assert first["status"] == "draft"
    assert first["publishDate"] is None


def test_blog_post_duplicate_explicit_slug_is_409(client: TestClient, admin_headers: dict):
    _create_post(client, admin_headers, slug="taken")
    r = client.post(f"{API}/admin/blog-posts", json={"title": "Other", "slug": "taken"}, headers=admin_headers)
    assert r.status_code == 409


def test_blog_post_transitions(client: TestClient, admin_headers: dict):
    pid = _create_post(client, admin_headers)["id"]

    r = client.post(f"{API}/admin/blog-posts/{pid}/publish", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "published"
    assert r.json()["publishDate"] is not None

    r = client.post(f"{API}/admin/blog-posts/{pid}/archive", headers=admin_headers)
    assert r.json()["status"] == "archived"

    # archived -> published no está permitido
    r = client.post(f"{API}/admin/blog-posts/{pid}/publish", headers=admin_headers)
    assert r.status_code == 409

    r = client.post(f"{API}/admin/blog-posts/{pid}/unpublish", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["status"] == "draft"
    assert r.json()["publishDate"] is None


def test_deleting_blog_post_detaches_case_study(client: TestClient, admin_headers: dict):
    pid = _create_post(client, admin_headers)["id"]
    r = client.post(f"{API}/admin/case-studies", json={
        "title": "Infra Migration", "blogPostId": pid,
        "metrics": [{"name": "cost", "value": "-30%"}],
        "gallery": [{"url": "https://img/1.png"}],
    }, headers=admin_headers)
    assert r.status_code == 201, r.text
    cs = r.json()
    assert cs["slug"] == "infra-migration"

    r = client.delete(f"{API}/admin/blog-posts/{pid}?confirm=true", headers=admin_headers)
    assert r.status_code == 204

    r = client.get(f"{API}/admin/case-studies/{cs['id']}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["blogPostId"] is None
    assert r.json()["metrics"][0]["value"] == "-30%"


def test_deleting_case_study_keeps_post(client: TestClient, admin_headers: dict):
    pid = _create_post(client, admin_headers)["id"]
    cid = client.post(f"{API}/admin/case-studies", json={"title": "CS", "blogPostId": pid},
                      headers=admin_headers).json()["id"]
    assert client.delete(f"{API}/admin/case-studies/{cid}?confirm=true", headers=admin_headers).status_code == 204
    assert client.get(f"{API}/admin/blog-posts/{pid}", headers=admin_headers).status_code == 200


# -----------------------------
# Other managers
# -----------------------------
def test_blog_category_slug_from_name(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/blog-categories", json={"name": "Dev Ops"}, headers=admin_headers)
    assert r.status_code == 201
    assert r.json()["slug"] == "dev-ops"


def test_blog_subscription_manager_normalizes_email(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/blog-subscriptions", json={"email": "Reader@Example.com"}, headers=admin_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["email"] == "reader@example.com"
    assert body["status"] == "pending"
    assert body["confirmationToken"]


def test_testimonial_approval(client: TestClient, admin_headers: dict):
    r = client.post(f"{API}/admin/testimonials", json={
        "name": "Ana", "email": "ana@example.com", "content": "Excellent delivery.",
    }, headers=admin_headers)
    tid = r.json()["id"]
    assert r.json()["approved"] is False
    assert client.get(f"{API}/testimonials").json() == []

    client.put(f"{API}/admin/testimonials/{tid}", json={"approved": True}, headers=admin_headers)
    assert [t["id"] for t in client.get(f"{API}/testimonials").json()] == [tid]


def test_contact_submission_mark_read(client: TestClient, admin_headers: dict):
    cid = client.post(f"{API}/contact", json={
        "name": "Bob", "email": "bob@example.com", "message": "Hello there",
    }).json()["id"]
    r = client.put(f"{API}/admin/contact-submissions/{cid}", json={"isRead": True}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["isRead"] is True


@pytest.mark.parametrize("path", [
    "sections", "projects", "experiences", "certifications", "blog-categories", "blog-posts",
    "blog-subscriptions", "case-studies", "testimonials", "contact-submissions",
])
def test_every_manager_lists(client: TestClient, admin_headers: dict, path: str):
    r = client.get(f"{API}/admin/{path}", headers=admin_headers)
    assert r.status_code == 200
    assert r.json() == []


# -----------------------------
# Uploads
# -----------------------------
def test_upload_unconfigured_is_503(client: TestClient, admin_headers: dict, monkeypatch):
    monkeypatch.setattr(settings, "FIREBASE_CREDENTIALS_PATH", None)
    r = client.post(f"{API}/admin/uploads", files={"file": ("a.png", b"\x89PNG", "image/png")},
                    headers=admin_headers)
    assert r.status_code == 503


def test_upload_rejects_non_image(client: TestClient, admin_headers: dict, monkeypatch):
    from portfolio.services import firebase_storage

    monkeypatch.setattr(firebase_storage, "is_firebase_configured", lambda: True)
    r = client.post(f"{API}/admin/uploads", files={"file": ("a.txt", b"hi", "text/plain")},
                    headers=admin_headers)
    assert r.status_code == 415


def test_upload_returns_url(client: TestClient, admin_headers: dict, monkeypatch):
    from portfolio.services import firebase_storage

    monkeypatch.setattr(firebase_storage, "is_firebase_configured", lambda: True)
    monkeypatch.setattr(firebase_storage, "upload_file_to_firebase",
                        lambda f, ct, path: f"https://cdn.example/{path}")
    r = client.post(f"{API}/admin/uploads", data={"folder": "projects"},
                    files={"file": ("shot.png", b"\x89PNG", "image/png")}, headers=admin_headers)
    assert r.status_code == 201
    body = r.json()
    assert body["path"].startswith(f"{settings.UPLOAD_PREFIX}/projects/")
    assert body["url"].endswith(body["path"])


# -----------------------------
# Explicit nulls on update
# -----------------------------
def test_null_on_required_field_is_422(client: TestClient, admin_headers: dict):
    cid = client.post(f"{API}/admin/certifications", json={"name": "CKA", "issuer": "CNCF"},
                      headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/certifications/{cid}", json={"name": None}, headers=admin_headers)
    assert r.status_code == 422
    assert client.get(f"{API}/admin/certifications/{cid}", headers=admin_headers).json()["name"] == "CKA"


def test_null_on_enum_field_is_422(client: TestClient, admin_headers: dict):
    sid = client.post(f"{API}/admin/sections", json={"type": "hero", "title": "Hi"},
                      headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/sections/{sid}", json={"type": None}, headers=admin_headers)
    assert r.status_code == 422
    assert client.get(f"{API}/admin/sections/{sid}", headers=admin_headers).json()["type"] == "hero"


def test_null_clears_optional_fields(client: TestClient, admin_headers: dict):
    eid = client.post(f"{API}/admin/experiences", json={
        "company": "ACME", "title": "PM", "startDate": "2019-01-01", "endDate": "2021-06-30",
    }, headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/experiences/{eid}", json={"endDate": None, "isCurrent": True},
                   headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["endDate"] is None
    assert r.json()["startDate"] == "2019-01-01"

    pid = client.post(f"{API}/admin/projects", json={"title": "P", "featured": True, "featuredOrder": 1},
                      headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/projects/{pid}", json={"featuredOrder": None}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["featuredOrder"] is None

    post_id = _create_post(client, admin_headers)["id"]
    cs_id = client.post(f"{API}/admin/case-studies", json={"title": "CS", "blogPostId": post_id},
                        headers=admin_headers).json()["id"]
    r = client.put(f"{API}/admin/case-studies/{cs_id}", json={"blogPostId": None}, headers=admin_headers)
    assert r.status_code == 200
    assert r.json()["blogPostId"] is None
