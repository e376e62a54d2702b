# tests/test_migration.py
from __future__ import annotations

import json

from sqlalchemy import create_engine, text
from sqlalchemy.exc import OperationalError

from portfolio.services.migration_service import (
    JsonRowSource, RowSource, SqlRowSource, copy_table, migrate, open_source,
)
from portfolio.storage.memory import MemoryStorage


def test_copy_table_resolves_aliases(storage):
    rows = [
        {"id": 1, "title": "AWS", "issuer": "Amazon", "issued_at": "2021-05-01"},
        {"id": 2, "name": "Bad", "section_type": "x"},
        {"id": 3, "name": "PMP", "issuer": "PMI"},
    ]
    report = copy_table(rows, "certifications", storage)
    assert (report.copied, report.failed) == (3, 0)
    names = sorted(c.name for c in storage.find_all("certifications"))
    assert names == ["AWS", "Bad", "PMP"]
    assert storage.get_certifications()[0].issue_date is not None


def test_copy_table_counts_failures(storage):
    rows = [
        {"id": "a", "type": "hero", "title": "Ok"},
        {"id": "b", "type": "notAType", "title": "Broken"},
        {"id": "c", "type": "about", "title": "Also ok"},
    ]
    report = copy_table(rows, "sections", storage)
    assert report.copied == 2
    assert report.failed == 1
    assert report.errors[0].startswith("b:")
    assert report.total == 3


def test_copy_table_keeps_counts_when_source_read_fails(storage):
    def rows():
        yield {"id": "a", "name": "CKA", "issuer": "CNCF"}
        yield {"id": "b", "name": "PMP", "issuer": "PMI"}
        raise OperationalError("SELECT * FROM certifications", {}, Exception("connection lost"))

    report = copy_table(rows(), "certifications", storage)
    assert (report.copied, report.failed) == (2, 1)
    assert "after 2 rows" in report.errors[0]
    assert sorted(c.name for c in storage.get_certifications()) == ["CKA", "PMP"]


def test_migrate_continues_after_source_read_failure():
    class FlakySource(RowSource):
        def rows(self, table):
            if table == "sections":
                yield {"id": "s1", "type": "hero", "title": "Hi"}
                raise OperationalError("SELECT * FROM sections", {}, Exception("gone"))
            if table == "projects":
                yield {"id": "p1", "title": "P", "slug": "p"}

    dest = MemoryStorage()
    sections, projects = migrate(FlakySource(), dest, ["sections", "projects"])
    assert (sections.copied, sections.failed) == (1, 1)
    assert (projects.copied, projects.failed) == (1, 0)


def test_json_education_and_certs_collection(tmp_path):
    export = {"educationAndCerts": {"doc1": {
        "name": "CSM", "institution": "Scrum Alliance", "credentialID": "AB-1",
        "credentialURL": "https://verify/AB-1", "issueDate": "2021-04-01",
    }}}
    path = tmp_path / "export.json"
    path.write_text(json.dumps(export), encoding="utf-8")

    dest = MemoryStorage()
    [report] = migrate(open_source(str(path)), dest, ["certifications"])
    assert (report.copied, report.failed) == (1, 0)
    cert = dest.get_certifications()[0]
    assert (cert.issuer, cert.credential_id, cert.credential_url) == \
        ("Scrum Alliance", "AB-1", "https://verify/AB-1")


def test_migrate_from_json_export_remaps_links(tmp_path):
    export = {
        "blogCategories": {"cat-devops": {"name": "DevOps", "slug": "devops"}},
        "blogPosts": [
            {"id": "p1", "title": "Legacy", "slug": "legacy", "category": "cat-devops",
             "isPublished": True, "cover_image_url": "https://img", "created": "2022-01-01T00:00:00Z"},
            {"id": "p2", "title": "Orphan", "slug": "orphan", "category": "missing"},
        ],
        "caseStudies": [{"id": "c1", "post_id": "p1", "title": "CS", "timeline": "2w"}],
    }
    path = tmp_path / "export.json"
    path.write_text(json.dumps(export), encoding="utf-8")

    dest = MemoryStorage()
    reports = migrate(open_source(str(path)), dest, ["case_study_details", "blog_posts", "blog_categories"])
    assert [r.table for r in reports] == ["blog_categories", "blog_posts", "case_study_details"]
    assert all(r.failed == 0 for r in reports)

    cat = dest.get_blog_category_by_slug("devops")
    post = dest.get_blog_post_by_slug("legacy")
    assert post.category_id == cat.id
    assert post.status == "published"
    assert post.featured_image == "https://img"
    assert dest.get_blog_post_by_slug("orphan").category_id is None
    cs = dest.get_case_study_detail_by_blog_post_id(post.id)
    assert cs.duration == "2w"


def test_json_source_missing_collection(tmp_path):
    path = tmp_path / "empty.json"
    path.write_text("{}", encoding="utf-8")
    assert list(JsonRowSource(path).rows("projects")) == []


def test_sql_source_reads_legacy_table(tmp_path):
    url = f"sqlite:///{tmp_path / 'legacy.db'}"
    engine = create_engine(url)
    with engine.begin() as conn:
        conn.execute(text(
            "CREATE TABLE experiences (id INTEGER PRIMARY KEY, company TEXT, role TEXT, "
            "achievements TEXT, start_date TEXT, display_order INTEGER)"
        ))
        conn.execute(text(
            "INSERT INTO experiences (company, role, achievements, start_date, display_order) "
            "VALUES ('ACME', 'PM', NULL, '2019-02-01', 2)"
        ))
    engine.dispose()

    source = SqlRowSource(url)
    try:
        dest = MemoryStorage()
        reports = migrate(source, dest, ["experiences", "projects"])
    finally:
        source.close()

    by_table = {r.table: r for r in reports}
    assert by_table["experiences"].copied == 1
    # la fuente no tiene tabla projects: se salta sin fallos
    assert by_table["projects"].total == 0

    exp = dest.find_all("experiences")[0]
    assert (exp.company, exp.title, exp.responsibilities) == ("ACME", "PM", [])
    assert exp.start_date.isoformat() == "2019-02-01"
