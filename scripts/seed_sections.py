# scripts/seed_sections.py
# Seed idempotente: crea las secciones hero/about/contact si aún no existen
from __future__ import annotations

import sys

from portfolio.core.logging import configure_logging
from portfolio.schemas.content import SectionCreate
from portfolio.services.section_service import validate_section_content
from portfolio.storage.base import Storage
from portfolio.storage.factory import open_storage

DEFAULT_SECTIONS = [
    SectionCreate(
        type="hero",
        title="Your Name",
        subtitle="Project Manager & App Developer",
        content={
            "description": "Experienced project manager building applications and self-hosted solutions.",
            "ctaText": "View My Work",
            "ctaLink": "#projects",
            "backgroundImage": "/images/hero-bg.jpg",
        },
        order=0,
    ),
    SectionCreate(
        type="about",
        title="About Me",
        subtitle="My Background & Expertise",
        content={
            "bio": "Project manager with years of experience in technology and product development.",
            "skills": ["Project Management", "Agile Methodologies", "Web Development", "DevOps"],
            "image": "/images/profile.jpg",
        },
        order=1,
    ),
    SectionCreate(
        type="contact",
        title="Get In Touch",
        subtitle="Let's Connect",
        content={
            "email": "hello@example.com",
            "linkedin": "https://linkedin.com/in/example",
            "github": "https://github.com/example",
            "location": "San Francisco, CA",
        },
        order=2,
    ),
]


def seed(storage: Storage) -> int:
    created = 0
    for section in DEFAULT_SECTIONS:
        if storage.get_sections_by_type(section.type):
            print(f"= {section.type} already present")
            continue
        validate_section_content(section.type, section.content)
        item = storage.create("sections", section)
        print(f"+ {section.type} id={item.id}")
        created += 1
    return created


def main() -> int:
    configure_logging()
    with open_storage() as storage:
        n = seed(storage)
    print(f"OK seeded {n} section(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
