# scripts/add_blog_post.py
# Crea un post desde un archivo HTML:
#   python -m scripts.add_blog_post --title "Hola" --file post.html --category devops --tags python,fastapi --publish
from __future__ import annotations

import argparse
import sys
from pathlib import Path

from portfolio.core.logging import configure_logging
from portfolio.schemas.blog import BlogPostCreate
from portfolio.services import blog_service
from portfolio.storage.factory import open_storage


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Create a blog post from an HTML file.")
    p.add_argument("--title", required=True)
    p.add_argument("--file", required=True, type=Path, help="HTML body")
    p.add_argument("--excerpt", default="")
    p.add_argument("--slug", default=None)
    p.add_argument("--category", default=None, help="Category slug (created if missing)")
    p.add_argument("--tags", default="", help="Comma separated")
    p.add_argument("--image", default=None, help="Featured image URL")
    p.add_argument("--publish", action="store_true")
    args = p.parse_args(argv)
    configure_logging()

    content = args.file.read_text(encoding="utf-8")

    with open_storage() as storage:
        category_id = None
        if args.category:
            cat = storage.get_blog_category_by_slug(args.category)
            if cat is None:
                cat = storage.create("blog_categories", {
                    "name": args.category.replace("-", " ").title(),
                    "slug": args.category,
                })
            category_id = cat.id

        payload = BlogPostCreate(
            title=args.title,
            slug=args.slug,
            excerpt=args.excerpt,
            content=content,
            featured_image=args.image,
            category_id=category_id,
            tags=[t.strip() for t in args.tags.split(",") if t.strip()],
            status="published" if args.publish else "draft",
        )
        post = blog_service.create_post(storage, payload)

    print(f"OK post id={post.id} slug={post.slug} status={post.status}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
