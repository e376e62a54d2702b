# scripts/create_admin.py
# Crea el usuario admin o resetea su contraseña:
#   ADMIN_PASSWORD=... python -m scripts.create_admin --username admin --email me@site.dev
from __future__ import annotations

import argparse
import getpass
import os
import sys

from portfolio.core.logging import configure_logging
from portfolio.services.auth_service import upsert_admin
from portfolio.storage.factory import open_storage


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Create or reset the admin user.")
    p.add_argument("--username", default=os.getenv("ADMIN_USERNAME", "admin"))
    p.add_argument("--email", default=os.getenv("ADMIN_EMAIL", ""))
    p.add_argument("--password", default=os.getenv("ADMIN_PASSWORD"))
    args = p.parse_args(argv)
    configure_logging()

    password = args.password or getpass.getpass("Admin password: ")
    if len(password) < 8:
        print("Password must be at least 8 characters", file=sys.stderr)
        return 2

    with open_storage() as storage:
        user = upsert_admin(storage, args.username, password, args.email)
    print(f"OK admin id={user.id} username={user.username}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
