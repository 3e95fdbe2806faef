"""Install the standard contract templates and optionally an administrator."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from splitfy.application.use_cases.contracts import seed_default_templates
from splitfy.application.use_cases.users import upsert_user
from splitfy.domain.entities import ROLE_ADMIN
from splitfy.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Seed the Splitfy database with contract templates.",
    )
    parser.add_argument(
        "--admin-email",
        default=None,
        help="E-mail of a user to create or promote to administrator (optional)",
    )
    parser.add_argument("--first-name", default=None, help="Administrator first name")
    parser.add_argument("--last-name", default=None, help="Administrator last name")
    return parser.parse_args()


def main() -> None:
    args = parse_args()

    initialize_database()

    session = SessionLocal()
    try:
        templates = seed_default_templates(session)
        admin = None
        if args.admin_email:
            admin = upsert_user(
                session,
                email=args.admin_email,
                first_name=args.first_name,
                last_name=args.last_name,
                role=ROLE_ADMIN,
            )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Seeding failed: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Database error while seeding: {exc}") from exc
    finally:
        session.close()

    print(f"Installed {len(templates)} contract template(s).")
    if admin is not None:
        print(f"Administrator ready: {admin.email} (ID {admin.id})")


if __name__ == "__main__":
    main()
