"""
Create a user (e.g. the first super admin). Run from project root:
  python -m app.scripts.create_user EMAIL PASSWORD "FULL NAME" [role]
Example:
  python -m app.scripts.create_user admin@example.com 'S3cure-pass' "Site Admin" super_admin
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.errors import AuthServiceError
from app.entities.role import CANONICAL_ROLES
from app.repositories import roles as role_repository
from app.services import auth as auth_service
from app.services import roles as role_service

ROLE_CHOICES = [role.name for role in CANONICAL_ROLES]


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a WC Check user.")
    parser.add_argument("email", help="Account email")
    parser.add_argument("password", help="Password (8-128 chars, a letter and a digit)")
    parser.add_argument("full_name", help="Full name")
    parser.add_argument("role", nargs="?", default="user", choices=ROLE_CHOICES)
    args = parser.parse_args()

    canonical = next(role for role in CANONICAL_ROLES if role.name == args.role)

    db = SessionLocal()
    try:
        try:
            user = auth_service.register(
                db,
                email=args.email.strip(),
                password=args.password,
                full_name=args.full_name.strip(),
            )
        except AuthServiceError as e:
            print(e.message, file=sys.stderr)
            return 1
        if args.role != user.role:
            role = role_repository.get_role_by_name_level(db, canonical.name, canonical.level)
            if role is None:
                print(
                    f"Role '{args.role}' does not exist; run python -m app.scripts.seed_roles first.",
                    file=sys.stderr,
                )
                return 1
            role_service.assign_role(db, user.id, role.id)
        print(f"Created user '{user.email}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
