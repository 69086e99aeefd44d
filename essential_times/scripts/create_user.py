"""
Create an account (e.g. an extra reporter). Run from project root:
  python -m essential_times.scripts.create_user EMAIL PASSWORD NAME [role]
Example:
  python -m essential_times.scripts.create_user kim@esil.com your-secure-password 김기자 reporter
"""
import argparse
import sys

from essential_times.core.database import SessionLocal, init_db
from essential_times.models.user import ROLE_USER, ROLES
from essential_times.services.errors import ServiceError
from essential_times.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create an Essential Times account.")
    parser.add_argument("email", help="Login email (unique)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("name", help="Display name shown as the article author")
    parser.add_argument("role", nargs="?", default=ROLE_USER, choices=list(ROLES))
    args = parser.parse_args(argv)

    init_db()
    db = SessionLocal()
    try:
        user = create_user(db, args.email, args.password, args.name, role=args.role)
    except ServiceError as e:
        print(e.message, file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
