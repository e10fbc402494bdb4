"""
Create a supervisor (administrator). Run from project root:
  python -m portal.scripts.create_supervisor EMAIL NAME PASSWORD [--permission P ...]
Example:
  python -m portal.scripts.create_supervisor admin@example.org "Admin" 'a-strong-pass1'
Without --permission the full default permission set is granted.
"""
import argparse
import sys

from portal.core.database import SessionLocal
from portal.core.logging_config import configure_logging
from portal.models import User
from portal.services.identity_store import DEFAULT_SUPERVISOR_PERMISSIONS, create_supervisor
from portal.services.validation import validate_email, validate_password


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a supervisor account (no registration UI).")
    parser.add_argument("email", help="Login email")
    parser.add_argument("name", help="Display name")
    parser.add_argument("password", help="Password (8+ chars, at least one letter and one digit)")
    parser.add_argument(
        "--permission",
        action="append",
        dest="permissions",
        metavar="PERMISSION",
        help=f"Grant a permission (repeatable). Default: {', '.join(DEFAULT_SUPERVISOR_PERMISSIONS)}",
    )
    args = parser.parse_args(argv)
    configure_logging()

    email = args.email.strip()
    name = args.name.strip()
    if not validate_email(email):
        print("Invalid email.", file=sys.stderr)
        return 1
    if not name:
        print("Name must not be empty.", file=sys.stderr)
        return 1
    password_check = validate_password(args.password)
    if not password_check.is_valid:
        print("Weak password: " + "; ".join(password_check.errors), file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = db.query(User).filter(User.email == email).first()
        if existing:
            print(f"User '{email}' already exists.", file=sys.stderr)
            return 1
        supervisor = create_supervisor(db, email, name, args.password, args.permissions)
        if supervisor is None:
            print(f"Could not create supervisor '{email}'; see log.", file=sys.stderr)
            return 1
        print(f"Created supervisor '{email}' with permissions: {', '.join(supervisor.permissions)}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
