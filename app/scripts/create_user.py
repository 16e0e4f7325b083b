"""
Create a dashboard account in the users table (used when ACCOUNT_BACKEND=database).
Run from project root:
  python -m app.scripts.create_user EMAIL USERNAME PASSWORD [role]
Example:
  python -m app.scripts.create_user ops@example.com ops your-secure-password admin
"""
import argparse
import logging
import sys

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError

from app.core.database import SessionLocal
from app.core.security import IDENTIFIER_MAX_LEN, PASSWORD_MAX_LEN, hash_password
from app.models.user import User
from app.services.submissions import is_valid_email

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

MIN_PASSWORD_LEN = 8


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a dashboard account (no signup UI).")
    parser.add_argument("email", help="Email address")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help=f"Password ({MIN_PASSWORD_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args()

    email = args.email.strip()
    username = args.username.strip()
    if not is_valid_email(email) or len(email) > IDENTIFIER_MAX_LEN:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not username or len(username) > IDENTIFIER_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if len(args.password) < MIN_PASSWORD_LEN or len(args.password) > PASSWORD_MAX_LEN:
        print(f"Password must be {MIN_PASSWORD_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter(or_(User.email == email, User.username == username))
            .first()
        )
        if existing:
            print("An account with that email or username already exists.", file=sys.stderr)
            return 1
        user = User(
            email=email,
            username=username,
            password_hash=hash_password(args.password),
            role=args.role,
        )
        db.add(user)
        db.commit()
        logger.info("Created account '%s' with role '%s'.", username, args.role)
        return 0
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Account creation failed: %s", e)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
