"""Account repositories: where the login flow looks up dashboard accounts."""

from typing import Protocol

from sqlalchemy import or_
from sqlalchemy.orm import Session

from app.core.config import Settings
from app.core.security import hash_password
from app.models.user import User
from app.schemas.auth import Account


class AccountRepository(Protocol):
    """Lookup of an account by exact email or username."""

    def find_by_identifier(self, identifier: str) -> Account | None: ...


class InMemoryAccountRepository:
    """Fixed accounts created at deployment time."""

    def __init__(self, accounts: list[Account]) -> None:
        self._accounts = list(accounts)

    def find_by_identifier(self, identifier: str) -> Account | None:
        for account in self._accounts:
            if account.email == identifier or account.username == identifier:
                return account
        return None


class SqlAccountRepository:
    """Accounts stored in the users table (see app.scripts.create_user)."""

    def __init__(self, db: Session) -> None:
        self._db = db

    def find_by_identifier(self, identifier: str) -> Account | None:
        user = (
            self._db.query(User)
            .filter(or_(User.email == identifier, User.username == identifier))
            .order_by(User.id)
            .first()
        )
        if user is None:
            return None
        return Account(
            id=str(user.id),
            email=user.email,
            username=user.username,
            password_hash=user.password_hash,
            role=user.role,
        )


def default_accounts(settings: Settings) -> list[Account]:
    """The two deployment accounts: an admin and a read-only demo user."""
    return [
        Account(
            id="1",
            email="admin@evcharging.com",
            username="admin",
            password_hash=hash_password(settings.ADMIN_PASSWORD.get_secret_value()),
            role="admin",
        ),
        Account(
            id="2",
            email="demo@evcharging.com",
            username="demo",
            password_hash=hash_password(settings.DEMO_PASSWORD.get_secret_value()),
            role="user",
        ),
    ]
