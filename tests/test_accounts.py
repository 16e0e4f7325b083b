"""Tests for account repositories and the login flow in app.services.auth."""

import unittest
from unittest.mock import MagicMock

from pydantic import SecretStr
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.core.security import PasswordHashError, hash_password
from app.models import Base, User
from app.schemas.auth import Account
from app.services.accounts import (
    InMemoryAccountRepository,
    SqlAccountRepository,
    default_accounts,
)
from app.services.auth import authenticate

ADMIN_HASH = hash_password("admin123")
DEMO_HASH = hash_password("demo123")


def _repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository(
        [
            Account(
                id="1",
                email="admin@evcharging.com",
                username="admin",
                password_hash=ADMIN_HASH,
                role="admin",
            ),
            Account(
                id="2",
                email="demo@evcharging.com",
                username="demo",
                password_hash=DEMO_HASH,
                role="user",
            ),
        ]
    )


class TestInMemoryRepository(unittest.TestCase):
    def test_find_by_username_and_email(self) -> None:
        repo = _repository()
        self.assertEqual(repo.find_by_identifier("admin").id, "1")
        self.assertEqual(repo.find_by_identifier("demo@evcharging.com").id, "2")

    def test_exact_match_only(self) -> None:
        repo = _repository()
        self.assertIsNone(repo.find_by_identifier("Admin"))
        self.assertIsNone(repo.find_by_identifier("admin "))
        self.assertIsNone(repo.find_by_identifier("nobody"))


class TestDefaultAccounts(unittest.TestCase):
    def test_admin_and_demo(self) -> None:
        settings = MagicMock()
        settings.ADMIN_PASSWORD = SecretStr("admin123")
        settings.DEMO_PASSWORD = SecretStr("demo123")
        accounts = default_accounts(settings)
        self.assertEqual(
            [(a.username, a.role) for a in accounts], [("admin", "admin"), ("demo", "user")]
        )
        repo = InMemoryAccountRepository(accounts)
        self.assertIsNotNone(authenticate(repo, "admin", "admin123"))
        self.assertIsNotNone(authenticate(repo, "demo", "demo123"))


class TestAuthenticate(unittest.TestCase):
    """Unknown identifier and wrong password both return None."""

    def test_success_by_username(self) -> None:
        account = authenticate(_repository(), "admin", "admin123")
        self.assertIsNotNone(account)
        assert account is not None
        self.assertEqual(account.role, "admin")
        self.assertNotIn("password_hash", account.redacted().model_dump())

    def test_success_by_email(self) -> None:
        account = authenticate(_repository(), "demo@evcharging.com", "demo123")
        self.assertIsNotNone(account)
        assert account is not None
        self.assertEqual(account.role, "user")

    def test_wrong_password(self) -> None:
        self.assertIsNone(authenticate(_repository(), "admin", "wrong"))

    def test_unknown_identifier(self) -> None:
        self.assertIsNone(authenticate(_repository(), "ghost", "admin123"))

    def test_malformed_hash_is_an_error(self) -> None:
        repo = InMemoryAccountRepository(
            [
                Account(
                    id="9",
                    email="broken@evcharging.com",
                    username="broken",
                    password_hash="plaintext",
                    role="user",
                )
            ]
        )
        with self.assertRaises(PasswordHashError):
            authenticate(repo, "broken", "whatever")


class TestSqlRepository(unittest.TestCase):
    """SqlAccountRepository reads accounts from the users table."""

    def setUp(self) -> None:
        engine = create_engine(
            "sqlite://",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        Base.metadata.create_all(engine)
        self.db = sessionmaker(bind=engine)()
        self.db.add(
            User(
                email="ops@example.com",
                username="ops",
                password_hash=ADMIN_HASH,
                role="admin",
            )
        )
        self.db.commit()

    def tearDown(self) -> None:
        self.db.close()

    def test_lookup(self) -> None:
        repo = SqlAccountRepository(self.db)
        by_email = repo.find_by_identifier("ops@example.com")
        by_username = repo.find_by_identifier("ops")
        self.assertIsNotNone(by_email)
        self.assertEqual(by_email, by_username)
        assert by_email is not None
        self.assertEqual(by_email.role, "admin")
        self.assertIsInstance(by_email.id, str)
        self.assertIsNone(repo.find_by_identifier("OPS"))

    def test_login_through_sql_repository(self) -> None:
        repo = SqlAccountRepository(self.db)
        self.assertIsNotNone(authenticate(repo, "ops", "admin123"))
        self.assertIsNone(authenticate(repo, "ops", "nope"))


if __name__ == "__main__":
    unittest.main()
