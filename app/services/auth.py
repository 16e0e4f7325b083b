"""Login flow: resolve an account by identifier and check its password."""

import logging

from app.core.security import verify_password
from app.schemas.auth import Account
from app.services.accounts import AccountRepository

logger = logging.getLogger(__name__)


def authenticate(
    repository: AccountRepository, identifier: str, password: str
) -> Account | None:
    """
    Return the account when identifier (email or username, exact match) and
    password are correct, else None. An unknown identifier and a wrong password
    give the same result.

    Raises PasswordHashError if the stored digest is malformed.
    """
    account = repository.find_by_identifier(identifier)
    if account is None:
        logger.info("Login failed: unknown identifier")
        return None
    if not verify_password(password, account.password_hash):
        logger.info("Login failed: wrong password", extra={"account_id": account.id})
        return None
    logger.info("Login succeeded", extra={"account_id": account.id, "role": account.role})
    return account
