"""Password hashing, JWT session tokens and role checks."""

import logging
from datetime import UTC, datetime, timedelta
from functools import lru_cache
from typing import Any

import bcrypt
import jwt
from pydantic import ValidationError

from app.core.config import get_settings
from app.schemas.auth import CurrentUser, Role, TokenClaims

logger = logging.getLogger(__name__)

# Bcrypt cost (rounds); fixed so every stored digest costs the same to check.
BCRYPT_ROUNDS = 12

# Min/max lengths for identifier and password validation.
IDENTIFIER_MIN_LEN = 1
IDENTIFIER_MAX_LEN = 255
PASSWORD_MIN_LEN = 1
PASSWORD_MAX_LEN = 128

# admin satisfies every check a user satisfies.
ROLE_RANK: dict[str, int] = {"user": 1, "admin": 2}


class PasswordHashError(Exception):
    """Raised when a stored password digest cannot be parsed."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def hash_password(plain_password: str) -> str:
    """Hash a plain-text password for storage. Do not store plain passwords."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=BCRYPT_ROUNDS)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """
    Verify a plain password against a stored hash.

    Returns False on mismatch. Raises PasswordHashError when the digest itself is
    malformed, which is a deployment problem rather than a wrong password.
    """
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError, AttributeError) as e:
        raise PasswordHashError("Stored password hash is malformed.") from e


def has_role(identity: CurrentUser, required_role: Role) -> bool:
    """True when identity's role is at least required_role."""
    return ROLE_RANK.get(identity.role, 0) >= ROLE_RANK[required_role]


class TokenCodec:
    """
    Signs and verifies session tokens.

    The signing secret, algorithm, issuer, audience and lifetime are fixed at
    construction. verify() collapses every failure to None so callers cannot tell
    an expired token from a forged one.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        issuer: str = "ev-charging-network",
        audience: str = "ev-charging-users",
        lifetime: timedelta = timedelta(days=7),
    ) -> None:
        if not secret:
            raise ValueError("Token signing secret must be non-empty")
        self._secret = secret
        self.algorithm = algorithm
        self.issuer = issuer
        self.audience = audience
        self.lifetime = lifetime

    def issue(self, claims: TokenClaims, now: datetime | None = None) -> str:
        """Encode claims with iat/exp/iss/aud and sign them."""
        issued_at = now or datetime.now(UTC)
        payload: dict[str, Any] = {
            "sub": claims.sub,
            "email": claims.email,
            "username": claims.username,
            "role": claims.role,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
            "iss": self.issuer,
            "aud": self.audience,
        }
        return jwt.encode(payload, self._secret, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims | None:
        """Return the verified claims, or None when the token is invalid for any reason."""
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self.algorithm],
                issuer=self.issuer,
                audience=self.audience,
                options={"require": ["exp", "iat", "iss", "aud", "sub"]},
            )
        except jwt.PyJWTError as e:
            logger.debug("Token rejected: %s", type(e).__name__)
            return None
        try:
            return TokenClaims.model_validate(payload)
        except ValidationError:
            logger.debug("Token rejected: unexpected claim shape")
            return None

    @property
    def max_age_seconds(self) -> int:
        return int(self.lifetime.total_seconds())


@lru_cache
def get_token_codec() -> TokenCodec:
    """Codec built from settings; shared by the login route and the session dependencies."""
    settings = get_settings()
    return TokenCodec(
        settings.JWT_SECRET.get_secret_value(),
        algorithm=settings.JWT_ALGORITHM,
        issuer=settings.JWT_ISSUER,
        audience=settings.JWT_AUDIENCE,
        lifetime=timedelta(minutes=settings.JWT_EXPIRE_MINUTES),
    )
