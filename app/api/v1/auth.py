"""Login, session verification and logout, plus the auth dependencies used by other routers."""

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from sqlalchemy.orm import Session

from app.core.config import get_settings
from app.core.database import get_db
from app.core.security import (
    PasswordHashError,
    TokenCodec,
    get_token_codec,
    has_role,
)
from app.schemas.auth import (
    CurrentUser,
    LoginRequest,
    LoginResponse,
    LogoutResponse,
    SessionResponse,
    TokenClaims,
)
from app.services.accounts import (
    AccountRepository,
    InMemoryAccountRepository,
    SqlAccountRepository,
    default_accounts,
)
from app.services.auth import authenticate

logger = logging.getLogger(__name__)
router = APIRouter()

BEARER_PREFIX = "Bearer "


def extract_token(request: Request, cookie_name: str) -> str | None:
    """Session token from the auth cookie, else from an Authorization: Bearer header."""
    token = request.cookies.get(cookie_name)
    if token:
        return token
    header = request.headers.get("authorization")
    if header and header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX):].strip() or None
    return None


def resolve_identity(
    request: Request, codec: TokenCodec, cookie_name: str | None = None
) -> CurrentUser | None:
    """
    Identity carried by the request's session token, or None.

    A missing token and an invalid one are indistinguishable to the caller. The
    identity comes from the verified claims alone; accounts are not re-read.
    """
    token = extract_token(request, cookie_name or get_settings().AUTH_COOKIE_NAME)
    if token is None:
        return None
    claims = codec.verify(token)
    if claims is None:
        return None
    return claims.to_user()


@lru_cache
def _memory_repository() -> InMemoryAccountRepository:
    return InMemoryAccountRepository(default_accounts(get_settings()))


def get_account_repository(
    db: Annotated[Session, Depends(get_db)],
) -> AccountRepository:
    """Dependency: the account repository selected by ACCOUNT_BACKEND."""
    if get_settings().ACCOUNT_BACKEND == "database":
        return SqlAccountRepository(db)
    return _memory_repository()


def get_optional_user(
    request: Request,
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> CurrentUser | None:
    """Dependency: the current identity, or None when the request carries no valid token."""
    return resolve_identity(request, codec)


def get_current_user(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> CurrentUser:
    """Dependency: require a valid session token. Raises 401 if missing or invalid."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def require_admin(
    current_user: Annotated[CurrentUser, Depends(get_current_user)],
) -> CurrentUser:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if not has_role(current_user, "admin"):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


def _set_session_cookie(response: Response, token: str, codec: TokenCodec) -> None:
    settings = get_settings()
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        max_age=codec.max_age_seconds,
        path="/",
        httponly=True,
        secure=settings.APP_ENV == "prod",
        samesite="lax",
    )


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    response: Response,
    repository: Annotated[AccountRepository, Depends(get_account_repository)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> LoginResponse:
    """
    Authenticate with an email or username and a password.

    On success the session token is returned in the body and set as an httpOnly
    cookie; send it back either way (cookie, or Authorization: Bearer <token>).
    """
    try:
        account = authenticate(repository, body.identifier, body.password)
    except PasswordHashError as e:
        logger.error("Login aborted: %s", e.message)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Internal server error",
        ) from e
    if account is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials",
        )
    user = account.redacted()
    token = codec.issue(
        TokenClaims(sub=user.id, email=user.email, username=user.username, role=user.role)
    )
    _set_session_cookie(response, token, codec)
    return LoginResponse(user=user, token=token)


@router.get("/verify", response_model=SessionResponse)
def verify_session(
    user: Annotated[CurrentUser | None, Depends(get_optional_user)],
) -> SessionResponse:
    """Return the identity behind the current session credential."""
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return SessionResponse(user=user)


@router.post("/logout", response_model=LogoutResponse)
def logout(response: Response) -> LogoutResponse:
    """
    Drop the session cookie. Tokens are stateless, so one already copied
    elsewhere stays valid until it expires.
    """
    response.delete_cookie(key=get_settings().AUTH_COOKIE_NAME, path="/")
    return LogoutResponse()
