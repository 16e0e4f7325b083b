"""Request/response schemas for auth endpoints."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["admin", "user"]


class LoginRequest(BaseModel):
    """Credentials for login. identifier is an email address or a username."""

    identifier: str = Field(
        ..., min_length=1, max_length=255, description="Email or username"
    )
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class Account(BaseModel):
    """Login-capable account as held by an account repository."""

    id: str
    email: str
    username: str
    password_hash: str
    role: Role

    def redacted(self) -> "CurrentUser":
        return CurrentUser(
            id=self.id, email=self.email, username=self.username, role=self.role
        )


class CurrentUser(BaseModel):
    """Authenticated identity (no password hash) for dependency injection."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    username: str
    role: Role


class TokenClaims(BaseModel):
    """Identity claims carried in a session token."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(..., min_length=1, description="Account id")
    email: str
    username: str
    role: Role

    def to_user(self) -> CurrentUser:
        return CurrentUser(
            id=self.sub, email=self.email, username=self.username, role=self.role
        )


class LoginResponse(BaseModel):
    """Successful login: redacted user plus the session token."""

    success: bool = True
    user: CurrentUser
    token: str = Field(..., description="JWT session token; also set as a cookie")
    message: str = "Authentication successful"


class SessionResponse(BaseModel):
    """Response for GET /auth/verify."""

    success: bool = True
    user: CurrentUser
    message: str = "User authenticated"


class LogoutResponse(BaseModel):
    """Response for POST /auth/logout; always successful."""

    success: bool = True
    message: str = "Logged out"
