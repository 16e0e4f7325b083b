"""Pydantic request/response schemas."""

from app.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsResponse,
    AnalyticsResult,
    GroupCount,
    MonthlyCount,
    SubmissionsData,
)
from app.schemas.auth import (
    Account,
    CurrentUser,
    LoginRequest,
    LoginResponse,
    TokenClaims,
)
from app.schemas.health import HealthResponse
from app.schemas.submissions import (
    DesiredLocationIn,
    SubmissionCreatedResponse,
    SubmissionForm,
)

__all__ = [
    "Account",
    "AnalyticsFilters",
    "AnalyticsResponse",
    "AnalyticsResult",
    "CurrentUser",
    "DesiredLocationIn",
    "GroupCount",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MonthlyCount",
    "SubmissionCreatedResponse",
    "SubmissionForm",
    "SubmissionsData",
    "TokenClaims",
]
