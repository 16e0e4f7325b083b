"""Public survey submission endpoint and the admin submissions table."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.orm import Session

from app.api.v1.auth import require_admin
from app.core.config import get_settings
from app.core.constants import AVERAGE_KMS_PER_DAY
from app.core.database import get_db
from app.schemas.analytics import SubmissionsPage
from app.schemas.auth import CurrentUser
from app.schemas.submissions import (
    SubmissionCreatedResponse,
    SubmissionForm,
    SubmissionReceipt,
)
from app.services.analytics import AnalyticsStoreError, list_submissions_page
from app.services.recaptcha import verify_recaptcha
from app.services.submissions import (
    SubmissionStoreError,
    create_submission,
    is_known_distance_bucket,
    is_valid_email,
    missing_required_fields,
)

logger = logging.getLogger(__name__)
router = APIRouter()

MAX_PAGE_SIZE = 100


def _bad_request(message: str, extra: dict[str, object] | None = None) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail={"message": message, **(extra or {})},
    )


@router.post("", response_model=SubmissionCreatedResponse, status_code=201)
async def submit_form(
    body: SubmissionForm,
    db: Annotated[Session, Depends(get_db)],
) -> SubmissionCreatedResponse:
    """
    Store one survey response with its desired charging locations.

    Required answers are checked before anything touches the database; the
    response lists every missing answer by name. When reCAPTCHA is enabled the
    token is verified first.
    """
    settings = get_settings()
    if settings.RECAPTCHA_ENABLED:
        if not body.recaptcha_token:
            raise _bad_request("ReCaptcha token is missing")
        if not await verify_recaptcha(body.recaptcha_token, settings):
            raise _bad_request("Invalid ReCaptcha token")

    missing = missing_required_fields(body)
    if missing:
        logger.info("Submission rejected: missing fields", extra={"missing_fields": missing})
        raise _bad_request(
            f"Please fill in all required fields: {', '.join(missing)}",
            {"error": "Missing required fields", "missingFields": missing},
        )
    if not is_valid_email(body.email or ""):
        raise _bad_request("Invalid email format")
    if not is_known_distance_bucket(body.average_kms_per_day or ""):
        raise _bad_request(
            "Invalid average_kms_per_day",
            {"allowedValues": list(AVERAGE_KMS_PER_DAY)},
        )

    try:
        submission_id = await run_in_threadpool(create_submission, db, body)
    except SubmissionStoreError as e:
        detail: dict[str, str] = {
            "message": "Failed to submit form. Please try again later.",
            "error": e.message,
        }
        if settings.DEBUG and e.cause is not None:
            detail["details"] = str(e.cause)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail
        ) from e

    return SubmissionCreatedResponse(
        submission_id=submission_id,
        data=SubmissionReceipt(
            submission_id=submission_id,
            email=(body.email or "").strip(),
            desired_locations_count=len(body.desired_locations),
            timestamp=datetime.now(UTC),
        ),
    )


@router.get("", response_model=SubmissionsPage)
def read_submissions_page(
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=MAX_PAGE_SIZE)] = 10,
) -> SubmissionsPage:
    """Paginated submissions table, newest first."""
    try:
        rows, total = list_submissions_page(db, page, limit)
    except AnalyticsStoreError as e:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"message": "Unable to retrieve data from database", "error": e.message},
        ) from e
    return SubmissionsPage(submissions=rows, total=total, page=page, limit=limit)
