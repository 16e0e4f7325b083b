"""Persist public form submissions together with their desired locations."""

import logging
import re

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.constants import AVERAGE_KMS_PER_DAY
from app.models import DesiredLocation, Submission
from app.schemas.submissions import SubmissionForm

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

# Answers that must be non-empty, in the order they are reported when missing.
REQUIRED_FIELDS = (
    "vehicle_type",
    "brand_model",
    "usage_type",
    "average_kms_per_day",
    "primary_charging_location",
    "charging_address",
    "charger_type",
    "full_name",
    "phone",
    "email",
)


class SubmissionStoreError(Exception):
    """Raised when a submission cannot be written; the transaction has been rolled back."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def missing_required_fields(form: SubmissionForm) -> list[str]:
    """Names of required answers that are absent or blank."""
    missing = []
    for name in REQUIRED_FIELDS:
        value = getattr(form, name)
        if value is None or not value.strip():
            missing.append(name)
    return missing


def is_valid_email(email: str) -> bool:
    return bool(EMAIL_PATTERN.match(email.strip()))


def is_known_distance_bucket(value: str) -> bool:
    return value in AVERAGE_KMS_PER_DAY


def create_submission(db: Session, form: SubmissionForm) -> int:
    """
    Insert one submission and all of its desired locations in a single transaction.

    Returns the new submission id. On any database error the whole transaction is
    rolled back, so a submission is never visible without its locations (or
    locations without their submission), and SubmissionStoreError is raised.
    """
    coords = form.current_charging_location
    submission = Submission(
        vehicle_type=form.vehicle_type,
        brand_model=form.brand_model,
        usage_type=form.usage_type,
        average_kms_per_day=form.average_kms_per_day,
        preference_connector=form.preference_connector or None,
        usual_charging_schedule=form.usual_charging_schedule or None,
        primary_charging_location=form.primary_charging_location,
        charging_address=form.charging_address,
        charging_latitude=coords.lat,
        charging_longitude=coords.lng,
        charger_type=form.charger_type,
        cost_per_km_charged=form.cost_per_km_charged or None,
        full_name=form.full_name,
        phone=form.phone,
        email=(form.email or "").strip(),
    )
    try:
        db.add(submission)
        db.flush()
        submission_id = submission.id
        for location in form.desired_locations:
            db.add(
                DesiredLocation(
                    submission_id=submission_id,
                    identifier=location.identifier,
                    address=location.address,
                    latitude=location.lat,
                    longitude=location.lng,
                )
            )
            db.flush()
        db.commit()
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Submission insert failed; transaction rolled back")
        raise SubmissionStoreError("Failed to save form submission.", cause=e) from e

    logger.info(
        "Form submission stored",
        extra={
            "submission_id": submission_id,
            "vehicle_type": form.vehicle_type,
            "desired_locations_count": len(form.desired_locations),
        },
    )
    return submission_id
