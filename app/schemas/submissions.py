"""Request/response schemas for the public charging-survey form."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class Coordinates(ApiModel):
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class DesiredLocationIn(ApiModel):
    """A proposed charging site, e.g. identifier 'home' or 'work'."""

    identifier: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=2000)
    lat: float | None = Field(default=None, ge=-90, le=90)
    lng: float | None = Field(default=None, ge=-180, le=180)


class SubmissionForm(ApiModel):
    """
    Form payload. Required answers are optional at the schema level so that a
    missing answer is reported by name rather than as a generic validation error.
    """

    vehicle_type: str | None = Field(default=None, max_length=100)
    brand_model: str | None = Field(default=None, max_length=200)
    usage_type: str | None = Field(default=None, max_length=100)
    average_kms_per_day: str | None = Field(default=None, max_length=50)
    usual_charging_schedule: str | None = Field(default=None, max_length=100)
    preference_connector: str | None = Field(default=None, max_length=100)
    primary_charging_location: str | None = Field(default=None, max_length=100)
    charging_address: str | None = Field(default=None, max_length=2000)
    charger_type: str | None = Field(default=None, max_length=100)
    cost_per_km_charged: str | None = Field(default=None, max_length=100)
    full_name: str | None = Field(default=None, max_length=200)
    phone: str | None = Field(default=None, max_length=50)
    email: str | None = Field(default=None, max_length=200)
    desired_locations: list[DesiredLocationIn] = Field(default_factory=list, max_length=50)
    current_charging_location: Coordinates = Field(default_factory=Coordinates)
    recaptcha_token: str | None = None


class SubmissionReceipt(ApiModel):
    submission_id: int
    email: str
    desired_locations_count: int
    timestamp: datetime


class SubmissionCreatedResponse(ApiModel):
    """Response for POST /submissions."""

    success: bool = True
    submission_id: int
    message: str = "Form submitted successfully"
    data: SubmissionReceipt
