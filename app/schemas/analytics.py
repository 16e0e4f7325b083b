"""Schemas for dashboard analytics: filters, grouped counts and raw rows."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import ApiModel


class AnalyticsFilters(ApiModel):
    """Optional equality filters; None, blank or 'all' means no constraint."""

    vehicle_type: str | None = Field(default=None, max_length=100)
    usage_type: str | None = Field(default=None, max_length=100)
    location_type: str | None = Field(
        default=None,
        max_length=100,
        description="Matches the submission's primary charging location.",
    )


class GroupCount(ApiModel):
    """One group of a grouped count."""

    label: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class MonthlyCount(ApiModel):
    """Submissions in one calendar month (YYYY-MM)."""

    month: str
    count: int = Field(..., ge=0)
    percentage: float = Field(..., ge=0, le=100)


class AnalyticsResult(ApiModel):
    """All dashboard aggregates for one filter set."""

    vehicle_types: list[GroupCount] = Field(default_factory=list)
    usage_types: list[GroupCount] = Field(default_factory=list)
    charging_locations: list[GroupCount] = Field(default_factory=list)
    km_ranges: list[GroupCount] = Field(default_factory=list)
    desired_location_counts: list[GroupCount] = Field(default_factory=list)
    monthly_data: list[MonthlyCount] = Field(default_factory=list)
    total_submissions: int = 0
    total_locations: int = 0


class AnalyticsMeta(ApiModel):
    total_submissions: int
    total_locations: int
    filters_applied: AnalyticsFilters | None = None
    timestamp: datetime


class AnalyticsResponse(ApiModel):
    success: bool = True
    data: AnalyticsResult
    meta: AnalyticsMeta


class AnalyticsQuery(ApiModel):
    """Body for POST /analytics."""

    filters: AnalyticsFilters = Field(default_factory=AnalyticsFilters)


class SubmissionRecord(ApiModel):
    """Raw submission row for tables, maps and heatmaps."""

    id: int
    vehicle_type: str
    brand_model: str
    usage_type: str
    average_kms_per_day: str
    preference_connector: str | None = None
    usual_charging_schedule: str | None = None
    primary_charging_location: str
    charging_address: str
    charging_latitude: float | None = None
    charging_longitude: float | None = None
    charger_type: str
    cost_per_km_charged: str | None = None
    full_name: str
    phone: str
    email: str
    created_at: datetime | None = None
    updated_at: datetime | None = None


class DesiredLocationRecord(ApiModel):
    """Raw desired-location row."""

    id: int
    submission_id: int
    identifier: str
    address: str
    latitude: float | None = None
    longitude: float | None = None
    created_at: datetime | None = None


class SubmissionsData(ApiModel):
    submissions: list[SubmissionRecord] = Field(default_factory=list)
    locations: list[DesiredLocationRecord] = Field(default_factory=list)


class SubmissionsMeta(ApiModel):
    submission_count: int
    location_count: int
    filters_applied: AnalyticsFilters | None = None
    timestamp: datetime


class SubmissionsResponse(ApiModel):
    """Response for GET /analytics/submissions."""

    success: bool = True
    data: SubmissionsData
    meta: SubmissionsMeta


class SubmissionsPage(ApiModel):
    """One page of the submissions table."""

    submissions: list[SubmissionRecord]
    total: int
    page: int
    limit: int


class FilterOptions(ApiModel):
    """Answer vocabularies the dashboard offers as filter choices."""

    vehicle_types: list[str]
    usage_types: list[str]
    location_types: list[str]
    km_ranges: list[str]
    charger_types: list[str]
    cost_per_kwh: list[str]
