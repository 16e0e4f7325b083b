"""Dashboard analytics endpoints (admin only): aggregates, raw rows and filter options."""

import logging
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.orm import Session

from app.api.v1.auth import get_current_user, require_admin
from app.core import constants
from app.core.config import get_settings
from app.core.database import get_db
from app.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsMeta,
    AnalyticsQuery,
    AnalyticsResponse,
    FilterOptions,
    SubmissionsMeta,
    SubmissionsResponse,
)
from app.schemas.auth import CurrentUser
from app.services.analytics import AnalyticsStoreError, get_analytics, get_submissions

logger = logging.getLogger(__name__)
router = APIRouter()


def query_filters(
    vehicle_type: Annotated[str | None, Query(alias="vehicleType", max_length=100)] = None,
    usage_type: Annotated[str | None, Query(alias="usageType", max_length=100)] = None,
    location_type: Annotated[str | None, Query(alias="locationType", max_length=100)] = None,
) -> AnalyticsFilters:
    """Dependency: filter set from ?vehicleType=&usageType=&locationType=."""
    return AnalyticsFilters(
        vehicle_type=vehicle_type,
        usage_type=usage_type,
        location_type=location_type,
    )


def _storage_unavailable(e: AnalyticsStoreError) -> HTTPException:
    detail: dict[str, str] = {
        "message": "Unable to retrieve data from database",
        "error": e.message,
    }
    if get_settings().DEBUG and e.cause is not None:
        detail["details"] = str(e.cause)
    return HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=detail)


def _analytics_response(db: Session, filters: AnalyticsFilters) -> AnalyticsResponse:
    try:
        data = get_analytics(db, filters)
    except AnalyticsStoreError as e:
        raise _storage_unavailable(e) from e
    return AnalyticsResponse(
        data=data,
        meta=AnalyticsMeta(
            total_submissions=data.total_submissions,
            total_locations=data.total_locations,
            filters_applied=filters,
            timestamp=datetime.now(UTC),
        ),
    )


@router.get("", response_model=AnalyticsResponse)
def read_analytics(
    filters: Annotated[AnalyticsFilters, Depends(query_filters)],
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> AnalyticsResponse:
    """
    Grouped counts and totals for the dashboard charts.

    Groups: vehicle type, usage type, primary charging location, daily distance
    bucket, desired-location identifier and submission month (latest 12). Each
    group carries its share of the filtered total as a percentage.
    """
    return _analytics_response(db, filters)


@router.post("", response_model=AnalyticsResponse)
def filter_analytics(
    body: AnalyticsQuery,
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> AnalyticsResponse:
    """Same as GET, with filters sent as {"filters": {...}} in the body."""
    logger.info("Filtered analytics request", extra={"filters": body.filters.model_dump()})
    return _analytics_response(db, body.filters)


@router.get("/submissions", response_model=SubmissionsResponse)
def read_submissions(
    filters: Annotated[AnalyticsFilters, Depends(query_filters)],
    db: Annotated[Session, Depends(get_db)],
    _admin: Annotated[CurrentUser, Depends(require_admin)],
) -> SubmissionsResponse:
    """Raw submissions and desired locations for the map and heatmap."""
    try:
        data = get_submissions(db, filters)
    except AnalyticsStoreError as e:
        raise _storage_unavailable(e) from e
    return SubmissionsResponse(
        data=data,
        meta=SubmissionsMeta(
            submission_count=len(data.submissions),
            location_count=len(data.locations),
            filters_applied=filters,
            timestamp=datetime.now(UTC),
        ),
    )


@router.get("/options", response_model=FilterOptions)
def read_filter_options(
    _user: Annotated[CurrentUser, Depends(get_current_user)],
) -> FilterOptions:
    """Answer vocabularies offered as dashboard filter choices."""
    return FilterOptions(
        vehicle_types=list(constants.VEHICLE_TYPES),
        usage_types=list(constants.USAGE_TYPES),
        location_types=list(constants.PRIMARY_CHARGING_LOCATIONS),
        km_ranges=list(constants.AVERAGE_KMS_PER_DAY),
        charger_types=list(constants.CHARGER_TYPES),
        cost_per_kwh=list(constants.COST_PER_KWH),
    )
