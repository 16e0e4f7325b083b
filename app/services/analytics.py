"""Dashboard analytics: grouped counts, totals and raw rows over filtered submissions."""

import logging
from typing import Any

from sqlalchemy import Select, extract, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, aliased

from app.models import DesiredLocation, Submission
from app.schemas.analytics import (
    AnalyticsFilters,
    AnalyticsResult,
    DesiredLocationRecord,
    GroupCount,
    MonthlyCount,
    SubmissionRecord,
    SubmissionsData,
)
from app.services.filters import FilterPredicate, build_filter

logger = logging.getLogger(__name__)

MONTHLY_WINDOW = 12


class AnalyticsStoreError(Exception):
    """Raised when an analytics query fails at the database."""

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        self.message = message
        self.cause = cause
        super().__init__(message)


def _percentage(count: int, total: int) -> float:
    if total <= 0:
        return 0.0
    return round(count * 100.0 / total, 1)


def _where(stmt: Select[Any], clauses: list[Any]) -> Select[Any]:
    return stmt.where(*clauses) if clauses else stmt


def _count_by(db: Session, column: Any, predicate: FilterPredicate) -> list[tuple[str, int]]:
    """Submissions grouped by one column, largest group first."""
    count = func.count(Submission.id).label("count")
    stmt = _where(select(column, count), predicate.for_submissions())
    stmt = stmt.group_by(column).order_by(count.desc())
    return [(label, int(n)) for label, n in db.execute(stmt).all()]


def _count_desired_by_identifier(
    db: Session, predicate: FilterPredicate
) -> list[tuple[str, int]]:
    efs = aliased(Submission, name="efs")
    count = func.count(DesiredLocation.id).label("count")
    stmt = select(DesiredLocation.identifier, count).join(
        efs, DesiredLocation.submission_id == efs.id
    )
    stmt = _where(stmt, predicate.for_join(efs))
    stmt = stmt.group_by(DesiredLocation.identifier).order_by(count.desc())
    return [(label, int(n)) for label, n in db.execute(stmt).all()]


def _count_by_month(db: Session, predicate: FilterPredicate) -> list[tuple[str, int]]:
    """Submissions per calendar month, most recent first, limited to MONTHLY_WINDOW months."""
    year = extract("year", Submission.created_at).label("year")
    month = extract("month", Submission.created_at).label("month")
    count = func.count(Submission.id).label("count")
    stmt = _where(select(year, month, count), predicate.for_submissions())
    stmt = (
        stmt.group_by(year, month)
        .order_by(year.desc(), month.desc())
        .limit(MONTHLY_WINDOW)
    )
    return [
        (f"{int(y):04d}-{int(m):02d}", int(n))
        for y, m, n in db.execute(stmt).all()
    ]


def _total_submissions(db: Session, predicate: FilterPredicate) -> int:
    stmt = _where(
        select(func.count(Submission.id)), predicate.for_submissions()
    )
    return int(db.scalar(stmt) or 0)


def _total_desired_locations(db: Session, predicate: FilterPredicate) -> int:
    efs = aliased(Submission, name="efs")
    stmt = select(func.count(DesiredLocation.id)).join(
        efs, DesiredLocation.submission_id == efs.id
    )
    stmt = _where(stmt, predicate.for_join(efs))
    return int(db.scalar(stmt) or 0)


def _groups(rows: list[tuple[str, int]], total: int) -> list[GroupCount]:
    return [
        GroupCount(label=label, count=n, percentage=_percentage(n, total))
        for label, n in rows
    ]


def get_analytics(db: Session, filters: AnalyticsFilters | None = None) -> AnalyticsResult:
    """
    Run every dashboard aggregate under one filter set.

    All eight queries share the same predicate and read through the same session,
    so they see one consistent view of the data. Percentages are relative to the
    filtered submission total, except desired-location groups which are relative
    to the filtered location total.
    """
    predicate = build_filter(filters)
    try:
        total_submissions = _total_submissions(db, predicate)
        total_locations = _total_desired_locations(db, predicate)
        vehicle_types = _count_by(db, Submission.vehicle_type, predicate)
        usage_types = _count_by(db, Submission.usage_type, predicate)
        charging_locations = _count_by(db, Submission.primary_charging_location, predicate)
        km_ranges = _count_by(db, Submission.average_kms_per_day, predicate)
        desired = _count_desired_by_identifier(db, predicate)
        monthly = _count_by_month(db, predicate)
    except SQLAlchemyError as e:
        logger.exception("Analytics query failed")
        raise AnalyticsStoreError("Failed to retrieve analytics.", cause=e) from e

    logger.info(
        "Analytics computed",
        extra={
            "filter_count": len(predicate.conditions),
            "total_submissions": total_submissions,
            "total_locations": total_locations,
        },
    )
    return AnalyticsResult(
        vehicle_types=_groups(vehicle_types, total_submissions),
        usage_types=_groups(usage_types, total_submissions),
        charging_locations=_groups(charging_locations, total_submissions),
        km_ranges=_groups(km_ranges, total_submissions),
        desired_location_counts=_groups(desired, total_locations),
        monthly_data=[
            MonthlyCount(month=m, count=n, percentage=_percentage(n, total_submissions))
            for m, n in monthly
        ],
        total_submissions=total_submissions,
        total_locations=total_locations,
    )


def get_submissions(db: Session, filters: AnalyticsFilters | None = None) -> SubmissionsData:
    """Raw submissions and their desired locations under a filter set, newest first."""
    predicate = build_filter(filters)
    efs = aliased(Submission, name="efs")
    submissions_stmt = _where(select(Submission), predicate.for_submissions()).order_by(
        Submission.created_at.desc(), Submission.id.desc()
    )
    locations_stmt = _where(
        select(DesiredLocation).join(efs, DesiredLocation.submission_id == efs.id),
        predicate.for_join(efs),
    ).order_by(DesiredLocation.created_at.desc(), DesiredLocation.id.desc())
    try:
        submissions = db.scalars(submissions_stmt).all()
        locations = db.scalars(locations_stmt).all()
    except SQLAlchemyError as e:
        logger.exception("Submissions query failed")
        raise AnalyticsStoreError("Failed to retrieve submissions.", cause=e) from e

    logger.info(
        "Retrieved %s submissions and %s locations", len(submissions), len(locations)
    )
    return SubmissionsData(
        submissions=[SubmissionRecord.model_validate(s) for s in submissions],
        locations=[DesiredLocationRecord.model_validate(loc) for loc in locations],
    )


def list_submissions_page(
    db: Session, page: int, limit: int
) -> tuple[list[SubmissionRecord], int]:
    """One page of submissions (1-based page), newest first, plus the overall count."""
    offset = (page - 1) * limit
    stmt = (
        select(Submission)
        .order_by(Submission.created_at.desc(), Submission.id.desc())
        .offset(offset)
        .limit(limit)
    )
    try:
        rows = db.scalars(stmt).all()
        total = int(db.scalar(select(func.count(Submission.id))) or 0)
    except SQLAlchemyError as e:
        logger.exception("Submissions page query failed")
        raise AnalyticsStoreError("Failed to retrieve submissions.", cause=e) from e
    return [SubmissionRecord.model_validate(r) for r in rows], total


def count_submissions(db: Session) -> int:
    """Total stored submissions; used by the health check."""
    try:
        return int(db.scalar(select(func.count(Submission.id))) or 0)
    except SQLAlchemyError as e:
        raise AnalyticsStoreError("Failed to count submissions.", cause=e) from e
