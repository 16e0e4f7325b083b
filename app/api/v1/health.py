"""Health check endpoint with database connectivity and submission count."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.database import check_db_connected, get_db
from app.schemas.health import HealthResponse
from app.services.analytics import AnalyticsStoreError, count_submissions

router = APIRouter()


@router.get("/", response_model=HealthResponse)
def get_health(db: Session = Depends(get_db)) -> HealthResponse:
    """
    Return service health status and database connectivity.
    Used by load balancers and monitoring.
    """
    if not check_db_connected(db):
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            database="disconnected",
        )
    try:
        total = count_submissions(db)
    except AnalyticsStoreError:
        return HealthResponse(
            status="degraded",
            environment=settings.APP_ENV,
            database="connected",
        )
    return HealthResponse(
        status="ok",
        environment=settings.APP_ENV,
        database="connected",
        total_submissions=total,
    )
