"""API v1 routes."""

from fastapi import APIRouter

from app.api.v1 import analytics, auth, health, submissions

router = APIRouter()
router.include_router(health.router, prefix="/health", tags=["health"])
router.include_router(auth.router, prefix="/auth", tags=["auth"])
router.include_router(submissions.router, prefix="/submissions", tags=["submissions"])
router.include_router(analytics.router, prefix="/analytics", tags=["analytics"])
