"""SQLAlchemy ORM models."""

from app.models.base import Base
from app.models.submission import DesiredLocation, Submission
from app.models.user import User

__all__ = ["Base", "DesiredLocation", "Submission", "User"]
