"""ORM models for form submissions and their desired charging locations."""

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    Numeric,
    String,
    Text,
    func,
)
from sqlalchemy.orm import relationship

from app.models.base import Base


class Submission(Base):
    """
    One respondent's vehicle and charging profile.

    Written once by the public form; read by the dashboard analytics.
    """

    __tablename__ = "ev_form_submissions"

    id = Column(Integer, primary_key=True, autoincrement=True)
    vehicle_type = Column(String(100), nullable=False, index=True)
    brand_model = Column(String(200), nullable=False)
    usage_type = Column(String(100), nullable=False, index=True)
    average_kms_per_day = Column(String(50), nullable=False)
    preference_connector = Column(String(100), nullable=True)
    usual_charging_schedule = Column(String(100), nullable=True)
    primary_charging_location = Column(String(100), nullable=False, index=True)
    charging_address = Column(Text, nullable=False)
    charging_latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    charging_longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)
    charger_type = Column(String(100), nullable=False)
    cost_per_km_charged = Column(String(100), nullable=True)
    full_name = Column(String(200), nullable=False)
    phone = Column(String(50), nullable=False)
    email = Column(String(200), nullable=False, index=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
    )

    desired_locations = relationship(
        "DesiredLocation",
        back_populates="submission",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class DesiredLocation(Base):
    """A respondent-proposed site for a new charging station; owned by one submission."""

    __tablename__ = "desired_locations"
    __table_args__ = (
        Index("ix_desired_locations_lat_lng", "latitude", "longitude"),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    submission_id = Column(
        Integer,
        ForeignKey("ev_form_submissions.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    identifier = Column(String(100), nullable=False, index=True)
    address = Column(Text, nullable=False)
    latitude = Column(Numeric(10, 8, asdecimal=False), nullable=True)
    longitude = Column(Numeric(11, 8, asdecimal=False), nullable=True)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    submission = relationship("Submission", back_populates="desired_locations")
