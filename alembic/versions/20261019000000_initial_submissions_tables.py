"""Initial submissions and desired locations tables.

Revision ID: 20261019000000
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "20261019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "ev_form_submissions",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("vehicle_type", sa.String(length=100), nullable=False),
        sa.Column("brand_model", sa.String(length=200), nullable=False),
        sa.Column("usage_type", sa.String(length=100), nullable=False),
        sa.Column("average_kms_per_day", sa.String(length=50), nullable=False),
        sa.Column("preference_connector", sa.String(length=100), nullable=True),
        sa.Column("usual_charging_schedule", sa.String(length=100), nullable=True),
        sa.Column("primary_charging_location", sa.String(length=100), nullable=False),
        sa.Column("charging_address", sa.Text(), nullable=False),
        sa.Column("charging_latitude", sa.Numeric(precision=10, scale=8), nullable=True),
        sa.Column("charging_longitude", sa.Numeric(precision=11, scale=8), nullable=True),
        sa.Column("charger_type", sa.String(length=100), nullable=False),
        sa.Column("cost_per_km_charged", sa.String(length=100), nullable=True),
        sa.Column("full_name", sa.String(length=200), nullable=False),
        sa.Column("phone", sa.String(length=50), nullable=False),
        sa.Column("email", sa.String(length=200), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    for column in (
        "vehicle_type",
        "usage_type",
        "primary_charging_location",
        "created_at",
        "email",
    ):
        op.create_index(
            op.f(f"ix_ev_form_submissions_{column}"),
            "ev_form_submissions",
            [column],
            unique=False,
        )

    op.create_table(
        "desired_locations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("submission_id", sa.Integer(), nullable=False),
        sa.Column("identifier", sa.String(length=100), nullable=False),
        sa.Column("address", sa.Text(), nullable=False),
        sa.Column("latitude", sa.Numeric(precision=10, scale=8), nullable=True),
        sa.Column("longitude", sa.Numeric(precision=11, scale=8), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.ForeignKeyConstraint(
            ["submission_id"],
            ["ev_form_submissions.id"],
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_desired_locations_submission_id"),
        "desired_locations",
        ["submission_id"],
        unique=False,
    )
    op.create_index(
        op.f("ix_desired_locations_identifier"),
        "desired_locations",
        ["identifier"],
        unique=False,
    )
    op.create_index(
        "ix_desired_locations_lat_lng",
        "desired_locations",
        ["latitude", "longitude"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("ix_desired_locations_lat_lng", table_name="desired_locations")
    op.drop_index(op.f("ix_desired_locations_identifier"), table_name="desired_locations")
    op.drop_index(op.f("ix_desired_locations_submission_id"), table_name="desired_locations")
    op.drop_table("desired_locations")
    for column in (
        "email",
        "created_at",
        "primary_charging_location",
        "usage_type",
        "vehicle_type",
    ):
        op.drop_index(
            op.f(f"ix_ev_form_submissions_{column}"),
            table_name="ev_form_submissions",
        )
    op.drop_table("ev_form_submissions")
