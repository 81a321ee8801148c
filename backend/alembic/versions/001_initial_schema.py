"""Initial schema: bookings with price snapshot, status checks and active-slot unique indexes.

Revision ID: 001
Revises: None
Create Date: 2026-10-17
"""
from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

ACTIVE = sa.text("status IN ('pending_approval', 'confirmed')")


def upgrade() -> None:
    op.create_table(
        "bookings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("court_id", sa.String(64), nullable=False),
        sa.Column("user_id", sa.String(64), nullable=False),
        sa.Column("coach_id", sa.String(64), nullable=True),
        sa.Column("start_time", sa.DateTime(), nullable=False),
        sa.Column("end_time", sa.DateTime(), nullable=False),
        sa.Column("rackets", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("shoes", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("pricing", sa.JSON(), nullable=False),
        sa.Column("status", sa.String(20), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.CheckConstraint("end_time > start_time", name="check_booking_slot_order"),
        sa.CheckConstraint("rackets BETWEEN 0 AND 4", name="check_booking_rackets_range"),
        sa.CheckConstraint("shoes BETWEEN 0 AND 4", name="check_booking_shoes_range"),
        sa.CheckConstraint(
            "status IN ('pending_approval', 'confirmed', 'cancelled', 'rejected')",
            name="check_booking_status",
        ),
    )
    op.create_index("ix_bookings_court_id", "bookings", ["court_id"])
    op.create_index("ix_bookings_user_id", "bookings", ["user_id"])
    op.create_index("ix_bookings_coach_id", "bookings", ["coach_id"])
    # Day views and the overlap scan both filter on start_time
    op.create_index("ix_bookings_start_time", "bookings", ["start_time"])
    # At most one active booking per court slot and per coach slot.
    # Cancelled and rejected rows fall outside the index so the slot frees up.
    op.create_index(
        "uq_active_court_slot", "bookings", ["court_id", "start_time"], unique=True,
        sqlite_where=ACTIVE, postgresql_where=ACTIVE,
    )
    op.create_index(
        "uq_active_coach_slot", "bookings", ["coach_id", "start_time"], unique=True,
        sqlite_where=ACTIVE, postgresql_where=ACTIVE,
    )


def downgrade() -> None:
    op.drop_table("bookings")
