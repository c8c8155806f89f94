"""initial schema

Revision ID: 0001
Revises:
"""

import sqlalchemy as sa
from alembic import op

revision = "0001"
down_revision = None
branch_labels = None
depends_on = None

ACTIVE = "status IN ('pending', 'confirmed')"


def upgrade():
    op.create_table(
        "vendors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("business_name", sa.Text, nullable=False),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("buffer_minutes", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("min_lead_time_hours", sa.Integer, nullable=False, server_default=sa.text("0")),
        sa.Column("email", sa.Text),
        sa.Column("phone", sa.Text),
        sa.Column("created_at", sa.Text, server_default=sa.text("CURRENT_TIMESTAMP")),
    )
    op.create_table(
        "services",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("duration_min", sa.Integer, nullable=False),
        sa.Column("price", sa.Float, nullable=False, server_default=sa.text("0")),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("description", sa.Text),
        sa.Column("deleted_at", sa.Text),
    )
    op.create_table(
        "availability",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("day_of_week", sa.Integer, nullable=False),
        sa.Column("start_time", sa.Text, nullable=False),
        sa.Column("end_time", sa.Text, nullable=False),
        sa.Column("is_active", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.UniqueConstraint("vendor_id", "day_of_week"),
    )
    op.create_table(
        "vendor_exceptions",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("is_closed", sa.Integer, nullable=False, server_default=sa.text("1")),
        sa.Column("start_time", sa.Text),
        sa.Column("end_time", sa.Text),
        sa.Column("reason", sa.Text),
        sa.UniqueConstraint("vendor_id", "date"),
    )
    op.create_table(
        "bookings",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("service_id", sa.Integer, sa.ForeignKey("services.id"), nullable=False),
        sa.Column("customer_id", sa.Integer, nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.Column("start_time", sa.Text, nullable=False),
        sa.Column("end_time", sa.Text, nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default=sa.text("'confirmed'")),
        sa.Column("created_at", sa.Text, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("updated_at", sa.Text, nullable=False, server_default=sa.text("CURRENT_TIMESTAMP")),
        sa.Column("customer_notes", sa.Text),
        sa.Column("vendor_notes", sa.Text),
        sa.Column("cancel_reason", sa.Text),
    )
    op.create_index(
        "uq_bookings_active_start",
        "bookings",
        ["vendor_id", "date", "start_time"],
        unique=True,
        sqlite_where=sa.text(ACTIVE),
        postgresql_where=sa.text(ACTIVE),
    )
    op.create_index("ix_bookings_vendor_date", "bookings", ["vendor_id", "date"])
    op.create_table(
        "booking_day_locks",
        sa.Column("vendor_id", sa.Integer, sa.ForeignKey("vendors.id", ondelete="CASCADE"), nullable=False),
        sa.Column("date", sa.Text, nullable=False),
        sa.PrimaryKeyConstraint("vendor_id", "date"),
    )


def downgrade():
    op.drop_table("booking_day_locks")
    op.drop_index("ix_bookings_vendor_date", table_name="bookings")
    op.drop_index("uq_bookings_active_start", table_name="bookings")
    op.drop_table("bookings")
    op.drop_table("vendor_exceptions")
    op.drop_table("availability")
    op.drop_table("services")
    op.drop_table("vendors")
