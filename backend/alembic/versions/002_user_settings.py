"""User settings tables and leave type constraint.

Revision ID: 002_user_settings
Revises: 001_initial
Create Date: 2026-10-20

"""

from alembic import op
import sqlalchemy as sa

revision: str = "002_user_settings"
down_revision: str | None = "001_initial"
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_check_constraint(
        "ck_leave_requests_type",
        "leave_requests",
        "leave_type IN ('ANNUAL', 'SICK', 'CASUAL', 'EMERGENCY', 'OTHER', 'UNPAID', 'STUDY')",
    )

    op.create_table(
        "notification_preferences",
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column(
            "email_leave_updates",
            sa.Boolean,
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column(
            "email_attendance_alerts",
            sa.Boolean,
            nullable=False,
            server_default=sa.true(),
        ),
        sa.Column("frequency", sa.Text, nullable=False, server_default="INSTANT"),
    )
    op.create_check_constraint(
        "ck_notification_preferences_frequency",
        "notification_preferences",
        "frequency IN ('INSTANT', 'DAILY', 'WEEKLY')",
    )

    op.create_table(
        "terms_acceptance",
        sa.Column(
            "user_id",
            sa.Integer,
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            primary_key=True,
        ),
        sa.Column("accepted", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("accepted_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("version", sa.Text, nullable=False, server_default="v1"),
        sa.Column("ip_address", sa.Text, nullable=True),
    )


def downgrade() -> None:
    op.drop_table("terms_acceptance")
    op.drop_table("notification_preferences")
    op.drop_constraint("ck_leave_requests_type", "leave_requests", type_="check")
