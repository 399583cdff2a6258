"""Initial schema: users, organisation profiles, leave requests, attendance.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _created_at() -> sa.Column:
    return sa.Column(
        "created_at",
        sa.DateTime(timezone=True),
        nullable=False,
        server_default=sa.func.now(),
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("username", sa.Text, nullable=False, unique=True),
        sa.Column("email", sa.Text, nullable=True),
        sa.Column("password_hash", sa.Text, nullable=False),
        sa.Column("role", sa.Text, nullable=False),
        sa.Column("name", sa.Text, nullable=True),
        sa.Column("phone", sa.Text, nullable=True),
        sa.Column("avatar_url", sa.Text, nullable=True),
        _created_at(),
    )
    op.create_check_constraint(
        "ck_users_role", "users", "role IN ('ADMIN', 'SUPERVISOR', 'INTERN')"
    )

    op.create_table(
        "departments",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False, unique=True),
    )

    op.create_table(
        "supervisors",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column(
            "department_id",
            sa.Integer,
            sa.ForeignKey("departments.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )

    op.create_table(
        "admins",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
    )

    op.create_table(
        "interns",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("name", sa.Text, nullable=False),
        sa.Column("email", sa.Text, nullable=False, unique=True),
        sa.Column(
            "department_id",
            sa.Integer,
            sa.ForeignKey("departments.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column(
            "supervisor_id",
            sa.Integer,
            sa.ForeignKey("supervisors.id", ondelete="SET NULL"),
            nullable=True,
        ),
    )

    op.create_table(
        "leave_requests",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "intern_id",
            sa.Integer,
            sa.ForeignKey("interns.id", ondelete="SET NULL"),
            nullable=True,
        ),
        sa.Column("leave_type", sa.Text, nullable=False),
        sa.Column("from_date", sa.Date, nullable=False),
        sa.Column("to_date", sa.Date, nullable=False),
        sa.Column("status", sa.Text, nullable=False, server_default="PENDING"),
        sa.Column("attachment_path", sa.Text, nullable=True),
        _created_at(),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )
    op.create_check_constraint(
        "ck_leave_requests_dates", "leave_requests", "to_date >= from_date"
    )
    op.create_check_constraint(
        "ck_leave_requests_status",
        "leave_requests",
        "status IN ('PENDING', 'APPROVED', 'REJECTED')",
    )
    op.create_index("ix_leave_requests_intern_id", "leave_requests", ["intern_id"])
    op.create_index("ix_leave_requests_status", "leave_requests", ["status"])
    op.create_index(
        "ix_leave_requests_attachment_path", "leave_requests", ["attachment_path"]
    )

    op.create_table(
        "attendance",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column(
            "intern_id",
            sa.Integer,
            sa.ForeignKey("interns.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("date", sa.Date, nullable=False),
        sa.Column("time_in", sa.DateTime(timezone=True), nullable=False),
        sa.Column("time_out", sa.DateTime(timezone=True), nullable=True),
        sa.Column("status", sa.Text, nullable=False),
        sa.Column("location", sa.Text, nullable=True),
        sa.Column("latitude", sa.Float, nullable=True),
        sa.Column("longitude", sa.Float, nullable=True),
    )
    op.create_index("ix_attendance_intern_id", "attendance", ["intern_id"])

    op.create_table(
        "verification_codes",
        sa.Column("email", sa.Text, primary_key=True),
        sa.Column("code", sa.Text, nullable=False),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_verification_codes_expires_at", "verification_codes", ["expires_at"]
    )


def downgrade() -> None:
    op.drop_table("verification_codes")
    op.drop_table("attendance")
    op.drop_table("leave_requests")
    op.drop_table("interns")
    op.drop_table("admins")
    op.drop_table("supervisors")
    op.drop_table("departments")
    op.drop_constraint("ck_users_role", "users", type_="check")
    op.drop_table("users")
