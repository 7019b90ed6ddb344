"""Initial schema — users, tuitions, applications, payments, notifications.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-18

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import UUID

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("role", sa.String(20), nullable=False, server_default="student"),
        sa.Column("name", sa.String(200), nullable=True),
        sa.Column("image", sa.String(1000), nullable=True),
        sa.Column("phone", sa.String(50), nullable=True),
        sa.Column("address", sa.String(500), nullable=True),
        sa.Column("institution", sa.String(200), nullable=True),
        sa.Column("class_name", sa.String(50), nullable=True),
        sa.Column("gender", sa.String(20), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "tuitions",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("student_email", sa.String(255), nullable=False),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("class_name", sa.String(50), nullable=True),
        sa.Column("salary", sa.Float, nullable=True),
        sa.Column("location", sa.String(500), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="pending"),
        sa.Column("posted_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_tuitions_student_email", "tuitions", ["student_email"])
    op.create_index("ix_tuitions_status", "tuitions", ["status"])

    op.create_table(
        "applications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("tutor_email", sa.String(255), nullable=False),
        sa.Column("student_email", sa.String(255), nullable=False),
        sa.Column("tuition_id", UUID(as_uuid=True), nullable=True),
        sa.Column("subject", sa.String(200), nullable=False),
        sa.Column("salary", sa.Float, nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="Pending"),
        sa.Column("applied_date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_applications_tutor_email", "applications", ["tutor_email"])
    op.create_index("ix_applications_student_email", "applications", ["student_email"])

    op.create_table(
        "payments",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("app_id", UUID(as_uuid=True), nullable=False),
        sa.Column("tutor_email", sa.String(255), nullable=False),
        sa.Column("student_email", sa.String(255), nullable=False),
        sa.Column("salary", sa.Float, nullable=False, server_default="0"),
        sa.Column("transaction_id", sa.String(255), nullable=True),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_payments_app_id", "payments", ["app_id"])
    op.create_index("ix_payments_tutor_email", "payments", ["tutor_email"])
    op.create_index("ix_payments_student_email", "payments", ["student_email"])

    op.create_table(
        "notifications",
        sa.Column("id", UUID(as_uuid=True), primary_key=True),
        sa.Column("receiver_email", sa.String(255), nullable=False),
        sa.Column("sender_email", sa.String(255), nullable=False),
        sa.Column("message", sa.Text, nullable=False),
        sa.Column("type", sa.String(30), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_receiver_email", "notifications", ["receiver_email"])


def downgrade() -> None:
    op.drop_table("notifications")
    op.drop_table("payments")
    op.drop_table("applications")
    op.drop_table("tuitions")
    op.drop_table("users")
