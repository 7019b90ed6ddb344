"""Tuition ORM — a student's posted request for a tutor.

Invariants:
    - student_email is the owner; only the owner or an admin may edit or delete
    - status transitions: pending -> approved | rejected (admin moderation only)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from etuition.db.base import Base


class Tuition(Base):
    """Tuition posting awaiting moderation or tutors."""
    __tablename__ = "tuitions"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    student_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    class_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    salary: Mapped[float | None] = mapped_column(Float, nullable=True)
    location: Mapped[str | None] = mapped_column(String(500), nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending", index=True,
    )
    posted_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
