"""Application ORM — a tutor's hiring request towards a student's subject.

Invariants:
    - At most one application per (tutor_email, student_email, subject), checked before insert
    - status transitions: Pending -> paid | rejected; termination deletes the row
    - status flips to paid only in the same transaction that inserts a Payment

Design Decisions:
    - tuition_id is informal (no FK): tuitions may be deleted while contracts live on
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from etuition.db.base import Base


class Application(Base):
    """Tutor application / hiring request."""
    __tablename__ = "applications"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    tutor_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    student_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    tuition_id: Mapped[uuid.UUID | None] = mapped_column(
        UUID(as_uuid=True), nullable=True,
    )
    subject: Mapped[str] = mapped_column(String(200), nullable=False)
    salary: Mapped[float | None] = mapped_column(Float, nullable=True)
    status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="Pending",
    )
    applied_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
