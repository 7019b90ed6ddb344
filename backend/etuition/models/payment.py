"""Payment ORM — append-only record of a settled charge.

Invariants:
    - app_id references exactly one Application (informal, no FK)
    - Rows are never updated or deleted by the API

Design Decisions:
    - transaction_id stores the provider reference when the client sends one
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, Float, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from etuition.db.base import Base


class Payment(Base):
    """Settled payment for an application."""
    __tablename__ = "payments"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    app_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, index=True,
    )
    tutor_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    student_email: Mapped[str] = mapped_column(
        String(255), nullable=False, index=True,
    )
    salary: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    transaction_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True,
    )
    date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
