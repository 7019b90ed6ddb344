"""User ORM — marketplace account keyed by email.

Invariants:
    - email is unique (one row per email, enforced by the store as well as by the create route)
    - role is one of student | tutor | admin, defaulting to student

Design Decisions:
    - Profile fields are all optional: accounts are created from a sign-in payload
      that may carry nothing beyond name and email
    - class_name maps to the "class" wire field (reserved word in Python)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import String, DateTime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.dialects.postgresql import UUID

from etuition.db.base import Base


class User(Base):
    """Marketplace user — student, tutor, or admin."""
    __tablename__ = "users"

    id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), primary_key=True, default=uuid.uuid4,
    )
    email: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True,
    )
    role: Mapped[str] = mapped_column(
        String(20), nullable=False, default="student",
    )
    name: Mapped[str | None] = mapped_column(String(200), nullable=True)
    image: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    address: Mapped[str | None] = mapped_column(String(500), nullable=True)
    institution: Mapped[str | None] = mapped_column(String(200), nullable=True)
    class_name: Mapped[str | None] = mapped_column(String(50), nullable=True)
    gender: Mapped[str | None] = mapped_column(String(20), nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
