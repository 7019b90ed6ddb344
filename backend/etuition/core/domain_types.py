"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - All valid states encoded as Enums — no raw string matching
    - ApplicationStatus keeps the stored spelling ("Pending" is capitalized)

Design Decisions:
    - str Enums: serialize to JSON without custom encoders
    - Identity is frozen: the guard hands the same verified value to every consumer
"""

from dataclasses import dataclass
from enum import Enum


# ─── Enums ───────────────────────────────────────────────────────

class Role(str, Enum):
    """Marketplace roles — maps to users.role."""
    STUDENT = "student"
    TUTOR = "tutor"
    ADMIN = "admin"


class ApplicationStatus(str, Enum):
    """Application lifecycle. TERMINATED is never stored (the row is deleted)."""
    PENDING = "Pending"
    PAID = "paid"
    REJECTED = "rejected"
    TERMINATED = "terminated"


class TuitionStatus(str, Enum):
    """Tuition posting moderation states."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class NotificationType(str, Enum):
    TERMINATION = "termination"


# ─── Value Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class Identity:
    """Verified bearer identity. role is the token claim, informational only."""
    email: str
    role: str | None = None
