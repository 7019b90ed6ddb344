"""Payment Schemas — charge intents and settlement records."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from etuition.schemas.base import WireModel


class ChargeIntentRequest(WireModel):
    """salary is parsed by payment_service.parse_salary."""
    salary: float | str | None = None


class PaymentCreate(WireModel):
    app_id: UUID
    transaction_id: str | None = Field(None, max_length=255)


class PaymentResponse(WireModel):
    id: UUID
    app_id: UUID
    tutor_email: str
    student_email: str
    salary: float
    transaction_id: str | None = None
    date: datetime
