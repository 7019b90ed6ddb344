"""Application Schemas — tutor hiring requests."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from etuition.schemas.base import WireModel


class ApplicationCreate(WireModel):
    """tutorEmail is never read from the body: it is the caller's verified email."""
    student_email: str = Field(min_length=3, max_length=255)
    subject: str = Field(min_length=1, max_length=200)
    salary: float | None = Field(None, gt=0)
    tuition_id: UUID | None = None


class ApplicationResponse(WireModel):
    id: UUID
    tutor_email: str
    student_email: str
    tuition_id: UUID | None = None
    subject: str
    salary: float | None = None
    status: str
    applied_date: datetime


class NotificationResponse(WireModel):
    id: UUID
    receiver_email: str
    sender_email: str
    message: str
    type: str
    date: datetime
