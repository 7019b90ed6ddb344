"""Tuition Schemas — posting, editing, moderation."""

from datetime import datetime
from uuid import UUID

from pydantic import Field, field_validator

from etuition.schemas.base import WireModel


class TuitionCreate(WireModel):
    subject: str = Field(min_length=1, max_length=200)
    class_name: str | None = Field(None, alias="class", max_length=50)
    salary: float | None = Field(None, gt=0)
    location: str | None = Field(None, max_length=500)

    @field_validator("subject")
    @classmethod
    def strip_subject(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("subject cannot be empty or whitespace")
        return v


class TuitionUpdate(WireModel):
    subject: str | None = Field(None, min_length=1, max_length=200)
    class_name: str | None = Field(None, alias="class", max_length=50)
    salary: float | None = Field(None, gt=0)
    location: str | None = Field(None, max_length=500)


class StatusUpdate(WireModel):
    """Shared body for every status-change route; validated in core."""
    status: str = Field(min_length=1, max_length=20)


class TuitionResponse(WireModel):
    id: UUID
    student_email: str
    subject: str
    class_name: str | None = Field(None, alias="class")
    salary: float | None = None
    location: str | None = None
    status: str
    posted_date: datetime
