"""User Schemas — account creation, profile updates, and responses.

Invariants:
    - Self-registration can only pick student or tutor; admin is granted by an admin
    - UserResponse always carries every profile field (projection happens in core)
"""

from datetime import datetime
from typing import Literal
from uuid import UUID

from pydantic import Field, field_validator

from etuition.schemas.base import WireModel


class UserCreate(WireModel):
    email: str = Field(min_length=3, max_length=255)
    name: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=1000)
    role: Literal["student", "tutor"] = "student"
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    institution: str | None = Field(None, max_length=200)
    class_name: str | None = Field(None, alias="class", max_length=50)
    gender: str | None = Field(None, max_length=20)

    @field_validator("email")
    @classmethod
    def strip_email(cls, v: str) -> str:
        v = v.strip()
        if "@" not in v:
            raise ValueError("email must contain '@'")
        return v


class UserUpdate(WireModel):
    """Partial update. role is admin-only; the other fields are owner-or-admin."""
    name: str | None = Field(None, max_length=200)
    image: str | None = Field(None, max_length=1000)
    role: Literal["student", "tutor", "admin"] | None = None
    phone: str | None = Field(None, max_length=50)
    address: str | None = Field(None, max_length=500)
    institution: str | None = Field(None, max_length=200)
    class_name: str | None = Field(None, alias="class", max_length=50)
    gender: str | None = Field(None, max_length=20)


class UserResponse(WireModel):
    id: UUID
    email: str
    role: str
    name: str | None = None
    image: str | None = None
    phone: str | None = None
    address: str | None = None
    institution: str | None = None
    class_name: str | None = Field(None, alias="class")
    gender: str | None = None
    created_at: datetime | None = None
