"""Auth Schemas — token issuance request."""

from pydantic import Field

from etuition.schemas.base import WireModel


class TokenRequest(WireModel):
    email: str = Field(min_length=1, max_length=255)
    role: str | None = Field(None, max_length=20)
    id_token: str | None = None
