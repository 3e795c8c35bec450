"""
Pydantic schemas for member records.

``Member`` is both the stored record (JSON encoded in the store) and
its wire representation in the API envelope.  ``MemberIn`` is the
request body accepted by the create and update endpoints; any ``id``
or ``registration`` a client sends is accepted by the parser and then
ignored by the service.
"""

from datetime import datetime, timezone
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field


class Member(BaseModel):
    """A registered member."""

    id: str = Field(..., examples=["0b7c51f0-3d4e-4a7a-9a55-3f2f1d0c9e21"])
    name: str = Field(..., examples=["Ada"])
    # Serialized as ``registration``.  Records written before the field
    # existed decode with ``None``.
    registration_time: Optional[datetime] = Field(None, alias="registration")

    model_config = ConfigDict(populate_by_name=True)


class MemberIn(BaseModel):
    """Request body for creating or updating a member."""

    name: str = ""
    id: Optional[str] = None
    registration: Optional[datetime] = None


class APIError(BaseModel):
    """Error object embedded in the envelope.  ``code`` mirrors the HTTP status."""

    code: int
    message: str


class Envelope(BaseModel):
    """Uniform response wrapper.

    Exactly one of ``results`` and ``error`` is set; ``None`` fields are
    left out of the serialized payload.
    """

    results: Optional[Dict[str, Member]] = None
    error: Optional[APIError] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def success(cls, members: Dict[str, Member]) -> "Envelope":
        return cls(results=members)

    @classmethod
    def failure(cls, code: int, message: str) -> "Envelope":
        return cls(error=APIError(code=code, message=message))
