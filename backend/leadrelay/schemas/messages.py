"""Message Schemas — request/response models for the dispatch and lead endpoints.

Invariants:
    - Recipient and content fields are stripped and must be non-empty
    - max_attempts, when given, is 1-10
    - DispatchResultResponse mirrors core DispatchResult one-to-one
"""

from pydantic import BaseModel, Field, field_validator

from leadrelay.core.domain_types import DispatchOutcome, FailureKind
from leadrelay.core.results import DispatchResult


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be empty or whitespace")
    return v


class TextMessageRequest(BaseModel):
    to: str = Field(min_length=1, max_length=32)
    text: str = Field(min_length=1, max_length=4096)
    max_attempts: int | None = Field(None, ge=1, le=10)

    @field_validator("to")
    @classmethod
    def strip_to(cls, v: str) -> str:
        return _strip_required(v)


class ImageMessageRequest(BaseModel):
    to: str = Field(min_length=1, max_length=32)
    url: str = Field(min_length=1, max_length=2048)
    caption: str | None = Field(None, max_length=1024)
    max_attempts: int | None = Field(None, ge=1, le=10)

    @field_validator("to", "url")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)


class DispatchResultResponse(BaseModel):
    outcome: DispatchOutcome
    message_id: str | None = None
    error_message: str | None = None
    failure_kind: FailureKind | None = None
    attempts_made: int

    @classmethod
    def from_result(cls, result: DispatchResult) -> "DispatchResultResponse":
        return cls(**result.to_dict())


class LeadCreate(BaseModel):
    """Landing-page form submission."""
    whatsapp_number: str = Field(min_length=4, max_length=32, pattern=r"^\+?[0-9 ()\-]+$")

    @field_validator("whatsapp_number")
    @classmethod
    def strip_number(cls, v: str) -> str:
        return _strip_required(v)


class LeadAcknowledgement(BaseModel):
    message: str
    delivery: DispatchResultResponse
