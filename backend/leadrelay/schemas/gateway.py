"""Gateway Admin Schemas — API key management and status diagnostics."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class CredentialUpdate(BaseModel):
    api_key: str = Field(min_length=1, max_length=512)

    @field_validator("api_key")
    @classmethod
    def strip_key(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("api_key cannot be empty or whitespace")
        return v


class CredentialStatus(BaseModel):
    configured: bool


class GatewayStatusResponse(BaseModel):
    connected: bool
    remote: dict[str, Any]
