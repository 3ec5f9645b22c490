"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache): single instance per process
    - gateway_base_url never ends with '/'
    - dispatch_max_attempts >= 1

Design Decisions:
    - gateway_api_key is only the fallback credential; the admin-managed key in
      the config store wins when present
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from leadrelay.core.templates import DEFAULT_LEAD_TEMPLATE


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Messaging gateway
    gateway_base_url: str = "https://wasenderapi.com/api"
    gateway_api_key: str | None = None
    gateway_send_timeout_seconds: float = 30.0
    gateway_status_timeout_seconds: float = 10.0

    @field_validator("gateway_base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        if isinstance(v, str):
            return v.rstrip("/")
        return v

    # Dispatch retry budget
    dispatch_max_attempts: int = Field(3, ge=1)
    dispatch_retry_delay_seconds: float = 2.0
    dispatch_rate_limit_step_seconds: float = 30.0
    dispatch_rate_limit_cap_seconds: float = 300.0

    # Lead notification
    sales_team_number: str = "+971501234567"
    lead_message_template: str = DEFAULT_LEAD_TEMPLATE

    # API
    cors_origins: list[str] = ["http://localhost:5173"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
