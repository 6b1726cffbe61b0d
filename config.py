"""Service configuration read from ``ADDRESS_VERIFIER_*`` environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings for the HERE client and the HTTP surface.

    Verification options (levels, thresholds) are not settings:
    callers pass them per request as :class:`models.VerificationArgs`.
    """

    model_config = SettingsConfigDict(
        env_prefix="ADDRESS_VERIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    here_api_key: SecretStr = Field(
        default=SecretStr(""),
        description="HERE Geocoding & Search API key",
    )
    here_lang: str = Field(
        default="en-US",
        description="Language requested from HERE for result labels",
    )
    request_timeout: float = Field(
        default=15.0,
        description="HTTP timeout in seconds for HERE requests",
        ge=1,
        le=120,
    )
    api_key: SecretStr = Field(
        default=SecretStr(""),
        description="Key clients must send in the X-API-Key header",
    )
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Root logging level",
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def _upper_log_level(cls, value):
        return value.upper() if isinstance(value, str) else value


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
