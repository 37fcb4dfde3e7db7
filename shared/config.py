"""
Shared configuration management for the Masa MCP service.
"""

from typing import Literal, Optional
from urllib.parse import urlparse

from pydantic import Field, SecretStr, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.errors import ConfigurationError


class MasaSettings(BaseSettings):
    """Settings for the Masa MCP service, read from the environment and `.env`."""

    model_config = SettingsConfigDict(
        env_prefix="MASA_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    # Masa API
    api_key: SecretStr = Field(description="Bearer token for the Masa API.")
    api_url: str = Field(default="https://api.masa.xyz", description="Base URL of the Masa API.")

    # Environment
    env: Literal["development", "production", "test"] = "development"
    log_level: Literal["error", "warning", "info", "debug"] = "info"

    # Resilience
    request_timeout: float = Field(default=30.0, gt=0)
    max_attempts: int = Field(default=3, ge=1, le=10)
    retry_base_delay: float = Field(default=1.0, ge=0)

    # Cache
    cache_max_size: int = Field(default=100, ge=1)
    cache_ttl_seconds: float = Field(default=300.0, gt=0)
    status_cache_ttl_seconds: float = Field(default=5.0, gt=0)

    # Observability
    metrics_port: Optional[int] = Field(default=None, ge=1, le=65535)

    @field_validator("api_key", mode="before")
    @classmethod
    def _require_api_key(cls, value):
        if isinstance(value, str):
            value = value.strip()
            if not value:
                raise ValueError("MASA_API_KEY is required")
        return value

    @field_validator("api_url")
    @classmethod
    def _validate_api_url(cls, value: str) -> str:
        parsed = urlparse(value)
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ValueError("MASA_API_URL must be a valid URL")
        return value.rstrip("/")

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, value):
        if isinstance(value, str):
            value = value.strip().lower()
            if value == "warn":
                value = "warning"
        return value

    def is_production(self) -> bool:
        return self.env == "production"

    def is_development(self) -> bool:
        return self.env == "development"

    def is_test(self) -> bool:
        return self.env == "test"


def load_settings(**overrides) -> MasaSettings:
    """Load and validate settings, raising ConfigurationError on failure.

    Nothing is logged here: logging is not configured yet and stdout carries
    the MCP transport. The caller reports the error.
    """
    try:
        return MasaSettings(**overrides)
    except ValidationError as exc:
        errors = [
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}"
            for error in exc.errors()
        ]
        raise ConfigurationError(
            "Environment configuration validation failed: " + ", ".join(errors),
            details={"errors": errors}
        ) from exc
