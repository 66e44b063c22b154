"""
Configuration management for the TLS assessor.

This module handles environment variables, settings validation, and configuration
management using Pydantic Settings for type safety and validation.
"""

from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigurationError
from .urls import CACHE_MAX_AGE, DEFAULT_API_URL


class ServerConfig(BaseModel):
    """Web server configuration settings."""

    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    debug: bool = Field(default=False, description="Enable debug mode")


class RetryPolicy(BaseModel):
    """Bounded retry with a fixed delay per transient status code."""

    model_config = ConfigDict(frozen=True)

    max_retries: int = Field(
        default=3, ge=0, description="Retries after the first attempt"
    )
    delays: dict[int, float] = Field(
        default_factory=lambda: {503: 15.0, 529: 30.0},
        description="Seconds to wait before retrying, keyed by status code",
    )

    def is_transient(self, status_code: int) -> bool:
        """Check if a status code is retried under this policy."""
        return status_code in self.delays

    def delay_for(self, status_code: int) -> float:
        """Get the wait before retrying a response with this status code."""
        return self.delays.get(status_code, 0.0)


class CadencePolicy(BaseModel):
    """Wait between polls, chosen from the last observed status."""

    model_config = ConfigDict(frozen=True)

    in_progress_seconds: float = Field(
        default=10.0, ge=0, description="Wait after an IN_PROGRESS status"
    )
    default_seconds: float = Field(
        default=5.0, ge=0, description="Wait after any other non-terminal status"
    )


class Settings(BaseSettings):
    """Main application settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Assessment API
    ssllabs_api_url: str = Field(
        default=DEFAULT_API_URL, description="SSL Labs API base URL"
    )
    request_timeout: float = Field(
        default=30.0, gt=0, description="HTTP request timeout in seconds"
    )
    cache_max_age: int = Field(
        default=CACHE_MAX_AGE, gt=0, description="maxAge sent with cached lookups"
    )

    # Retry policy
    retry_max_attempts: int = Field(
        default=3, ge=0, description="Retries for 503/529 responses"
    )
    retry_delay_unavailable: float = Field(
        default=15.0, ge=0, description="Wait before retrying a 503 in seconds"
    )
    retry_delay_overloaded: float = Field(
        default=30.0, ge=0, description="Wait before retrying a 529 in seconds"
    )

    # Polling cadence
    poll_interval_in_progress: float = Field(
        default=10.0, ge=0, description="Wait after IN_PROGRESS in seconds"
    )
    poll_interval_default: float = Field(
        default=5.0, ge=0, description="Wait after other pending statuses in seconds"
    )
    max_polls: int = Field(
        default=0, ge=0, description="Poll ceiling per session (0 for unlimited)"
    )

    # Server configuration
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8080, description="Server port")
    debug: bool = Field(default=False, description="Enable debug mode")

    # Logging configuration
    log_level: str = Field(default="INFO", description="Log level")
    log_format: str = Field(default="json", description="Log format")

    # Security
    allowed_origins: str | list[str] = Field(
        default="http://localhost:5173",
        validation_alias=AliasChoices("allowed_origins", "allowed_origin"),
        description="Allowed CORS origins (comma-separated)",
    )
    enable_cors: bool = Field(default=True, description="Enable CORS")

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def parse_allowed_origins(cls, v: Any) -> list[str]:
        """Parse allowed origins from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        elif isinstance(v, list):
            return v
        else:
            error_msg = f"allowed_origins must be a string or list, got {type(v)}"
            raise ValueError(error_msg)

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level."""
        allowed_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in allowed_levels:
            raise ValueError(f"Invalid log level: {v}")
        return v.upper()

    @field_validator("log_format")
    @classmethod
    def validate_log_format(cls, v: str) -> str:
        """Validate log format."""
        if v.lower() not in {"json", "console"}:
            raise ValueError(f"Invalid log format: {v}")
        return v.lower()

    @property
    def server_config(self) -> ServerConfig:
        """Get server configuration."""
        return ServerConfig(host=self.host, port=self.port, debug=self.debug)

    @property
    def retry_policy(self) -> RetryPolicy:
        """Get the transport retry policy."""
        return RetryPolicy(
            max_retries=self.retry_max_attempts,
            delays={
                503: self.retry_delay_unavailable,
                529: self.retry_delay_overloaded,
            },
        )

    @property
    def cadence_policy(self) -> CadencePolicy:
        """Get the polling cadence policy."""
        return CadencePolicy(
            in_progress_seconds=self.poll_interval_in_progress,
            default_seconds=self.poll_interval_default,
        )


# Global settings instance - initialized lazily to avoid import-time errors
_settings_instance: Settings | None = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if necessary."""
    global _settings_instance
    if _settings_instance is None:
        try:
            _settings_instance = Settings()
        except ValidationError as e:
            raise ConfigurationError(
                f"Invalid configuration: {e}", context={"errors": e.error_count()}
            ) from e
    return _settings_instance
