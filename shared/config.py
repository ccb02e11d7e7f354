"""
Shared configuration management for the Photo Sharing service.
"""

import math

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


ALLOWED_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_prefix="PHOTOS_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local", description="Deployment environment name")
    log_level: str = Field(default="info", description="Logging level")

    # Cache
    cache_enabled: bool = Field(default=True, description="Route cacheable repository reads through the cache")
    cache_expiration_seconds: float = Field(default=1200.0, description="Absolute expiration of cache entries")
    cache_single_flight: bool = Field(default=False, description="Coalesce concurrent misses on the same key")
    enable_cache_admin: bool = Field(default=False, description="Expose the cache clear endpoint")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        if value.lower() not in ALLOWED_LOG_LEVELS:
            raise ValueError(f"Log level must be one of: {', '.join(ALLOWED_LOG_LEVELS)}")
        return value.lower()

    @field_validator("cache_expiration_seconds")
    @classmethod
    def validate_cache_expiration(cls, value: float) -> float:
        if not math.isfinite(value) or value <= 0:
            raise ValueError("Cache expiration must be a positive, finite number of seconds.")
        return value


class ServiceConfig(BaseConfig):
    """Service-specific configuration."""

    service_name: str
    port: int


def get_config(service_name: str, port: int, **overrides) -> ServiceConfig:
    """Get configuration for a specific service."""
    return ServiceConfig(service_name=service_name, port=port, **overrides)
