"""
Shared configuration management for the Weather Gateway.
"""

from typing import Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_WEATHER_API_BASE_URL = (
    "https://weather.visualcrossing.com/VisualCrossingWebServices/rest/services/timeline"
)


class BaseConfig(BaseSettings):
    """Base configuration class with common settings."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore"
    )

    # Environment
    env: str = Field(default="local")
    log_level: str = Field(default="info")

    # HTTP listener
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8080)


class GatewayConfig(BaseConfig):
    """Weather gateway configuration."""

    # Upstream weather provider
    weather_api_key: str = Field(default="")
    weather_api_base_url: str = Field(default=DEFAULT_WEATHER_API_BASE_URL)
    weather_unit_group: str = Field(default="us")
    weather_api_timeout_seconds: float = Field(default=10.0, gt=0)

    # Cache store; unset disables caching entirely
    redis_url: Optional[str] = Field(default=None)
    redis_socket_timeout_seconds: float = Field(default=5.0, gt=0)
    cache_ttl_seconds: int = Field(default=6000, gt=0)

    # Rate limiting
    rate_limit_max_requests: int = Field(default=50, gt=0)
    rate_limit_window_seconds: int = Field(default=3600, gt=0)
    rate_limit_trust_proxy: bool = Field(default=False)

    @field_validator("redis_url", mode="before")
    @classmethod
    def _blank_redis_url_is_unset(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


def get_config(**overrides) -> GatewayConfig:
    """Get gateway configuration, with optional explicit overrides."""
    return GatewayConfig(**overrides)
