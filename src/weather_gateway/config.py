"""Application configuration management."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Placeholder keys available at startup; override API_KEYS in any real deployment.
DEFAULT_API_KEYS = [
    "b2180c8ac8633b32549bb10ac4ca7730",
    "e7dd890a480d1e9547cd9d92b2f803c7",
    "5ceca6dbfe14418a07e12fc76ec7d1bb",
    "147854e652b5b992ec688497963df829",
    "bc6faa4243d1bf3acef6c4f5cd862c1f",
]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Server settings
    app_host: str = Field(default="0.0.0.0", description="Server bind host")
    app_port: int = Field(default=8080, description="Server bind port")

    # Upstream API settings
    upstream_url: str = Field(
        default="http://api.openweathermap.org/data/2.5/weather",
        description="OpenWeatherMap current weather endpoint",
    )
    upstream_timeout_seconds: float = Field(
        default=5.0,
        description="Upstream request timeout in seconds",
        ge=0.1,
        le=30.0,
    )
    upstream_api_key: str | None = Field(
        default=None,
        description="Provider credential; when unset the caller's API key is forwarded",
    )

    # Admission settings
    api_keys: list[str] = Field(
        default_factory=lambda: list(DEFAULT_API_KEYS),
        description="API keys accepted at startup",
    )
    rate_limit_quota: int = Field(
        default=5,
        description="Requests allowed per key in each window",
        ge=1,
    )
    rate_limit_window_seconds: float = Field(
        default=3600,
        description="Length of the global rate limit window in seconds",
        gt=0,
    )

    # Logging settings
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    log_format: str = Field(
        default="json",
        description="Log format (json or text)",
    )


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()
