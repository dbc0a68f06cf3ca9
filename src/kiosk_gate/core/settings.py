"""Application settings and configuration.

This module defines all configuration options for the Kiosk Gate service.
Settings are loaded from environment variables with sensible defaults. A
``Settings`` instance is built once at startup and handed to each component.
"""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

StoreBackend = Literal["auto", "redis", "rest", "memory", "none"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Settings can be overridden via environment variables or .env files, or
    passed explicitly to ``create_app`` (tests do this with tighter limits).
    """

    # Application metadata
    app_name: str = Field(default="Kiosk Gate", alias="APP_NAME")
    app_version: str = Field(default="0.1.0", alias="APP_VERSION")
    debug: bool = Field(default=False, alias="DEBUG")
    log_level: str = Field(default="INFO", alias="LOG_LEVEL")

    # Shared state store
    store_backend: StoreBackend = Field(default="auto", alias="STORE_BACKEND")
    redis_url: str | None = Field(default=None, alias="REDIS_URL")
    kv_rest_api_url: str | None = Field(default=None, alias="KV_REST_API_URL")
    kv_rest_api_token: str | None = Field(default=None, alias="KV_REST_API_TOKEN")
    store_timeout_seconds: float = Field(default=2.0, gt=0, alias="STORE_TIMEOUT_SECONDS")

    # Admission limits (soft caps)
    concurrency_limit: int = Field(default=100, ge=0, alias="CONCURRENCY_LIMIT")
    daily_limit: int = Field(default=100, ge=0, alias="DAILY_LIMIT")

    # Presence and expiry horizons
    liveness_window_seconds: int = Field(default=60, gt=0, alias="LIVENESS_WINDOW_SECONDS")
    session_ttl_seconds: int = Field(default=86_400, gt=0, alias="SESSION_TTL_SECONDS")
    counter_ttl_seconds: int = Field(default=172_800, gt=0, alias="COUNTER_TTL_SECONDS")
    cookie_max_age_seconds: int = Field(default=86_400, gt=0, alias="COOKIE_MAX_AGE_SECONDS")
    heartbeat_interval_seconds: int = Field(
        default=30,
        gt=0,
        alias="HEARTBEAT_INTERVAL_SECONDS",
    )

    # Calendar days are counted in this zone
    timezone: str = Field(default="Asia/Seoul", alias="APP_TIMEZONE")

    # CORS configuration for the kiosk frontend
    cors_origins: list[str] = Field(default=["*"], alias="CORS_ORIGINS")
    cors_allow_credentials: bool = Field(default=True, alias="CORS_ALLOW_CREDENTIALS")
    cors_allow_methods: list[str] = Field(
        default=["GET", "POST", "OPTIONS"],
        alias="CORS_ALLOW_METHODS",
    )
    cors_allow_headers: list[str] = Field(default=["*"], alias="CORS_ALLOW_HEADERS")

    model_config = SettingsConfigDict(
        env_file=".env",
        validate_assignment=True,
        populate_by_name=True,
        extra="ignore",
    )

    @property
    def limits(self) -> dict[str, int]:
        """Return the admission limits as a convenience dictionary."""
        return {
            "concurrency": self.concurrency_limit,
            "daily": self.daily_limit,
        }
