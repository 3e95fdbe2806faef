"""Application configuration settings."""

from __future__ import annotations

from functools import lru_cache

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE = ".env"
ENV_FILE_ENCODING = "utf-8"


class Settings(BaseSettings):
    """Application configuration values loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=ENV_FILE, env_file_encoding=ENV_FILE_ENCODING, extra="ignore"
    )

    database_url: str = Field(
        default="sqlite:///./splitfy.db",
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify bearer tokens", min_length=1
    )
    access_token_expire_minutes: int = Field(
        default=60,
        description="Number of minutes before issued access tokens expire",
        gt=0,
    )
    app_timezone: str | None = Field(
        default="UTC",
        description="Timezone used to localize persisted timestamps",
    )
    log_level: str = Field(default="INFO", description="Root logging level")
    cors_origins: str = Field(
        default="http://localhost:5173",
        description="Comma separated list of origins allowed to call the API",
    )
    sendgrid_api_key: str | None = Field(
        default=None,
        description="SendGrid API key used for sending transactional emails via the REST API",
    )
    sendgrid_sender: str | None = Field(
        default=None,
        description="Email address that will appear as the sender of transactional messages",
        min_length=3,
    )
    openai_api_key: str | None = Field(
        default=None, description="API key used for negotiation analysis"
    )
    openai_base_url: str | None = Field(
        default=None, description="Optional override of the OpenAI API base URL"
    )
    openai_model: str | None = Field(
        default="gpt-4.1-mini", description="Model used for negotiation analysis"
    )
    openai_temperature: float = Field(default=0.2, ge=0, le=2)
    openai_max_output_tokens: int | None = Field(default=800)
    azure_storage_connection_string: str | None = Field(
        default=None, description="Connection string for profile image storage"
    )
    azure_storage_container_name: str | None = Field(
        default=None, description="Blob container that stores uploaded objects"
    )
    activity_rate_limit: int = Field(
        default=120,
        description="Activity sink requests allowed per user and window",
        gt=0,
    )
    message_rate_limit: int = Field(
        default=30,
        description="Direct messages allowed per user and window",
        gt=0,
    )
    rate_limit_window_seconds: float = Field(
        default=60.0,
        description="Length of the rate limiting window in seconds",
        gt=0,
    )

    @model_validator(mode="after")
    def _validate_sendgrid_pair(self) -> "Settings":
        if bool(self.sendgrid_api_key) ^ bool(self.sendgrid_sender):
            raise ValueError(
                "SENDGRID_API_KEY and SENDGRID_SENDER must both be provided to enable email"
            )
        if self.sendgrid_sender and "@" not in self.sendgrid_sender:
            raise ValueError("SENDGRID_SENDER must be a valid email address")
        return self

    def allowed_origins(self) -> list[str]:
        """Return the configured CORS origins as a list."""

        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
