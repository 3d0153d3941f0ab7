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
        description="Database connection URL used by SQLAlchemy to connect to the DB",
        min_length=1,
    )
    secret_key: str = Field(
        description="Secret key used to verify access tokens", min_length=1
    )
    jwt_algorithm: str = Field(
        default="HS256", description="Algorithm used to sign access tokens"
    )
    access_token_expire_minutes: int = Field(
        default=60 * 24,
        description="Number of minutes before issued access tokens expire",
        gt=0,
    )
    allowed_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000"],
        description="Origins allowed to call the API from a browser",
    )
    max_text_length: int = Field(
        default=4000,
        description="Maximum number of characters accepted in a text message",
        gt=0,
    )
    notification_list_limit: int = Field(
        default=50,
        description="Number of notifications returned by the listing endpoint",
        gt=0,
    )
    azure_storage_connection_string: str | None = Field(
        default=None,
        description="Connection string for the blob storage account holding uploads",
    )
    azure_storage_container_name: str | None = Field(
        default=None,
        description="Container where audio and file uploads are stored",
    )
    vapid_public_key: str | None = Field(
        default=None, description="VAPID public key advertised to push subscribers"
    )
    vapid_private_key: str | None = Field(
        default=None, description="VAPID private key used to sign web push requests"
    )
    vapid_subject: str = Field(
        default="mailto:support@chatline.local",
        description="Contact URI sent with web push requests",
    )
    log_level: str = Field(default="INFO", description="Root logging level")

    @model_validator(mode="after")
    def _validate_vapid_pair(self) -> "Settings":
        if bool(self.vapid_public_key) ^ bool(self.vapid_private_key):
            raise ValueError(
                "VAPID_PUBLIC_KEY and VAPID_PRIVATE_KEY must both be provided to enable push"
            )
        if not self.vapid_subject.startswith(("mailto:", "https://")):
            raise ValueError("VAPID_SUBJECT must be a mailto: or https:// URI")
        return self

    @property
    def push_enabled(self) -> bool:
        return bool(self.vapid_private_key)


@lru_cache
def get_settings() -> Settings:
    """Return cached application settings instance."""

    return Settings()


def reset_settings_cache() -> None:
    """Clear the settings cache to force reloading from the environment."""

    get_settings.cache_clear()


__all__ = ["Settings", "get_settings", "reset_settings_cache"]
