"""Application configuration management using Pydantic Settings."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    All settings can be overridden via environment variables. The Supabase
    settings are optional: when either is missing the store runs against
    device-local storage only.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="network20", description="Application name, used as the top-level logger name")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Supabase
    supabase_url: str = Field(default="", description="Supabase project URL")
    supabase_anon_key: str = Field(default="", description="Supabase anon (publishable) key")

    # Auth redirects
    auth_redirect_url: str | None = Field(
        default=None,
        description="Redirect URL used in sign-up confirmation and password reset emails",
    )

    # Local storage
    local_storage_dir: str = Field(
        default=".network20",
        description="Directory holding the on-device key-value store",
    )

    @property
    def remote_configured(self) -> bool:
        """Check if both the Supabase URL and key are present."""
        return bool(self.supabase_url.strip()) and bool(self.supabase_anon_key.strip())


@lru_cache
def get_settings() -> Settings:
    """Get cached settings singleton.

    Returns:
        Settings: Application settings instance.

    Note:
        Settings are read once per process. Call get_settings.cache_clear()
        to reload settings.
    """
    return Settings()
