"""Configuration management for TalkForge."""

from functools import lru_cache
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="TALKFORGE_",
        env_file=".env.local",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # API Keys (no prefix, standard env vars)
    google_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("GOOGLE_API_KEY", "GEMINI_API_KEY"),
    )
    openai_api_key: str | None = Field(default=None, alias="OPENAI_API_KEY")
    anthropic_api_key: str | None = Field(default=None, alias="ANTHROPIC_API_KEY")

    # Provider configuration
    provider: Literal["google", "openai", "anthropic"] = "google"
    model: str | None = Field(
        default=None,
        description="Model override for the configured provider only",
    )
    gemini_api_base: str = "https://generativelanguage.googleapis.com/v1beta"
    temperature: float = Field(default=0.8, ge=0.0, le=2.0)
    request_timeout: float = Field(default=60.0, gt=0, le=600)

    # GitHub lookups
    github_api_base: str = "https://api.github.com"
    github_user_agent: str = "TalkForge-App"
    lookup_debounce_ms: int = Field(
        default=700,
        ge=0,
        le=10000,
        description="Delay before a GitHub lookup fires, reset on every edit",
    )

    # Input limits
    max_pdf_size_mb: int = Field(default=10, ge=1, le=100)
    max_profile_text_length: int = Field(default=50000, ge=1000)
    min_profile_text_length: int = Field(default=50, ge=1)
    max_event_description_length: int = Field(default=1000, ge=100)

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def max_pdf_size_bytes(self) -> int:
        """Maximum accepted upload size in bytes."""
        return self.max_pdf_size_mb * 1024 * 1024

    def api_key_for(self, provider: str) -> str | None:
        """Return the configured API key for a provider."""
        if provider == "openai":
            return self.openai_api_key
        if provider == "anthropic":
            return self.anthropic_api_key
        return self.google_api_key

    def model_for(self, provider: str) -> str | None:
        """Return the model override, which only applies to the configured provider."""
        return self.model if provider == self.provider else None


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
