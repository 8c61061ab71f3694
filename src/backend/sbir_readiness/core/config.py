"""
Application configuration management.

Loads settings from environment variables via .env file.
Supports multiple environments (development, staging, production).
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    All sensitive values should be stored in .env file (not committed to git).
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "SBIR Readiness"
    app_version: str = "0.1.0"
    environment: Literal["development", "staging", "production"] = "development"
    debug: bool = Field(default=False, description="Enable debug mode")

    # API Configuration
    api_prefix: str = "/api/v1"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    allowed_origins: str = Field(
        default="http://localhost:3000,http://localhost:5173",
        description="CORS allowed origins (comma-separated)"
    )

    @property
    def cors_origins(self) -> list[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.allowed_origins.split(",") if origin.strip()]

    # OpenAI (external scoring oracle)
    openai_api_key: str | None = Field(
        default=None,
        description="OpenAI API key; checked when a scoring call is made, not at startup"
    )
    openai_model: str = Field(
        default="gpt-4o-mini",
        description="Chat completion model used for section scoring"
    )
    openai_timeout: float = Field(
        default=60.0,
        gt=0,
        description="Timeout for a single scoring call in seconds"
    )
    scoring_max_section_chars: int = Field(
        default=6000,
        ge=1,
        description="Section text is truncated to this many characters before scoring"
    )

    # Logging
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "INFO"
    log_format: Literal["json", "console"] = "json"

    @field_validator("openai_api_key", mode="before")
    @classmethod
    def blank_key_is_missing(cls, v: str | None) -> str | None:
        """Treat an empty OPENAI_API_KEY the same as an unset one."""
        if isinstance(v, str) and not v.strip():
            return None
        return v


@lru_cache
def get_settings() -> Settings:
    """
    Get cached application settings.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
