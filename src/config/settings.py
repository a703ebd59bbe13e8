"""
Application settings - pydantic-settings configuration.

This module defines application configuration using pydantic-settings
for environment variable loading with validation and defaults.
"""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database configuration (required, no default)
    database_url: str = Field(..., min_length=1)
    pool_min_size: int = 1  # Minimum connections in pool
    pool_max_size: int = 10  # Maximum connections in pool
    connect_timeout_seconds: float = 10.0  # Startup wait before giving up
    health_check_timeout_seconds: float = 2.0

    # HTTP listener
    host: str = "0.0.0.0"
    port: int = 5000

    # "development" exposes exception messages in 500 responses
    environment: str = "production"
    log_level: str = "INFO"

    # Cross-origin policy
    cors_allowed_origins: list[str] = [
        "http://localhost:5175",
        "http://localhost:5173",
        "http://localhost:3000",
        "https://graceful-crisp-800723.netlify.app",
    ]
    cors_trusted_suffixes: list[str] = [".netlify.app"]

    @property
    def is_development(self) -> bool:
        return self.environment.strip().lower() == "development"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
