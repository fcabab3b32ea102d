"""Centralized configuration for the media catalog backend.

Configuration strategy (Hybrid approach):
- CRITICAL settings (Security): Require explicit .env configuration.
  No defaults. Raises ValidationError if missing.
- INFRASTRUCTURE settings (Logging, Database, API ports, uploads): Can use
  safe defaults. Override via .env as needed.

All configuration values are sourced from environment variables (.env file).

Usage:
    from src.settings import settings

    settings.database.sync_url
    settings.paths.uploads_dir
"""

from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from src.settings.api import APISettings, CORSSettings, SecuritySettings
from src.settings.base import LoggingSettings, PathsSettings
from src.settings.database import DatabaseSettings
from src.settings.storage import UploadSettings

__all__ = [
    # Main
    "Settings",
    "settings",
    # Base
    "PathsSettings",
    "LoggingSettings",
    # Database
    "DatabaseSettings",
    # API
    "APISettings",
    "SecuritySettings",
    "CORSSettings",
    # Uploads
    "UploadSettings",
    # Utilities
    "get_masked_settings",
]


# =============================================================================
# GLOBAL SETTINGS
# =============================================================================


class Settings(BaseSettings):
    """Global application settings.

    Aggregates all configuration sections into a single object.
    Access via the singleton: `from src.settings import settings`
    """

    environment: str = Field(default="development", alias="ENVIRONMENT")
    debug: bool = Field(default=False, alias="DEBUG")

    # Paths and logging
    paths: PathsSettings = Field(default_factory=PathsSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

    # Database
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)

    # API
    api: APISettings = Field(default_factory=APISettings)
    security: SecuritySettings = Field(default_factory=SecuritySettings)
    cors: CORSSettings = Field(default_factory=CORSSettings)

    # Uploads
    uploads: UploadSettings = Field(default_factory=UploadSettings)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        valid_envs = {"development", "production", "test"}
        v_lower = v.lower()
        if v_lower not in valid_envs:
            raise ValueError(f"Invalid ENVIRONMENT. Valid: {valid_envs}")
        return v_lower

    def model_post_init(self, _: Any) -> None:
        """Initialize directories after settings are loaded."""
        self.paths.ensure_directories()


# =============================================================================
# SINGLETON INSTANCE
# =============================================================================

settings = Settings()


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_masked_settings() -> dict[str, Any]:
    """Return settings dict with sensitive values masked.

    Returns:
        Configuration dictionary safe for logging.
    """
    config = settings.model_dump()
    mask = "***MASKED***"

    # Paths to mask (section, key)
    secrets = [
        ("database", "password"),
        ("database", "url"),
        ("security", "jwt_secret_key"),
    ]

    for section, key in secrets:
        if section in config and key in config[section] and config[section][key]:
            config[section][key] = mask

    return config
