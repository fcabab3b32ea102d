"""Base configuration settings.

Contains foundational settings for paths and logging.
"""

from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# =============================================================================
# PROJECT ROOT DETECTION
# =============================================================================

_PROJECT_ROOT = Path(__file__).parent.parent.parent
_ENV_FILE = _PROJECT_ROOT / ".env"


def get_project_root() -> Path:
    """Get project root directory."""
    return _PROJECT_ROOT


def get_env_file() -> Path:
    """Get .env file path."""
    return _ENV_FILE


# =============================================================================
# PATH SETTINGS
# =============================================================================


class PathsSettings(BaseSettings):
    """Uploads and logs paths configuration.

    Attributes:
        uploads_root: Override for the uploads directory (absolute or
            relative to the project root).
    """

    uploads_root: str = Field(default="uploads", alias="UPLOADS_DIR")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def project_root(self) -> Path:
        """Project root directory."""
        return _PROJECT_ROOT

    @property
    def uploads_dir(self) -> Path:
        """Covers and screenshots of movies and series."""
        path = Path(self.uploads_root)
        return path if path.is_absolute() else _PROJECT_ROOT / path

    @property
    def logs_dir(self) -> Path:
        """Application logs."""
        return _PROJECT_ROOT / "logs"

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        directories = [
            self.uploads_dir,
            self.logs_dir,
        ]
        for directory in directories:
            directory.mkdir(parents=True, exist_ok=True)


# =============================================================================
# LOGGING SETTINGS
# =============================================================================


class LoggingSettings(BaseSettings):
    """Logging configuration.

    Attributes:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_dir: Log files directory.
        format: Log format (json or text).
    """

    level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_dir: str = Field(default="logs", alias="LOG_DIR")
    format: str = Field(default="json", alias="LOG_FORMAT")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @field_validator("level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is valid."""
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        v_upper = v.upper()
        if v_upper not in valid_levels:
            raise ValueError(f"Invalid LOG_LEVEL. Valid: {valid_levels}")
        return v_upper
