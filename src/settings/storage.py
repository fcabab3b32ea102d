"""Upload settings for cover and screenshot images."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class UploadSettings(BaseSettings):
    """Image upload limits.

    Attributes:
        max_image_size: Maximum accepted image size in bytes.
        allowed_types_raw: Comma-separated accepted content types.
    """

    max_image_size: int = Field(default=10 * 1024 * 1024, alias="MAX_IMAGE_SIZE", gt=0)
    allowed_types_raw: str = Field(
        default="image/jpeg,image/png",
        alias="ALLOWED_IMAGE_TYPES",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def allowed_types(self) -> frozenset[str]:
        """Parse accepted content types from comma-separated string."""
        return frozenset(t.strip().lower() for t in self.allowed_types_raw.split(",") if t.strip())
