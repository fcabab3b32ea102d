"""Image upload validation."""

from dataclasses import dataclass
from functools import cached_property
from pathlib import PurePath
from uuid import uuid4

from werkzeug.utils import secure_filename

from src.services.catalog.errors import ValidationFailedError
from src.settings import settings

_EXTENSIONS = {"image/jpeg": ".jpg", "image/png": ".png"}


@dataclass(frozen=True)
class ImageUpload:
    """An uploaded image held in memory.

    Attributes:
        filename: Client-supplied file name.
        content_type: Declared MIME type.
        data: Raw bytes.
    """

    filename: str
    content_type: str
    data: bytes

    @cached_property
    def safe_filename(self) -> str:
        """Sanitized base name; generated once when nothing usable is left."""
        name = secure_filename(PurePath(self.filename.replace("\\", "/")).name)
        if not name:
            return f"{uuid4().hex}{_EXTENSIONS.get(self.content_type.lower(), '')}"
        return name


def validate_image(
    image: ImageUpload,
    max_size: int | None = None,
    allowed_types: frozenset[str] | None = None,
) -> None:
    """Check an upload's content type and size.

    Args:
        image: Upload to check.
        max_size: Byte limit, defaults to MAX_IMAGE_SIZE.
        allowed_types: Accepted MIME types, defaults to ALLOWED_IMAGE_TYPES.

    Raises:
        ValidationFailedError: If the image is empty, too large or of
            an unsupported type.
    """
    max_size = max_size if max_size is not None else settings.uploads.max_image_size
    allowed_types = allowed_types if allowed_types is not None else settings.uploads.allowed_types

    if image.content_type.lower() not in allowed_types:
        raise ValidationFailedError(
            f"unsupported image type {image.content_type!r} for {image.filename!r}"
        )
    if not image.data:
        raise ValidationFailedError(f"empty image {image.filename!r}")
    if len(image.data) > max_size:
        raise ValidationFailedError(
            f"image {image.filename!r} exceeds {max_size} bytes ({len(image.data)})"
        )
