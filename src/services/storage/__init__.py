"""Upload storage for cover and screenshot images."""

from src.services.storage.file_storage import FileStorage, get_file_storage
from src.services.storage.images import ImageUpload, validate_image

__all__ = ["FileStorage", "get_file_storage", "ImageUpload", "validate_image"]
