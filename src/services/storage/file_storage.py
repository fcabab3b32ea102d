"""Disk storage for uploaded images.

Files live under the uploads directory as
``<movies|series>/<id>/covers/<name>`` and
``<movies|series>/<id>/screenshots/<name>``.
"""

import shutil
from functools import lru_cache
from pathlib import Path

from src.services.catalog.errors import TransientError, ValidationFailedError
from src.settings import settings
from src.utils.logger import get_logger

logger = get_logger("catalog.storage")


class FileStorage:
    """Stores files under a root directory.

    Attributes:
        root: Directory every relative path is resolved against.
    """

    def __init__(self, root: Path | None = None) -> None:
        """Initialize storage.

        Args:
            root: Base directory. Defaults to the configured uploads directory.
        """
        self.root = (root or settings.paths.uploads_dir).resolve()

    def _resolve(self, relative_path: str) -> Path:
        """Resolve a relative path, refusing anything outside the root."""
        if "\x00" in relative_path:
            raise ValidationFailedError(f"path {relative_path!r} contains a null byte")
        path = (self.root / relative_path).resolve()
        if path == self.root or not path.is_relative_to(self.root):
            raise ValidationFailedError(f"path {relative_path!r} escapes the uploads directory")
        return path

    def save_file(self, data: bytes, relative_path: str) -> Path:
        """Write bytes to a file, creating parent directories.

        Args:
            data: File contents.
            relative_path: Destination relative to the root.

        Returns:
            Absolute path of the written file.

        Raises:
            ValidationFailedError: If the path is unusable or outside the root.
            TransientError: If the file cannot be written.
        """
        path = self._resolve(relative_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except (OSError, ValueError) as e:
            raise TransientError(f"storage.file.save: {e}") from e
        logger.debug(f"Saved {len(data)} bytes to {path}")
        return path

    def delete_directory(self, relative_path: str) -> None:
        """Remove a directory tree; a missing directory is not an error.

        Raises:
            TransientError: If the directory cannot be removed.
        """
        path = self._resolve(relative_path)
        if not path.exists():
            return
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise TransientError(f"storage.file.delete_directory: {e}") from e
        logger.debug(f"Removed directory {path}")


@lru_cache(maxsize=1)
def get_file_storage() -> FileStorage:
    """Get cached FileStorage rooted at the uploads directory."""
    return FileStorage()
