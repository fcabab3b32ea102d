"""Tests for image validation and file storage."""

from pathlib import Path

import pytest

from src.services.catalog.errors import TransientError, ValidationFailedError
from src.services.storage.file_storage import FileStorage
from src.services.storage.images import ImageUpload, validate_image
from tests.factories import PNG_BYTES


class TestImageUpload:
    """Tests for upload file names."""

    @staticmethod
    def test_directories_are_stripped() -> None:
        upload = ImageUpload(filename="../../etc/poster.png", content_type="image/png", data=b"x")
        assert upload.safe_filename == "poster.png"

    @staticmethod
    def test_windows_paths_are_stripped() -> None:
        upload = ImageUpload(filename="C:\\Users\\me\\shot.jpg", content_type="image/jpeg", data=b"x")
        assert upload.safe_filename == "shot.jpg"

    @staticmethod
    def test_blank_name_generated_once() -> None:
        upload = ImageUpload(filename="", content_type="image/jpeg", data=b"x")
        assert upload.safe_filename.endswith(".jpg")
        assert upload.safe_filename == upload.safe_filename

    @staticmethod
    @pytest.mark.parametrize(
        ("filename", "expected"),
        [
            ("my cover<1>?.png", "my_cover1.png"),
            ("c\x00.png", "c.png"),
            ("../../.bashrc", "bashrc"),
            ("pipe|star*quote\".jpg", "pipestarquote.jpg"),
        ],
    )
    def test_hostile_names_are_sanitized(filename: str, expected: str) -> None:
        upload = ImageUpload(filename=filename, content_type="image/png", data=b"x")
        assert upload.safe_filename == expected

    @staticmethod
    @pytest.mark.parametrize("filename", ["..", "<>?", "\x00"])
    def test_unusable_names_are_generated(filename: str) -> None:
        upload = ImageUpload(filename=filename, content_type="image/png", data=b"x")
        assert upload.safe_filename.endswith(".png")
        assert len(upload.safe_filename) == 36


class TestValidateImage:
    """Tests for validate_image."""

    @staticmethod
    def test_accepts_configured_types() -> None:
        validate_image(ImageUpload("a.png", "image/png", PNG_BYTES))
        validate_image(ImageUpload("a.jpg", "IMAGE/JPEG", PNG_BYTES))

    @staticmethod
    def test_rejects_other_types() -> None:
        with pytest.raises(ValidationFailedError, match="unsupported image type"):
            validate_image(ImageUpload("a.gif", "image/gif", PNG_BYTES))

    @staticmethod
    def test_rejects_empty() -> None:
        with pytest.raises(ValidationFailedError, match="empty image"):
            validate_image(ImageUpload("a.png", "image/png", b""))

    @staticmethod
    def test_rejects_oversize() -> None:
        with pytest.raises(ValidationFailedError, match="exceeds 10 bytes"):
            validate_image(ImageUpload("a.png", "image/png", b"x" * 11), max_size=10)

    @staticmethod
    def test_custom_allowed_types() -> None:
        validate_image(ImageUpload("a.gif", "image/gif", b"x"), allowed_types=frozenset({"image/gif"}))


class TestFileStorage:
    """Tests for FileStorage."""

    @staticmethod
    def test_save_creates_parents(storage: FileStorage, uploads_root: Path) -> None:
        path = storage.save_file(b"data", "movies/1/covers/c.png")
        assert path == (uploads_root / "movies/1/covers/c.png").resolve()
        assert path.read_bytes() == b"data"

    @staticmethod
    def test_delete_directory(storage: FileStorage, uploads_root: Path) -> None:
        storage.save_file(b"a", "series/2/screenshots/a.png")
        storage.save_file(b"b", "series/2/covers/b.png")

        storage.delete_directory("series/2")

        assert not (uploads_root / "series" / "2").exists()
        assert (uploads_root / "series").is_dir()

    @staticmethod
    def test_delete_missing_directory_is_ok(storage: FileStorage) -> None:
        storage.delete_directory("movies/404")

    @staticmethod
    @pytest.mark.parametrize("path", ["../outside.png", "movies/../../x", ".", ""])
    def test_paths_outside_root_rejected(storage: FileStorage, path: str) -> None:
        with pytest.raises(ValidationFailedError, match="escapes"):
            storage.save_file(b"x", path)

    @staticmethod
    def test_null_byte_in_path_rejected(storage: FileStorage, uploads_root: Path) -> None:
        with pytest.raises(ValidationFailedError, match="null byte"):
            storage.save_file(b"x", "movies/1/covers/c\x00.png")
        assert list(uploads_root.iterdir()) == []

    @staticmethod
    def test_write_failure_is_transient(storage: FileStorage, uploads_root: Path) -> None:
        (uploads_root / "movies").write_bytes(b"not a directory")
        with pytest.raises(TransientError):
            storage.save_file(b"x", "movies/1/covers/c.png")
