"""Tests for catalog error kinds and operation tagging."""

import logging
import sqlite3

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.services.catalog.errors import (
    AlreadyExistsError,
    CatalogError,
    NotFoundError,
    TransientError,
    ValidationFailedError,
    from_integrity_error,
    operation,
)


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT ...", {}, sqlite3.IntegrityError(message))


class PgError(Exception):
    def __init__(self, pgcode: str) -> None:
        super().__init__(f"pg error {pgcode}")
        self.pgcode = pgcode


class TestWrap:
    """Tests for CatalogError.wrap."""

    @staticmethod
    def test_wrap_keeps_kind_and_prefixes() -> None:
        error = NotFoundError("movie 1 not found").wrap("service.movie.get_by_id")
        assert isinstance(error, NotFoundError)
        assert str(error) == "service.movie.get_by_id: movie 1 not found"


class TestFromIntegrityError:
    """Tests for constraint violation classification."""

    @staticmethod
    def test_sqlite_unique() -> None:
        error = from_integrity_error(integrity_error("UNIQUE constraint failed: genres.name"), "op")
        assert isinstance(error, AlreadyExistsError)

    @staticmethod
    def test_sqlite_foreign_key() -> None:
        error = from_integrity_error(integrity_error("FOREIGN KEY constraint failed"), "op")
        assert isinstance(error, NotFoundError)

    @staticmethod
    def test_sqlite_not_null_is_validation() -> None:
        error = from_integrity_error(integrity_error("NOT NULL constraint failed: genres.name"), "op")
        assert isinstance(error, ValidationFailedError)
        assert str(error).startswith("op: ")

    @staticmethod
    @pytest.mark.parametrize(
        ("code", "kind"),
        [("23505", AlreadyExistsError), ("23503", NotFoundError), ("23514", ValidationFailedError)],
    )
    def test_postgres_codes(code: str, kind: type[CatalogError]) -> None:
        error = from_integrity_error(IntegrityError("INSERT ...", {}, PgError(code)), "op")
        assert isinstance(error, kind)


class TestOperation:
    """Tests for the operation context manager."""

    @staticmethod
    def test_catalog_error_is_tagged() -> None:
        with pytest.raises(NotFoundError, match="^storage.movie.get: movie 2 not found$"):
            with operation("storage.movie.get"):
                raise NotFoundError("movie 2 not found")

    @staticmethod
    def test_integrity_error_is_classified() -> None:
        with pytest.raises(AlreadyExistsError, match="^storage.genre.insert: "):
            with operation("storage.genre.insert"):
                raise integrity_error("UNIQUE constraint failed: genres.name")

    @staticmethod
    def test_other_database_errors_are_transient() -> None:
        with pytest.raises(TransientError):
            with operation("storage.movie.get"):
                raise OperationalError("SELECT 1", {}, Exception("timeout"))

    @staticmethod
    def test_unrelated_errors_pass_through() -> None:
        with pytest.raises(KeyError):
            with operation("service.movie.add"):
                raise KeyError("x")

    @staticmethod
    def test_failures_are_logged(caplog: pytest.LogCaptureFixture) -> None:
        log = logging.getLogger("tests.errors")
        with caplog.at_level(logging.WARNING, logger="tests.errors"):
            with pytest.raises(ValidationFailedError):
                with operation("service.movie.add", log):
                    raise ValidationFailedError("bad")
            with pytest.raises(TransientError):
                with operation("service.movie.get", log):
                    raise OperationalError("SELECT 1", {}, Exception("down"))

        levels = [record.levelname for record in caplog.records]
        assert levels == ["WARNING", "ERROR"]
