"""Error kinds raised by catalog stores and services.

Every layer prefixes the message with its operation tag
(``storage.movie.insert``, ``service.movie.add``) and keeps the kind,
so callers can branch on the class while logs show the full path.
"""

import logging
from collections.abc import Generator
from contextlib import contextmanager
from typing import Self

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

# =============================================================================
# ERROR KINDS
# =============================================================================


class CatalogError(Exception):
    """Base exception for catalog operations."""

    def wrap(self, op: str) -> Self:
        """Return an error of the same kind prefixed with an operation tag.

        Args:
            op: Operation tag of the calling layer.

        Returns:
            New error instance with message ``"{op}: {message}"``.
        """
        return type(self)(f"{op}: {self}")


class NotFoundError(CatalogError):
    """Raised when the referenced entity does not exist."""

    pass


class AlreadyExistsError(CatalogError):
    """Raised when a natural key or unique pair already exists."""

    pass


class ValidationFailedError(CatalogError):
    """Raised when input violates a constraint or format rule."""

    pass


class TransientError(CatalogError):
    """Raised on database failures worth retrying (timeouts, lost connections)."""

    pass


# =============================================================================
# TRANSLATION
# =============================================================================

_PG_UNIQUE_VIOLATION = "23505"
_PG_FOREIGN_KEY_VIOLATION = "23503"


def from_integrity_error(error: IntegrityError, op: str) -> CatalogError:
    """Map a database constraint violation to an error kind.

    Unique violations become AlreadyExistsError, foreign key violations
    NotFoundError (the referenced row is missing), anything else
    (check, not-null) ValidationFailedError.

    Args:
        error: Integrity error raised by the driver.
        op: Operation tag for the message.

    Returns:
        Catalog error of the matching kind.
    """
    code = getattr(error.orig, "pgcode", None)
    text = str(error.orig)
    if code == _PG_UNIQUE_VIOLATION or "UNIQUE constraint failed" in text:
        return AlreadyExistsError(f"{op}: {text}")
    if code == _PG_FOREIGN_KEY_VIOLATION or "FOREIGN KEY constraint failed" in text:
        return NotFoundError(f"{op}: {text}")
    return ValidationFailedError(f"{op}: {text}")


@contextmanager
def operation(op: str, log: logging.Logger | None = None) -> Generator[None, None, None]:
    """Tag errors escaping the block with an operation name.

    Catalog errors keep their kind. Integrity errors are classified
    with from_integrity_error; other SQLAlchemy errors (timeouts,
    dropped connections) become TransientError.

    Args:
        op: Operation tag, e.g. ``"service.movie.add"``.
        log: Logger receiving a warning for each failure, if given.

    Raises:
        CatalogError: Wrapped error of the appropriate kind.
    """
    try:
        yield
    except CatalogError as e:
        error = e.wrap(op)
        _log_failure(log, error)
        raise error from e
    except IntegrityError as e:
        error = from_integrity_error(e, op)
        _log_failure(log, error)
        raise error from e
    except SQLAlchemyError as e:
        error = TransientError(f"{op}: {e}")
        _log_failure(log, error)
        raise error from e


def _log_failure(log: logging.Logger | None, error: CatalogError) -> None:
    if log is None:
        return
    if isinstance(error, TransientError):
        log.error(f"{type(error).__name__}: {error}")
    else:
        log.warning(f"{type(error).__name__}: {error}")
