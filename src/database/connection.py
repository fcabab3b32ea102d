"""Relational connection pool management with SQLAlchemy 2.0.

Provides transactional sessions with proper connection pooling
and lifecycle management. PostgreSQL is the production backend;
SQLite URLs are accepted for local runs and the test suite.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import Engine, create_engine, event, text
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import QueuePool, StaticPool

from src.settings import settings
from src.utils.logger import get_logger

logger = get_logger("catalog.database")


class DatabaseConnection:
    """Manages the connection pool and session factory.

    Attributes:
        _engine: SQLAlchemy engine.
        _session_factory: Session factory bound to the engine.

    Example:
        ```python
        db = DatabaseConnection()
        with db.session() as session:
            result = session.execute(text("SELECT 1"))
        ```
    """

    def __init__(self, url: str | None = None) -> None:
        """Initialize the connection pool.

        Args:
            url: Database URL. Defaults to the configured PostgreSQL URL.
        """
        self._url = url or settings.database.sync_url
        self._engine = self._create_engine(self._url)
        self._session_factory = self._create_session_factory()

    @staticmethod
    def _create_engine(url: str) -> Engine:
        """Create SQLAlchemy engine for the URL's backend.

        PostgreSQL connections carry the configured statement timeout.
        SQLite connections enforce foreign keys; in-memory databases share
        a single connection so every session sees the same data.

        Args:
            url: Database URL.

        Returns:
            Configured SQLAlchemy Engine.
        """
        backend = make_url(url).get_backend_name()
        if backend == "sqlite":
            options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
            if ":memory:" in url or url.rstrip("/").endswith("sqlite:"):
                options["poolclass"] = StaticPool
            engine = create_engine(url, echo=settings.debug, **options)
            event.listen(engine, "connect", _enable_sqlite_foreign_keys)
            return engine

        db = settings.database
        return create_engine(
            url,
            poolclass=QueuePool,
            pool_size=db.pool_size,
            max_overflow=db.pool_overflow,
            pool_timeout=db.pool_timeout,
            pool_pre_ping=True,
            echo=settings.debug,
            connect_args={"options": f"-c statement_timeout={db.statement_timeout_ms}"},
        )

    def _create_session_factory(self) -> sessionmaker[Session]:
        """Create session factory.

        Returns:
            Configured sessionmaker.
        """
        return sessionmaker(
            bind=self._engine,
            autocommit=False,
            autoflush=False,
            expire_on_commit=False,
        )

    @contextmanager
    def session(self) -> Generator[Session, None, None]:
        """Provide a transactional session scope.

        Automatically commits on success, rolls back on exception,
        and closes the session when done.

        Yields:
            SQLAlchemy Session instance.

        Raises:
            Exception: Re-raises any exception after rollback.
        """
        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    def check_connection(self) -> bool:
        """Test database connectivity with a simple query.

        Returns:
            True if connection successful, False otherwise.
        """
        try:
            with self.session() as session:
                session.execute(text("SELECT 1"))
            return True
        except Exception:  # noqa: BLE001
            return False

    def create_schema(self) -> None:
        """Create all tables declared on the ORM metadata."""
        from src.database.models import Base

        Base.metadata.create_all(bind=self._engine)

    def drop_schema(self) -> None:
        """Drop all tables declared on the ORM metadata."""
        from src.database.models import Base

        Base.metadata.drop_all(bind=self._engine)

    def dispose(self) -> None:
        """Dispose the connection pool and release resources.

        Should be called during application shutdown.
        """
        self._engine.dispose()

    @property
    def engine(self) -> Engine:
        """Get the underlying engine."""
        return self._engine

    @property
    def backend(self) -> str:
        """Backend name of the engine dialect ('postgresql', 'sqlite')."""
        return self._engine.dialect.name


def _enable_sqlite_foreign_keys(dbapi_connection: Any, _record: Any) -> None:
    """Turn on SQLite foreign key enforcement for a new connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# =============================================================================
# MODULE-LEVEL CONVENIENCE FUNCTIONS
# =============================================================================

_db: DatabaseConnection | None = None


def get_database() -> DatabaseConnection:
    """Get the shared DatabaseConnection instance.

    Creates the instance on first call (lazy initialization).

    Returns:
        DatabaseConnection instance.
    """
    global _db  # noqa: PLW0603
    if _db is None:
        _db = DatabaseConnection()
    return _db


def init_database() -> None:
    """Initialize database connection pool.

    Call during application startup to eagerly create connections.
    """
    db = get_database()
    if db.check_connection():
        logger.info("Database connection established")
    else:
        logger.error("Database connection failed")


def close_database() -> None:
    """Close database connection pool.

    Call during application shutdown to release resources.
    """
    global _db  # noqa: PLW0603
    if _db is not None:
        _db.dispose()
        _db = None
        logger.info("Database connections closed")
