"""
Base repository with generic CRUD operations.

Provides a reusable base class for all repositories with
common database operations.
"""

from typing import Any, Generic, TypeVar

from sqlalchemy import delete, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session

from src.database.models.base import Base

# Generic type variable bound to Base model
ModelT = TypeVar("ModelT", bound=Base)


def dialect_insert(session: Session, model: type[Base]) -> Any:
    """Build an INSERT supporting ON CONFLICT for the session's backend.

    Args:
        session: Session whose bind decides the dialect.
        model: Mapped class to insert into.

    Returns:
        PostgreSQL or SQLite Insert construct.
    """
    if session.get_bind().dialect.name == "sqlite":
        return sqlite.insert(model)
    return postgresql.insert(model)


class BaseRepository(Generic[ModelT]):
    """Generic repository providing common CRUD operations.

    Attributes:
        model: SQLAlchemy model class.
        session: Database session.
    """

    model: type[ModelT]

    def __init__(self, session: Session) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy session instance.
        """
        self._session = session

    @property
    def session(self) -> Session:
        """Get the database session."""
        return self._session

    def insert_stmt(self, model: type[Base] | None = None) -> Any:
        """Dialect-aware INSERT for this repository's model (or another)."""
        return dialect_insert(self._session, model or self.model)

    def get_by_id(self, entity_id: int) -> ModelT | None:
        """Retrieve entity by primary key.

        Args:
            entity_id: Primary key value.

        Returns:
            Entity instance or None if not found.
        """
        return self._session.get(self.model, entity_id)

    def get_all(self, limit: int | None = None, offset: int = 0) -> list[ModelT]:
        """Retrieve all entities ordered by primary key.

        Args:
            limit: Maximum number of results, None for no limit.
            offset: Number of results to skip.

        Returns:
            List of entity instances.
        """
        stmt = select(self.model).order_by(self.model.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._session.scalars(stmt).all())

    def exists(self, entity_id: int) -> bool:
        """Check if entity exists by primary key.

        Args:
            entity_id: Primary key value.

        Returns:
            True if entity exists.
        """
        stmt = select(self.model.id).where(self.model.id == entity_id)
        return self._session.scalar(stmt) is not None

    def count(self) -> int:
        """Count total number of entities.

        Returns:
            Total count.
        """
        stmt = select(func.count()).select_from(self.model)
        result = self._session.execute(stmt).scalar()
        return result or 0

    def create(self, entity: ModelT) -> ModelT:
        """Create a new entity.

        Args:
            entity: Entity instance to persist.

        Returns:
            Persisted entity with generated ID.
        """
        self._session.add(entity)
        self._session.flush()
        return entity

    def delete_by_id(self, entity_id: int) -> bool:
        """Delete entity by primary key.

        Args:
            entity_id: Primary key value.

        Returns:
            True if entity was deleted, False if not found.
        """
        result = self._session.execute(delete(self.model).where(self.model.id == entity_id))
        return result.rowcount > 0
