"""Services for genres, age categories and keywords."""

from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from src.database.connection import DatabaseConnection, get_database
from src.database.models import AgeCategory, Genre
from src.database.repositories.age_category import AgeCategoryRepository
from src.database.repositories.genre import GenreRepository
from src.database.repositories.keyword import KeywordRepository
from src.services.catalog.errors import NotFoundError, operation
from src.services.catalog.schemas import AgeCategoryData, GenreData, KeywordData
from src.utils.logger import get_logger

logger = get_logger("catalog.reference")


class _ReferenceService:
    """Base for the reference data services.

    Attributes:
        kind: Name used in operation tags.
    """

    kind: str

    def __init__(self, db: DatabaseConnection | None = None) -> None:
        """Initialize service.

        Args:
            db: Connection to use. Defaults to the shared connection.
        """
        self._db = db or get_database()

    def _op(self, name: str) -> Any:
        return operation(f"service.{self.kind}.{name}", logger)


class GenreService(_ReferenceService):
    """Manage genres."""

    kind = "genre"

    def add(self, genres: Sequence[GenreData]) -> int:
        """Insert genres whose names are new.

        Returns:
            Number of genres actually inserted.
        """
        with self._op("add"), self._db.session() as session:
            inserted = GenreRepository(session).insert_many(g.name for g in genres)
        logger.info(f"Inserted {inserted} of {len(genres)} genres")
        return inserted

    def remove(self, genre_id: int) -> None:
        """Delete a genre; its junction rows go with it.

        Raises:
            NotFoundError: If the genre does not exist.
        """
        with self._op("remove"), self._db.session() as session:
            if not GenreRepository(session).delete_by_id(genre_id):
                raise NotFoundError(f"genre {genre_id} not found")
        logger.info(f"Deleted genre {genre_id}")

    def get_by_id(self, genre_id: int) -> Genre:
        """Genre by id.

        Raises:
            NotFoundError: If the genre does not exist.
        """
        with self._op("get_by_id"), self._db.session() as session:
            genre = GenreRepository(session).get_by_id(genre_id)
            if genre is None:
                raise NotFoundError(f"genre {genre_id} not found")
            return genre

    def get_all(self) -> list[Genre]:
        """All genres ordered by id."""
        with self._op("get_all"), self._db.session() as session:
            return GenreRepository(session).get_all()


class AgeCategoryService(_ReferenceService):
    """Manage age categories."""

    kind = "age_category"

    def add(self, categories: Sequence[AgeCategoryData]) -> int:
        """Insert age ranges that are new.

        Returns:
            Number of categories actually inserted.
        """
        with self._op("add"), self._db.session() as session:
            inserted = AgeCategoryRepository(session).insert_many(
                (c.min_age, c.max_age) for c in categories
            )
        logger.info(f"Inserted {inserted} of {len(categories)} age categories")
        return inserted

    def remove(self, category_id: int) -> None:
        """Delete an age category.

        Raises:
            NotFoundError: If the category does not exist.
        """
        with self._op("remove"), self._db.session() as session:
            if not AgeCategoryRepository(session).delete_by_id(category_id):
                raise NotFoundError(f"age category {category_id} not found")
        logger.info(f"Deleted age category {category_id}")

    def get_by_id(self, category_id: int) -> AgeCategory:
        """Age category by id.

        Raises:
            NotFoundError: If the category does not exist.
        """
        with self._op("get_by_id"), self._db.session() as session:
            category = AgeCategoryRepository(session).get_by_id(category_id)
            if category is None:
                raise NotFoundError(f"age category {category_id} not found")
            return category

    def get_all(self) -> list[AgeCategory]:
        """All age categories ordered by id."""
        with self._op("get_all"), self._db.session() as session:
            return AgeCategoryRepository(session).get_all()


class KeywordService(_ReferenceService):
    """Manage keywords."""

    kind = "keyword"

    def add(self, keywords: Sequence[KeywordData]) -> int:
        """Insert keywords that are new.

        Returns:
            Number of keywords actually inserted.
        """
        with self._op("add"), self._db.session() as session:
            inserted = KeywordRepository(session).insert_many(k.name for k in keywords)
        logger.info(f"Inserted {inserted} of {len(keywords)} keywords")
        return inserted


@lru_cache(maxsize=1)
def get_genre_service() -> GenreService:
    """Get cached GenreService."""
    return GenreService()


@lru_cache(maxsize=1)
def get_age_category_service() -> AgeCategoryService:
    """Get cached AgeCategoryService."""
    return AgeCategoryService()


@lru_cache(maxsize=1)
def get_keyword_service() -> KeywordService:
    """Get cached KeywordService."""
    return KeywordService()
