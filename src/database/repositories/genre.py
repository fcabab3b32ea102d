"""Genre repository for reference data operations.

Provides idempotent inserts and lookups for genres.
"""

from collections.abc import Iterable

from sqlalchemy import select

from src.database.models import Genre
from src.database.repositories.base import BaseRepository


class GenreRepository(BaseRepository[Genre]):
    """Repository for Genre entity operations.

    Genres are deduplicated by name; inserting an existing name
    is a no-op that still yields its id.
    """

    model = Genre

    def get_by_name(self, name: str) -> Genre | None:
        """Retrieve genre by name.

        Args:
            name: Genre name (e.g., 'Horror').

        Returns:
            Genre instance or None.
        """
        return self._session.scalar(select(Genre).where(Genre.name == name))

    def upsert(self, name: str) -> int:
        """Insert the genre if absent and return its id in one statement.

        Args:
            name: Genre name.

        Returns:
            Id of the new or existing genre.
        """
        stmt = self.insert_stmt().values(name=name)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={"name": stmt.excluded.name},
        ).returning(Genre.id)
        return self._session.execute(stmt).scalar_one()

    def insert_many(self, names: Iterable[str]) -> int:
        """Insert genres, skipping names that already exist.

        Args:
            names: Genre names.

        Returns:
            Number of genres actually inserted.
        """
        rows = [{"name": name} for name in dict.fromkeys(names)]
        if not rows:
            return 0
        stmt = self.insert_stmt().values(rows).on_conflict_do_nothing(index_elements=["name"])
        return self._session.execute(stmt).rowcount
