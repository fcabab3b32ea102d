"""Keyword repository for reference data operations."""

from collections.abc import Iterable

from src.database.models import Keyword
from src.database.repositories.base import BaseRepository


class KeywordRepository(BaseRepository[Keyword]):
    """Repository for Keyword entity operations."""

    model = Keyword

    def upsert(self, name: str) -> int:
        """Insert the keyword if absent and return its id.

        Args:
            name: Keyword text.

        Returns:
            Id of the new or existing keyword.
        """
        stmt = self.insert_stmt().values(name=name)
        stmt = stmt.on_conflict_do_update(
            index_elements=["name"],
            set_={"name": stmt.excluded.name},
        ).returning(Keyword.id)
        return self._session.execute(stmt).scalar_one()

    def insert_many(self, names: Iterable[str]) -> int:
        """Insert keywords, skipping existing ones.

        Returns:
            Number of keywords actually inserted.
        """
        rows = [{"name": name} for name in dict.fromkeys(names)]
        if not rows:
            return 0
        stmt = self.insert_stmt().values(rows).on_conflict_do_nothing(index_elements=["name"])
        return self._session.execute(stmt).rowcount
