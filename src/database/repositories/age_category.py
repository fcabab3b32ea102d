"""Age category repository for reference data operations."""

from collections.abc import Iterable

from sqlalchemy import select

from src.database.models import AgeCategory
from src.database.repositories.base import BaseRepository


class AgeCategoryRepository(BaseRepository[AgeCategory]):
    """Repository for AgeCategory entity operations.

    Categories are deduplicated by their (min_age, max_age) pair.
    """

    model = AgeCategory

    def get_by_range(self, min_age: int, max_age: int) -> AgeCategory | None:
        """Retrieve the category with exactly these bounds."""
        stmt = select(AgeCategory).where(
            AgeCategory.min_age == min_age,
            AgeCategory.max_age == max_age,
        )
        return self._session.scalar(stmt)

    def upsert(self, min_age: int, max_age: int) -> int:
        """Insert the range if absent and return its id.

        Args:
            min_age: Lower bound.
            max_age: Upper bound.

        Returns:
            Id of the new or existing category.
        """
        stmt = self.insert_stmt().values(min_age=min_age, max_age=max_age)
        stmt = stmt.on_conflict_do_update(
            index_elements=["min_age", "max_age"],
            set_={"min_age": stmt.excluded.min_age},
        ).returning(AgeCategory.id)
        return self._session.execute(stmt).scalar_one()

    def insert_many(self, ranges: Iterable[tuple[int, int]]) -> int:
        """Insert ranges, skipping existing ones.

        Args:
            ranges: (min_age, max_age) pairs.

        Returns:
            Number of categories actually inserted.
        """
        rows = [{"min_age": lo, "max_age": hi} for lo, hi in dict.fromkeys(ranges)]
        if not rows:
            return 0
        stmt = self.insert_stmt().values(rows).on_conflict_do_nothing(
            index_elements=["min_age", "max_age"],
        )
        return self._session.execute(stmt).rowcount
