"""Series service."""

from functools import lru_cache

from src.database.models import Episode, Series
from src.database.repositories.series import SeriesRepository
from src.services.catalog.content_service import ContentService


class SeriesService(ContentService[Series]):
    """Create, browse, filter and favorite series."""

    repository_class = SeriesRepository
    kind = "series"
    upload_dir = "series"

    def get_season(self, series_id: int, season_number: int) -> list[Episode]:
        """Episodes of one season.

        Raises:
            NotFoundError: If the series or season does not exist.
        """
        with self._op("get_season"), self._db.session() as session:
            return SeriesRepository(session).get_season(series_id, season_number)


@lru_cache(maxsize=1)
def get_series_service() -> SeriesService:
    """Get cached SeriesService bound to the shared connection."""
    return SeriesService()
