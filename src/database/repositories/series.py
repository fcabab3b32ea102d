"""Series repository.

Adds seasons and episodes on top of the shared content storage.
Season and episode numbers are 1-based list positions.
"""

from sqlalchemy import delete, insert, select
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from src.database.models import (
    Episode,
    FavoriteSeries,
    ProjectType,
    Season,
    Series,
    SeriesAgeCategory,
    SeriesCover,
    SeriesGenre,
    SeriesKeyword,
    SeriesScreenshot,
)
from src.database.repositories.content import ContentRepository, storage_operation
from src.services.catalog.errors import NotFoundError
from src.services.catalog.schemas import ContentPatch, SeasonData, SeriesData, SeriesPatch


class SeriesRepository(ContentRepository[Series]):
    """Repository for Series entity operations."""

    model = Series
    kind = "series"
    project_type = ProjectType.SERIES
    foreign_key = "series_id"
    genre_link = SeriesGenre
    keyword_link = SeriesKeyword
    age_link = SeriesAgeCategory
    cover_model = SeriesCover
    screenshot_model = SeriesScreenshot
    favorite_model = FavoriteSeries

    def _load_options(self) -> list[LoaderOption]:
        return [
            *super()._load_options(),
            selectinload(Series.seasons).selectinload(Season.episodes),
        ]

    @storage_operation("get_season")
    def get_season(self, series_id: int, season_number: int) -> list[Episode]:
        """Episodes of one season, ordered by episode number.

        Raises:
            NotFoundError: If the series or the season does not exist.
        """
        self._require(series_id)
        season = self._get_season(series_id, season_number)
        if season is None:
            raise NotFoundError(f"season {season_number} of series {series_id} not found")
        stmt = (
            select(Episode)
            .where(Episode.season_id == season.id)
            .order_by(Episode.episode_number)
        )
        return list(self._session.scalars(stmt).all())

    def _get_season(self, series_id: int, season_number: int) -> Season | None:
        stmt = select(Season).where(
            Season.series_id == series_id,
            Season.season_number == season_number,
        )
        return self._session.scalar(stmt)

    def _insert_children(self, entity_id: int, data: SeriesData) -> None:
        for number, season in enumerate(data.seasons, start=1):
            self._insert_season(entity_id, number, season)

    def _insert_season(self, series_id: int, number: int, season: SeasonData) -> None:
        row = self.create(Season(series_id=series_id, season_number=number))
        episodes = [
            {"season_id": row.id, "episode_number": position, "link": episode.link}
            for position, episode in enumerate(season.episodes, start=1)
        ]
        if episodes:
            self._session.execute(insert(Episode), episodes)

    def _update_children(self, entity_id: int, patch: ContentPatch) -> None:
        """Update episode links by position, creating missing seasons and episodes."""
        if not isinstance(patch, SeriesPatch) or patch.seasons is None:
            return
        for number, season_data in enumerate(patch.seasons, start=1):
            season = self._get_season(entity_id, number)
            if season is None:
                self._insert_season(entity_id, number, season_data)
                continue
            existing = {episode.episode_number: episode for episode in season.episodes}
            for position, episode_data in enumerate(season_data.episodes, start=1):
                episode = existing.get(position)
                if episode is None:
                    self.session.add(
                        Episode(season_id=season.id, episode_number=position, link=episode_data.link)
                    )
                else:
                    episode.link = episode_data.link

    def _delete_children(self, entity_id: int) -> None:
        seasons = select(Season.id).where(Season.series_id == entity_id)
        self._session.execute(delete(Episode).where(Episode.season_id.in_(seasons)))
        self._session.execute(delete(Season).where(Season.series_id == entity_id))
