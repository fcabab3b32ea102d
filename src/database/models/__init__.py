"""SQLAlchemy ORM models for the media catalog.

Usage:
    from src.database.models import Movie, Series, Project, Base
"""

from src.database.models.base import Base, ContentMixin, TimestampMixin
from src.database.models.movie import (
    FavoriteMovie,
    Movie,
    MovieAgeCategory,
    MovieCover,
    MovieGenre,
    MovieKeyword,
    MovieScreenshot,
)
from src.database.models.project import (
    ContentRef,
    FavoriteProject,
    MovieRef,
    Project,
    ProjectType,
    SeriesRef,
    make_ref,
    ref_type,
)
from src.database.models.reference import AgeCategory, Genre, Keyword
from src.database.models.series import (
    Episode,
    FavoriteSeries,
    Season,
    Series,
    SeriesAgeCategory,
    SeriesCover,
    SeriesGenre,
    SeriesKeyword,
    SeriesScreenshot,
)
from src.database.models.user import User

__all__ = [
    # Base
    "Base",
    "ContentMixin",
    "TimestampMixin",
    # Reference data
    "Genre",
    "Keyword",
    "AgeCategory",
    # Movies
    "Movie",
    "MovieGenre",
    "MovieKeyword",
    "MovieAgeCategory",
    "MovieCover",
    "MovieScreenshot",
    "FavoriteMovie",
    # Series
    "Series",
    "Season",
    "Episode",
    "SeriesGenre",
    "SeriesKeyword",
    "SeriesAgeCategory",
    "SeriesCover",
    "SeriesScreenshot",
    "FavoriteSeries",
    # Projects
    "Project",
    "ProjectType",
    "FavoriteProject",
    "MovieRef",
    "SeriesRef",
    "ContentRef",
    "make_ref",
    "ref_type",
    # Users
    "User",
]
