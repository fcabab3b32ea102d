"""Movie repository."""

from src.database.models import (
    FavoriteMovie,
    Movie,
    MovieAgeCategory,
    MovieCover,
    MovieGenre,
    MovieKeyword,
    MovieScreenshot,
    ProjectType,
)
from src.database.repositories.content import ContentRepository


class MovieRepository(ContentRepository[Movie]):
    """Repository for Movie entity operations."""

    model = Movie
    kind = "movie"
    project_type = ProjectType.MOVIE
    foreign_key = "movie_id"
    genre_link = MovieGenre
    keyword_link = MovieKeyword
    age_link = MovieAgeCategory
    cover_model = MovieCover
    screenshot_model = MovieScreenshot
    favorite_model = FavoriteMovie
