"""Movie service."""

from functools import lru_cache

from src.database.models import Movie
from src.database.repositories.movie import MovieRepository
from src.services.catalog.content_service import ContentService


class MovieService(ContentService[Movie]):
    """Create, browse, filter and favorite movies."""

    repository_class = MovieRepository
    kind = "movie"
    upload_dir = "movies"


@lru_cache(maxsize=1)
def get_movie_service() -> MovieService:
    """Get cached MovieService bound to the shared connection."""
    return MovieService()
