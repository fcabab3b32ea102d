"""Repository layer for database operations.

Each repository wraps one aggregate and runs in the caller's session.

Usage:
    from src.database.repositories import MovieRepository

    with db.session() as session:
        movies = MovieRepository(session).get_by_title("night")
"""

from src.database.repositories.age_category import AgeCategoryRepository
from src.database.repositories.base import BaseRepository, dialect_insert
from src.database.repositories.content import ContentRepository
from src.database.repositories.genre import GenreRepository
from src.database.repositories.keyword import KeywordRepository
from src.database.repositories.movie import MovieRepository
from src.database.repositories.project import ProjectRepository
from src.database.repositories.series import SeriesRepository
from src.database.repositories.user import UserRepository

__all__ = [
    "BaseRepository",
    "dialect_insert",
    "ContentRepository",
    "GenreRepository",
    "KeywordRepository",
    "AgeCategoryRepository",
    "MovieRepository",
    "SeriesRepository",
    "ProjectRepository",
    "UserRepository",
]
