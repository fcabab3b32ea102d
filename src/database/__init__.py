"""Database package for the media catalog.

Provides database connection management and ORM models. Repositories
live in ``src.database.repositories``.

Usage:
    from src.database import get_database
    from src.database.repositories import MovieRepository

    db = get_database()
    with db.session() as session:
        movies = MovieRepository(session).get_by_title("night")
"""

from src.database.connection import (
    DatabaseConnection,
    close_database,
    get_database,
    init_database,
)
from src.database.models import Base

__all__ = [
    "DatabaseConnection",
    "get_database",
    "init_database",
    "close_database",
    "Base",
]
