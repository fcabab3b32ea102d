"""Shared pytest fixtures for catalog tests.

Every test gets a fresh in-memory SQLite database with the full
schema and a file storage rooted in a temporary directory.
"""

import os

# Settings are read at import time; the JWT secret has no default.
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key-do-not-use-in-production-minimum-32-chars")
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("ADMIN_EMAIL", "admin@example.com")
os.environ.setdefault("ENVIRONMENT", "test")

from collections.abc import Generator
from pathlib import Path

import pytest

from src.database.connection import DatabaseConnection
from src.services.catalog.movie_service import MovieService
from src.services.catalog.project_service import ProjectService
from src.services.catalog.reference_service import (
    AgeCategoryService,
    GenreService,
    KeywordService,
)
from src.services.catalog.schemas import UserRegistration
from src.services.catalog.series_service import SeriesService
from src.services.catalog.user_service import UserService
from src.services.storage.file_storage import FileStorage
from tests.factories import ADMIN_EMAIL, PASSWORD, make_movie

# =============================================================================
# INFRASTRUCTURE
# =============================================================================


@pytest.fixture
def db() -> Generator[DatabaseConnection, None, None]:
    """Fresh in-memory database with the catalog schema."""
    connection = DatabaseConnection("sqlite+pysqlite:///:memory:")
    connection.create_schema()
    yield connection
    connection.dispose()


@pytest.fixture
def uploads_root(tmp_path: Path) -> Path:
    """Temporary uploads directory."""
    root = tmp_path / "uploads"
    root.mkdir()
    return root


@pytest.fixture
def storage(uploads_root: Path) -> FileStorage:
    """File storage rooted in the temporary uploads directory."""
    return FileStorage(uploads_root)


# =============================================================================
# SERVICES
# =============================================================================


@pytest.fixture
def movie_service(db: DatabaseConnection, storage: FileStorage) -> MovieService:
    return MovieService(db, storage)


@pytest.fixture
def series_service(db: DatabaseConnection, storage: FileStorage) -> SeriesService:
    return SeriesService(db, storage)


@pytest.fixture
def project_service(db: DatabaseConnection, storage: FileStorage) -> ProjectService:
    return ProjectService(db, storage)


@pytest.fixture
def user_service(db: DatabaseConnection) -> UserService:
    return UserService(db, admin_email=ADMIN_EMAIL)


@pytest.fixture
def genre_service(db: DatabaseConnection) -> GenreService:
    return GenreService(db)


@pytest.fixture
def age_category_service(db: DatabaseConnection) -> AgeCategoryService:
    return AgeCategoryService(db)


@pytest.fixture
def keyword_service(db: DatabaseConnection) -> KeywordService:
    return KeywordService(db)


# =============================================================================
# SAMPLE DATA
# =============================================================================


@pytest.fixture
def users(user_service: UserService) -> tuple[int, int]:
    """Two registered users (U1, U2)."""
    first = user_service.register(
        UserRegistration(name="Alice", email="alice@example.com", password=PASSWORD)
    )
    second = user_service.register(
        UserRegistration(name="Bob", email="bob@example.com", password=PASSWORD)
    )
    return first, second


@pytest.fixture
def horror_catalog(movie_service: MovieService) -> dict[str, int]:
    """Movies spanning genres, years and popularity, keyed by title."""
    movies = [
        make_movie("Hereditary", 2018, ("Horror", "Drama")),
        make_movie("Malignant", 2021, ("Horror",)),
        make_movie("X", 2022, ("Horror", "Thriller")),
        make_movie("Barbarian", 2022, ("Horror", "Thriller")),
        make_movie("Smile", 2023, ("Horror", "Mystery")),
        make_movie("Paddington 2", 2017, ("Comedy", "Family")),
        make_movie("Knives Out", 2019, ("Mystery", "Comedy")),
    ]
    return {m.title: movie_service.add(m) for m in movies}



@pytest.fixture
def crowd(user_service: UserService) -> list[int]:
    """Four registered users for interleaved favorite sequences."""
    return [
        user_service.register(
            UserRegistration(name=name, email=f"{name.lower()}@example.com", password=PASSWORD)
        )
        for name in ("Dana", "Eve", "Frank", "Grace")
    ]
