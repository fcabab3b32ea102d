"""Tests for catalog repositories, run inside one session each."""

import pytest

from src.database.repositories import (
    AgeCategoryRepository,
    GenreRepository,
    MovieRepository,
    ProjectRepository,
    SeriesRepository,
)
from src.database.models import MovieRef
from src.services.catalog.errors import NotFoundError
from tests.factories import make_movie, make_series


class TestGenreRepository:
    """Tests for genre upserts."""

    @staticmethod
    def test_upsert_returns_existing_id(db) -> None:
        with db.session() as session:
            repo = GenreRepository(session)
            first = repo.upsert("Horror")
            assert repo.upsert("Horror") == first
            assert repo.upsert("Drama") != first
            assert repo.count() == 2

    @staticmethod
    def test_insert_many_counts_new_names(db) -> None:
        with db.session() as session:
            repo = GenreRepository(session)
            assert repo.insert_many(["Horror", "Horror", "Drama"]) == 2
            assert repo.insert_many(["Drama", "Comedy"]) == 1
            assert repo.insert_many([]) == 0
            assert repo.get_by_name("Comedy") is not None


class TestAgeCategoryRepository:
    """Tests for age range upserts."""

    @staticmethod
    def test_upsert_by_range(db) -> None:
        with db.session() as session:
            repo = AgeCategoryRepository(session)
            category_id = repo.upsert(12, 18)
            assert repo.upsert(12, 18) == category_id
            assert repo.get_by_range(12, 18).id == category_id
            assert repo.get_by_range(0, 6) is None


class TestContentRepository:
    """Tests for the shared content storage."""

    @staticmethod
    def test_get_by_genres_keeps_one_row_per_match(db) -> None:
        with db.session() as session:
            repo = MovieRepository(session)
            both = repo.insert(make_movie("Both", genres=("Horror", "Thriller")))
            one = repo.insert(make_movie("One", genres=("Thriller",)))

            result = repo.get_by_genres(["Horror", "Thriller"])

            assert [m.id for m in result] == [both, both, one]

    @staticmethod
    def test_get_by_genres_unknown_name(db) -> None:
        with db.session() as session:
            repo = MovieRepository(session)
            repo.insert(make_movie(genres=("Horror",)))
            assert repo.get_by_genres(["Western"]) == []
            assert repo.get_by_genres([]) == []

    @staticmethod
    def test_get_by_title_escapes_wildcards(db) -> None:
        with db.session() as session:
            repo = MovieRepository(session)
            repo.insert(make_movie("100% Wolf"))
            repo.insert(make_movie("1000 Wolves"))

            assert [m.title for m in repo.get_by_title("100%")] == ["100% Wolf"]
            assert [m.title for m in repo.get_by_title("wol")] == ["100% Wolf", "1000 Wolves"]

    @staticmethod
    def test_get_by_year_is_inclusive(db) -> None:
        with db.session() as session:
            repo = SeriesRepository(session)
            for year in (2019, 2020, 2023, 2024):
                repo.insert(make_series(f"S{year}", year))
            titles = [s.title for s in repo.get_by_year(2020, 2023)]
            assert titles == ["S2020", "S2023"]

    @staticmethod
    def test_favorite_toggles_report_changes(db, users) -> None:
        u1, _ = users
        with db.session() as session:
            repo = MovieRepository(session)
            movie_id = repo.insert(make_movie())

            assert repo.add_to_favorites(movie_id, u1) is True
            assert repo.add_to_favorites(movie_id, u1) is False
            assert repo.remove_from_favorites(movie_id, u1) is True
            assert repo.remove_from_favorites(movie_id, u1) is False

    @staticmethod
    def test_delete_missing_raises(db) -> None:
        with db.session() as session:
            with pytest.raises(NotFoundError, match="^storage.movie.delete: movie 3 not found$"):
                MovieRepository(session).delete(3)


class TestProjectRepository:
    """Tests for project rows."""

    @staticmethod
    def test_get_by_ref(db) -> None:
        with db.session() as session:
            movie_id = MovieRepository(session).insert(make_movie())
            repo = ProjectRepository(session)
            project_id = repo.add(MovieRef(movie_id))

            assert repo.get_by_ref(MovieRef(movie_id)).id == project_id
            assert repo.target_exists(MovieRef(movie_id))
            assert not repo.target_exists(MovieRef(movie_id + 1))

    @staticmethod
    def test_project_favorite_toggles(db, users) -> None:
        u1, _ = users
        with db.session() as session:
            movie_id = MovieRepository(session).insert(make_movie())
            repo = ProjectRepository(session)
            project_id = repo.add(MovieRef(movie_id))

            assert repo.add_favorite(project_id, u1) is True
            assert repo.add_favorite(project_id, u1) is False
            assert [p.id for p in repo.get_favorites(u1)] == [project_id]
            assert repo.remove_favorite(project_id, u1) is True
            assert repo.get_favorites(u1) == []
