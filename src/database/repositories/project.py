"""Project repository.

Projects reference a movie or series by (type, id). This repository
only writes the projects and favorite_projects tables; the content
tables belong to their own repositories.
"""

from sqlalchemy import delete, insert, literal, select

from src.database.models import (
    ContentRef,
    FavoriteMovie,
    FavoriteProject,
    FavoriteSeries,
    Movie,
    MovieRef,
    Project,
    Series,
    SeriesRef,
    ref_type,
)
from src.database.repositories.base import BaseRepository
from src.services.catalog.errors import NotFoundError, operation


class ProjectRepository(BaseRepository[Project]):
    """Repository for Project entity operations."""

    model = Project

    def target_exists(self, ref: ContentRef) -> bool:
        """Whether the movie or series behind a reference exists."""
        match ref:
            case MovieRef(id=content_id):
                model = Movie
            case SeriesRef(id=content_id):
                model = Series
            case _:
                raise TypeError(f"Unsupported content reference: {ref!r}")
        return self._session.scalar(select(model.id).where(model.id == content_id)) is not None

    def add(self, ref: ContentRef) -> int:
        """Insert a project for an existing movie or series.

        Users who already favorite the entity get the project favorite too.

        Args:
            ref: Reference to the concrete entity.

        Returns:
            Id of the new project.

        Raises:
            NotFoundError: If the referenced entity does not exist.
            AlreadyExistsError: If a project already references it.
        """
        with operation("storage.project.insert"):
            if not self.target_exists(ref):
                raise NotFoundError(f"{ref_type(ref).value} {ref.id} not found")
            project = self.create(Project(project_type=ref_type(ref), project_id=ref.id))
            self._copy_favorites(ref, project.id)
            return project.id

    def _copy_favorites(self, ref: ContentRef, project_id: int) -> None:
        match ref:
            case MovieRef(id=content_id):
                favorites = (
                    select(FavoriteMovie.user_id, literal(project_id))
                    .where(FavoriteMovie.movie_id == content_id)
                    .order_by(FavoriteMovie.id)
                )
            case SeriesRef(id=content_id):
                favorites = (
                    select(FavoriteSeries.user_id, literal(project_id))
                    .where(FavoriteSeries.series_id == content_id)
                    .order_by(FavoriteSeries.id)
                )
        self._session.execute(
            insert(FavoriteProject).from_select(["user_id", "project_id"], favorites)
        )

    def require(self, project_id: int) -> Project:
        """Retrieve a project or raise NotFoundError."""
        with operation("storage.project.get_by_id"):
            project = self.get_by_id(project_id)
            if project is None:
                raise NotFoundError(f"project {project_id} not found")
            return project

    def get_by_ref(self, ref: ContentRef) -> Project | None:
        """Retrieve the project referencing a concrete entity."""
        stmt = select(Project).where(
            Project.project_type == ref_type(ref),
            Project.project_id == ref.id,
        )
        return self._session.scalar(stmt)

    def add_favorite(self, project_id: int, user_id: int) -> bool:
        """Record a project-level favorite.

        Returns:
            True if recorded, False if it already existed.
        """
        with operation("storage.project.add_to_favorites"):
            stmt = (
                self.insert_stmt(FavoriteProject)
                .values(user_id=user_id, project_id=project_id)
                .on_conflict_do_nothing(index_elements=["user_id", "project_id"])
            )
            return self._session.execute(stmt).rowcount > 0

    def remove_favorite(self, project_id: int, user_id: int) -> bool:
        """Delete a project-level favorite.

        Returns:
            True if removed, False if there was none.
        """
        with operation("storage.project.remove_from_favorites"):
            stmt = delete(FavoriteProject).where(
                FavoriteProject.user_id == user_id,
                FavoriteProject.project_id == project_id,
            )
            return self._session.execute(stmt).rowcount > 0

    def get_favorites(self, user_id: int) -> list[Project]:
        """Projects in a user's favorites, in the order they were added."""
        with operation("storage.project.get_favorites"):
            stmt = (
                select(Project)
                .join(FavoriteProject, FavoriteProject.project_id == Project.id)
                .where(FavoriteProject.user_id == user_id)
                .order_by(FavoriteProject.id)
            )
            return list(self._session.scalars(stmt).all())
