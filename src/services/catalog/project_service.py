"""Project indirection layer.

Lets callers reference, favorite, filter and manage movies and series
through one project id without knowing the concrete type. Dispatch is
a match on the tagged reference stored in the project row.

Favoriting a project writes the concrete favorite (with its popularity
update) and the project-level favorite in the same transaction, so the
two junctions never disagree.
"""

from collections.abc import Sequence
from functools import lru_cache
from typing import Any

from sqlalchemy.orm import Session

from src.database.connection import DatabaseConnection, get_database
from src.database.models import ContentRef, MovieRef, Project, ProjectType, SeriesRef
from src.database.repositories.content import ContentRepository
from src.database.repositories.movie import MovieRepository
from src.database.repositories.project import ProjectRepository
from src.database.repositories.series import SeriesRepository
from src.monitoring.middleware import record_favorite_change
from src.services.catalog.errors import CatalogError, ValidationFailedError, operation
from src.services.catalog.filtering import FilteredContent, get_filtered
from src.services.catalog.movie_service import MovieService
from src.services.catalog.schemas import (
    ContentPatch,
    FilterParams,
    MovieData,
    MoviePatch,
    SeriesData,
    SeriesPatch,
)
from src.services.catalog.series_service import SeriesService
from src.services.storage.file_storage import FileStorage, get_file_storage
from src.services.storage.images import ImageUpload
from src.utils.logger import get_logger

logger = get_logger("catalog.project")


def content_repository(session: Session, ref: ContentRef) -> ContentRepository[Any]:
    """Repository owning the entity behind a reference."""
    match ref:
        case MovieRef():
            return MovieRepository(session)
        case SeriesRef():
            return SeriesRepository(session)
        case _:
            raise TypeError(f"Unsupported content reference: {ref!r}")


def upload_dir(ref: ContentRef) -> str:
    """Upload directory of the entity behind a reference."""
    match ref:
        case MovieRef(id=content_id):
            return f"movies/{content_id}"
        case SeriesRef(id=content_id):
            return f"series/{content_id}"
        case _:
            raise TypeError(f"Unsupported content reference: {ref!r}")


class ProjectService:
    """Operations on projects.

    Attributes:
        movies: Service used to create movies.
        series: Service used to create series.
    """

    def __init__(
        self,
        db: DatabaseConnection | None = None,
        storage: FileStorage | None = None,
    ) -> None:
        """Initialize service.

        Args:
            db: Connection to use. Defaults to the shared connection.
            storage: File storage. Defaults to the uploads directory.
        """
        self._db = db or get_database()
        self._storage = storage or get_file_storage()
        self.movies = MovieService(self._db, self._storage)
        self.series = SeriesService(self._db, self._storage)

    @staticmethod
    def _op(name: str) -> Any:
        return operation(f"service.project.{name}", logger)

    # =========================================================================
    # CREATE
    # =========================================================================

    def add(self, ref: ContentRef) -> int:
        """Create a project for an existing movie or series.

        Raises:
            NotFoundError: If the referenced entity does not exist.
            AlreadyExistsError: If a project already references it.
        """
        with self._op("add"), self._db.session() as session:
            project_id = ProjectRepository(session).add(ref)
        logger.info(f"Created project {project_id} for {ref}")
        return project_id

    def create_movie(
        self,
        data: MovieData,
        cover: ImageUpload | None = None,
        screenshots: Sequence[ImageUpload] = (),
    ) -> int:
        """Create a movie and its project.

        Returns:
            Id of the new project.
        """
        movie_id = self.movies.add(data, cover, screenshots)
        return self._attach(MovieRef(movie_id))

    def create_series(
        self,
        data: SeriesData,
        cover: ImageUpload | None = None,
        screenshots: Sequence[ImageUpload] = (),
    ) -> int:
        """Create a series and its project.

        Returns:
            Id of the new project.
        """
        series_id = self.series.add(data, cover, screenshots)
        return self._attach(SeriesRef(series_id))

    def _attach(self, ref: ContentRef) -> int:
        """Create the project for freshly created content, undoing it on failure."""
        try:
            return self.add(ref)
        except CatalogError:
            logger.warning(f"Project creation failed, removing {ref}")
            self._remove_content(ref)
            raise

    # =========================================================================
    # READ
    # =========================================================================

    def get_by_id(self, project_id: int) -> Project:
        """Project row.

        Raises:
            NotFoundError: If it does not exist.
        """
        with self._op("get_by_id"), self._db.session() as session:
            return ProjectRepository(session).require(project_id)

    def get_content(self, project_id: int) -> Any:
        """Movie or series behind a project, relations loaded.

        Raises:
            NotFoundError: If the project does not exist.
        """
        with self._op("get_content"), self._db.session() as session:
            ref = ProjectRepository(session).require(project_id).ref
            return content_repository(session, ref).get_with_relations(ref.id)

    def get_all(self) -> FilteredContent:
        """Content of every project, split by type."""
        with self._op("get_all"), self._db.session() as session:
            projects = ProjectRepository(session).get_all()
            return self._resolve(session, projects)

    def get_filtered(self, params: FilterParams) -> FilteredContent:
        """Filter movies, series or both.

        With no project type both are filtered; each list is sorted
        on its own.
        """
        with self._op("get_filtered"), self._db.session() as session:
            result = FilteredContent()
            if params.project_type in (None, ProjectType.MOVIE):
                result.movies = get_filtered(MovieRepository(session), params)
            if params.project_type in (None, ProjectType.SERIES):
                result.series = get_filtered(SeriesRepository(session), params)
        logger.debug(
            f"Filter matched {len(result.movies)} movies and {len(result.series)} series"
        )
        return result

    # =========================================================================
    # UPDATE / DELETE
    # =========================================================================

    def update(self, project_id: int, patch: ContentPatch) -> None:
        """Patch the movie or series behind a project.

        Raises:
            NotFoundError: If the project does not exist.
            ValidationFailedError: If the patch is for the other content type.
        """
        with self._op("update"), self._db.session() as session:
            ref = ProjectRepository(session).require(project_id).ref
            match ref:
                case MovieRef() if isinstance(patch, SeriesPatch):
                    raise ValidationFailedError(f"project {project_id} is a movie")
                case SeriesRef() if isinstance(patch, MoviePatch):
                    raise ValidationFailedError(f"project {project_id} is a series")
            content_repository(session, ref).update(ref.id, patch)
        logger.info(f"Updated project {project_id} ({ref})")

    def remove(self, project_id: int) -> None:
        """Delete a project together with its movie or series.

        Raises:
            NotFoundError: If the project does not exist.
        """
        with self._op("remove"):
            with self._db.session() as session:
                ref = ProjectRepository(session).require(project_id).ref
                content_repository(session, ref).delete(ref.id)
            self._storage.delete_directory(upload_dir(ref))
        logger.info(f"Deleted project {project_id} ({ref})")

    def update_cover(self, project_id: int, cover: ImageUpload) -> None:
        """Replace the cover of the movie or series behind a project."""
        ref = self.get_by_id(project_id).ref
        self._content_service(ref).update_cover(ref.id, cover)

    def update_screenshots(self, project_id: int, screenshots: Sequence[ImageUpload]) -> None:
        """Replace the screenshots of the movie or series behind a project."""
        ref = self.get_by_id(project_id).ref
        self._content_service(ref).update_screenshots(ref.id, screenshots)

    def _content_service(self, ref: ContentRef) -> MovieService | SeriesService:
        match ref:
            case MovieRef():
                return self.movies
            case SeriesRef():
                return self.series
            case _:
                raise TypeError(f"Unsupported content reference: {ref!r}")

    def _remove_content(self, ref: ContentRef) -> None:
        with self._db.session() as session:
            content_repository(session, ref).delete(ref.id)
        self._storage.delete_directory(upload_dir(ref))

    # =========================================================================
    # FAVORITES
    # =========================================================================

    def add_to_favorites(self, project_id: int, user_id: int) -> None:
        """Favorite a project and its movie or series in one transaction.

        Raises:
            NotFoundError: If the project or user does not exist.
        """
        with self._op("add_to_favorites"), self._db.session() as session:
            projects = ProjectRepository(session)
            ref = projects.require(project_id).ref
            added = content_repository(session, ref).add_to_favorites(ref.id, user_id)
            recorded = projects.add_favorite(project_id, user_id)
        if added or recorded:
            record_favorite_change("project", "added")
            logger.info(f"User {user_id} added project {project_id} ({ref}) to favorites")

    def remove_from_favorites(self, project_id: int, user_id: int) -> None:
        """Unfavorite a project and its movie or series in one transaction.

        Raises:
            NotFoundError: If the project does not exist.
        """
        with self._op("remove_from_favorites"), self._db.session() as session:
            projects = ProjectRepository(session)
            ref = projects.require(project_id).ref
            removed = content_repository(session, ref).remove_from_favorites(ref.id, user_id)
            dropped = projects.remove_favorite(project_id, user_id)
        if removed or dropped:
            record_favorite_change("project", "removed")
            logger.info(f"User {user_id} removed project {project_id} ({ref}) from favorites")

    def get_favorites(self, user_id: int) -> FilteredContent:
        """Content of a user's favorite projects, split by type."""
        with self._op("get_favorites"), self._db.session() as session:
            projects = ProjectRepository(session).get_favorites(user_id)
            return self._resolve(session, projects)

    # =========================================================================
    # HELPERS
    # =========================================================================

    @staticmethod
    def _resolve(session: Session, projects: list[Project]) -> FilteredContent:
        """Load the content behind projects, keeping the project order."""
        movie_ids = [p.project_id for p in projects if p.project_type is ProjectType.MOVIE]
        series_ids = [p.project_id for p in projects if p.project_type is ProjectType.SERIES]
        movies = {m.id: m for m in MovieRepository(session).get_by_ids(movie_ids)}
        series = {s.id: s for s in SeriesRepository(session).get_by_ids(series_ids)}
        return FilteredContent(
            movies=[movies[i] for i in movie_ids if i in movies],
            series=[series[i] for i in series_ids if i in series],
        )


@lru_cache(maxsize=1)
def get_project_service() -> ProjectService:
    """Get cached ProjectService bound to the shared connection."""
    return ProjectService()
