"""Service layer shared by movies and series.

Each call runs in one database session: it commits when the block
succeeds and rolls back on any error. Image files are written after
the commit, so a crash in between leaves rows that reference files
never written.
"""

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

from sqlalchemy.orm import Session

from src.database.connection import DatabaseConnection, get_database
from src.database.models import make_ref
from src.database.repositories.content import ContentRepository
from src.database.repositories.project import ProjectRepository
from src.services.catalog.errors import operation
from src.services.catalog.filtering import get_filtered
from src.services.catalog.schemas import ContentData, ContentPatch, FilterParams
from src.monitoring.middleware import record_favorite_change
from src.services.storage.file_storage import FileStorage, get_file_storage
from src.services.storage.images import ImageUpload, validate_image
from src.utils.logger import get_logger

logger = get_logger("catalog.service")

ContentT = TypeVar("ContentT")


class ContentService(Generic[ContentT]):
    """Operations on one content type.

    Attributes:
        repository_class: Repository bound to each session.
        kind: Name used in operation tags.
        upload_dir: Directory under the uploads root.
    """

    repository_class: type[ContentRepository[Any]]
    kind: str
    upload_dir: str

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

    def repository(self, session: Session) -> ContentRepository[Any]:
        """Repository bound to a session."""
        return self.repository_class(session)

    def _op(self, name: str) -> Any:
        return operation(f"service.{self.kind}.{name}", logger)

    def _entity_dir(self, entity_id: int) -> str:
        return f"{self.upload_dir}/{entity_id}"

    # =========================================================================
    # CREATE / READ / UPDATE / DELETE
    # =========================================================================

    def add(
        self,
        data: ContentData,
        cover: ImageUpload | None = None,
        screenshots: Sequence[ImageUpload] = (),
    ) -> int:
        """Create an entity, then store its images.

        Images are validated before anything is written.

        Args:
            data: Creation payload.
            cover: Optional cover upload; its name replaces ``data.cover``.
            screenshots: Screenshot uploads; their names replace
                ``data.screenshots`` when given.

        Returns:
            Id of the new entity.

        Raises:
            ValidationFailedError: If an image or the payload is invalid.
            AlreadyExistsError: On a unique violation.
        """
        with self._op("add"):
            for image in [cover, *screenshots]:
                if image is not None:
                    validate_image(image)
            updates: dict[str, Any] = {}
            if cover is not None:
                updates["cover"] = cover.safe_filename
            if screenshots:
                updates["screenshots"] = [image.safe_filename for image in screenshots]
            data = data.model_copy(update=updates)

            with self._db.session() as session:
                entity_id = self.repository(session).insert(data)

            logger.info(f"Created {self.kind} {entity_id}: '{data.title}'")
            if cover is not None:
                self._save_cover(entity_id, cover)
            if screenshots:
                self._save_screenshots(entity_id, screenshots)
        return entity_id

    def get_by_id(self, entity_id: int) -> ContentT:
        """Entity with relations loaded.

        Raises:
            NotFoundError: If it does not exist.
        """
        with self._op("get_by_id"), self._db.session() as session:
            return self.repository(session).get_with_relations(entity_id)

    def get_all(self) -> list[ContentT]:
        """All entities ordered by id."""
        with self._op("get_all"), self._db.session() as session:
            return self.repository(session).get_all()

    def update(self, entity_id: int, patch: ContentPatch) -> None:
        """Apply a sparse patch.

        Raises:
            NotFoundError: If the entity does not exist.
        """
        with self._op("update"), self._db.session() as session:
            self.repository(session).update(entity_id, patch)
        logger.info(f"Updated {self.kind} {entity_id}")

    def remove(self, entity_id: int) -> None:
        """Delete an entity and its projects, then its upload directory.

        Raises:
            NotFoundError: If the entity does not exist.
        """
        with self._op("remove"):
            with self._db.session() as session:
                self.repository(session).delete(entity_id)
            self._storage.delete_directory(self._entity_dir(entity_id))
        logger.info(f"Deleted {self.kind} {entity_id}")

    def update_cover(self, entity_id: int, cover: ImageUpload) -> None:
        """Replace the cover row and file."""
        with self._op("update_cover"):
            validate_image(cover)
            with self._db.session() as session:
                self.repository(session).update_cover(entity_id, cover.safe_filename)
            self._storage.delete_directory(f"{self._entity_dir(entity_id)}/covers")
            self._save_cover(entity_id, cover)

    def update_screenshots(self, entity_id: int, screenshots: Sequence[ImageUpload]) -> None:
        """Replace all screenshot rows and files."""
        with self._op("update_screenshots"):
            for image in screenshots:
                validate_image(image)
            with self._db.session() as session:
                self.repository(session).update_screenshots(
                    entity_id,
                    [image.safe_filename for image in screenshots],
                )
            self._storage.delete_directory(f"{self._entity_dir(entity_id)}/screenshots")
            self._save_screenshots(entity_id, screenshots)

    # =========================================================================
    # FAVORITES
    # =========================================================================

    def add_to_favorites(self, entity_id: int, user_id: int) -> None:
        """Favorite an entity; repeating the call changes nothing.

        The favorite of the entity's project, if it has one, is written
        in the same transaction.

        Raises:
            NotFoundError: If the entity or the user does not exist.
        """
        with self._op("add_to_favorites"), self._db.session() as session:
            added = self.repository(session).add_to_favorites(entity_id, user_id)
            self._mirror_project_favorite(session, entity_id, user_id, favorite=True)
        self._log_toggle("added", entity_id, user_id, added)

    def remove_from_favorites(self, entity_id: int, user_id: int) -> None:
        """Unfavorite an entity; repeating the call changes nothing.

        The favorite of the entity's project, if it has one, is removed
        in the same transaction.

        Raises:
            NotFoundError: If the entity does not exist.
        """
        with self._op("remove_from_favorites"), self._db.session() as session:
            removed = self.repository(session).remove_from_favorites(entity_id, user_id)
            self._mirror_project_favorite(session, entity_id, user_id, favorite=False)
        self._log_toggle("removed", entity_id, user_id, removed)

    def get_favorites(self, user_id: int) -> list[ContentT]:
        """Entities in a user's favorites."""
        with self._op("get_favorites"), self._db.session() as session:
            return self.repository(session).get_favorites(user_id)

    # =========================================================================
    # FILTERING
    # =========================================================================

    def get_filtered(self, params: FilterParams) -> list[ContentT]:
        """Filter this content type.

        See ``src.services.catalog.filtering`` for the precedence rules.
        """
        with self._op("get_filtered"), self._db.session() as session:
            return get_filtered(self.repository(session), params)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _save_cover(self, entity_id: int, cover: ImageUpload) -> None:
        self._storage.save_file(
            cover.data,
            f"{self._entity_dir(entity_id)}/covers/{cover.safe_filename}",
        )

    def _save_screenshots(self, entity_id: int, screenshots: Sequence[ImageUpload]) -> None:
        for image in screenshots:
            self._storage.save_file(
                image.data,
                f"{self._entity_dir(entity_id)}/screenshots/{image.safe_filename}",
            )

    def _mirror_project_favorite(
        self,
        session: Session,
        entity_id: int,
        user_id: int,
        favorite: bool,
    ) -> None:
        projects = ProjectRepository(session)
        project = projects.get_by_ref(make_ref(self.kind, entity_id))
        if project is None:
            return
        if favorite:
            projects.add_favorite(project.id, user_id)
        else:
            projects.remove_favorite(project.id, user_id)

    def _log_toggle(self, action: str, entity_id: int, user_id: int, changed: bool) -> None:
        if changed:
            record_favorite_change(self.kind, action)
            logger.info(f"User {user_id} {action} favorite {self.kind} {entity_id}")
        else:
            logger.debug(f"User {user_id} favorite unchanged: {self.kind} {entity_id}")
