"""Shared storage logic for movies and series.

Movies and series have the same shape (reference-data junctions,
cover, screenshots, favorites, popularity counter); concrete
repositories only declare which tables play each role.
"""

import functools
from collections.abc import Callable, Iterable, Sequence
from typing import Any, TypeVar

from sqlalchemy import delete, insert, select, update
from sqlalchemy.orm import selectinload
from sqlalchemy.orm.interfaces import LoaderOption

from src.database.models import FavoriteProject, Genre, Project, ProjectType
from src.database.models.base import Base
from src.database.repositories.age_category import AgeCategoryRepository
from src.database.repositories.base import BaseRepository
from src.database.repositories.genre import GenreRepository
from src.database.repositories.keyword import KeywordRepository
from src.services.catalog.errors import NotFoundError, operation
from src.services.catalog.schemas import (
    AgeCategoryData,
    ContentData,
    ContentPatch,
    GenreData,
    KeywordData,
)

ContentT = TypeVar("ContentT", bound=Base)
ReturnT = TypeVar("ReturnT")

# Payload fields that are not columns of the content table
_NON_COLUMN_FIELDS = {"genres", "keywords", "age_categories", "cover", "screenshots", "seasons"}


def storage_operation(name: str) -> Callable[[Callable[..., ReturnT]], Callable[..., ReturnT]]:
    """Tag errors raised by a repository method with ``storage.<kind>.<name>``."""

    def decorator(func: Callable[..., ReturnT]) -> Callable[..., ReturnT]:
        @functools.wraps(func)
        def wrapper(self: "ContentRepository[Any]", *args: Any, **kwargs: Any) -> ReturnT:
            with operation(f"storage.{self.kind}.{name}"):
                return func(self, *args, **kwargs)

        return wrapper

    return decorator


class ContentRepository(BaseRepository[ContentT]):
    """Storage for a content type (movie or series).

    Subclasses declare the tables; the favorites protocol, filter
    fetches and the transactional insert/update/delete live here.
    All methods run in the caller's session and never commit.

    Attributes:
        kind: Short name used in operation tags and upload paths.
        project_type: Project type referencing this content.
        foreign_key: Column name linking child tables to the content row.
    """

    kind: str
    project_type: ProjectType
    foreign_key: str
    genre_link: type[Base]
    keyword_link: type[Base]
    age_link: type[Base]
    cover_model: type[Base]
    screenshot_model: type[Base]
    favorite_model: type[Base]

    # =========================================================================
    # QUERIES
    # =========================================================================

    def _load_options(self) -> list[LoaderOption]:
        """Eager loads needed to serialize an entity after the session closes."""
        return [
            selectinload(self.model.genres),
            selectinload(self.model.keywords),
            selectinload(self.model.age_categories),
            selectinload(self.model.cover),
            selectinload(self.model.screenshots),
        ]

    def _select(self) -> Any:
        return select(self.model).options(*self._load_options())

    def _fk(self, table: type[Base]) -> Any:
        return getattr(table, self.foreign_key)

    def _require(self, entity_id: int) -> None:
        if not self.exists(entity_id):
            raise NotFoundError(f"{self.kind} {entity_id} not found")

    @storage_operation("get_by_id")
    def get_with_relations(self, entity_id: int) -> ContentT:
        """Retrieve an entity with every relation loaded.

        Raises:
            NotFoundError: If no entity has this id.
        """
        entity = self._session.scalar(self._select().where(self.model.id == entity_id))
        if entity is None:
            raise NotFoundError(f"{self.kind} {entity_id} not found")
        return entity

    @storage_operation("get_all")
    def get_all(self, limit: int | None = None, offset: int = 0) -> list[ContentT]:
        """Retrieve all entities ordered by id, relations loaded."""
        stmt = self._select().order_by(self.model.id).offset(offset)
        if limit is not None:
            stmt = stmt.limit(limit)
        return list(self._session.scalars(stmt).all())

    @storage_operation("get_by_ids")
    def get_by_ids(self, entity_ids: Iterable[int]) -> list[ContentT]:
        """Entities with the given ids, ordered by id; unknown ids are skipped."""
        ids = list(entity_ids)
        if not ids:
            return []
        stmt = self._select().where(self.model.id.in_(ids)).order_by(self.model.id)
        return list(self._session.scalars(stmt).all())

    @storage_operation("get_by_title")
    def get_by_title(self, title: str) -> list[ContentT]:
        """Entities whose title contains the substring, case-insensitively.

        Wildcards in the input are matched literally.
        """
        stmt = (
            self._select()
            .where(self.model.title.icontains(title, autoescape=True))
            .order_by(self.model.id)
        )
        return list(self._session.scalars(stmt).all())

    @storage_operation("get_by_genres")
    def get_by_genres(self, names: Sequence[str]) -> list[ContentT]:
        """Entities linked to any of the named genres.

        An entity matching several names is returned once per match;
        deduplication is left to the caller.

        Args:
            names: Genre names.

        Returns:
            Matching entities ordered by id.
        """
        if not names:
            return []
        link = self.genre_link
        stmt = (
            self._select()
            .join(link, self._fk(link) == self.model.id)
            .join(Genre, Genre.id == link.genre_id)
            .where(Genre.name.in_(list(names)))
            .order_by(self.model.id, Genre.id)
        )
        return list(self._session.scalars(stmt).all())

    @storage_operation("get_by_year")
    def get_by_year(self, year_start: int, year_end: int) -> list[ContentT]:
        """Entities released between the two years, inclusive."""
        stmt = (
            self._select()
            .where(self.model.release_year.between(year_start, year_end))
            .order_by(self.model.id)
        )
        return list(self._session.scalars(stmt).all())

    @storage_operation("get_favorites")
    def get_favorites(self, user_id: int) -> list[ContentT]:
        """Entities in a user's favorites, in the order they were added."""
        fav = self.favorite_model
        stmt = (
            self._select()
            .join(fav, self._fk(fav) == self.model.id)
            .where(fav.user_id == user_id)
            .order_by(fav.id)
        )
        return list(self._session.scalars(stmt).all())

    # =========================================================================
    # FAVORITES / POPULARITY
    # =========================================================================

    @storage_operation("add_to_favorites")
    def add_to_favorites(self, entity_id: int, user_id: int) -> bool:
        """Record a favorite and increment popularity if it is new.

        The pair insert and the counter update run in the caller's
        transaction. The UPDATE takes the row lock, so concurrent
        toggles on the same entity serialize.

        Args:
            entity_id: Content id.
            user_id: User id.

        Returns:
            True if the favorite was added, False if it already existed.

        Raises:
            NotFoundError: If the content or the user does not exist.
        """
        self._require(entity_id)
        fav = self.favorite_model
        stmt = (
            self.insert_stmt(fav)
            .values({"user_id": user_id, self.foreign_key: entity_id})
            .on_conflict_do_nothing(index_elements=["user_id", self.foreign_key])
        )
        if self._session.execute(stmt).rowcount == 0:
            return False
        self._bump_popularity(entity_id, 1)
        return True

    @storage_operation("remove_from_favorites")
    def remove_from_favorites(self, entity_id: int, user_id: int) -> bool:
        """Delete a favorite and decrement popularity if it existed.

        Returns:
            True if the favorite was removed, False if there was none.

        Raises:
            NotFoundError: If the content does not exist.
        """
        self._require(entity_id)
        fav = self.favorite_model
        stmt = delete(fav).where(fav.user_id == user_id, self._fk(fav) == entity_id)
        if self._session.execute(stmt).rowcount == 0:
            return False
        self._bump_popularity(entity_id, -1)
        return True

    def _bump_popularity(self, entity_id: int, delta: int) -> None:
        stmt = (
            update(self.model)
            .where(self.model.id == entity_id)
            .values(popularity=self.model.popularity + delta)
        )
        self._session.execute(stmt)

    # =========================================================================
    # INSERT / UPDATE / DELETE
    # =========================================================================

    @storage_operation("insert")
    def insert(self, data: ContentData) -> int:
        """Insert an entity with its relations and images.

        Reference data is created on demand; a failure at any step
        leaves nothing behind once the caller rolls back.

        Args:
            data: Creation payload.

        Returns:
            Id of the new entity.
        """
        entity = self.create(self.model(**data.model_dump(exclude=_NON_COLUMN_FIELDS)))
        self._link_relations(
            entity.id,
            genres=data.genres,
            keywords=data.keywords,
            age_categories=data.age_categories,
        )
        if data.cover:
            self._session.execute(
                insert(self.cover_model).values({self.foreign_key: entity.id, "filename": data.cover})
            )
        self._insert_screenshots(entity.id, data.screenshots)
        self._insert_children(entity.id, data)
        self._session.flush()
        return entity.id

    @storage_operation("update")
    def update(self, entity_id: int, patch: ContentPatch) -> None:
        """Apply a sparse patch.

        Only fields present in the patch are written; a present
        relation list replaces the whole junction set.

        Raises:
            NotFoundError: If no entity has this id.
        """
        entity = self.get_by_id(entity_id)
        if entity is None:
            raise NotFoundError(f"{self.kind} {entity_id} not found")
        for field, value in patch.scalar_changes().items():
            setattr(entity, field, value)
        self._link_relations(
            entity_id,
            genres=patch.genres,
            keywords=patch.keywords,
            age_categories=patch.age_categories,
            replace=True,
        )
        self._update_children(entity_id, patch)
        self._session.flush()

    @storage_operation("delete")
    def delete(self, entity_id: int) -> None:
        """Delete an entity, its child rows and the projects pointing at it.

        Raises:
            NotFoundError: If no entity has this id.
        """
        self._require(entity_id)
        self._delete_children(entity_id)
        for table in (
            self.favorite_model,
            self.genre_link,
            self.keyword_link,
            self.age_link,
            self.cover_model,
            self.screenshot_model,
        ):
            self._session.execute(delete(table).where(self._fk(table) == entity_id))

        projects = select(Project.id).where(
            Project.project_type == self.project_type,
            Project.project_id == entity_id,
        )
        self._session.execute(delete(FavoriteProject).where(FavoriteProject.project_id.in_(projects)))
        self._session.execute(
            delete(Project).where(
                Project.project_type == self.project_type,
                Project.project_id == entity_id,
            )
        )
        self._session.execute(delete(self.model).where(self.model.id == entity_id))

    @storage_operation("update_cover")
    def update_cover(self, entity_id: int, filename: str) -> None:
        """Replace the cover row."""
        self._require(entity_id)
        cover = self.cover_model
        self._session.execute(delete(cover).where(self._fk(cover) == entity_id))
        self._session.execute(
            insert(cover).values({self.foreign_key: entity_id, "filename": filename})
        )

    @storage_operation("update_screenshots")
    def update_screenshots(self, entity_id: int, filenames: Sequence[str]) -> None:
        """Replace all screenshot rows."""
        self._require(entity_id)
        shots = self.screenshot_model
        self._session.execute(delete(shots).where(self._fk(shots) == entity_id))
        self._insert_screenshots(entity_id, filenames)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _insert_screenshots(self, entity_id: int, filenames: Iterable[str]) -> None:
        rows = [{self.foreign_key: entity_id, "filename": name} for name in filenames]
        if rows:
            self._session.execute(insert(self.screenshot_model), rows)

    def _link_relations(
        self,
        entity_id: int,
        *,
        genres: list[GenreData] | None,
        keywords: list[KeywordData] | None,
        age_categories: list[AgeCategoryData] | None,
        replace: bool = False,
    ) -> None:
        """Upsert reference data and write junction rows.

        A None list is skipped. With replace=True, a present list first
        clears the existing junction set.
        """
        if genres is not None:
            repo = GenreRepository(self._session)
            ids = [repo.upsert(genre.name) for genre in genres]
            self._write_links(self.genre_link, "genre_id", entity_id, ids, replace)
        if keywords is not None:
            repo = KeywordRepository(self._session)
            ids = [repo.upsert(keyword.name) for keyword in keywords]
            self._write_links(self.keyword_link, "keyword_id", entity_id, ids, replace)
        if age_categories is not None:
            repo = AgeCategoryRepository(self._session)
            ids = [repo.upsert(age.min_age, age.max_age) for age in age_categories]
            self._write_links(self.age_link, "age_category_id", entity_id, ids, replace)

    def _write_links(
        self,
        link: type[Base],
        target_column: str,
        entity_id: int,
        target_ids: list[int],
        replace: bool,
    ) -> None:
        if replace:
            self._session.execute(delete(link).where(self._fk(link) == entity_id))
        rows = [
            {self.foreign_key: entity_id, target_column: target_id}
            for target_id in dict.fromkeys(target_ids)
        ]
        if rows:
            self._session.execute(insert(link), rows)

    # Hooks for content types with extra child tables (series)

    def _insert_children(self, entity_id: int, data: ContentData) -> None:
        pass

    def _update_children(self, entity_id: int, patch: ContentPatch) -> None:
        pass

    def _delete_children(self, entity_id: int) -> None:
        pass
