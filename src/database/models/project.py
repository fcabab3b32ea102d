"""Project models.

A project is a type-erased reference to either a movie or a series.
The referenced id cannot carry a polymorphic foreign key, so the
repositories delete project rows together with their target.
"""

from dataclasses import dataclass
from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.database.models.base import Base

# =============================================================================
# TAGGED REFERENCES
# =============================================================================


class ProjectType(str, Enum):
    """Concrete content type behind a project."""

    MOVIE = "movie"
    SERIES = "series"


@dataclass(frozen=True)
class MovieRef:
    """Reference to a movie by id."""

    id: int


@dataclass(frozen=True)
class SeriesRef:
    """Reference to a series by id."""

    id: int


ContentRef = MovieRef | SeriesRef


def make_ref(project_type: ProjectType | str, content_id: int) -> ContentRef:
    """Build the tagged reference for a type name and id.

    Raises:
        ValueError: If the type is neither movie nor series.
    """
    match ProjectType(project_type):
        case ProjectType.MOVIE:
            return MovieRef(content_id)
        case ProjectType.SERIES:
            return SeriesRef(content_id)


def ref_type(ref: ContentRef) -> ProjectType:
    """Return the project type of a tagged reference."""
    return ProjectType.MOVIE if isinstance(ref, MovieRef) else ProjectType.SERIES


# =============================================================================
# PROJECT
# =============================================================================


class Project(Base):
    """Abstract reference to a movie or series.

    Attributes:
        id: Primary key.
        project_type: Concrete type of the target.
        project_id: Id of the target in its own table.
    """

    __tablename__ = "projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    project_type: Mapped[ProjectType] = mapped_column(
        SAEnum(
            ProjectType,
            name="project_type",
            values_callable=lambda enum: [member.value for member in enum],
        ),
        nullable=False,
    )
    project_id: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (UniqueConstraint("project_type", "project_id", name="uq_project_target"),)

    @property
    def ref(self) -> ContentRef:
        """Tagged reference to the concrete entity."""
        return make_ref(self.project_type, self.project_id)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Project(id={self.id}, type='{self.project_type.value}', target={self.project_id})>"


class FavoriteProject(Base):
    """A user's favorite project."""

    __tablename__ = "favorite_projects"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    project_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("projects.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (UniqueConstraint("user_id", "project_id", name="uq_favorite_project"),)
