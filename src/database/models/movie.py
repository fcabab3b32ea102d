"""Movie models.

Contains the Movie entity, its owned images, the junction tables
linking it to reference data and the per-user favorites relation.
"""

from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from src.database.models.base import Base, ContentMixin, TimestampMixin

# Foreign key references
MOVIE_FK = "movies.id"

if TYPE_CHECKING:
    from src.database.models.reference import AgeCategory, Genre, Keyword


# =============================================================================
# MOVIE
# =============================================================================


class Movie(Base, ContentMixin, TimestampMixin):
    """Movie entity.

    Relations to reference data and images are read-only on the ORM
    side; writes go through explicit junction inserts in the repository.

    Attributes:
        id: Primary key.
        youtube_id: Trailer video identifier.
    """

    __tablename__ = "movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    youtube_id: Mapped[str] = mapped_column(String(64), nullable=False, default="")

    # Relationships
    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary="movie_genres",
        order_by="Genre.id",
        viewonly=True,
    )
    keywords: Mapped[list["Keyword"]] = relationship(
        "Keyword",
        secondary="movie_keywords",
        order_by="Keyword.id",
        viewonly=True,
    )
    age_categories: Mapped[list["AgeCategory"]] = relationship(
        "AgeCategory",
        secondary="movie_age_categories",
        order_by="AgeCategory.id",
        viewonly=True,
    )
    cover: Mapped["MovieCover | None"] = relationship(
        "MovieCover",
        uselist=False,
        viewonly=True,
    )
    screenshots: Mapped[list["MovieScreenshot"]] = relationship(
        "MovieScreenshot",
        order_by="MovieScreenshot.id",
        viewonly=True,
    )

    __table_args__ = (CheckConstraint("popularity >= 0", name="chk_movie_popularity"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Movie(id={self.id}, title='{self.title}', popularity={self.popularity})>"


# =============================================================================
# IMAGES
# =============================================================================


class MovieCover(Base):
    """Cover image of a movie (one per movie)."""

    __tablename__ = "movie_covers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)


class MovieScreenshot(Base):
    """Screenshot image of a movie."""

    __tablename__ = "movie_screenshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)


# =============================================================================
# ASSOCIATION TABLES
# =============================================================================


class MovieGenre(Base):
    """Association table for Movie-Genre many-to-many relationship."""

    __tablename__ = "movie_genres"

    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    )


class MovieKeyword(Base):
    """Association table for Movie-Keyword many-to-many relationship."""

    __tablename__ = "movie_keywords"

    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("keywords.id", ondelete="CASCADE"),
        primary_key=True,
    )


class MovieAgeCategory(Base):
    """Association table for Movie-AgeCategory many-to-many relationship."""

    __tablename__ = "movie_age_categories"

    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    age_category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("age_categories.id", ondelete="CASCADE"),
        primary_key=True,
    )


class FavoriteMovie(Base):
    """A user's favorite movie.

    Row existence is the only record of whether the movie's popularity
    was incremented for this user.
    """

    __tablename__ = "favorite_movies"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    movie_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(MOVIE_FK, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (UniqueConstraint("user_id", "movie_id", name="uq_favorite_movie"),)
