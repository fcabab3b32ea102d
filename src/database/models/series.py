"""Series models.

Mirrors the movie tables and adds seasons and episodes, whose
numbers are positional within their parent.
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
SERIES_FK = "series.id"

if TYPE_CHECKING:
    from src.database.models.reference import AgeCategory, Genre, Keyword


# =============================================================================
# SERIES
# =============================================================================


class Series(Base, ContentMixin, TimestampMixin):
    """Series entity.

    Attributes:
        id: Primary key.
        seasons: Seasons ordered by season number.
    """

    __tablename__ = "series"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # Relationships
    genres: Mapped[list["Genre"]] = relationship(
        "Genre",
        secondary="series_genres",
        order_by="Genre.id",
        viewonly=True,
    )
    keywords: Mapped[list["Keyword"]] = relationship(
        "Keyword",
        secondary="series_keywords",
        order_by="Keyword.id",
        viewonly=True,
    )
    age_categories: Mapped[list["AgeCategory"]] = relationship(
        "AgeCategory",
        secondary="series_age_categories",
        order_by="AgeCategory.id",
        viewonly=True,
    )
    cover: Mapped["SeriesCover | None"] = relationship(
        "SeriesCover",
        uselist=False,
        viewonly=True,
    )
    screenshots: Mapped[list["SeriesScreenshot"]] = relationship(
        "SeriesScreenshot",
        order_by="SeriesScreenshot.id",
        viewonly=True,
    )
    seasons: Mapped[list["Season"]] = relationship(
        "Season",
        order_by="Season.season_number",
        viewonly=True,
    )

    __table_args__ = (CheckConstraint("popularity >= 0", name="chk_series_popularity"),)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Series(id={self.id}, title='{self.title}', popularity={self.popularity})>"


# =============================================================================
# SEASONS AND EPISODES
# =============================================================================


class Season(Base):
    """Season of a series, numbered from 1."""

    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        nullable=False,
    )
    season_number: Mapped[int] = mapped_column(Integer, nullable=False)

    episodes: Mapped[list["Episode"]] = relationship(
        "Episode",
        order_by="Episode.episode_number",
        viewonly=True,
    )

    __table_args__ = (
        UniqueConstraint("series_id", "season_number", name="uq_season_number"),
        CheckConstraint("season_number > 0", name="chk_season_number"),
    )

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Season(series_id={self.series_id}, number={self.season_number})>"


class Episode(Base):
    """Episode of a season, numbered from 1."""

    __tablename__ = "episodes"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    season_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("seasons.id", ondelete="CASCADE"),
        nullable=False,
    )
    episode_number: Mapped[int] = mapped_column(Integer, nullable=False)
    link: Mapped[str] = mapped_column(String(1000), nullable=False)

    __table_args__ = (
        UniqueConstraint("season_id", "episode_number", name="uq_episode_number"),
        CheckConstraint("episode_number > 0", name="chk_episode_number"),
    )


# =============================================================================
# IMAGES
# =============================================================================


class SeriesCover(Base):
    """Cover image of a series (one per series)."""

    __tablename__ = "series_covers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        unique=True,
        nullable=False,
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)


class SeriesScreenshot(Base):
    """Screenshot image of a series."""

    __tablename__ = "series_screenshots"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    filename: Mapped[str] = mapped_column(String(255), nullable=False)


# =============================================================================
# ASSOCIATION TABLES
# =============================================================================


class SeriesGenre(Base):
    """Association table for Series-Genre many-to-many relationship."""

    __tablename__ = "series_genres"

    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    genre_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("genres.id", ondelete="CASCADE"),
        primary_key=True,
    )


class SeriesKeyword(Base):
    """Association table for Series-Keyword many-to-many relationship."""

    __tablename__ = "series_keywords"

    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("keywords.id", ondelete="CASCADE"),
        primary_key=True,
    )


class SeriesAgeCategory(Base):
    """Association table for Series-AgeCategory many-to-many relationship."""

    __tablename__ = "series_age_categories"

    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        primary_key=True,
    )
    age_category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("age_categories.id", ondelete="CASCADE"),
        primary_key=True,
    )


class FavoriteSeries(Base):
    """A user's favorite series."""

    __tablename__ = "favorite_series"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
    )
    series_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey(SERIES_FK, ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    __table_args__ = (UniqueConstraint("user_id", "series_id", name="uq_favorite_series"),)
