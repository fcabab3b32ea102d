"""SQLAlchemy declarative base and common mixins.

Provides the foundation for all ORM models with common
columns and behaviors.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models.

    All models should inherit from this class to be part
    of the same metadata and support table creation.
    """

    pass


class TimestampMixin:
    """Mixin providing created_at and updated_at timestamps.

    Automatically sets created_at on insert and updates
    updated_at on every update.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


class ContentMixin:
    """Columns shared by movies and series.

    Attributes:
        title: Display title, searched case-insensitively.
        release_year: Year of first release.
        description: Synopsis.
        popularity: Number of users holding the entity in favorites.
        duration: Runtime in minutes (per episode for series).
        director: Director name.
        producer: Producer name.
    """

    title: Mapped[str] = mapped_column(String(500), nullable=False, index=True)
    release_year: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    popularity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=0,
        server_default="0",
    )
    duration: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    director: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    producer: Mapped[str] = mapped_column(String(255), nullable=False, default="")
