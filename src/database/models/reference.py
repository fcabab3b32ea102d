"""Reference data shared by movies and series.

Genres, keywords and age categories are deduplicated by their
natural key and linked to content through junction tables.
"""

from sqlalchemy import CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from src.database.models.base import Base


class Genre(Base):
    """Genre reference table.

    Attributes:
        id: Primary key.
        name: Genre display name (natural key).
    """

    __tablename__ = "genres"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Genre(id={self.id}, name='{self.name}')>"


class Keyword(Base):
    """Free-form keyword attached to content.

    Attributes:
        id: Primary key.
        name: Keyword text (natural key).
    """

    __tablename__ = "keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), unique=True, nullable=False)

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<Keyword(id={self.id}, name='{self.name}')>"


class AgeCategory(Base):
    """Audience age range, e.g. 12-18.

    Attributes:
        id: Primary key.
        min_age: Lower bound (inclusive).
        max_age: Upper bound (inclusive).
    """

    __tablename__ = "age_categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    min_age: Mapped[int] = mapped_column(Integer, nullable=False)
    max_age: Mapped[int] = mapped_column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("min_age", "max_age", name="uq_age_category_range"),
        CheckConstraint("min_age >= 0 AND min_age <= max_age", name="chk_age_range"),
    )

    @property
    def label(self) -> str:
        """Range formatted as 'min-max'."""
        return f"{self.min_age}-{self.max_age}"

    def __repr__(self) -> str:
        """Return string representation."""
        return f"<AgeCategory(id={self.id}, range='{self.label}')>"
