"""Input value objects for catalog services.

Create payloads, sparse patches and filter parameters. Patch fields
default to None, meaning "leave unchanged"; any other value, including
0 or an empty list, is applied.
"""

import re
from datetime import date
from typing import ClassVar, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from src.database.models import ProjectType

# =============================================================================
# REFERENCE DATA
# =============================================================================

_AGE_RANGE_PATTERN = re.compile(r"^\s*(\d+)\s*-\s*(\d+)\s*$")


class GenreData(BaseModel):
    """Genre natural key."""

    name: str = Field(..., min_length=1, max_length=100)


class KeywordData(BaseModel):
    """Keyword natural key."""

    name: str = Field(..., min_length=1, max_length=255)


class AgeCategoryData(BaseModel):
    """Age range natural key (inclusive bounds)."""

    min_age: int = Field(..., ge=0)
    max_age: int = Field(..., ge=0)

    @model_validator(mode="after")
    def check_bounds(self) -> "AgeCategoryData":
        """Reject ranges whose lower bound exceeds the upper bound."""
        if self.min_age > self.max_age:
            raise ValueError("min_age must not exceed max_age")
        return self

    @classmethod
    def from_range(cls, value: str) -> "AgeCategoryData":
        """Parse the 'min-max' form used by admin forms.

        Args:
            value: Range such as "12-18".

        Returns:
            Parsed age category.

        Raises:
            ValueError: If the value is not two dash-separated integers.
        """
        match = _AGE_RANGE_PATTERN.match(value)
        if match is None:
            raise ValueError(f"Invalid age range: {value!r}")
        return cls(min_age=int(match.group(1)), max_age=int(match.group(2)))


# =============================================================================
# CONTENT CREATE PAYLOADS
# =============================================================================


class EpisodeData(BaseModel):
    """Episode payload. Its number is its 1-based position in the season."""

    link: str = Field(..., min_length=1, max_length=1000)


class SeasonData(BaseModel):
    """Season payload. Its number is its 1-based position in the series."""

    episodes: list[EpisodeData] = Field(default_factory=list)


class ContentData(BaseModel):
    """Fields shared by movie and series creation."""

    title: str = Field(..., min_length=1, max_length=500)
    release_year: int = Field(..., ge=0)
    description: str = ""
    duration: int = Field(default=0, ge=0)
    director: str = ""
    producer: str = ""
    genres: list[GenreData] = Field(default_factory=list)
    keywords: list[KeywordData] = Field(default_factory=list)
    age_categories: list[AgeCategoryData] = Field(default_factory=list)
    cover: str | None = None
    screenshots: list[str] = Field(default_factory=list)


class MovieData(ContentData):
    """Movie creation payload."""

    youtube_id: str = ""


class SeriesData(ContentData):
    """Series creation payload."""

    seasons: list[SeasonData] = Field(default_factory=list)


# =============================================================================
# SPARSE PATCHES
# =============================================================================


class ContentPatch(BaseModel):
    """Sparse update shared by movies and series.

    A relation list that is present replaces the whole junction set.
    """

    title: str | None = Field(default=None, min_length=1, max_length=500)
    release_year: int | None = Field(default=None, ge=0)
    description: str | None = None
    duration: int | None = Field(default=None, ge=0)
    director: str | None = None
    producer: str | None = None
    genres: list[GenreData] | None = None
    keywords: list[KeywordData] | None = None
    age_categories: list[AgeCategoryData] | None = None

    RELATIONS: ClassVar[tuple[str, ...]] = ("genres", "keywords", "age_categories")

    def scalar_changes(self) -> dict[str, object]:
        """Column values present in the patch."""
        excluded = set(self.RELATIONS) | {"seasons"}
        return {
            key: value
            for key, value in self.model_dump(exclude_none=True).items()
            if key not in excluded
        }


class MoviePatch(ContentPatch):
    """Sparse movie update."""

    youtube_id: str | None = None


class SeriesPatch(ContentPatch):
    """Sparse series update.

    Seasons are matched by position: links of existing episodes are
    updated, missing seasons and episodes are created.
    """

    seasons: list[SeasonData] | None = None


# =============================================================================
# FILTER PARAMETERS
# =============================================================================

PopularityOrder = Literal["asc", "desc"]


class FilterParams(BaseModel):
    """Multi-criteria content filter.

    Attributes:
        project_type: Restrict to movies or series; None means both.
        genres: Genre names combined with OR semantics.
        year_start: Inclusive lower bound, 0 when unset.
        year_end: Inclusive upper bound, 0 when unset.
        title: Case-insensitive substring.
        popularity_order: 'asc' sorts by descending popularity and 'desc'
            by ascending popularity; None keeps store order.
    """

    model_config = ConfigDict(frozen=True)

    project_type: ProjectType | None = None
    genres: list[str] = Field(default_factory=list)
    year_start: int = Field(default=0, ge=0)
    year_end: int = Field(default=0, ge=0)
    title: str = ""
    popularity_order: PopularityOrder | None = None

    @field_validator("genres")
    @classmethod
    def strip_genres(cls, v: list[str]) -> list[str]:
        """Drop blank genre names."""
        return [g.strip() for g in v if g.strip()]

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        """Strip surrounding whitespace."""
        return v.strip()

    @property
    def has_year_range(self) -> bool:
        """Whether a year bound was given."""
        return self.year_start != 0 or self.year_end != 0

    def normalized(self, current_year: int) -> "FilterParams":
        """Fill in the upper year bound the way the HTTP layer does.

        A missing upper bound, or one below the lower bound, becomes the
        current year.

        Args:
            current_year: Year used as the default upper bound.

        Returns:
            New FilterParams instance.
        """
        if self.year_end == 0 or self.year_end < self.year_start:
            return self.model_copy(update={"year_end": current_year})
        return self


# =============================================================================
# USERS
# =============================================================================

_EMAIL_PATTERN = re.compile(r"^[a-z0-9._%+\-]+@[a-z0-9.\-]+\.[a-z]{2,}$")
MIN_PASSWORD_LENGTH = 6


def check_email(value: str) -> str:
    """Normalize an email to lower case and check its format."""
    email = value.strip().lower()
    if not _EMAIL_PATTERN.match(email):
        raise ValueError("Invalid email format")
    return email


def check_password(value: str) -> str:
    """Require at least six characters with a letter and a digit."""
    if len(value) < MIN_PASSWORD_LENGTH:
        raise ValueError(f"Password must be at least {MIN_PASSWORD_LENGTH} characters")
    if not any(c.isalpha() for c in value) or not any(c.isdigit() for c in value):
        raise ValueError("Password must contain a letter and a digit")
    return value


class UserRegistration(BaseModel):
    """New account."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str
    password: str
    number: str = Field(default="", max_length=32)
    date_of_birth: date | None = None

    @field_validator("email")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Lower-case and check the email format."""
        return check_email(v)

    @field_validator("password")
    @classmethod
    def validate_password(cls, v: str) -> str:
        """Enforce password strength."""
        return check_password(v)


class ProfilePatch(BaseModel):
    """Sparse profile update."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    number: str | None = Field(default=None, max_length=32)
    date_of_birth: date | None = None
