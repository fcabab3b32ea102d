"""Pydantic schemas for API request/response validation.

Defines data transfer objects for content, projects, reference data,
users and authentication. Service inputs (create payloads, patches,
filters) are defined in ``src.services.catalog.schemas`` and reused
as request bodies.
"""

from datetime import UTC, date, datetime

from pydantic import BaseModel, ConfigDict, Field

from src.database.models import ProjectType
from src.services.catalog.schemas import AgeCategoryData, GenreData, KeywordData

# =============================================================================
# HEALTH
# =============================================================================


class DatabaseComponentHealth(BaseModel):
    """Database connection health status."""

    connected: bool = False
    backend: str | None = None


class HealthComponents(BaseModel):
    """Health status of all system components."""

    database: DatabaseComponentHealth = Field(default_factory=DatabaseComponentHealth)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str = Field(examples=["healthy"])
    version: str = Field(examples=["1.0.0"])
    components: HealthComponents = Field(default_factory=HealthComponents)
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


# =============================================================================
# AUTHENTICATION
# =============================================================================


class TokenRequest(BaseModel):
    """Token request schema (login credentials)."""

    email: str = Field(min_length=3, max_length=255)
    password: str = Field(min_length=1, max_length=100)


class TokenResponse(BaseModel):
    """JWT token pair response schema."""

    access_token: str
    refresh_token: str
    token_type: str = Field(default="bearer")
    expires_in: int = Field(description="Access token lifetime in seconds")


class RegisterResponse(BaseModel):
    """Registration confirmation."""

    id: int
    email: str
    message: str


# =============================================================================
# USERS
# =============================================================================


class UserResponse(BaseModel):
    """Public user fields."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    number: str = ""
    date_of_birth: date | None = None
    user_type: str


class PasswordChangeRequest(BaseModel):
    """Password change payload."""

    old_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1)


# =============================================================================
# REFERENCE DATA
# =============================================================================


class GenreResponse(BaseModel):
    """Genre."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class KeywordResponse(BaseModel):
    """Keyword."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class AgeCategoryResponse(BaseModel):
    """Age category."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    min_age: int
    max_age: int


class GenreCreateRequest(BaseModel):
    """Genres to insert."""

    genres: list[GenreData] = Field(min_length=1)


class KeywordCreateRequest(BaseModel):
    """Keywords to insert."""

    keywords: list[KeywordData] = Field(min_length=1)


class AgeCategoryCreateRequest(BaseModel):
    """Age categories to insert, as objects or 'min-max' strings."""

    categories: list[AgeCategoryData] = Field(default_factory=list)
    ranges: list[str] = Field(default_factory=list, examples=[["0-6", "12-18"]])


class InsertedResponse(BaseModel):
    """Number of rows actually inserted."""

    inserted: int


# =============================================================================
# CONTENT
# =============================================================================


class ImageResponse(BaseModel):
    """Stored image file name."""

    model_config = ConfigDict(from_attributes=True)

    filename: str


class ContentResponse(BaseModel):
    """Fields shared by movies and series."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    release_year: int
    description: str
    popularity: int
    duration: int
    director: str
    producer: str
    genres: list[GenreResponse] = Field(default_factory=list)
    keywords: list[KeywordResponse] = Field(default_factory=list)
    age_categories: list[AgeCategoryResponse] = Field(default_factory=list)
    cover: ImageResponse | None = None
    screenshots: list[ImageResponse] = Field(default_factory=list)


class MovieResponse(ContentResponse):
    """Movie with relations."""

    youtube_id: str = ""


class EpisodeResponse(BaseModel):
    """Episode of a season."""

    model_config = ConfigDict(from_attributes=True)

    episode_number: int
    link: str


class SeasonResponse(BaseModel):
    """Season with its episodes."""

    model_config = ConfigDict(from_attributes=True)

    season_number: int
    episodes: list[EpisodeResponse] = Field(default_factory=list)


class SeriesResponse(ContentResponse):
    """Series with relations, seasons and episodes."""

    seasons: list[SeasonResponse] = Field(default_factory=list)


# =============================================================================
# PROJECTS
# =============================================================================


class ProjectResponse(BaseModel):
    """Project reference."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    project_type: ProjectType
    project_id: int


class ProjectDetail(BaseModel):
    """Project with the content it references."""

    project: ProjectResponse
    movie: MovieResponse | None = None
    series: SeriesResponse | None = None


class ProjectCreatedResponse(BaseModel):
    """Id of a newly created project."""

    id: int


class ContentListResponse(BaseModel):
    """Movies and series, listed separately."""

    movies: list[MovieResponse] = Field(default_factory=list)
    series: list[SeriesResponse] = Field(default_factory=list)
    count: int = 0
