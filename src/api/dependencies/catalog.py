"""Catalog dependencies for FastAPI.

Service injection, filter query parsing and upload reading.
"""

from datetime import UTC, datetime
from typing import Annotated, Literal

from fastapi import Depends, Query, UploadFile

from src.database.models import ProjectType
from src.services.catalog.movie_service import MovieService, get_movie_service
from src.services.catalog.project_service import ProjectService, get_project_service
from src.services.catalog.reference_service import (
    AgeCategoryService,
    GenreService,
    KeywordService,
    get_age_category_service,
    get_genre_service,
    get_keyword_service,
)
from src.services.catalog.schemas import FilterParams
from src.services.catalog.series_service import SeriesService, get_series_service
from src.services.catalog.user_service import UserService, get_user_service
from src.services.storage.images import ImageUpload

# =============================================================================
# SERVICES
# =============================================================================

Movies = Annotated[MovieService, Depends(get_movie_service)]
SeriesCatalog = Annotated[SeriesService, Depends(get_series_service)]
Projects = Annotated[ProjectService, Depends(get_project_service)]
Genres = Annotated[GenreService, Depends(get_genre_service)]
AgeCategories = Annotated[AgeCategoryService, Depends(get_age_category_service)]
Keywords = Annotated[KeywordService, Depends(get_keyword_service)]
Users = Annotated[UserService, Depends(get_user_service)]


# =============================================================================
# FILTER
# =============================================================================


def get_filter_params(
    project_type: Annotated[ProjectType | None, Query()] = None,
    genres: Annotated[list[str] | None, Query(description="Repeat or comma-separate")] = None,
    year_start: Annotated[int, Query(ge=0)] = 0,
    year_end: Annotated[int, Query(ge=0)] = 0,
    title: Annotated[str, Query(max_length=500)] = "",
    popularity_order: Annotated[Literal["asc", "desc"] | None, Query()] = None,
) -> FilterParams:
    """Parse filter query parameters.

    A missing or inverted upper year bound becomes the current year.

    Returns:
        Normalized filter parameters.
    """
    names = [name for value in genres or [] for name in value.split(",")]
    params = FilterParams(
        project_type=project_type,
        genres=names,
        year_start=year_start,
        year_end=year_end,
        title=title,
        popularity_order=popularity_order,
    )
    return params.normalized(datetime.now(UTC).year)


Filter = Annotated[FilterParams, Depends(get_filter_params)]


# =============================================================================
# UPLOADS
# =============================================================================


def read_upload(file: UploadFile) -> ImageUpload:
    """Read an uploaded file into memory.

    Args:
        file: Multipart file part.

    Returns:
        Upload with its declared content type.
    """
    data = file.file.read()
    return ImageUpload(
        filename=file.filename or "",
        content_type=file.content_type or "application/octet-stream",
        data=data,
    )
