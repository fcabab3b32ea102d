"""Project endpoints for REST API.

Projects are the single entry point for creating and administering
movies and series. Each project references exactly one of them; the
endpoints dispatch on that reference.
"""

from typing import Annotated, Any, TypeVar

from fastapi import APIRouter, Body, File, Form, HTTPException, UploadFile, status
from pydantic import BaseModel, ValidationError

from src.api.dependencies.auth import AdminUser, CurrentUser
from src.api.dependencies.catalog import Filter, Projects, read_upload
from src.api.schemas import (
    ContentListResponse,
    MovieResponse,
    ProjectCreatedResponse,
    ProjectDetail,
    ProjectResponse,
    SeriesResponse,
)
from src.database.models import ProjectType
from src.services.catalog.filtering import FilteredContent
from src.services.catalog.schemas import MovieData, MoviePatch, SeriesData, SeriesPatch

router = APIRouter(prefix="/projects", tags=["Projects"])

ModelT = TypeVar("ModelT", bound=BaseModel)

DataField = Annotated[str, Form(description="JSON document describing the content")]
CoverFile = Annotated[UploadFile | None, File(description="Cover image")]
ScreenshotFiles = Annotated[list[UploadFile] | None, File(description="Screenshot images")]


# =============================================================================
# HELPERS
# =============================================================================


def _parse(model: type[ModelT], raw: str | dict[str, Any]) -> ModelT:
    """Validate a JSON string or dict against a schema.

    Raises:
        HTTPException: 422 with the validation errors.
    """
    try:
        if isinstance(raw, str):
            return model.model_validate_json(raw)
        return model.model_validate(raw)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=e.errors(include_url=False, include_context=False),
        ) from e


def _content_list(result: FilteredContent) -> ContentListResponse:
    return ContentListResponse(
        movies=[MovieResponse.model_validate(m) for m in result.movies],
        series=[SeriesResponse.model_validate(s) for s in result.series],
        count=len(result),
    )


# =============================================================================
# READ
# =============================================================================


@router.get("", response_model=ContentListResponse, summary="List projects")
def list_projects(_user: CurrentUser, projects: Projects) -> ContentListResponse:
    """Get the content of every project, movies and series listed separately."""
    return _content_list(projects.get_all())


@router.get(
    "/search",
    response_model=ContentListResponse,
    summary="Filter projects",
    description=(
        "Filters movies, series or both (project_type). Each list is filtered "
        "and sorted independently."
    ),
)
def search_projects(_user: CurrentUser, projects: Projects, params: Filter) -> ContentListResponse:
    """Filter projects by type, title, genres, years and popularity order."""
    return _content_list(projects.get_filtered(params))


@router.get("/favorites", response_model=ContentListResponse, summary="Favorite projects")
def favorite_projects(user: CurrentUser, projects: Projects) -> ContentListResponse:
    """Get the current user's favorite projects."""
    return _content_list(projects.get_favorites(user.user_id))


@router.get(
    "/{project_id}",
    response_model=ProjectDetail,
    summary="Get project",
    responses={404: {"description": "Project not found"}},
)
def get_project(project_id: int, _user: CurrentUser, projects: Projects) -> ProjectDetail:
    """Get a project with the movie or series it references."""
    project = projects.get_by_id(project_id)
    content = projects.get_content(project_id)
    detail = ProjectDetail(project=ProjectResponse.model_validate(project))
    if project.project_type is ProjectType.MOVIE:
        detail.movie = MovieResponse.model_validate(content)
    else:
        detail.series = SeriesResponse.model_validate(content)
    return detail


# =============================================================================
# CREATE
# =============================================================================


@router.post(
    "/movies",
    response_model=ProjectCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create movie project",
    responses={400: {"description": "Invalid image"}, 422: {"description": "Invalid movie data"}},
)
def create_movie(
    data: DataField,
    _admin: AdminUser,
    projects: Projects,
    cover: CoverFile = None,
    screenshots: ScreenshotFiles = None,
) -> ProjectCreatedResponse:
    """Create a movie with its images, then its project (admin only).

    The multipart form carries the movie as JSON in ``data``, an
    optional ``cover`` and any number of ``screenshots``.
    """
    movie = _parse(MovieData, data)
    project_id = projects.create_movie(
        movie,
        cover=read_upload(cover) if cover is not None else None,
        screenshots=[read_upload(f) for f in screenshots or []],
    )
    return ProjectCreatedResponse(id=project_id)


@router.post(
    "/series",
    response_model=ProjectCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create series project",
    responses={400: {"description": "Invalid image"}, 422: {"description": "Invalid series data"}},
)
def create_series(
    data: DataField,
    _admin: AdminUser,
    projects: Projects,
    cover: CoverFile = None,
    screenshots: ScreenshotFiles = None,
) -> ProjectCreatedResponse:
    """Create a series with seasons, episodes and images, then its project (admin only)."""
    series = _parse(SeriesData, data)
    project_id = projects.create_series(
        series,
        cover=read_upload(cover) if cover is not None else None,
        screenshots=[read_upload(f) for f in screenshots or []],
    )
    return ProjectCreatedResponse(id=project_id)


# =============================================================================
# UPDATE / DELETE
# =============================================================================


@router.put(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Update project content",
    description=(
        "Sparse update. Omitted fields are kept; a relation list that is present "
        "replaces the current links, an empty list clears them."
    ),
    responses={404: {"description": "Project not found"}},
)
def update_project(
    project_id: int,
    patch: Annotated[dict[str, Any], Body()],
    _admin: AdminUser,
    projects: Projects,
) -> None:
    """Patch the movie or series behind a project (admin only)."""
    project = projects.get_by_id(project_id)
    model = MoviePatch if project.project_type is ProjectType.MOVIE else SeriesPatch
    projects.update(project_id, _parse(model, patch))


@router.delete(
    "/{project_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete project",
    responses={404: {"description": "Project not found"}},
)
def delete_project(project_id: int, _admin: AdminUser, projects: Projects) -> None:
    """Delete a project, its content, favorites and files (admin only)."""
    projects.remove(project_id)


@router.put(
    "/{project_id}/cover",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace cover",
    responses={400: {"description": "Invalid image"}, 404: {"description": "Project not found"}},
)
def update_cover(
    project_id: int,
    cover: Annotated[UploadFile, File()],
    _admin: AdminUser,
    projects: Projects,
) -> None:
    """Replace the cover image of a project's content (admin only)."""
    projects.update_cover(project_id, read_upload(cover))


@router.put(
    "/{project_id}/screenshots",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Replace screenshots",
    responses={400: {"description": "Invalid image"}, 404: {"description": "Project not found"}},
)
def update_screenshots(
    project_id: int,
    screenshots: Annotated[list[UploadFile], File()],
    _admin: AdminUser,
    projects: Projects,
) -> None:
    """Replace all screenshots of a project's content (admin only)."""
    projects.update_screenshots(project_id, [read_upload(f) for f in screenshots])


# =============================================================================
# FAVORITES
# =============================================================================


@router.post(
    "/{project_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add project to favorites",
    responses={404: {"description": "Project not found"}},
)
def add_favorite(project_id: int, user: CurrentUser, projects: Projects) -> None:
    """Favorite a project and the content it references."""
    projects.add_to_favorites(project_id, user.user_id)


@router.delete(
    "/{project_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove project from favorites",
    responses={404: {"description": "Project not found"}},
)
def remove_favorite(project_id: int, user: CurrentUser, projects: Projects) -> None:
    """Unfavorite a project and the content it references."""
    projects.remove_from_favorites(project_id, user.user_id)
