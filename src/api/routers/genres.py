"""Genre endpoints for REST API."""

from fastapi import APIRouter, status

from src.api.dependencies.auth import AdminUser, CurrentUser
from src.api.dependencies.catalog import Genres
from src.api.schemas import GenreCreateRequest, GenreResponse, InsertedResponse

router = APIRouter(prefix="/genres", tags=["Genres"])


@router.get("", response_model=list[GenreResponse], summary="List genres")
def list_genres(_user: CurrentUser, genres: Genres) -> list[GenreResponse]:
    """Get all genres ordered by id."""
    return [GenreResponse.model_validate(g) for g in genres.get_all()]


@router.get(
    "/{genre_id}",
    response_model=GenreResponse,
    summary="Get genre",
    responses={404: {"description": "Genre not found"}},
)
def get_genre(genre_id: int, _user: CurrentUser, genres: Genres) -> GenreResponse:
    """Get a genre by id."""
    return GenreResponse.model_validate(genres.get_by_id(genre_id))


@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add genres",
    description="Names that already exist are skipped.",
)
def add_genres(request: GenreCreateRequest, _admin: AdminUser, genres: Genres) -> InsertedResponse:
    """Insert new genres (admin only)."""
    return InsertedResponse(inserted=genres.add(request.genres))


@router.delete(
    "/{genre_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete genre",
    responses={404: {"description": "Genre not found"}},
)
def delete_genre(genre_id: int, _admin: AdminUser, genres: Genres) -> None:
    """Delete a genre and its links to content (admin only)."""
    genres.remove(genre_id)
