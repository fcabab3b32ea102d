"""Movie endpoints for REST API.

Browsing, filtering and favorites for movies. Creation and
administration go through the projects router.
"""

from fastapi import APIRouter, status

from src.api.dependencies.auth import CurrentUser
from src.api.dependencies.catalog import Filter, Movies
from src.api.schemas import MovieResponse

router = APIRouter(prefix="/movies", tags=["Movies"])


@router.get(
    "",
    response_model=list[MovieResponse],
    summary="List movies",
)
def list_movies(_user: CurrentUser, movies: Movies) -> list[MovieResponse]:
    """Get all movies ordered by id."""
    return [MovieResponse.model_validate(m) for m in movies.get_all()]


@router.get(
    "/search",
    response_model=list[MovieResponse],
    summary="Filter movies",
    description=(
        "Title matching a single movie wins; otherwise genres (any of) and year range "
        "apply. popularity_order=asc lists the most popular first."
    ),
)
def search_movies(_user: CurrentUser, movies: Movies, params: Filter) -> list[MovieResponse]:
    """Filter movies by title, genres, years and popularity order."""
    return [MovieResponse.model_validate(m) for m in movies.get_filtered(params)]


@router.get(
    "/favorites",
    response_model=list[MovieResponse],
    summary="Favorite movies",
)
def favorite_movies(user: CurrentUser, movies: Movies) -> list[MovieResponse]:
    """Get the current user's favorite movies."""
    return [MovieResponse.model_validate(m) for m in movies.get_favorites(user.user_id)]


@router.get(
    "/{movie_id}",
    response_model=MovieResponse,
    summary="Get movie",
    responses={404: {"description": "Movie not found"}},
)
def get_movie(movie_id: int, _user: CurrentUser, movies: Movies) -> MovieResponse:
    """Get a movie with its genres, keywords, age categories and images."""
    return MovieResponse.model_validate(movies.get_by_id(movie_id))


@router.post(
    "/{movie_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add movie to favorites",
)
def add_favorite(movie_id: int, user: CurrentUser, movies: Movies) -> None:
    """Favorite a movie. Repeating the call has no effect."""
    movies.add_to_favorites(movie_id, user.user_id)


@router.delete(
    "/{movie_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove movie from favorites",
)
def remove_favorite(movie_id: int, user: CurrentUser, movies: Movies) -> None:
    """Unfavorite a movie. Repeating the call has no effect."""
    movies.remove_from_favorites(movie_id, user.user_id)
