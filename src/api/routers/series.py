"""Series endpoints for REST API.

Browsing, filtering, seasons and favorites for series.
"""

from typing import Annotated

from fastapi import APIRouter, Path, status

from src.api.dependencies.auth import CurrentUser
from src.api.dependencies.catalog import Filter, SeriesCatalog
from src.api.schemas import EpisodeResponse, SeriesResponse

router = APIRouter(prefix="/series", tags=["Series"])


@router.get("", response_model=list[SeriesResponse], summary="List series")
def list_series(_user: CurrentUser, series: SeriesCatalog) -> list[SeriesResponse]:
    """Get all series ordered by id."""
    return [SeriesResponse.model_validate(s) for s in series.get_all()]


@router.get("/search", response_model=list[SeriesResponse], summary="Filter series")
def search_series(
    _user: CurrentUser,
    series: SeriesCatalog,
    params: Filter,
) -> list[SeriesResponse]:
    """Filter series by title, genres, years and popularity order."""
    return [SeriesResponse.model_validate(s) for s in series.get_filtered(params)]


@router.get("/favorites", response_model=list[SeriesResponse], summary="Favorite series")
def favorite_series(user: CurrentUser, series: SeriesCatalog) -> list[SeriesResponse]:
    """Get the current user's favorite series."""
    return [SeriesResponse.model_validate(s) for s in series.get_favorites(user.user_id)]


@router.get(
    "/{series_id}",
    response_model=SeriesResponse,
    summary="Get series",
    responses={404: {"description": "Series not found"}},
)
def get_series(series_id: int, _user: CurrentUser, series: SeriesCatalog) -> SeriesResponse:
    """Get a series with relations, seasons and episodes."""
    return SeriesResponse.model_validate(series.get_by_id(series_id))


@router.get(
    "/{series_id}/seasons/{season_number}",
    response_model=list[EpisodeResponse],
    summary="Episodes of a season",
    responses={404: {"description": "Series or season not found"}},
)
def get_season(
    series_id: int,
    season_number: Annotated[int, Path(ge=1)],
    _user: CurrentUser,
    series: SeriesCatalog,
) -> list[EpisodeResponse]:
    """Get the episodes of one season, ordered by number."""
    episodes = series.get_season(series_id, season_number)
    return [EpisodeResponse.model_validate(e) for e in episodes]


@router.post(
    "/{series_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Add series to favorites",
)
def add_favorite(series_id: int, user: CurrentUser, series: SeriesCatalog) -> None:
    """Favorite a series. Repeating the call has no effect."""
    series.add_to_favorites(series_id, user.user_id)


@router.delete(
    "/{series_id}/favorite",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Remove series from favorites",
)
def remove_favorite(series_id: int, user: CurrentUser, series: SeriesCatalog) -> None:
    """Unfavorite a series. Repeating the call has no effect."""
    series.remove_from_favorites(series_id, user.user_id)
