"""Age category endpoints for REST API."""

from fastapi import APIRouter, HTTPException, status

from src.api.dependencies.auth import AdminUser, CurrentUser
from src.api.dependencies.catalog import AgeCategories
from src.api.schemas import AgeCategoryCreateRequest, AgeCategoryResponse, InsertedResponse
from src.services.catalog.schemas import AgeCategoryData

router = APIRouter(prefix="/age-categories", tags=["Age categories"])


@router.get("", response_model=list[AgeCategoryResponse], summary="List age categories")
def list_age_categories(_user: CurrentUser, categories: AgeCategories) -> list[AgeCategoryResponse]:
    """Get all age categories ordered by id."""
    return [AgeCategoryResponse.model_validate(c) for c in categories.get_all()]


@router.get(
    "/{category_id}",
    response_model=AgeCategoryResponse,
    summary="Get age category",
    responses={404: {"description": "Age category not found"}},
)
def get_age_category(
    category_id: int,
    _user: CurrentUser,
    categories: AgeCategories,
) -> AgeCategoryResponse:
    """Get an age category by id."""
    return AgeCategoryResponse.model_validate(categories.get_by_id(category_id))


@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add age categories",
    description="Accepts objects and 'min-max' strings. Existing ranges are skipped.",
    responses={400: {"description": "Malformed range"}},
)
def add_age_categories(
    request: AgeCategoryCreateRequest,
    _admin: AdminUser,
    categories: AgeCategories,
) -> InsertedResponse:
    """Insert new age categories (admin only).

    Raises:
        HTTPException: 400 if a range string is malformed or empty input.
    """
    try:
        parsed = [AgeCategoryData.from_range(r) for r in request.ranges]
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e)) from e

    items = [*request.categories, *parsed]
    if not items:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No age categories given",
        )
    return InsertedResponse(inserted=categories.add(items))


@router.delete(
    "/{category_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete age category",
    responses={404: {"description": "Age category not found"}},
)
def delete_age_category(category_id: int, _admin: AdminUser, categories: AgeCategories) -> None:
    """Delete an age category (admin only)."""
    categories.remove(category_id)
