"""Keyword endpoints for REST API."""

from fastapi import APIRouter, status

from src.api.dependencies.auth import AdminUser
from src.api.dependencies.catalog import Keywords
from src.api.schemas import InsertedResponse, KeywordCreateRequest

router = APIRouter(prefix="/keywords", tags=["Keywords"])


@router.post(
    "",
    response_model=InsertedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add keywords",
    description="Names that already exist are skipped.",
)
def add_keywords(
    request: KeywordCreateRequest,
    _admin: AdminUser,
    keywords: Keywords,
) -> InsertedResponse:
    """Insert new keywords (admin only)."""
    return InsertedResponse(inserted=keywords.add(request.keywords))
