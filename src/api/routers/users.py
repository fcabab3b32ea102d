"""User account endpoints for REST API.

Registration and token issuance live in the auth routes of the
application; this router covers profile and account management.
"""

from fastapi import APIRouter, HTTPException, status

from src.api.dependencies.auth import AdminUser, CurrentUser
from src.api.dependencies.catalog import Users
from src.api.schemas import PasswordChangeRequest, UserResponse
from src.services.catalog.schemas import ProfilePatch

router = APIRouter(prefix="/users", tags=["Users"])


@router.get("", response_model=list[UserResponse], summary="List users")
def list_users(_admin: AdminUser, users: Users) -> list[UserResponse]:
    """Get all users (admin only)."""
    return [UserResponse.model_validate(u) for u in users.get_all()]


@router.get("/me", response_model=UserResponse, summary="Current user")
def get_me(user: CurrentUser, users: Users) -> UserResponse:
    """Get the authenticated user's profile."""
    return UserResponse.model_validate(users.get_by_id(user.user_id))


@router.put("/me", response_model=UserResponse, summary="Update profile")
def update_me(patch: ProfilePatch, user: CurrentUser, users: Users) -> UserResponse:
    """Update name, phone number or date of birth."""
    return UserResponse.model_validate(users.update_profile(user.user_id, patch))


@router.put(
    "/me/password",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Change password",
    responses={400: {"description": "Wrong current password or weak new password"}},
)
def change_password(request: PasswordChangeRequest, user: CurrentUser, users: Users) -> None:
    """Change the authenticated user's password."""
    users.change_password(user.user_id, request.old_password, request.new_password)


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get user",
    responses={404: {"description": "User not found"}},
)
def get_user(user_id: int, _admin: AdminUser, users: Users) -> UserResponse:
    """Get a user by id (admin only)."""
    return UserResponse.model_validate(users.get_by_id(user_id))


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete user",
    responses={403: {"description": "Not allowed"}, 404: {"description": "User not found"}},
)
def delete_user(user_id: int, user: CurrentUser, users: Users) -> None:
    """Delete an account. Users may delete themselves; admins anyone.

    Raises:
        HTTPException: 403 if a non-admin targets another account.
    """
    if user_id != user.user_id and not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    users.remove(user_id)
