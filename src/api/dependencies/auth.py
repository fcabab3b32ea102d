"""Authentication dependencies for FastAPI.

Provides dependency injection for JWT token validation,
current user extraction and admin gating.
"""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from src.api.services.jwt_service import (
    ACCESS_TOKEN,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
    TokenPayload,
    get_jwt_service,
)

# =============================================================================
# SECURITY SCHEME
# =============================================================================

# HTTPBearer extracts token from "Authorization: Bearer <token>" header
security_scheme = HTTPBearer(
    scheme_name="JWT",
    description="Enter JWT token obtained from /api/v1/auth/token",
    auto_error=True,
)


# =============================================================================
# DEPENDENCIES
# =============================================================================


def get_current_user(
    credentials: Annotated[
        HTTPAuthorizationCredentials,
        Depends(security_scheme),
    ],
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> TokenPayload:
    """Extract and validate current user from an access token.

    Args:
        credentials: Bearer token from Authorization header.
        jwt_service: JWT service for token validation.

    Returns:
        Decoded token payload with user information.

    Raises:
        HTTPException: 401 if token is invalid, expired or a refresh token.
    """
    token = credentials.credentials
    try:
        payload = jwt_service.decode_token(token)
    except TokenExpiredError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    except InvalidTokenError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid authentication token",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    if payload.token_type != ACCESS_TOKEN:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Access token required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return payload


def get_admin_user(user: Annotated[TokenPayload, Depends(get_current_user)]) -> TokenPayload:
    """Require the admin role.

    Raises:
        HTTPException: 403 if the user is not an admin.
    """
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin privileges required",
        )
    return user


# Type aliases for cleaner endpoint signatures
CurrentUser = Annotated[TokenPayload, Depends(get_current_user)]
AdminUser = Annotated[TokenPayload, Depends(get_admin_user)]
