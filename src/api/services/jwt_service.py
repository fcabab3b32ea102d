"""JWT token generation and validation service.

Handles access and refresh token creation, validation, and payload
extraction using the algorithm configured in settings.
"""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any

import jwt
from jwt.exceptions import ExpiredSignatureError
from jwt.exceptions import InvalidTokenError as PyJWTInvalidTokenError

from src.settings import settings

ACCESS_TOKEN = "access"
REFRESH_TOKEN = "refresh"

# =============================================================================
# DATA STRUCTURES
# =============================================================================


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    Attributes:
        sub: Subject (user ID).
        email: User email.
        user_type: 'user' or 'admin'.
        token_type: 'access' or 'refresh'.
        exp: Expiration timestamp.
        iat: Issued at timestamp.
    """

    sub: str
    email: str
    user_type: str
    token_type: str
    exp: datetime
    iat: datetime

    @property
    def user_id(self) -> int:
        """Subject as an integer user id."""
        return int(self.sub)

    @property
    def is_admin(self) -> bool:
        """Whether the token carries the admin role."""
        return self.user_type == "admin"


class JWTError(Exception):
    """Base exception for JWT operations."""

    pass


class TokenExpiredError(JWTError):
    """Raised when token has expired."""

    pass


class InvalidTokenError(JWTError):
    """Raised when token is malformed or invalid."""

    pass


# =============================================================================
# JWT SERVICE
# =============================================================================


class JWTService:
    """Service for JWT token operations.

    Attributes:
        _secret_key: Secret key for signing.
        _algorithm: JWT algorithm (HS256).
        _expire_minutes: Access token lifetime in minutes.
        _refresh_expire_hours: Refresh token lifetime in hours.
    """

    def __init__(self) -> None:
        """Initialize JWT service from settings."""
        security = settings.security
        self._secret_key = security.jwt_secret_key
        self._algorithm = security.jwt_algorithm
        self._expire_minutes = security.jwt_expire_minutes
        self._refresh_expire_hours = security.jwt_refresh_expire_hours

    def create_token(
        self,
        subject: str,
        email: str = "",
        user_type: str = "user",
        token_type: str = ACCESS_TOKEN,
    ) -> str:
        """Generate a new JWT token.

        Args:
            subject: Token subject (user ID).
            email: User email claim.
            user_type: Role claim.
            token_type: 'access' or 'refresh'.

        Returns:
            Encoded JWT string.
        """
        now = datetime.now(UTC)
        lifetime = (
            timedelta(hours=self._refresh_expire_hours)
            if token_type == REFRESH_TOKEN
            else timedelta(minutes=self._expire_minutes)
        )
        payload = {
            "sub": subject,
            "email": email,
            "user_type": user_type,
            "type": token_type,
            "iat": now,
            "exp": now + lifetime,
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def create_token_pair(self, subject: str, email: str, user_type: str) -> tuple[str, str]:
        """Generate an access token and a refresh token.

        Returns:
            Tuple of (access_token, refresh_token).
        """
        return (
            self.create_token(subject, email, user_type, ACCESS_TOKEN),
            self.create_token(subject, email, user_type, REFRESH_TOKEN),
        )

    def decode_token(self, token: str) -> TokenPayload:
        """Decode and validate a JWT token.

        Args:
            token: Encoded JWT string.

        Returns:
            Decoded token payload.

        Raises:
            TokenExpiredError: If token has expired.
            InvalidTokenError: If token is malformed.
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
            )
            return self._parse_payload(payload)
        except ExpiredSignatureError as e:
            raise TokenExpiredError("Token has expired") from e
        except (PyJWTInvalidTokenError, KeyError) as e:
            raise InvalidTokenError("Invalid token") from e

    @staticmethod
    def _parse_payload(payload: dict[str, Any]) -> TokenPayload:
        """Parse raw payload dict into TokenPayload."""
        return TokenPayload(
            sub=payload["sub"],
            email=payload.get("email", ""),
            user_type=payload.get("user_type", "user"),
            token_type=payload.get("type", ACCESS_TOKEN),
            exp=datetime.fromtimestamp(payload["exp"], tz=UTC),
            iat=datetime.fromtimestamp(payload["iat"], tz=UTC),
        )

    @property
    def expire_seconds(self) -> int:
        """Get access token lifetime in seconds."""
        return self._expire_minutes * 60


def get_jwt_service() -> JWTService:
    """Factory function for JWTService.

    Returns:
        Configured JWTService instance.
    """
    return JWTService()
