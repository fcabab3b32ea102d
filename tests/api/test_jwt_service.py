"""Tests for JWT token creation and validation."""

from datetime import UTC, datetime, timedelta

import jwt
import pytest

from src.api.services.jwt_service import (
    ACCESS_TOKEN,
    REFRESH_TOKEN,
    InvalidTokenError,
    JWTService,
    TokenExpiredError,
)
from src.settings import settings


@pytest.fixture
def service() -> JWTService:
    return JWTService()


class TestCreateToken:
    """Tests for token creation."""

    @staticmethod
    def test_access_token_round_trip(service: JWTService) -> None:
        """Claims survive encoding and decoding."""
        token = service.create_token("7", email="a@example.com", user_type="admin")
        payload = service.decode_token(token)
        assert payload.user_id == 7
        assert payload.email == "a@example.com"
        assert payload.is_admin is True
        assert payload.token_type == ACCESS_TOKEN

    @staticmethod
    def test_access_lifetime(service: JWTService) -> None:
        """Access tokens expire after the configured minutes."""
        payload = service.decode_token(service.create_token("1"))
        assert payload.exp - payload.iat == timedelta(minutes=settings.security.jwt_expire_minutes)

    @staticmethod
    def test_token_pair(service: JWTService) -> None:
        """The pair holds an access token and a longer-lived refresh token."""
        access, refresh = service.create_token_pair("3", "b@example.com", "user")
        access_payload = service.decode_token(access)
        refresh_payload = service.decode_token(refresh)
        assert access_payload.token_type == ACCESS_TOKEN
        assert refresh_payload.token_type == REFRESH_TOKEN
        assert refresh_payload.exp - refresh_payload.iat == timedelta(
            hours=settings.security.jwt_refresh_expire_hours
        )
        assert refresh_payload.is_admin is False

    @staticmethod
    def test_expire_seconds(service: JWTService) -> None:
        assert service.expire_seconds == settings.security.jwt_expire_minutes * 60


class TestDecodeToken:
    """Tests for token validation failures."""

    @staticmethod
    def test_expired(service: JWTService) -> None:
        """A token past its expiry raises TokenExpiredError."""
        past = datetime.now(UTC) - timedelta(hours=1)
        token = jwt.encode(
            {"sub": "1", "iat": past - timedelta(minutes=5), "exp": past},
            settings.security.jwt_secret_key,
            algorithm=settings.security.jwt_algorithm,
        )
        with pytest.raises(TokenExpiredError):
            service.decode_token(token)

    @staticmethod
    def test_wrong_signature(service: JWTService) -> None:
        """A token signed with another key is rejected."""
        now = datetime.now(UTC)
        token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(minutes=5)},
            "another-secret-key-that-is-long-enough-to-sign",
            algorithm=settings.security.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    @staticmethod
    def test_missing_subject(service: JWTService) -> None:
        """A token without subject is invalid."""
        now = datetime.now(UTC)
        token = jwt.encode(
            {"iat": now, "exp": now + timedelta(minutes=5)},
            settings.security.jwt_secret_key,
            algorithm=settings.security.jwt_algorithm,
        )
        with pytest.raises(InvalidTokenError):
            service.decode_token(token)

    @staticmethod
    def test_garbage(service: JWTService) -> None:
        with pytest.raises(InvalidTokenError):
            service.decode_token("not-a-token")
