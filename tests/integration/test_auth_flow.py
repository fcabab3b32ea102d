"""Integration tests for registration and JWT authentication flow.

Tests cover:
- Registration, duplicate emails and credential validation
- Login with valid / invalid credentials
- Token-based access to protected endpoints
- Expired, forged and refresh token rejection
- Admin role granted to the configured account
"""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

import jwt
from httpx import AsyncClient

from src.settings import settings
from tests.factories import PASSWORD

# ============================================================================
# Registration tests
# ============================================================================


class TestRegister:
    """POST /api/v1/auth/register"""

    @staticmethod
    async def test_register_returns_id(client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register",
            json={"name": "Dana", "email": "Dana@Example.com", "password": PASSWORD},
        )
        assert resp.status_code == 201
        body = resp.json()
        assert body["id"] > 0
        assert body["email"] == "dana@example.com"

    @staticmethod
    async def test_duplicate_email_conflict(client: AsyncClient) -> None:
        payload = {"name": "Dana", "email": "dana@example.com", "password": PASSWORD}
        assert (await client.post("/api/v1/auth/register", json=payload)).status_code == 201
        resp = await client.post("/api/v1/auth/register", json=payload)
        assert resp.status_code == 409

    @staticmethod
    async def test_invalid_email(client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register",
            json={"name": "Dana", "email": "not-an-email", "password": PASSWORD},
        )
        assert resp.status_code == 422

    @staticmethod
    async def test_weak_password(client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/register",
            json={"name": "Dana", "email": "dana@example.com", "password": "abc"},
        )
        assert resp.status_code == 422


# ============================================================================
# Login tests
# ============================================================================


class TestLogin:
    """POST /api/v1/auth/token: credential validation."""

    @staticmethod
    async def test_login_valid_credentials(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.post(
            "/api/v1/auth/token",
            json={"email": "carol@example.com", "password": PASSWORD},
        )
        assert resp.status_code == 200
        body = resp.json()
        assert "access_token" in body
        assert "refresh_token" in body
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == settings.security.jwt_expire_minutes * 60

    @staticmethod
    async def test_login_invalid_password(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.post(
            "/api/v1/auth/token",
            json={"email": "carol@example.com", "password": "wrongpassword1"},
        )
        assert resp.status_code == 401

    @staticmethod
    async def test_login_unknown_user(client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/token",
            json={"email": "nobody@example.com", "password": PASSWORD},
        )
        assert resp.status_code == 401

    @staticmethod
    async def test_login_short_email(client: AsyncClient) -> None:
        resp = await client.post("/api/v1/auth/token", json={"email": "ab", "password": PASSWORD})
        assert resp.status_code == 422

    @staticmethod
    async def test_login_empty_password(client: AsyncClient) -> None:
        resp = await client.post(
            "/api/v1/auth/token",
            json={"email": "carol@example.com", "password": ""},
        )
        assert resp.status_code == 422


# ============================================================================
# Token access tests
# ============================================================================


def _token(sub: str = "1", token_type: str = "access", **lifetime: int) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": sub,
        "type": token_type,
        "iat": now - timedelta(hours=2),
        "exp": now + timedelta(**lifetime),
    }
    return jwt.encode(
        payload,
        settings.security.jwt_secret_key,
        algorithm=settings.security.jwt_algorithm,
    )


class TestTokenAccess:
    """Protected endpoint access with / without valid JWT."""

    @staticmethod
    async def test_token_grants_access(client: AsyncClient, auth_headers: dict[str, str]) -> None:
        resp = await client.get("/api/v1/users/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == "carol@example.com"
        assert resp.json()["user_type"] == "user"

    @staticmethod
    async def test_missing_token(client: AsyncClient) -> None:
        resp = await client.get("/api/v1/movies")
        # HTTPBearer(auto_error=True) returns 401 or 403 depending on version
        assert resp.status_code in (401, 403)

    @staticmethod
    async def test_expired_token_returns_401(client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/movies",
            headers={"Authorization": f"Bearer {_token(hours=-1)}"},
        )
        assert resp.status_code == 401
        assert "expired" in resp.json()["detail"].lower()

    @staticmethod
    async def test_wrong_signature_token_denied(client: AsyncClient) -> None:
        now = datetime.now(UTC)
        bad_token = jwt.encode(
            {"sub": "1", "iat": now, "exp": now + timedelta(hours=1)},
            "wrong-secret-key-at-least-32-chars-long!",
            algorithm="HS256",
        )
        resp = await client.get("/api/v1/movies", headers={"Authorization": f"Bearer {bad_token}"})
        assert resp.status_code == 401

    @staticmethod
    async def test_refresh_token_rejected(client: AsyncClient) -> None:
        resp = await client.get(
            "/api/v1/movies",
            headers={"Authorization": f"Bearer {_token(token_type='refresh', hours=1)}"},
        )
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Access token required"


# ============================================================================
# Roles
# ============================================================================


class TestRoles:
    """Admin gating."""

    @staticmethod
    async def test_configured_account_is_admin(client: AsyncClient, admin_headers: dict[str, str]) -> None:
        resp = await client.get("/api/v1/users/me", headers=admin_headers)
        assert resp.json()["user_type"] == "admin"

    @staticmethod
    async def test_admin_endpoint_forbidden_for_user(
        client: AsyncClient,
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.get("/api/v1/users", headers=auth_headers)
        assert resp.status_code == 403

    @staticmethod
    async def test_admin_lists_users(
        client: AsyncClient,
        admin_headers: dict[str, str],
        auth_headers: dict[str, str],
    ) -> None:
        resp = await client.get("/api/v1/users", headers=admin_headers)
        assert resp.status_code == 200
        assert {u["email"] for u in resp.json()} == {"admin@example.com", "carol@example.com"}
