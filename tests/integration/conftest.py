"""Shared fixtures for API integration tests.

Uses the module-level ``app`` from ``src.api.main``. Service
dependencies are overridden with services bound to the per-test
in-memory database and temporary uploads directory. The ASGI
transport does not run the lifespan, so the shared connection is
never opened.
"""

from __future__ import annotations

from collections.abc import AsyncGenerator

import pytest
from httpx import ASGITransport, AsyncClient

from src.database.connection import DatabaseConnection
from src.services.catalog.movie_service import MovieService, get_movie_service
from src.services.catalog.project_service import ProjectService, get_project_service
from src.services.catalog.reference_service import (
    AgeCategoryService,
    GenreService,
    KeywordService,
    get_age_category_service,
    get_genre_service,
    get_keyword_service,
)
from src.services.catalog.series_service import SeriesService, get_series_service
from src.services.catalog.user_service import UserService, get_user_service
from src.services.storage.file_storage import FileStorage
from tests.factories import ADMIN_EMAIL, PASSWORD

# ---------------------------------------------------------------------------
# Auto-mark all tests in this directory as "integration"
# ---------------------------------------------------------------------------


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    """Auto-apply ``@pytest.mark.integration`` to every test collected here."""
    integration_marker = pytest.mark.integration
    for item in items:
        if "integration" in str(item.fspath):
            item.add_marker(integration_marker)


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
async def client(
    db: DatabaseConnection,
    storage: FileStorage,
    monkeypatch: pytest.MonkeyPatch,
) -> AsyncGenerator[AsyncClient, None]:
    """Provide an ``httpx.AsyncClient`` wired to the real app.

    * Every catalog service is overridden with one bound to ``db``.
    * The health check queries ``db`` instead of the shared connection.
    """
    from src.api import main
    from src.api.main import app

    overrides = {
        get_movie_service: lambda: MovieService(db, storage),
        get_series_service: lambda: SeriesService(db, storage),
        get_project_service: lambda: ProjectService(db, storage),
        get_genre_service: lambda: GenreService(db),
        get_age_category_service: lambda: AgeCategoryService(db),
        get_keyword_service: lambda: KeywordService(db),
        get_user_service: lambda: UserService(db, admin_email=ADMIN_EMAIL),
    }
    app.dependency_overrides.update(overrides)
    monkeypatch.setattr(main, "get_database", lambda: db)
    transport = ASGITransport(app=app, raise_app_exceptions=False)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c
    for dependency in overrides:
        app.dependency_overrides.pop(dependency, None)


async def register_and_login(client: AsyncClient, name: str, email: str) -> dict[str, str]:
    """Create an account, log in and return Authorization headers."""
    resp = await client.post(
        "/api/v1/auth/register",
        json={"name": name, "email": email, "password": PASSWORD},
    )
    assert resp.status_code == 201, f"Register failed: {resp.text}"
    resp = await client.post("/api/v1/auth/token", json={"email": email, "password": PASSWORD})
    assert resp.status_code == 200, f"Login failed: {resp.text}"
    return {"Authorization": f"Bearer {resp.json()['access_token']}"}


@pytest.fixture
async def admin_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization headers of the configured admin account."""
    return await register_and_login(client, "Admin", ADMIN_EMAIL)


@pytest.fixture
async def auth_headers(client: AsyncClient) -> dict[str, str]:
    """Authorization headers of a regular user."""
    return await register_and_login(client, "Carol", "carol@example.com")
