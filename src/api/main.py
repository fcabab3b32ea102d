"""FastAPI application entry point.

Creates and configures the Media Catalog REST API with
authentication, error mapping and OpenAPI documentation.
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from typing import Annotated

from fastapi import Depends, FastAPI, HTTPException, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from src.api.dependencies.catalog import Users
from src.api.routers import age_categories, genres, keywords, movies, projects, series, users
from src.api.schemas import (
    DatabaseComponentHealth,
    HealthComponents,
    HealthResponse,
    RegisterResponse,
    TokenRequest,
    TokenResponse,
)
from src.api.services.jwt_service import JWTService, get_jwt_service
from src.database.connection import close_database, get_database, init_database
from src.monitoring.middleware import PrometheusMiddleware, mount_metrics
from src.services.catalog.errors import (
    AlreadyExistsError,
    CatalogError,
    NotFoundError,
    TransientError,
    ValidationFailedError,
)
from src.services.catalog.schemas import UserRegistration
from src.settings import settings
from src.utils.logger import get_logger

logger = get_logger("catalog.api")

# =============================================================================
# LIFESPAN
# =============================================================================


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager.

    Opens the connection pool on startup and releases it on shutdown.

    Args:
        _app: FastAPI application instance.

    Yields:
        None after startup tasks complete.
    """
    settings.paths.ensure_directories()
    init_database()
    yield
    close_database()


# =============================================================================
# ERROR MAPPING
# =============================================================================

ERROR_STATUS: dict[type[CatalogError], int] = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    AlreadyExistsError: status.HTTP_409_CONFLICT,
    ValidationFailedError: status.HTTP_400_BAD_REQUEST,
    TransientError: status.HTTP_503_SERVICE_UNAVAILABLE,
}


async def catalog_error_handler(_request: Request, exc: Exception) -> JSONResponse:
    """Translate a catalog error kind into an HTTP status.

    Args:
        _request: Incoming request.
        exc: Error raised by a service.

    Returns:
        JSON response with the error message as detail.
    """
    status_code = next(
        (code for kind, code in ERROR_STATUS.items() if isinstance(exc, kind)),
        status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(f"Request failed: {exc}")
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


# =============================================================================
# APPLICATION FACTORY
# =============================================================================


def create_app() -> FastAPI:
    """Create and configure FastAPI application.

    Returns:
        Configured FastAPI instance.
    """
    app = FastAPI(
        title=settings.api.title,
        version=settings.api.version,
        description="REST API for browsing, filtering and favoriting movies and series",
        lifespan=lifespan,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        openapi_url="/api/openapi.json",
    )
    _configure_cors(app)
    app.add_middleware(PrometheusMiddleware)
    mount_metrics(app)
    app.add_exception_handler(CatalogError, catalog_error_handler)
    _register_routers(app)
    return app


def _configure_cors(app: FastAPI) -> None:
    """Configure CORS middleware.

    Args:
        app: FastAPI application instance.
    """
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors.origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["Authorization", "Content-Type"],
    )


def _register_routers(app: FastAPI) -> None:
    """Register API routers.

    Args:
        app: FastAPI application instance.
    """
    for module in (projects, movies, series, genres, age_categories, keywords, users):
        app.include_router(module.router, prefix="/api/v1")


# =============================================================================
# ROOT ENDPOINTS
# =============================================================================

app = create_app()


@app.get(
    "/api/v1/health",
    response_model=HealthResponse,
    tags=["Health"],
    summary="Health check",
    description="Verify API is running and the database answers.",
)
def health_check() -> HealthResponse:
    """Health check endpoint (no authentication required).

    Returns:
        API health status with version and component details.
    """
    database = _check_database()
    return HealthResponse(
        status="healthy" if database.connected else "degraded",
        version=settings.api.version,
        components=HealthComponents(database=database),
    )


def _check_database() -> DatabaseComponentHealth:
    """Check database connection status."""
    db = get_database()
    return DatabaseComponentHealth(connected=db.check_connection(), backend=db.backend)


# =============================================================================
# AUTHENTICATION
# =============================================================================


@app.post(
    "/api/v1/auth/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    tags=["Authentication"],
    summary="Register new user",
    description="Create a new user account.",
    responses={409: {"description": "Email already registered"}},
)
def register(request: UserRegistration, user_service: Users) -> RegisterResponse:
    """Register a new user.

    Args:
        request: Registration data, validated email and password.
        user_service: Account service.

    Returns:
        Confirmation with the new user's id.
    """
    user_id = user_service.register(request)
    return RegisterResponse(
        id=user_id,
        email=request.email,
        message="User registered successfully",
    )


@app.post(
    "/api/v1/auth/token",
    response_model=TokenResponse,
    tags=["Authentication"],
    summary="Get access token",
    description="Authenticate and receive an access and a refresh token.",
)
def login(
    request: TokenRequest,
    user_service: Users,
    jwt_service: Annotated[JWTService, Depends(get_jwt_service)],
) -> TokenResponse:
    """Authenticate user and return a JWT token pair.

    Args:
        request: Login credentials.
        user_service: Account service.
        jwt_service: JWT service for token generation.

    Returns:
        Access and refresh tokens.

    Raises:
        HTTPException: 401 if credentials invalid.
    """
    try:
        user = user_service.login(request.email, request.password)
    except (NotFoundError, ValidationFailedError):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        ) from None
    access_token, refresh_token = jwt_service.create_token_pair(
        subject=str(user.id),
        email=user.email,
        user_type=user.user_type,
    )
    return TokenResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        expires_in=jwt_service.expire_seconds,
    )


# =============================================================================
# CLI ENTRY POINT
# =============================================================================


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "src.api.main:app",
        host=settings.api.host,
        port=settings.api.port,
        reload=settings.api.reload,
    )
