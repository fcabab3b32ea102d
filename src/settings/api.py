"""API configuration settings.

FastAPI, security (JWT), and CORS settings.
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class APISettings(BaseSettings):
    """FastAPI configuration.

    Attributes:
        host: API host address.
        port: API port.
        reload: Enable auto-reload in development.
        workers: Number of worker processes.
        public_url: Public URL for the API.
    """

    host: str = Field(default="0.0.0.0", alias="API_HOST")
    port: int = Field(default=8000, alias="API_PORT")
    reload: bool = Field(default=True, alias="API_RELOAD")
    workers: int = Field(default=4, alias="API_WORKERS")
    public_url: str = Field(default="http://localhost:8000", alias="API_PUBLIC_URL")
    title: str = Field(default="Media Catalog API", alias="API_TITLE")
    version: str = Field(default="1.0.0", alias="API_VERSION")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


class SecuritySettings(BaseSettings):
    """JWT and admin configuration.

    Attributes:
        jwt_secret_key: Secret key for JWT signing.
        jwt_algorithm: JWT algorithm (HS256, RS256).
        jwt_expire_minutes: Access token lifetime.
        jwt_refresh_expire_hours: Refresh token lifetime.
        admin_email: Account that receives the admin role on login.
    """

    jwt_secret_key: str = Field(alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256", alias="JWT_ALGORITHM")
    jwt_expire_minutes: int = Field(default=30, alias="JWT_EXPIRE_MINUTES")
    jwt_refresh_expire_hours: int = Field(default=24, alias="JWT_REFRESH_EXPIRE_HOURS")
    admin_email: str = Field(default="admin@example.com", alias="ADMIN_EMAIL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def is_configured(self) -> bool:
        """Check if JWT secret is configured and secure."""
        return bool(self.jwt_secret_key and len(self.jwt_secret_key) >= 32)


class CORSSettings(BaseSettings):
    """CORS configuration.

    Attributes:
        origins_raw: Comma-separated allowed origins.
    """

    origins_raw: str = Field(
        default="http://localhost:3000",
        alias="CORS_ORIGINS",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    @property
    def origins(self) -> list[str]:
        """Parse origins from comma-separated string."""
        return [o.strip() for o in self.origins_raw.split(",") if o.strip()]
