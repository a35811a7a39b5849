from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    app_name: str = "User Sync API"
    app_version: str = "0.1.0"

    database_scheme: str = "postgresql+psycopg"
    database_host: str = "localhost"
    database_port: int = 5432
    database_user: str = "user_sync"
    database_password: str = "user_sync_password"
    database_name: str = "user_sync"

    # Token-issuing service
    auth_base_url: str = "http://localhost:8081"
    auth_login_endpoint: str = "/auth/login"
    token_expiry_buffer_seconds: int = Field(default=300, ge=0)  # treat tokens as expired 5 min early

    # Remote user listing API
    external_api_base_url: str = "https://jsonplaceholder.typicode.com"

    # Outbound HTTP behaviour
    http_timeout_seconds: float = Field(default=10.0, gt=0)
    retry_max_attempts: int = Field(default=3, ge=1)  # total attempts, first one included
    retry_delay_seconds: float = Field(default=1.0, ge=0)
    retry_max_delay_seconds: float = Field(default=30.0, ge=0)  # cap for a single backoff wait

    cors_allowed_origins: str | list[str] = "http://localhost:5173"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="USER_SYNC_",
        extra="ignore",
    )

    @property
    def database_url(self) -> str:
        """Assemble a SQLAlchemy compatible database URL."""
        return (
            f"{self.database_scheme}://{self.database_user}:{self.database_password}"
            f"@{self.database_host}:{self.database_port}/{self.database_name}"
        )

    @property
    def resolved_cors_allowed_origins(self) -> list[str]:
        """Return the configured CORS origins as a normalized list."""

        if isinstance(self.cors_allowed_origins, str):
            return [
                origin.strip()
                for origin in self.cors_allowed_origins.split(",")
                if origin.strip()
            ]

        return list(self.cors_allowed_origins)


@lru_cache
def get_settings() -> Settings:
    """Cache settings to avoid re-parsing environment files."""
    return Settings()
