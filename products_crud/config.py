"""Application Configuration: environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables or .env (never hardcoded in code paths)
    - get_settings() is cached (lru_cache): single instance per process
    - database_url is always an asyncpg URL assembled from DATABASE_* values
"""

from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env", case_sensitive=False, extra="ignore",
    )

    # Server
    server_port: int = 3000
    server_shutdown_timeout: int = 10

    # Database
    database_host: str = "localhost:5432"
    database_name: str = "products"
    database_user: str = "postgres"
    database_password: str = "postgres"
    database_ssl_mode: str = "disable"
    database_connect_timeout: int = 60
    database_pool_size: int = 10
    database_max_overflow: int = 5

    # API
    cors_origins: list[str] = ["*"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def database_url(self) -> str:
        host, _, port = self.database_host.partition(":")
        url = URL.create(
            "postgresql+asyncpg",
            username=self.database_user,
            password=self.database_password,
            host=host,
            port=int(port) if port else None,
            database=self.database_name,
            query={"ssl": self.database_ssl_mode},
        )
        return url.render_as_string(hide_password=False)


@lru_cache
def get_settings() -> Settings:
    return Settings()
