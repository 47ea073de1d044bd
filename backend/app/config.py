"""Application configuration via environment variables."""
from typing import Optional
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """App settings loaded from .env / .env.local or the environment."""

    # Connection URLs, in resolution order. Hosted Postgres providers export
    # several of these; whichever comes first wins.
    POSTGRES_PRISMA_URL: Optional[str] = None
    POSTGRES_URL: Optional[str] = None
    POSTGRES_URL_NON_POOLING: Optional[str] = None
    DATABASE_URL: Optional[str] = None

    CORS_ORIGINS: str = "http://localhost:3000"
    LOG_LEVEL: str = "INFO"
    SQL_ECHO: bool = False

    class Config:
        # later files take priority, so .env overrides .env.local
        env_file = (".env.local", ".env")
        extra = "ignore"

    @property
    def database_url(self) -> Optional[str]:
        """First non-empty connection URL, or None when storage is not provisioned."""
        return (
            self.POSTGRES_PRISMA_URL
            or self.POSTGRES_URL
            or self.POSTGRES_URL_NON_POOLING
            or self.DATABASE_URL
            or None
        )

    @property
    def migration_url(self) -> Optional[str]:
        """Direct (non-pooled) URL for schema migrations."""
        return self.POSTGRES_URL_NON_POOLING or self.database_url

    @property
    def is_db_configured(self) -> bool:
        return self.database_url is not None

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]


settings = Settings()
