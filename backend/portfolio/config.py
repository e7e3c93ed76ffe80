"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded)
    - get_settings() is cached (lru_cache) — single instance per process
    - admin_key unset means every admin operation is rejected
    - environment defaults to production: error detail is exposed only when
      ENVIRONMENT=development is set explicitly

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Mail notifications enabled only when both SMTP credentials are present
      (ADR: local development works without a mail relay)
"""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://portfolio:portfolio@db:5432/portfolio"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosting providers hand out postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 10
    database_max_overflow: int = 5

    # Runtime
    environment: str = "production"

    # Admin
    admin_key: str | None = None

    # Blog
    default_author: str = "Halil Yüksel"

    # Mail
    smtp_host: str = "smtp.gmail.com"
    smtp_port: int = 587
    smtp_user: str | None = None
    smtp_password: str | None = None
    smtp_timeout_seconds: float = 10.0
    contact_email: str | None = None
    mail_sender_name: str = "Portfolio Contact"

    # API
    cors_origins: list[str] = [
        "http://localhost:5173", "http://localhost:3000",
    ]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @property
    def mail_enabled(self) -> bool:
        return bool(self.smtp_user and self.smtp_password)

    @property
    def owner_email(self) -> str | None:
        return self.contact_email or self.smtp_user


@lru_cache
def get_settings() -> Settings:
    return Settings()
