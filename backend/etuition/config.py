"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded in code paths)
    - get_settings() is cached (lru_cache) — single instance per process

Design Decisions:
    - pydantic-settings over raw os.environ: validation, type coercion, .env file support
    - Defaults provided for all non-secret settings: works out-of-the-box locally
"""

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = (
        "postgresql+asyncpg://etuition:etuition@db:5432/etuition"
    )

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10

    # Bearer tokens
    access_token_secret: str = "change-me"
    access_token_algorithm: str = "HS256"
    access_token_ttl_minutes: int = 60

    # Charge provider (Stripe)
    stripe_secret_key: str = "sk_test_placeholder"
    payment_currency: str = "usd"
    payment_max_retries: int = 3
    payment_base_delay_ms: int = 200
    payment_max_delay_ms: int = 5_000

    # Identity provider (Firebase), base64-encoded service account JSON
    firebase_service_key: str | None = None
    require_identity_proof: bool = False

    # Marketplace policy
    super_admin_email: str = "admin@etuition.com"
    platform_commission_rate: float = 0.20

    # API
    cors_origins: list[str] = ["http://localhost:5173"]
    port: int = 3000

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
