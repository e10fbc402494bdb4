"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Allowed URL schemes for DATABASE_URL (module-level so validators can use it).
VALID_DATABASE_URL_PREFIXES = (
    "sqlite://",
    "sqlite+pysqlite://",
    "postgresql://",
    "postgresql+psycopg2://",
    "postgres://",
    "postgres+psycopg2://",
)

VALID_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Settings(BaseSettings):
    """Validated application settings from env and optional .env file."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
    )

    APP_ENV: Literal["dev", "prod"] = "dev"
    DEBUG: bool = False
    API_V1_PREFIX: str = "/api/v1"
    LOG_LEVEL: str = "INFO"

    # SQLite file for local use; point at PostgreSQL in production.
    DATABASE_URL: str = "sqlite:///./database.sqlite"

    # Bcrypt cost (rounds) used when hashing new passwords.
    BCRYPT_ROUNDS: int = 10

    # Postal-code (CEP) lookup used for address auto-fill on registration.
    CEP_LOOKUP_BASE_URL: str = "https://viacep.com.br/ws"
    CEP_LOOKUP_TIMEOUT_SEC: float = 10.0

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        v = v.strip()
        if not any(v.startswith(prefix) for prefix in VALID_DATABASE_URL_PREFIXES):
            raise ValueError(
                "DATABASE_URL must be a SQLite or PostgreSQL URL "
                "(e.g. sqlite:///./database.sqlite or postgresql+psycopg2://...)"
            )
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = (v or "").strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("CEP_LOOKUP_BASE_URL")
    @classmethod
    def validate_cep_lookup_base_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("CEP_LOOKUP_BASE_URL must be set and non-empty")
        s = v.strip().lower()
        if not (s.startswith("http://") or s.startswith("https://")):
            raise ValueError(
                "CEP_LOOKUP_BASE_URL must use http or https (e.g. https://viacep.com.br/ws)"
            )
        return v.strip().rstrip("/")

    @field_validator("CEP_LOOKUP_TIMEOUT_SEC")
    @classmethod
    def validate_cep_lookup_timeout(cls, v: float) -> float:
        if v <= 0 or v > 60:
            raise ValueError(
                "CEP_LOOKUP_TIMEOUT_SEC must be greater than 0 and at most 60"
            )
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
