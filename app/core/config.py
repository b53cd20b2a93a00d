"""Application configuration loaded from environment variables."""

from functools import lru_cache
from typing import Literal

from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

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
    LOG_LEVEL: str = "INFO"
    API_PREFIX: str = "/api"

    # In-memory SQLite by default; all data is lost when the process exits.
    DATABASE_URL: str = "sqlite://"
    # Populate demo users, tweets and follows at start-up.
    SEED_DATA: bool = True

    # JWT authentication
    JWT_SECRET: SecretStr = SecretStr("change-me-in-production")
    JWT_ALGORITHM: str = "HS256"
    JWT_EXPIRE_MINUTES: int = 60 * 24

    BCRYPT_ROUNDS: int = 12

    # Tweet image uploads
    UPLOAD_DIR: str = "uploads"
    UPLOAD_URL_PREFIX: str = "/uploads"
    UPLOAD_MAX_FILES: int = 4
    UPLOAD_MAX_BYTES: int = 5 * 1024 * 1024

    CORS_ORIGINS: list[str] = ["*"]

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = v.strip().upper()
        if level not in VALID_LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {', '.join(VALID_LOG_LEVELS)}")
        return level

    @field_validator("API_PREFIX", "UPLOAD_URL_PREFIX")
    @classmethod
    def validate_prefix(cls, v: str) -> str:
        s = v.strip().rstrip("/")
        if s and not s.startswith("/"):
            raise ValueError("URL prefixes must start with '/' (e.g. /api)")
        return s

    @field_validator("DATABASE_URL")
    @classmethod
    def validate_database_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("DATABASE_URL must be set and non-empty")
        if not v.strip().startswith("sqlite"):
            raise ValueError("DATABASE_URL must be a SQLite URL (e.g. sqlite://)")
        return v.strip()

    @field_validator("JWT_SECRET")
    @classmethod
    def validate_jwt_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value() or not v.get_secret_value().strip():
            raise ValueError("JWT_SECRET must be set and non-empty")
        return v

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("JWT_ALGORITHM must be set and non-empty")
        return v.strip()

    @field_validator("JWT_EXPIRE_MINUTES")
    @classmethod
    def validate_jwt_expire_minutes(cls, v: int) -> int:
        if v < 1 or v > 10080:
            raise ValueError(
                "JWT_EXPIRE_MINUTES must be between 1 and 10080 (1 min to 7 days)"
            )
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 16")
        return v

    @field_validator("UPLOAD_MAX_FILES")
    @classmethod
    def validate_upload_max_files(cls, v: int) -> int:
        if v < 0 or v > 10:
            raise ValueError("UPLOAD_MAX_FILES must be between 0 and 10")
        return v

    @field_validator("UPLOAD_MAX_BYTES")
    @classmethod
    def validate_upload_max_bytes(cls, v: int) -> int:
        if v < 1 or v > 50 * 1024 * 1024:
            raise ValueError("UPLOAD_MAX_BYTES must be between 1 byte and 50 MB")
        return v


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance (safe to call from dependencies)."""
    return Settings()


settings = get_settings()
