"""Application configuration using pydantic-settings."""
from functools import lru_cache
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Database
    database_url: str
    db_pool_size: int = Field(default=5, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=10, validation_alias="DB_MAX_OVERFLOW")

    # Cookie session
    session_secret: str = Field(
        default="dev-session-secret-change-me",
        validation_alias="SESSION_SECRET",
    )
    session_cookie: str = Field(default="tuiter_session", validation_alias="SESSION_COOKIE")
    session_max_age: int = Field(
        default=14 * 24 * 60 * 60, validation_alias="SESSION_MAX_AGE",
    )
    session_same_site: Literal["lax", "strict", "none"] = Field(
        default="lax", validation_alias="SESSION_SAME_SITE",
    )
    session_https_only: bool = Field(default=False, validation_alias="SESSION_HTTPS_ONLY")

    # Password hashing cost (lower it in tests only)
    bcrypt_rounds: int = Field(default=12, ge=4, le=31, validation_alias="BCRYPT_ROUNDS")

    # CORS - comma-separated list of allowed origins (stored as string, parsed via property)
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="CORS_ORIGINS",
    )

    # Relation toggles
    # "atomic": counters move with a single UPDATE ... SET col = col + delta.
    # "legacy": counters are written as (count read before the mutation) +/- 1,
    #           which loses updates when two toggles on one tuit interleave.
    counter_strategy: Literal["atomic", "legacy"] = Field(
        default="atomic", validation_alias="COUNTER_STRATEGY",
    )
    toggle_max_attempts: int = Field(default=3, ge=1, validation_alias="TOGGLE_MAX_ATTEMPTS")

    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @model_validator(mode="after")
    def validate_cookie_policy(self) -> "Settings":
        """Browsers drop SameSite=None cookies that are not marked Secure."""
        if self.session_same_site == "none" and not self.session_https_only:
            raise ValueError(
                "SESSION_SAME_SITE=none requires SESSION_HTTPS_ONLY=true",
            )
        return self

    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [
            origin.strip()
            for origin in self.cors_origins_str.split(",")
            if origin.strip()
        ]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
