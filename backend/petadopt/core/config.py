"""Runtime settings read from the environment and an optional ``.env`` file."""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENV_FILE = Path(__file__).resolve().parents[3] / ".env"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_ENV_FILE, case_sensitive=False, populate_by_name=True
    )

    app_env: str = Field("local", alias="APP_ENV")
    app_name: str = "PetAdopt API"
    api_v1_prefix: str = "/api/v1"

    # Async URL for the app; migrations use SYNC_DATABASE_URL when given.
    database_url: str = Field(..., alias="DATABASE_URL")
    sync_database_url: str | None = Field(None, alias="SYNC_DATABASE_URL")
    database_echo: bool = Field(False, alias="DATABASE_ECHO")

    secret_key: str = Field(..., alias="SECRET_KEY")
    jwt_secret_key: str = Field("", alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    access_token_expire_minutes: int = Field(
        7 * 24 * 60, alias="ACCESS_TOKEN_EXPIRE_MINUTES"
    )

    # Rate limiting is off unless REDIS_URL is set.
    redis_url: str | None = Field(None, alias="REDIS_URL")
    rate_limit_default: str = Field("100/minute", alias="RATE_LIMIT_DEFAULT")
    rate_limit_login: str = Field("10/minute", alias="RATE_LIMIT_LOGIN")

    cors_allow_origins: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
        alias="CORS_ALLOW_ORIGINS",
    )
    cors_allow_credentials: bool = Field(False, alias="CORS_ALLOW_CREDENTIALS")

    bootstrap_admin_email: str | None = Field(None, alias="BOOTSTRAP_ADMIN_EMAIL")
    bootstrap_admin_password: str | None = Field(
        None, alias="BOOTSTRAP_ADMIN_PASSWORD"
    )
    bootstrap_admin_name: str = Field("Admin User", alias="BOOTSTRAP_ADMIN_NAME")

    pet_image_limit: int = Field(5, alias="PET_IMAGE_LIMIT")
    page_size_max: int = Field(100, alias="PAGE_SIZE_MAX")
    stats_top_breeds: int = Field(5, alias="STATS_TOP_BREEDS")
    stats_recent_pet_days: int = Field(30, alias="STATS_RECENT_PET_DAYS")

    @field_validator("cors_allow_origins", mode="before")
    @classmethod
    def _split_origins(cls, value: Any) -> Any:
        if isinstance(value, str):
            return [part.strip() for part in value.split(",") if part.strip()]
        return value

    @model_validator(mode="after")
    def _default_jwt_secret(self) -> "Settings":
        if not self.jwt_secret_key:
            self.jwt_secret_key = self.secret_key
        return self


@lru_cache
def get_settings() -> Settings:
    """Settings are read once per process; tests call ``cache_clear()``."""
    return Settings()  # type: ignore[call-arg]
