from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # App
    app_env: str = "dev"
    log_level: str = "INFO"
    public_base_url: str = "http://localhost:8000"

    # Infra
    database_url: str = "postgresql://app:app@db:5432/app"
    redis_url: str = "redis://redis:6379/0"
    smtp_base_url: str = "http://smtp-mock:8025"
    auto_create_schema: bool = True

    # Security / policies
    bcrypt_rounds: int = Field(default=12, ge=4, le=31)
    hash_cost_mode: Literal["strong", "fast"] = "strong"
    session_ttl_seconds: int = 86400
    remember_cookie_max_age_seconds: int = 20 * 365 * 86400

    # User profile rules
    name_max_length: int = 50
    email_max_length: int = 255
    password_min_length: int = 6

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
