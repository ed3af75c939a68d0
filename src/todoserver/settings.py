from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TODOSERVER_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    database_url: str = "sqlite+aiosqlite:///./todoserver.db"

    # For local development
    auto_create_db: bool = False

    log_level: str = "INFO"
    log_json: bool = False
    log_http_requests: bool = True

    # Used by `todoserver serve`
    host: str = "127.0.0.1"
    port: int = 4567


def get_settings() -> Settings:
    return Settings()
