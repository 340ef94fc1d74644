"""
Configuration settings for liteorm.

Uses Pydantic Settings to load environment variables for the database file
location, logging, and connection behaviour. Explicit constructor arguments on
`Database` always win over these values.
"""
from __future__ import annotations

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    db_path: str = Field("database/liteorm.db", alias="LITEORM_DB_PATH")
    check_same_thread: bool = Field(False, alias="LITEORM_CHECK_SAME_THREAD")

    # Logging
    log_level: str = Field("INFO", alias="LITEORM_LOG_LEVEL")
    json_logs: bool = Field(False, alias="LITEORM_JSON_LOGS")
    echo_sql: bool = Field(False, alias="LITEORM_ECHO_SQL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """
    Retrieve a cached instance of Settings to avoid repeated env parsing.
    """
    return Settings()


__all__ = ["Settings", "get_settings"]
