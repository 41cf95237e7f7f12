# eventrepo/config/settings.py

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="EVENTREPO_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # --- Application ---
    app_name: str = "eventrepo"  # logger namespace for scripts
    environment: Literal["dev", "test", "prod"] = "dev"

    # --- Storage ---
    storage_backend: Literal["memory", "couchdb", "redis"] = "memory"
    storage_timeout_seconds: float = Field(10.0, gt=0)

    # --- CouchDB ---
    couchdb_url: str = "http://localhost:5984"
    couchdb_database: str = "cqrs"
    couchdb_design: str = "cqrs"

    # --- Redis ---
    redis_url: str = "redis://localhost:6379/0"
    redis_key_prefix: str = "eventrepo"

    # --- Observability ---
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"


@lru_cache
def get_settings() -> AppSettings:
    return AppSettings()


# Singleton for direct import (e.g. in storage adapters)
settings = get_settings()
