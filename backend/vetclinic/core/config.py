"""Module: config."""

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


# Centralized runtime configuration loaded from environment variables.
class Settings(BaseSettings):
    # Which entity store backs the API: in-process maps or SQLAlchemy.
    storage_backend: Literal["memory", "sql"] = "memory"
    # SQLAlchemy connection string, only read when storage_backend == "sql".
    database_url: str = "sqlite:///./vetclinic.db"
    # Load the demo clinic (staff, patients, today's appointments) into an empty store.
    seed_demo_data: bool = True
    log_level: str = "INFO"
    # Frontend dev servers allowed to call the API.
    cors_origins: list[str] = [
        "http://localhost:5173",
        "http://127.0.0.1:5173",
        "http://localhost:5174",
        "http://127.0.0.1:5174",
    ]

    # Also load values from a local .env file.
    model_config = SettingsConfigDict(env_file=".env", env_prefix="VETCLINIC_", extra="ignore")


def get_settings() -> Settings:
    return Settings()
