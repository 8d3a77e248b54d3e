"""
Application settings loaded from the environment.

Each concern reads its own prefix (STORAGE_, RANKING_, API_); top-level
values and a .env file are read by Settings itself.
"""

from pathlib import Path
from typing import Literal

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

SortFieldName = Literal["priority", "name", "stock", "cost", "leadTime"]


class StorageSettings(BaseSettings):
    """Where the parts database lives and how connections are pooled."""

    model_config = SettingsConfigDict(env_prefix="STORAGE_")

    data_dir: Path = Path("data")
    db_name: str = "parts.db"
    pool_size: int = Field(default=5, ge=1)
    busy_timeout: int = Field(default=30000, ge=0, description="SQLite busy timeout, ms")
    acquire_timeout: float = Field(default=30.0, gt=0, description="Pool wait limit, s")

    @property
    def db_path(self) -> Path:
        return self.data_dir / self.db_name


class RankingSettings(BaseSettings):
    """Defaults applied when a view request leaves an option out."""

    model_config = SettingsConfigDict(env_prefix="RANKING_")

    default_sort_field: SortFieldName = "priority"
    default_direction: Literal["asc", "desc"] = "asc"
    default_algorithm: Literal["comparator", "quicksort", "mergesort"] = "comparator"


class APISettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="API_")

    host: str = "0.0.0.0"
    port: int = 8000
    debug: bool = False
    cors_origins: list[str] = ["*"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Spare Parts Reordering Assistant"
    app_version: str = "1.0.0"
    environment: Literal["development", "staging", "production"] = "development"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    storage: StorageSettings = Field(default_factory=StorageSettings)
    ranking: RankingSettings = Field(default_factory=RankingSettings)
    api: APISettings = Field(default_factory=APISettings)

    @model_validator(mode="after")
    def create_data_dir(self) -> "Settings":
        self.storage.data_dir.mkdir(parents=True, exist_ok=True)
        return self

    @property
    def is_development(self) -> bool:
        return self.environment == "development"


_settings: Settings | None = None


def get_settings() -> Settings:
    """Process-wide settings, built on first use."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Forget cached settings so the next get_settings() rereads the environment."""
    global _settings
    _settings = None
