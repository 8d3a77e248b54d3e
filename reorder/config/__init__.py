"""Settings and logging shared by every layer."""

from reorder.config.logging import configure_logging, get_logger
from reorder.config.settings import (
    APISettings,
    RankingSettings,
    Settings,
    StorageSettings,
    get_settings,
    reset_settings,
)

__all__ = [
    "APISettings",
    "RankingSettings",
    "Settings",
    "StorageSettings",
    "configure_logging",
    "get_logger",
    "get_settings",
    "reset_settings",
]
