"""Configuration management."""

from .paths import AppPaths
from .settings import ApiSettings, PaginationSettings, SessionSettings, Settings, SettingsManager

__all__ = [
    "AppPaths",
    "ApiSettings",
    "PaginationSettings",
    "SessionSettings",
    "Settings",
    "SettingsManager",
]
