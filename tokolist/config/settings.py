"""
TokoList Settings Management
Loads and validates settings from settings.yml using Pydantic
"""

import logging
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger("TokoList.Settings")


class ApiSettings(BaseModel):
    """Backend connection settings"""
    base_url: str = Field(
        default="http://10.0.2.2:3000",
        description="Root URL of the toko backend"
    )
    timeout: float = Field(
        default=30.0,
        ge=1,
        le=300,
        description="Request timeout in seconds (1-300)"
    )

    @field_validator('base_url')
    @classmethod
    def validate_base_url(cls, v: str) -> str:
        """Require a scheme and drop any trailing slash"""
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("base_url must start with http:// or https://")
        return v.rstrip("/")


class PaginationSettings(BaseModel):
    """List paging settings"""
    page_size: int = Field(
        default=10,
        ge=1,
        le=100,
        description="Number of records requested per page (1-100)"
    )
    debounce_ms: int = Field(
        default=500,
        ge=0,
        le=10000,
        description="Minimum gap between two fetches in milliseconds"
    )

    @property
    def debounce_seconds(self) -> float:
        return self.debounce_ms / 1000.0


class SessionSettings(BaseModel):
    path: Optional[Path] = Field(
        default=None,
        description="Override for the session file location"
    )


class Settings(BaseModel):
    """Main settings model"""
    api: ApiSettings = Field(default_factory=ApiSettings)
    pagination: PaginationSettings = Field(default_factory=PaginationSettings)
    session: SessionSettings = Field(default_factory=SessionSettings)


class SettingsManager:
    """Manages loading and accessing settings"""

    def __init__(self, config_path: Optional[Path] = None):
        """
        Initialize settings manager

        Args:
            config_path: Path to settings.yml file. Defaults to ./settings.yml
        """
        if config_path is None:
            config_path = Path("settings.yml")

        self.config_path = Path(config_path)
        self.settings = self._load_settings()

    def _load_settings(self) -> Settings:
        """Load and validate settings from YAML file"""
        if not self.config_path.exists():
            logger.info("Settings file not found at %s, using defaults", self.config_path)
            return Settings()

        try:
            with open(self.config_path, "r") as f:
                config_data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error("Error reading settings %s: %s", self.config_path, e)
            return Settings()

        if config_data is None:
            logger.info("Settings file is empty, using defaults")
            return Settings()
        if not isinstance(config_data, dict):
            logger.error("Settings file must contain a mapping, using defaults")
            return Settings()

        try:
            settings = Settings(**config_data)
        except ValidationError as e:
            logger.error("Invalid settings in %s: %s", self.config_path, e)
            return Settings()

        logger.info("Loaded settings from %s", self.config_path)
        logger.debug("  - Page size: %d", settings.pagination.page_size)
        return settings

    def reload(self):
        """Reload settings from file"""
        self.settings = self._load_settings()

    @property
    def base_url(self) -> str:
        return self.settings.api.base_url

    @property
    def timeout(self) -> float:
        return self.settings.api.timeout

    @property
    def page_size(self) -> int:
        return self.settings.pagination.page_size

    @property
    def debounce_seconds(self) -> float:
        return self.settings.pagination.debounce_seconds
