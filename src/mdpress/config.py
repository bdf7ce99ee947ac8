"""Configuration management for mdpress."""

from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration via environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Output
    output_filename: str = Field(
        default="document.pdf",
        alias="MDPRESS_OUTPUT_FILENAME",
    )
    print_title: str = Field(
        default="Document",
        alias="MDPRESS_PRINT_TITLE",
    )

    # Rasterization
    raster_scale: float = Field(
        default=2.0,
        gt=0,
        le=8,
        alias="MDPRESS_RASTER_SCALE",
    )
    jpeg_quality: float = Field(
        default=0.98,
        gt=0,
        le=1,
        alias="MDPRESS_JPEG_QUALITY",
    )
    # Bounds the canvas walk for very long documents
    max_pages: int = Field(
        default=50,
        ge=1,
        alias="MDPRESS_MAX_PAGES",
    )

    # Logging
    log_level: str = Field(
        default="WARNING",
        alias="MDPRESS_LOG_LEVEL",
    )


# Global settings instance
_settings: Optional[Settings] = None


def get_settings() -> Settings:
    """Get the global settings instance, creating it if needed."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def load_settings(env_file: Optional[Path] = None) -> Settings:
    """Replace the global settings, reading ``env_file`` instead of ./.env when given."""
    global _settings
    _settings = Settings(_env_file=env_file) if env_file else Settings()
    return _settings
