"""
Configuration management for Stripworks.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from STRIPWORKS_* environment variables."""

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Root logging level for the CLI and windows"
    )

    # Playback
    default_fps: int = Field(
        default=8,
        ge=1,
        le=60,
        description="Playback rate a timeline editor opens with"
    )

    # Display
    display_fps: int = Field(
        default=60,
        description="Host display loop rate (ticks per second)"
    )
    preview_width: int = Field(default=800, description="Playback preview canvas width")
    preview_height: int = Field(default=600, description="Playback preview canvas height")
    runtime_width: int = Field(default=800, description="Runtime preview viewport width")
    runtime_height: int = Field(default=450, description="Runtime preview viewport height")
    editor_width: int = Field(default=1024, description="Editor window width")
    editor_height: int = Field(default=720, description="Editor window height")

    # Pixel editor
    palette_limit: int = Field(
        default=20,
        ge=1,
        description="Maximum number of colors reported by palette extraction"
    )

    class Config:
        env_prefix = "STRIPWORKS_"
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    Call get_settings.cache_clear() after changing the environment.
    """
    return Settings()
