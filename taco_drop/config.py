"""
Configuration management for Taco Drop.
Uses pydantic-settings for environment variable parsing.
"""

from functools import lru_cache
from typing import Optional

from pydantic_settings import BaseSettings
from pydantic import Field

from taco_drop.gameplay.constants import SEARCH_QUERY, SEARCH_RADIUS_METERS
from taco_drop.gameplay.difficulty import RepopulatePolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Search
    search_query: str = Field(
        default=SEARCH_QUERY,
        description="Name of the place to measure distance to"
    )
    search_radius_meters: float = Field(
        default=SEARCH_RADIUS_METERS,
        gt=0,
        description="Radius of the search region around the player"
    )
    nominatim_url: str = Field(
        default="https://nominatim.openstreetmap.org/search",
        description="OpenStreetMap Nominatim search endpoint"
    )
    request_timeout_seconds: float = Field(default=10.0, gt=0)
    user_agent: str = Field(
        default="taco-drop/0.1",
        description="User-Agent sent to the places service (Nominatim requires one)"
    )
    max_results: int = Field(default=20, ge=1, le=50)

    # Location. Unset means the default location is used.
    latitude: Optional[float] = Field(default=None, ge=-90, le=90)
    longitude: Optional[float] = Field(default=None, ge=-180, le=180)

    # Gameplay
    repopulate_policy: RepopulatePolicy = Field(
        default=RepopulatePolicy.ON_CHANGE,
        description="ON_CHANGE respawns only when the level changes, ALWAYS on every fix"
    )

    # Display
    screen_width: int = Field(default=400, ge=120)
    screen_height: int = Field(default=800, ge=200)
    fps: int = Field(default=60, ge=1)

    # Logging
    log_level: str = Field(default="INFO")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "TACO_DROP_"
        case_sensitive = False


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
