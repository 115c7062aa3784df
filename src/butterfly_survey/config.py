"""Application settings.

Values come from ``BUTTERFLY_SURVEY_*`` environment variables or a ``.env``
file in the working directory, falling back to the defaults below.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Survey pipeline configuration."""

    model_config = SettingsConfigDict(
        env_prefix="BUTTERFLY_SURVEY_",
        env_file=".env",
        extra="ignore",
    )

    app_name: str = "butterfly-survey"
    app_env: str = "development"
    debug: bool = False

    # Root under which data/ and outputs/ live
    project_dir: Path = Path()
    raw_filename: str = "booni_butterfly_csv.txt"
    cleaned_filename: str = "booni_butterflies_cleaned.csv"

    site_name: str = "Booni, Upper Chitral"
    # Decimal places used to group nearby coordinates into one location
    location_precision: int = 4
    figure_dpi: int = 300
    regional_pattern: str = "Chitral|Chitrali"


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings instance."""
    return Settings()
