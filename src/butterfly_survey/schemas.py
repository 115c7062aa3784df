"""
Domain models for the butterfly survey.

The observation table itself lives in a pandas DataFrame; these models
describe the fixed column layout and the scalar summaries that are
serialized to JSON between stages.
"""

from __future__ import annotations

from datetime import date
from enum import StrEnum

from pydantic import BaseModel, Field

# =============================================================================
# Observation table layout
# =============================================================================

#: Columns every raw survey file must provide.
RAW_COLUMNS = [
    "ScientificName",
    "EnglishName",
    "Family",
    "Date",
    "Latitude",
    "Longitude",
    "Elevation_m",
]

#: Calendar fields derived once at ingest.
DERIVED_COLUMNS = ["Year", "Month", "Month_num", "Season"]

CLEANED_COLUMNS = RAW_COLUMNS + DERIVED_COLUMNS


class Season(StrEnum):
    """Meteorological season (northern hemisphere)."""

    SPRING = "Spring"
    SUMMER = "Summer"
    AUTUMN = "Autumn"
    WINTER = "Winter"


# =============================================================================
# Summaries
# =============================================================================


class SurveyOverview(BaseModel):
    """Headline numbers for the whole survey."""

    total_observations: int = Field(..., ge=0)
    unique_species: int = Field(..., ge=0)
    first_date: date | None = None
    last_date: date | None = None
    min_elevation_m: float | None = None
    max_elevation_m: float | None = None

    @property
    def elevation_gradient_m(self) -> float:
        """Difference between the highest and lowest observation."""
        if self.min_elevation_m is None or self.max_elevation_m is None:
            return 0.0
        return self.max_elevation_m - self.min_elevation_m


class SpatialSummary(BaseModel):
    """Extent of the surveyed area."""

    hull_area_km2: float = Field(..., ge=0)
    observation_points: int = Field(..., ge=0)
    elevation_gradient_m: float = Field(default=0.0, ge=0)
    hull_coordinates: list[tuple[float, float]] = Field(
        default_factory=list, description="Hull ring as (lon, lat) pairs"
    )
