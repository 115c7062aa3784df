"""Field-survey observation data.

The survey is one hand-collected CSV of butterfly sightings. This package
reads it and produces the cleaned observation table every later stage uses.

Public API:
  - ingest: load_raw_observations, clean_observations, season_for_month,
    restore_cleaned_dtypes
"""

from butterfly_survey.survey.ingest import (
    MONTH_ABBREVIATIONS,
    MONTH_NAMES,
    clean_observations,
    load_raw_observations,
    restore_cleaned_dtypes,
    season_for_month,
)

__all__ = [
    "MONTH_ABBREVIATIONS",
    "MONTH_NAMES",
    "clean_observations",
    "load_raw_observations",
    "restore_cleaned_dtypes",
    "season_for_month",
]
