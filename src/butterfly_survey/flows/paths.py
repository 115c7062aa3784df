"""Relative store paths shared by the stage flows."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from butterfly_survey.config import get_settings
from butterfly_survey.survey.ingest import restore_cleaned_dtypes

if TYPE_CHECKING:
    import pandas as pd

    from butterfly_survey.store import SurveyStore

_settings = get_settings()

RAW_PATH = Path("data/raw") / _settings.raw_filename
CLEANED_PATH = Path("data/cleaned") / _settings.cleaned_filename

TABLES = Path("outputs/tables")
FIGURES = Path("outputs/figures")
MAPS = Path("outputs/maps")
REPORTS = Path("outputs/reports")

# Stage 1
SPECIES_SUMMARY_PATH = TABLES / "species_summary.csv"
FAMILY_SUMMARY_PATH = TABLES / "family_summary.csv"
OVERVIEW_PATH = TABLES / "survey_overview.json"

# Stage 2
ELEVATION_PATH = TABLES / "elevation_by_species.csv"
HOTSPOTS_PATH = TABLES / "observation_hotspots.csv"
SEASONAL_ELEVATION_PATH = TABLES / "seasonal_elevation.csv"
SPATIAL_SUMMARY_PATH = TABLES / "spatial_summary.json"
MAP_PATH = MAPS / "booni_butterfly_map.html"

# Stage 3
CHECKLIST_PATH = TABLES / "species_checklist.csv"
ANNOTATED_PATH = TABLES / "annotated_species_list.csv"
SPECIES_BY_FAMILY_PATH = TABLES / "species_by_family.csv"
FAMILY_BREAKDOWN_PATH = TABLES / "family_breakdown.csv"
PHENOLOGY_PATH = TABLES / "species_phenology.csv"
PHOTO_GUIDE_PATH = TABLES / "photo_naming_guide.csv"

# Report
REPORT_PATH = REPORTS / "booni_butterfly_report.html"


def read_cleaned(store: SurveyStore) -> pd.DataFrame:
    """Load the cleaned observation table written by the clean stage.

    Raises:
        FileNotFoundError: The clean stage hasn't been run.
    """
    table = store.read_table(CLEANED_PATH, keep_default_na=False, na_values=[""])
    if table is None:
        msg = (
            f"Cleaned observations not found at {store.base / CLEANED_PATH}; "
            "run the clean stage first."
        )
        raise FileNotFoundError(msg)
    return restore_cleaned_dtypes(table)
