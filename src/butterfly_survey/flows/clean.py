"""
Prefect flow for stage 1: ingest and clean the raw survey file.

Parses the hand-collected sightings, derives calendar fields, writes the
cleaned table that every later stage reads, and produces the exploratory
summaries and charts.

Run locally:
    python -m butterfly_survey.flows.clean
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task

from butterfly_survey.analysis.exploration import (
    family_summary,
    monthly_observations,
    species_accumulation,
    species_summary,
    survey_overview,
)
from butterfly_survey.config import get_settings
from butterfly_survey.flows.paths import (
    CLEANED_PATH,
    FAMILY_SUMMARY_PATH,
    FIGURES,
    OVERVIEW_PATH,
    RAW_PATH,
    SPECIES_SUMMARY_PATH,
)
from butterfly_survey.renderers import charts
from butterfly_survey.renderers.date_utils import survey_period_label
from butterfly_survey.schemas import SurveyOverview
from butterfly_survey.store import SurveyStore
from butterfly_survey.survey.ingest import clean_observations, load_raw_observations

settings = get_settings()
store = SurveyStore(settings.project_dir)


@task(name="load-raw-observations")
def load_raw(raw_path: Path) -> pd.DataFrame:
    """Read the raw sightings file."""
    return load_raw_observations(raw_path)


@task(name="clean-observations")
def clean(raw: pd.DataFrame) -> pd.DataFrame:
    """Parse dates and numbers and derive calendar fields."""
    return clean_observations(raw)


@task(name="save-cleaned")
def save_cleaned(cleaned: pd.DataFrame, raw_path: Path) -> Path:
    """Write the cleaned table for the downstream stages."""
    return store.write_table(
        CLEANED_PATH,
        cleaned,
        source="clean-observations",
        input=str(raw_path),
    )


@task(name="summarize-survey")
def summarize_survey(cleaned: pd.DataFrame) -> SurveyOverview:
    """Write the overview, species summary and family summary."""
    overview = survey_overview(cleaned)
    store.write(OVERVIEW_PATH, overview.model_dump(mode="json"), source="summarize-survey")

    species = species_summary(cleaned)
    store.write_table(SPECIES_SUMMARY_PATH, species, source="summarize-survey")
    print(species.to_string(index=False))

    families = family_summary(cleaned)
    store.write_table(FAMILY_SUMMARY_PATH, families, source="summarize-survey")
    print(families.to_string(index=False))

    return overview


@task(name="plot-exploration")
def plot_exploration(cleaned: pd.DataFrame) -> list[Path]:
    """Render the family, monthly, elevation and accumulation charts."""
    figures = {
        "01_family_diversity.png": charts.family_diversity_figure(family_summary(cleaned)),
        "02_temporal_distribution.png": charts.temporal_distribution_figure(
            monthly_observations(cleaned), site_label=_site_label(cleaned)
        ),
        "03_elevation_distribution.png": charts.elevation_distribution_figure(cleaned),
        "04_species_accumulation.png": charts.species_accumulation_figure(
            species_accumulation(cleaned)
        ),
    }
    return [
        store.write_figure(FIGURES / name, fig, source="plot-exploration", dpi=settings.figure_dpi)
        for name, fig in figures.items()
    ]


def _site_label(cleaned: pd.DataFrame) -> str:
    """Chart subtitle such as ``Booni, Upper Chitral (2020-2021)``."""
    if cleaned.empty:
        return settings.site_name
    first, last = int(cleaned["Year"].min()), int(cleaned["Year"].max())
    years = str(first) if first == last else f"{first}-{last}"
    return f"{settings.site_name} ({years})"


@flow(name="clean-observations", log_prints=True)
def clean_all(raw_path: Path | None = None) -> dict[str, Any]:
    """
    Ingest and clean the raw survey file.

    Aborts on the first malformed row; nothing is written in that case.
    """
    raw_path = raw_path or store.base / RAW_PATH

    print(f"Reading raw observations from {raw_path}...")
    raw = load_raw(raw_path)

    print(f"Cleaning {len(raw)} observations...")
    cleaned = clean(raw)
    output_path = save_cleaned(cleaned, raw_path)
    print(f"Saved cleaned observations to {output_path}")

    overview = summarize_survey(cleaned)
    print("=== BOONI BUTTERFLY SURVEY SUMMARY ===")
    print(f"Total Observations: {overview.total_observations}")
    print(f"Unique Species: {overview.unique_species}")
    print(f"Survey Period: {survey_period_label(overview.first_date, overview.last_date)}")
    print(f"Elevation Gradient: {overview.elevation_gradient_m:.0f} meters")

    print("Plotting exploratory charts...")
    figure_paths = plot_exploration(cleaned)

    return {
        "observations": overview.total_observations,
        "species": overview.unique_species,
        "figures": len(figure_paths),
        "output": str(output_path),
    }


if __name__ == "__main__":
    result = clean_all()
    print(f"Flow complete: {result}")
