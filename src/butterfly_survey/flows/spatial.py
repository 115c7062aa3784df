"""
Prefect flow for stage 2: spatial and elevation summaries.

Reads the cleaned table and writes per-species elevation ranges, location
hotspots, monthly elevation stats, the survey-area summary, the
interactive map and the elevation charts.

Run locally:
    python -m butterfly_survey.flows.spatial
"""

from __future__ import annotations

from pathlib import Path  # noqa: TC003
from typing import Any

import pandas as pd
from prefect import flow, task

from butterfly_survey.analysis.elevation import elevation_by_species, monthly_elevation
from butterfly_survey.analysis.spatial import observation_hotspots, spatial_summary
from butterfly_survey.config import get_settings
from butterfly_survey.flows.paths import (
    ELEVATION_PATH,
    FIGURES,
    HOTSPOTS_PATH,
    MAP_PATH,
    SEASONAL_ELEVATION_PATH,
    SPATIAL_SUMMARY_PATH,
    read_cleaned,
)
from butterfly_survey.renderers import charts
from butterfly_survey.renderers.survey_map import build_survey_map_html
from butterfly_survey.schemas import SpatialSummary
from butterfly_survey.store import SurveyStore

settings = get_settings()
store = SurveyStore(settings.project_dir)

#: Hotspots echoed to the run log
TOP_HOTSPOTS = 5


@task(name="load-cleaned")
def load_cleaned() -> pd.DataFrame:
    """Load the cleaned observation table."""
    return read_cleaned(store)


@task(name="summarize-elevation")
def summarize_elevation(observations: pd.DataFrame) -> dict[str, pd.DataFrame]:
    """Write per-species and per-month elevation tables."""
    by_species = elevation_by_species(observations)
    store.write_table(ELEVATION_PATH, by_species, source="summarize-elevation")

    by_month = monthly_elevation(observations)
    store.write_table(SEASONAL_ELEVATION_PATH, by_month, source="summarize-elevation")

    return {"by_species": by_species, "by_month": by_month}


@task(name="summarize-extent")
def summarize_extent(observations: pd.DataFrame) -> SpatialSummary:
    """Write the convex-hull survey-area summary."""
    summary = spatial_summary(observations)
    store.write(SPATIAL_SUMMARY_PATH, summary.model_dump(mode="json"), source="summarize-extent")
    return summary


@task(name="find-hotspots")
def find_hotspots(observations: pd.DataFrame) -> pd.DataFrame:
    """Write species/observation counts per rounded location."""
    hotspots = observation_hotspots(observations, precision=settings.location_precision)
    store.write_table(
        HOTSPOTS_PATH,
        hotspots,
        source="find-hotspots",
        precision=settings.location_precision,
    )
    return hotspots


@task(name="build-map")
def build_map(observations: pd.DataFrame) -> Path:
    """Render and write the interactive observation map."""
    html = build_survey_map_html(observations, site_name=settings.site_name)
    return store.write_text(MAP_PATH, html, source="build-map", markers=len(observations))


@task(name="plot-elevation")
def plot_elevation(observations: pd.DataFrame, elevation: dict[str, pd.DataFrame]) -> list[Path]:
    """Render the elevation range, family box plot and seasonal charts."""
    figures = {
        "05_elevation_ranges.png": charts.elevation_ranges_figure(elevation["by_species"]),
        "06_elevation_by_family.png": charts.elevation_by_family_figure(observations),
        "07_seasonal_elevation.png": charts.seasonal_elevation_figure(elevation["by_month"]),
    }
    return [
        store.write_figure(FIGURES / name, fig, source="plot-elevation", dpi=settings.figure_dpi)
        for name, fig in figures.items()
    ]


@flow(name="spatial-summary", log_prints=True)
def spatial_all() -> dict[str, Any]:
    """
    Build every spatial and elevation output from the cleaned table.

    The steps are independent aggregations over the same table.
    """
    print("Loading cleaned observations...")
    observations = load_cleaned()

    print("Summarizing elevation by species and month...")
    elevation = summarize_elevation(observations)

    print("Computing survey extent...")
    extent = summarize_extent(observations)

    print("Finding observation hotspots...")
    hotspots = find_hotspots(observations)

    print("Building interactive map...")
    map_path = build_map(observations)
    print(f"Interactive map saved: {map_path}")

    print("Plotting elevation charts...")
    figure_paths = plot_elevation(observations, elevation)

    print("=== SPATIAL SUMMARY ===")
    print(f"Study area (convex hull): {extent.hull_area_km2:.2f} km²")
    print(f"Number of observation points: {extent.observation_points}")
    print(f"Elevation gradient: {extent.elevation_gradient_m:.0f} meters")
    print("Top observation hotspots:")
    print(hotspots.head(TOP_HOTSPOTS).to_string(index=False))

    return {
        "species": len(elevation["by_species"]),
        "hotspots": len(hotspots),
        "hull_area_km2": extent.hull_area_km2,
        "figures": len(figure_paths),
        "map": str(map_path),
    }


if __name__ == "__main__":
    result = spatial_all()
    print(f"Flow complete: {result}")
