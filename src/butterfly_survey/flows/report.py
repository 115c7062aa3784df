"""
Prefect flow for rendering the narrative survey report.

Reads the cleaned table (required) and whatever the spatial and checklist
stages wrote, then renders one HTML report next to the other outputs.

Run locally:
    python -m butterfly_survey.flows.report
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import pandas as pd
from prefect import flow, task

from butterfly_survey.analysis.checklist import notable_elevations, regional_species
from butterfly_survey.analysis.exploration import survey_overview
from butterfly_survey.config import get_settings
from butterfly_survey.flows.paths import (
    ANNOTATED_PATH,
    CHECKLIST_PATH,
    ELEVATION_PATH,
    FAMILY_BREAKDOWN_PATH,
    HOTSPOTS_PATH,
    MAP_PATH,
    PHENOLOGY_PATH,
    REPORT_PATH,
    SPATIAL_SUMMARY_PATH,
    read_cleaned,
)
from butterfly_survey.renderers.report import ReportInputs, build_report_html
from butterfly_survey.schemas import SpatialSummary
from butterfly_survey.store import SurveyStore

settings = get_settings()
store = SurveyStore(settings.project_dir)


def _read_text_table(path: Path) -> pd.DataFrame | None:
    """Read a stored table keeping empty cells and names like "NA" as text."""
    return store.read_table(path, keep_default_na=False, na_values=[""])


def _href(target: Path) -> str:
    """Link to ``target`` relative to the report's directory."""
    report_dir = (store.base / REPORT_PATH).parent
    return Path(os.path.relpath(target, report_dir)).as_posix()


@task(name="load-report-inputs")
def load_report_inputs() -> ReportInputs:
    """Collect every stage output the report can use."""
    observations = read_cleaned(store)

    spatial_data = store.read(SPATIAL_SUMMARY_PATH)
    spatial = SpatialSummary.model_validate(spatial_data) if spatial_data else None

    checklist = _read_text_table(CHECKLIST_PATH)
    regional: list[str] = []
    notable: dict[str, dict[str, Any] | None] = {}
    if checklist is not None:
        regional = regional_species(checklist, settings.regional_pattern)["EnglishName"].tolist()
        notable = notable_elevations(checklist)

    figures = sorted(store.figures.glob("*.png")) if store.figures.exists() else []
    map_file = store.file_path(MAP_PATH)

    return ReportInputs(
        overview=survey_overview(observations),
        site_name=settings.site_name,
        spatial=spatial,
        family_breakdown=_read_text_table(FAMILY_BREAKDOWN_PATH),
        annotated_species=_read_text_table(ANNOTATED_PATH),
        elevation_by_species=_read_text_table(ELEVATION_PATH),
        hotspots=_read_text_table(HOTSPOTS_PATH),
        phenology=_read_text_table(PHENOLOGY_PATH),
        regional_species=regional,
        notable=notable,
        figures=[_href(f) for f in figures],
        map_href=_href(map_file) if map_file else None,
    )


@task(name="write-report")
def write_report(html: str) -> Path:
    """Write the rendered report."""
    return store.write_text(REPORT_PATH, html, source="write-report")


@flow(name="survey-report", log_prints=True)
def report_all() -> dict[str, Any]:
    """
    Render the narrative report from the stored stage outputs.
    """
    print("Loading stage outputs...")
    inputs = load_report_inputs()
    if inputs.spatial is None:
        print("Warning: No spatial summary found. Run the spatial stage for the full report.")
    if inputs.annotated_species is None:
        print("Warning: No checklist found. Run the checklist stage for the full report.")

    print("Rendering report...")
    html = build_report_html(inputs)
    output_path = write_report(html)

    print(f"Report written: {output_path}")
    return {"figures": len(inputs.figures), "output": str(output_path)}


if __name__ == "__main__":
    result = report_all()
    print(f"Flow complete: {result}")
