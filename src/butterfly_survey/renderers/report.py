"""Narrative survey report renderer.

Assembles the stage outputs into one HTML document: an overview paragraph
followed by family, checklist, elevation, hotspot and phenology sections.
A section whose table is missing is rendered as a short note instead.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from butterfly_survey.analysis.phenology import (
    EARLY_SEASON_MONTHS,
    PEAK_SEASON_MONTHS,
    species_first_seen_in,
)
from butterfly_survey.renderers import render_template
from butterfly_survey.renderers.date_utils import format_survey_date, survey_period_label

if TYPE_CHECKING:
    import pandas as pd

    from butterfly_survey.schemas import SpatialSummary, SurveyOverview

# Rows shown in the hotspot table
TOP_HOTSPOTS = 5


@dataclass
class ReportInputs:
    """Everything the report can draw on; tables are None when not produced."""

    overview: SurveyOverview
    site_name: str
    spatial: SpatialSummary | None = None
    family_breakdown: pd.DataFrame | None = None
    annotated_species: pd.DataFrame | None = None
    elevation_by_species: pd.DataFrame | None = None
    hotspots: pd.DataFrame | None = None
    phenology: pd.DataFrame | None = None
    regional_species: list[str] = field(default_factory=list)
    notable: dict[str, dict[str, Any] | None] = field(default_factory=dict)
    figures: list[str] = field(default_factory=list)
    map_href: str | None = None


def _records(table: pd.DataFrame | None, limit: int | None = None) -> list[dict[str, Any]] | None:
    """Table rows as dicts for the template, or None when the table is missing."""
    if table is None:
        return None
    rows = table.head(limit) if limit is not None else table
    return rows.to_dict("records")


def _figure_caption(filename: str) -> str:
    """Readable caption from a chart file name like ``05_elevation_ranges.png``."""
    stem = filename.rsplit("/", 1)[-1].rsplit(".", 1)[0]
    words = stem.split("_")
    if words and words[0].isdigit():
        words = words[1:]
    return " ".join(words).capitalize()


def build_report_html(inputs: ReportInputs) -> str:
    """Render the full narrative report document."""
    overview = inputs.overview

    early: list[str] | None = None
    peak: list[str] | None = None
    if inputs.phenology is not None:
        early = species_first_seen_in(inputs.phenology, EARLY_SEASON_MONTHS)
        peak = species_first_seen_in(inputs.phenology, PEAK_SEASON_MONTHS)

    return render_template(
        "report.html.j2",
        site_name=inputs.site_name,
        overview=overview,
        period=survey_period_label(overview.first_date, overview.last_date),
        first_date=format_survey_date(overview.first_date),
        last_date=format_survey_date(overview.last_date),
        gradient=overview.elevation_gradient_m,
        spatial=inputs.spatial,
        families=_records(inputs.family_breakdown),
        checklist=_records(inputs.annotated_species),
        elevation=_records(inputs.elevation_by_species),
        highest=inputs.notable.get("highest"),
        lowest=inputs.notable.get("lowest"),
        hotspots=_records(inputs.hotspots, limit=TOP_HOTSPOTS),
        phenology=_records(inputs.phenology),
        early_species=early,
        peak_species=peak,
        regional_species=inputs.regional_species,
        figures=[{"src": f, "caption": _figure_caption(f)} for f in inputs.figures],
        map_href=inputs.map_href,
    )
