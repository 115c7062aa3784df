"""Leaflet map renderer for survey observations.

Generates a single HTML document with one circle marker per observation,
colored by family, with street/satellite base layers, a family legend and
a scale bar.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any

import pandas as pd
from markupsafe import escape

from butterfly_survey.renderers import render_template
from butterfly_survey.renderers.date_utils import format_survey_date
from butterfly_survey.renderers.family_palette import FALLBACK_COLOR, build_family_palette


@dataclass
class MapMarker:
    """One observation on the map."""

    lat: float
    lon: float
    label: str
    popup: str
    family: str
    color: str


def build_popup_html(row: dict[str, Any]) -> str:
    """Popup body for one observation: names, family, date and elevation."""
    return (
        f"<b>{escape(row['EnglishName'])}</b><br/>"
        f"<i>{escape(row['ScientificName'])}</i><br/>"
        f"Family: {escape(row['Family'])}<br/>"
        f"Date: {format_survey_date(row['Date'])}<br/>"
        f"Elevation: {row['Elevation_m']:.0f}m"
    )


def build_map_markers(
    observations: pd.DataFrame,
    palette: dict[str, str] | None = None,
) -> list[MapMarker]:
    """Build one marker per observation, in table order."""
    if palette is None:
        palette = build_family_palette(observations["Family"])

    markers: list[MapMarker] = []
    for row in observations.to_dict("records"):
        family = str(row["Family"])
        markers.append(
            MapMarker(
                lat=float(row["Latitude"]),
                lon=float(row["Longitude"]),
                label=str(row["EnglishName"]),
                popup=build_popup_html(row),
                family=family,
                color=palette.get(family, FALLBACK_COLOR),
            )
        )
    return markers


def _map_bounds(markers: list[MapMarker]) -> list[list[float]]:
    """South-west and north-east corners enclosing every marker."""
    lats = [m.lat for m in markers]
    lons = [m.lon for m in markers]
    return [[min(lats), min(lons)], [max(lats), max(lons)]]


def build_survey_map_html(
    observations: pd.DataFrame,
    site_name: str = "Booni, Upper Chitral",
    palette: dict[str, str] | None = None,
) -> str:
    """Render the interactive observation map as a full HTML document."""
    if palette is None:
        palette = build_family_palette(observations["Family"])

    markers = build_map_markers(observations, palette)
    bounds = _map_bounds(markers) if markers else None
    legend = [{"family": family, "color": color} for family, color in palette.items()]

    return render_template(
        "survey_map.html.j2",
        site_name=site_name,
        obs_count=len(markers),
        markers=[asdict(m) for m in markers],
        bounds=bounds,
        legend=legend,
    )
