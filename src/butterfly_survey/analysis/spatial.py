"""Survey extent and observation hotspots.

Coordinates are WGS84 longitude/latitude. Areas are computed on the
ellipsoid with ``pyproj.Geod`` so they come out in square meters rather
than square degrees.
"""

from __future__ import annotations

import pandas as pd
from pyproj import Geod
from shapely.geometry import LineString, MultiPoint
from shapely.geometry.base import BaseGeometry

from butterfly_survey.analysis.elevation import elevation_gradient
from butterfly_survey.schemas import SpatialSummary

WGS84 = Geod(ellps="WGS84")

SQ_METERS_PER_SQ_KM = 1_000_000

# Planar area (square degrees) at or below which a hull counts as a line
DEGENERATE_AREA_DEG2 = 1e-12


def _is_degenerate(polygon: BaseGeometry) -> bool:
    return polygon.area <= DEGENERATE_AREA_DEG2


def survey_hull(observations: pd.DataFrame) -> BaseGeometry | None:
    """Convex hull of all observation points, or None when there are none.

    The result is a Polygon for three or more non-collinear points, and a
    LineString or Point otherwise. Floating-point noise can make collinear
    points come out as a zero-width sliver polygon; those are collapsed to
    the segment between their extreme points.
    """
    if observations.empty:
        return None
    points = MultiPoint(list(zip(observations["Longitude"], observations["Latitude"], strict=True)))
    hull = points.convex_hull
    if hull.geom_type == "Polygon" and _is_degenerate(hull):
        ends = sorted(hull.exterior.coords)
        return LineString([ends[0], ends[-1]])
    return hull


def geodesic_area_km2(geometry: BaseGeometry | None) -> float:
    """Ellipsoidal area of a lon/lat geometry in km² (0 for points and lines)."""
    if geometry is None or geometry.is_empty or geometry.geom_type != "Polygon":
        return 0.0
    if _is_degenerate(geometry):
        return 0.0
    area_m2, _perimeter = WGS84.geometry_area_perimeter(geometry)
    return abs(area_m2) / SQ_METERS_PER_SQ_KM


def hull_coordinates(geometry: BaseGeometry | None) -> list[tuple[float, float]]:
    """Hull vertices as (lon, lat) pairs; polygons give their closed exterior ring."""
    if geometry is None or geometry.is_empty:
        return []
    if geometry.geom_type == "Polygon":
        coords = geometry.exterior.coords
    else:
        coords = geometry.coords
    return [(float(x), float(y)) for x, y in coords]


def spatial_summary(observations: pd.DataFrame) -> SpatialSummary:
    """Hull area, point count and elevation gradient for the whole survey."""
    hull = survey_hull(observations)
    return SpatialSummary(
        hull_area_km2=geodesic_area_km2(hull),
        observation_points=len(observations),
        elevation_gradient_m=elevation_gradient(observations),
        hull_coordinates=hull_coordinates(hull),
    )


def observation_hotspots(observations: pd.DataFrame, precision: int = 4) -> pd.DataFrame:
    """Species and observation counts per location, most species-rich first.

    Locations are coordinates rounded to ``precision`` decimal places, so
    sightings a few meters apart count as the same spot.
    """
    located = observations.assign(
        Latitude=observations["Latitude"].round(precision),
        Longitude=observations["Longitude"].round(precision),
    )
    located["Location_key"] = [
        f"{lat}_{lon}" for lat, lon in zip(located["Latitude"], located["Longitude"], strict=True)
    ]
    hotspots = (
        located.groupby(["Location_key", "Latitude", "Longitude"])
        .agg(
            Species_count=("ScientificName", "nunique"),
            Observation_count=("ScientificName", "size"),
        )
        .reset_index()
    )
    return hotspots.sort_values(
        ["Species_count", "Observation_count", "Location_key"],
        ascending=[False, False, True],
    ).reset_index(drop=True)
