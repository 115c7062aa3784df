"""Species checklist and the reporting tables derived from it.

The checklist keeps one row per species: its first observation by date,
numbered in Family / ScientificName order. The numbering is what photo
files are named after, so it must be reproducible for identical input.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

CHECKLIST_COLUMNS = [
    "Family",
    "EnglishName",
    "ScientificName",
    "Date",
    "Elevation_m",
    "Latitude",
    "Longitude",
]


def photo_filename(species_id: int) -> str:
    """Photo file name for a checklist entry, e.g. ``species_05.jpg``."""
    return f"species_{species_id:02d}.jpg"


def species_checklist(observations: pd.DataFrame) -> pd.DataFrame:
    """One row per species from its earliest observation.

    When a species has several observations on its earliest date, the one
    that comes first in the observation table is used.

    Returns:
        Checklist sorted by Family then ScientificName, with ``Species_ID``
        (1..N in that order), ``Photo_filename`` and ``Total_observations``.
    """
    first_seen = (
        observations.sort_values("Date", kind="stable")
        .drop_duplicates("ScientificName", keep="first")[CHECKLIST_COLUMNS]
        .sort_values(["Family", "ScientificName"], kind="stable")
        .reset_index(drop=True)
    )
    first_seen["Species_ID"] = range(1, len(first_seen) + 1)
    first_seen["Photo_filename"] = first_seen["Species_ID"].map(photo_filename)

    counts = observations.groupby("ScientificName").size().rename("Total_observations")
    checklist = first_seen.merge(counts, how="left", left_on="ScientificName", right_index=True)
    checklist["Total_observations"] = checklist["Total_observations"].fillna(0).astype(int)
    return checklist


def annotated_species_list(checklist: pd.DataFrame) -> pd.DataFrame:
    """Human-readable checklist with formatted date and elevation."""
    return pd.DataFrame(
        {
            "#": checklist["Species_ID"],
            "Family": checklist["Family"],
            "English Name": checklist["EnglishName"],
            "Scientific Name": checklist["ScientificName"],
            "First Observed": checklist["Date"].dt.strftime("%d %b %Y"),
            "Elevation": [f"{m:.0f}m" for m in checklist["Elevation_m"]],
            "Total Obs.": checklist["Total_observations"],
        }
    )


def species_by_family(checklist: pd.DataFrame) -> pd.DataFrame:
    """English names of each family's species, largest families first."""
    grouped = (
        checklist.groupby("Family")
        .agg(
            Species=("EnglishName", ", ".join),
            Count=("EnglishName", "size"),
        )
        .reset_index()
    )
    return grouped.sort_values(
        ["Count", "Family"], ascending=[False, True], kind="stable"
    ).reset_index(drop=True)


def family_breakdown(checklist: pd.DataFrame) -> pd.DataFrame:
    """Species count per family and its share of all checklist species."""
    total = len(checklist)
    breakdown = checklist.groupby("Family").size().reset_index(name="Species_count")
    if total:
        breakdown["Percentage"] = (100 * breakdown["Species_count"] / total).round(1)
    else:
        breakdown["Percentage"] = pd.Series(dtype=float)
    return breakdown.sort_values(
        ["Species_count", "Family"], ascending=[False, True], kind="stable"
    ).reset_index(drop=True)


def regional_species(checklist: pd.DataFrame, pattern: str = "Chitral|Chitrali") -> pd.DataFrame:
    """Checklist rows whose English name matches ``pattern`` (a regex)."""
    matches = checklist["EnglishName"].str.contains(pattern, regex=True, na=False)
    return checklist[matches].reset_index(drop=True)


def notable_elevations(checklist: pd.DataFrame) -> dict[str, dict[str, Any] | None]:
    """Species whose first observation was the highest and the lowest.

    Returns a dict with ``highest`` and ``lowest`` checklist rows (as
    dicts), each None when the checklist is empty.
    """
    if checklist.empty:
        return {"highest": None, "lowest": None}
    elevation = checklist["Elevation_m"]
    return {
        "highest": checklist.loc[elevation.idxmax()].to_dict(),
        "lowest": checklist.loc[elevation.idxmin()].to_dict(),
    }


def photo_naming_guide(checklist: pd.DataFrame) -> pd.DataFrame:
    """Which file name each species' photo should be renamed to."""
    return pd.DataFrame(
        {
            "Species_ID": checklist["Species_ID"],
            "EnglishName": checklist["EnglishName"],
            "Rename to": checklist["Photo_filename"],
        }
    )
