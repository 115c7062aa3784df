"""Whole-survey descriptive summaries.

Headline numbers, per-species and per-family tables, the monthly
observation histogram and the species accumulation curve.
"""

from __future__ import annotations

import pandas as pd

from butterfly_survey.schemas import SurveyOverview


def survey_overview(observations: pd.DataFrame) -> SurveyOverview:
    """Total observations, species richness, survey period and elevation range."""
    if observations.empty:
        return SurveyOverview(total_observations=0, unique_species=0)

    return SurveyOverview(
        total_observations=len(observations),
        unique_species=int(observations["ScientificName"].nunique()),
        first_date=observations["Date"].min().date(),
        last_date=observations["Date"].max().date(),
        min_elevation_m=float(observations["Elevation_m"].min()),
        max_elevation_m=float(observations["Elevation_m"].max()),
    )


def species_summary(observations: pd.DataFrame) -> pd.DataFrame:
    """One row per scientific name with counts, dates and elevation stats.

    Family and English name are taken from the species' first row.
    Sorted by Family, then ScientificName.
    """
    summary = (
        observations.groupby("ScientificName", sort=False)
        .agg(
            Family=("Family", "first"),
            EnglishName=("EnglishName", "first"),
            Observations=("ScientificName", "size"),
            First_seen=("Date", "min"),
            Last_seen=("Date", "max"),
            Min_elevation=("Elevation_m", "min"),
            Max_elevation=("Elevation_m", "max"),
            Mean_elevation=("Elevation_m", "mean"),
        )
        .reset_index()
    )
    columns = [
        "Family",
        "ScientificName",
        "EnglishName",
        "Observations",
        "First_seen",
        "Last_seen",
        "Min_elevation",
        "Max_elevation",
        "Mean_elevation",
    ]
    return summary[columns].sort_values(["Family", "ScientificName"]).reset_index(drop=True)


def family_summary(observations: pd.DataFrame) -> pd.DataFrame:
    """Distinct species and observation counts per family, richest first."""
    summary = (
        observations.groupby("Family")
        .agg(
            Species=("ScientificName", "nunique"),
            Observations=("ScientificName", "size"),
        )
        .reset_index()
    )
    return summary.sort_values(
        ["Species", "Family"], ascending=[False, True], kind="stable"
    ).reset_index(drop=True)


def monthly_observations(observations: pd.DataFrame) -> pd.DataFrame:
    """Observation counts per calendar month, in calendar order."""
    counts = (
        observations.groupby(["Month_num", "Month"])
        .size()
        .reset_index(name="Observations")
        .sort_values("Month_num")
    )
    return counts[["Month", "Month_num", "Observations"]].reset_index(drop=True)


def species_accumulation(observations: pd.DataFrame) -> pd.DataFrame:
    """Cumulative number of distinct species by observation date.

    Rows are observations in date order (ties keep table order); the
    counter goes up on each species' first appearance.
    """
    ordered = observations.sort_values("Date", kind="stable")
    first_sighting = ~ordered["ScientificName"].duplicated()
    return pd.DataFrame(
        {
            "Date": ordered["Date"].to_numpy(),
            "ScientificName": ordered["ScientificName"].to_numpy(),
            "Cumulative_species": first_sighting.cumsum().astype(int).to_numpy(),
        }
    )
