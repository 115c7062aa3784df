"""Elevation statistics per species and per month."""

from __future__ import annotations

import pandas as pd


def elevation_by_species(observations: pd.DataFrame) -> pd.DataFrame:
    """Elevation range, mean and observation count per species.

    Sorted by mean elevation, highest first.
    """
    by_species = (
        observations.groupby("ScientificName", sort=False)
        .agg(
            EnglishName=("EnglishName", "first"),
            Family=("Family", "first"),
            Min_elevation=("Elevation_m", "min"),
            Max_elevation=("Elevation_m", "max"),
            Mean_elevation=("Elevation_m", "mean"),
            Observations=("Elevation_m", "size"),
        )
        .reset_index()
    )
    by_species["Elevation_range"] = by_species["Max_elevation"] - by_species["Min_elevation"]
    columns = [
        "ScientificName",
        "EnglishName",
        "Family",
        "Min_elevation",
        "Max_elevation",
        "Mean_elevation",
        "Elevation_range",
        "Observations",
    ]
    return (
        by_species[columns]
        .sort_values(["Mean_elevation", "ScientificName"], ascending=[False, True])
        .reset_index(drop=True)
    )


def monthly_elevation(observations: pd.DataFrame) -> pd.DataFrame:
    """Mean and sample standard deviation of elevation per calendar month.

    SD is NaN for months with a single observation.
    """
    by_month = (
        observations.groupby(["Month_num", "Month", "Season"])
        .agg(
            Mean_elevation=("Elevation_m", "mean"),
            SD_elevation=("Elevation_m", "std"),
            Observations=("Elevation_m", "size"),
        )
        .reset_index()
        .sort_values("Month_num")
    )
    columns = ["Month", "Month_num", "Season", "Mean_elevation", "SD_elevation", "Observations"]
    return by_month[columns].reset_index(drop=True)


def elevation_gradient(observations: pd.DataFrame) -> float:
    """Difference between the highest and lowest observation, 0 if empty."""
    if observations.empty:
        return 0.0
    return float(observations["Elevation_m"].max() - observations["Elevation_m"].min())
