"""Flight-period (phenology) summary per species.

For each species: the calendar month of its first and last observation and
how many distinct months it was recorded in.
"""

from __future__ import annotations

import pandas as pd

from butterfly_survey.survey.ingest import MONTH_NAMES

EARLY_SEASON_MONTHS = ("April", "May")
PEAK_SEASON_MONTHS = ("June", "July")

PHENOLOGY_COLUMNS = ["EnglishName", "ScientificName", "First_month", "Last_month", "Active_months"]


def species_phenology(observations: pd.DataFrame) -> pd.DataFrame:
    """First month, last month and active-month count per species.

    Sorted by the calendar month of the first observation, then English name.
    """
    if observations.empty:
        return pd.DataFrame(columns=PHENOLOGY_COLUMNS)

    grouped = (
        observations.groupby("ScientificName")
        .agg(
            EnglishName=("EnglishName", "first"),
            First_date=("Date", "min"),
            Last_date=("Date", "max"),
            Active_months=("Month_num", "nunique"),
        )
        .reset_index()
    )
    first_month_num = grouped["First_date"].dt.month
    phenology = pd.DataFrame(
        {
            "EnglishName": grouped["EnglishName"],
            "ScientificName": grouped["ScientificName"],
            "First_month": [MONTH_NAMES[m] for m in first_month_num],
            "Last_month": [MONTH_NAMES[m] for m in grouped["Last_date"].dt.month],
            "Active_months": grouped["Active_months"].astype(int),
            "_order": first_month_num,
        }
    )
    return (
        phenology.sort_values(["_order", "EnglishName"], kind="stable")
        .drop(columns="_order")
        .reset_index(drop=True)
    )


def species_first_seen_in(phenology: pd.DataFrame, months: tuple[str, ...]) -> list[str]:
    """English names of species whose first month is one of ``months``."""
    return phenology.loc[phenology["First_month"].isin(months), "EnglishName"].tolist()
