"""Raw observation parsing and cleaning.

Turns the hand-collected sightings file into the cleaned observation table
with calendar fields derived once. There is no row filtering: a row that
cannot be cleaned aborts the whole run.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd

from butterfly_survey.schemas import CLEANED_COLUMNS, RAW_COLUMNS, Season

if TYPE_CHECKING:
    from pathlib import Path

NUMERIC_COLUMNS = ["Latitude", "Longitude", "Elevation_m"]
TEXT_COLUMNS = ["ScientificName", "EnglishName", "Family"]

# Day-first layouts tried in order; the first that matches wins
DATE_FORMATS = ("%d-%m-%Y", "%d/%m/%Y", "%d.%m.%Y", "%d %b %Y", "%d %B %Y", "%d-%b-%Y")

MONTH_ABBREVIATIONS = [
    "",
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
]

MONTH_NAMES = [
    "",
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
]

_SEASON_BY_MONTH: dict[int, Season] = {
    3: Season.SPRING,
    4: Season.SPRING,
    5: Season.SPRING,
    6: Season.SUMMER,
    7: Season.SUMMER,
    8: Season.SUMMER,
    9: Season.AUTUMN,
    10: Season.AUTUMN,
    11: Season.AUTUMN,
}


def season_for_month(month: int) -> Season:
    """Map a calendar month (1-12) to its season."""
    if not 1 <= month <= 12:
        msg = f"Month must be between 1 and 12, got {month}"
        raise ValueError(msg)
    return _SEASON_BY_MONTH.get(month, Season.WINTER)


def _row_numbers(mask: pd.Series) -> str:
    """1-based data-row numbers where ``mask`` is true, for error messages."""
    return ", ".join(str(i + 1) for i in mask[mask].index)


def load_raw_observations(path: Path) -> pd.DataFrame:
    """Read the raw sightings file with every column kept as text.

    Raises:
        FileNotFoundError: The file does not exist.
        ValueError: A required column is missing.
    """
    if not path.exists():
        msg = f"Raw observation file not found: {path}"
        raise FileNotFoundError(msg)

    raw = pd.read_csv(path, dtype=str, keep_default_na=False, skipinitialspace=True)
    raw.columns = [str(c).strip() for c in raw.columns]

    missing = [c for c in RAW_COLUMNS if c not in raw.columns]
    if missing:
        msg = f"Raw observation file {path} is missing columns: {missing}"
        raise ValueError(msg)
    return raw


def parse_survey_dates(values: pd.Series) -> pd.Series:
    """Parse day-month-year date strings into calendar dates.

    Only the day-first layouts in ``DATE_FORMATS`` are accepted
    (``15-06-2020``, ``15/06/2020``, ``15 Jun 2020``, ...). A month-first
    date such as ``06-15-2020`` does not parse. Raises ValueError listing
    the rows that don't parse.
    """
    text = values.astype(str).str.strip()
    parsed = pd.Series(pd.NaT, index=text.index, dtype="datetime64[ns]")
    for fmt in DATE_FORMATS:
        parsed = parsed.fillna(pd.to_datetime(text, format=fmt, errors="coerce"))
    bad = parsed.isna()
    if bad.any():
        msg = f"Unparseable Date in rows: {_row_numbers(bad)}"
        raise ValueError(msg)
    return parsed.dt.normalize()


def coerce_numeric(values: pd.Series, column: str) -> pd.Series:
    """Convert a text column to floats; missing or non-numeric values are fatal."""
    text = values.astype(str).str.strip()
    numeric = pd.to_numeric(text, errors="coerce")
    bad = numeric.isna()
    if bad.any():
        msg = f"Non-numeric {column} in rows: {_row_numbers(bad)}"
        raise ValueError(msg)
    return numeric.astype(float)


def clean_observations(raw: pd.DataFrame) -> pd.DataFrame:
    """Build the cleaned observation table from raw text rows.

    Args:
        raw: Raw rows as returned by ``load_raw_observations``.

    Returns:
        A new DataFrame with the same row count, numeric coordinates and
        elevation, a parsed ``Date`` and derived ``Year``, ``Month``,
        ``Month_num`` and ``Season`` columns. Extra input columns are kept
        after the standard ones.
    """
    cleaned = raw.reset_index(drop=True).copy()
    for column in TEXT_COLUMNS:
        cleaned[column] = cleaned[column].astype(str).str.strip()

    cleaned["Date"] = parse_survey_dates(cleaned["Date"])
    for column in NUMERIC_COLUMNS:
        cleaned[column] = coerce_numeric(cleaned[column], column)

    month_num = cleaned["Date"].dt.month.astype(int)
    cleaned["Year"] = cleaned["Date"].dt.year.astype(int)
    cleaned["Month"] = month_num.map(lambda m: MONTH_ABBREVIATIONS[m])
    cleaned["Month_num"] = month_num
    cleaned["Season"] = month_num.map(lambda m: str(season_for_month(m)))

    extras = [c for c in cleaned.columns if c not in CLEANED_COLUMNS]
    return cleaned[CLEANED_COLUMNS + extras]


def restore_cleaned_dtypes(table: pd.DataFrame) -> pd.DataFrame:
    """Restore dtypes on a cleaned table read back from CSV.

    Blank names read back as NaN are turned back into empty strings.
    """
    restored = table.copy()
    restored["Date"] = pd.to_datetime(restored["Date"], format="ISO8601")
    for column in TEXT_COLUMNS:
        restored[column] = restored[column].fillna("").astype(str)
    for column in NUMERIC_COLUMNS:
        restored[column] = restored[column].astype(float)
    for column in ("Year", "Month_num"):
        restored[column] = restored[column].astype(int)
    return restored
