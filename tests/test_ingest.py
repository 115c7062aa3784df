"""Tests for raw survey ingest and cleaning."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pandas as pd
import pytest

from butterfly_survey.schemas import CLEANED_COLUMNS, Season
from butterfly_survey.survey.ingest import (
    clean_observations,
    coerce_numeric,
    load_raw_observations,
    parse_survey_dates,
    restore_cleaned_dtypes,
    season_for_month,
)

if TYPE_CHECKING:
    from pathlib import Path


def _raw_row(**overrides: str) -> dict[str, str]:
    row = {
        "ScientificName": "Papilio machaon",
        "EnglishName": "Common Swallowtail",
        "Family": "Papilionidae",
        "Date": "15-06-2020",
        "Latitude": "35.82",
        "Longitude": "71.83",
        "Elevation_m": "2105",
    }
    row.update(overrides)
    return row


class TestSeasonForMonth:
    """Test month to season mapping."""

    @pytest.mark.parametrize(
        ("month", "season"),
        [
            (1, Season.WINTER),
            (2, Season.WINTER),
            (3, Season.SPRING),
            (5, Season.SPRING),
            (6, Season.SUMMER),
            (8, Season.SUMMER),
            (9, Season.AUTUMN),
            (11, Season.AUTUMN),
            (12, Season.WINTER),
        ],
    )
    def test_season(self, month: int, season: Season) -> None:
        assert season_for_month(month) == season

    def test_every_month_has_one_season(self) -> None:
        seasons = [season_for_month(m) for m in range(1, 13)]
        assert len(seasons) == 12
        assert set(seasons) == set(Season)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_out_of_range(self, month: int) -> None:
        with pytest.raises(ValueError, match="between 1 and 12"):
            season_for_month(month)


class TestLoadRawObservations:
    """Test reading the raw file."""

    def test_reads_all_rows_as_text(self, raw_survey_file: Path) -> None:
        raw = load_raw_observations(raw_survey_file)
        assert len(raw) == 8
        assert raw["Elevation_m"].iloc[0] == "2105"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError, match="not found"):
            load_raw_observations(tmp_path / "nope.txt")

    def test_missing_column(self, tmp_path: Path) -> None:
        path = tmp_path / "raw.txt"
        path.write_text("ScientificName,Date\nPapilio machaon,15-06-2020\n")
        with pytest.raises(ValueError, match="missing columns"):
            load_raw_observations(path)

    def test_strips_header_whitespace(self, tmp_path: Path) -> None:
        path = tmp_path / "raw.txt"
        path.write_text(
            "ScientificName, EnglishName, Family, Date, Latitude, Longitude, Elevation_m\n"
            "Papilio machaon, Common Swallowtail, Papilionidae, 15-06-2020, 35.82, 71.83, 2105\n"
        )
        raw = load_raw_observations(path)
        assert "EnglishName" in raw.columns
        assert raw["EnglishName"].iloc[0] == "Common Swallowtail"


class TestParseSurveyDates:
    """Test day-first date parsing."""

    def test_day_first(self) -> None:
        parsed = parse_survey_dates(pd.Series(["03-04-2020"]))
        assert parsed.iloc[0] == pd.Timestamp(2020, 4, 3)

    @pytest.mark.parametrize(
        "text", ["15-06-2020", "15/06/2020", "15.06.2020", "15 Jun 2020", "15 June 2020"]
    )
    def test_day_first_layouts(self, text: str) -> None:
        parsed = parse_survey_dates(pd.Series([text]))
        assert parsed.iloc[0] == pd.Timestamp(2020, 6, 15)

    def test_month_first_is_rejected(self) -> None:
        with pytest.raises(ValueError, match="Unparseable Date in rows: 1"):
            parse_survey_dates(pd.Series(["06-15-2020"]))

    def test_mixed_layouts_in_one_column(self) -> None:
        parsed = parse_survey_dates(pd.Series(["03-04-2020", "5 May 2021"]))
        assert parsed.tolist() == [pd.Timestamp(2020, 4, 3), pd.Timestamp(2021, 5, 5)]

    def test_unparseable_reports_row(self) -> None:
        with pytest.raises(ValueError, match="Unparseable Date in rows: 2"):
            parse_survey_dates(pd.Series(["15-06-2020", "sometime in June"]))

    def test_empty_date(self) -> None:
        with pytest.raises(ValueError, match="Unparseable Date"):
            parse_survey_dates(pd.Series([""]))


class TestCoerceNumeric:
    """Test numeric conversion."""

    def test_converts(self) -> None:
        values = coerce_numeric(pd.Series(["2105", " 2400.5 "]), "Elevation_m")
        assert values.tolist() == [2105.0, 2400.5]

    def test_non_numeric_names_column_and_row(self) -> None:
        with pytest.raises(ValueError, match="Non-numeric Elevation_m in rows: 1"):
            coerce_numeric(pd.Series(["high", "2400"]), "Elevation_m")

    def test_missing_value(self) -> None:
        with pytest.raises(ValueError, match="Non-numeric Latitude"):
            coerce_numeric(pd.Series([""]), "Latitude")


class TestCleanObservations:
    """Test building the cleaned table."""

    def test_row_count_preserved(self, observations: pd.DataFrame) -> None:
        assert len(observations) == 8

    def test_standard_columns_first(self, observations: pd.DataFrame) -> None:
        assert list(observations.columns) == CLEANED_COLUMNS

    def test_derived_fields(self, observations: pd.DataFrame) -> None:
        first = observations.iloc[0]
        assert first["Date"] == pd.Timestamp(2020, 4, 15)
        assert first["Year"] == 2020
        assert first["Month"] == "Apr"
        assert first["Month_num"] == 4
        assert first["Season"] == "Spring"

    def test_month_num_matches_date(self, observations: pd.DataFrame) -> None:
        assert (observations["Month_num"] == observations["Date"].dt.month).all()
        assert (observations["Year"] == observations["Date"].dt.year).all()

    def test_numeric_columns(self, observations: pd.DataFrame) -> None:
        assert observations["Elevation_m"].dtype == float
        assert observations["Latitude"].iloc[0] == pytest.approx(35.82)

    def test_strips_names(self) -> None:
        raw = pd.DataFrame([_raw_row(EnglishName="  Common Swallowtail ")])
        cleaned = clean_observations(raw)
        assert cleaned["EnglishName"].iloc[0] == "Common Swallowtail"

    def test_keeps_extra_columns(self) -> None:
        raw = pd.DataFrame([_raw_row(Notes="on thistle")])
        cleaned = clean_observations(raw)
        assert cleaned.columns[-1] == "Notes"
        assert cleaned["Notes"].iloc[0] == "on thistle"

    def test_bad_row_aborts(self) -> None:
        raw = pd.DataFrame([_raw_row(), _raw_row(Elevation_m="n/a")])
        with pytest.raises(ValueError, match="rows: 2"):
            clean_observations(raw)

    def test_month_first_row_aborts(self) -> None:
        raw = pd.DataFrame([_raw_row(), _raw_row(Date="06-15-2020")])
        with pytest.raises(ValueError, match="Unparseable Date in rows: 2"):
            clean_observations(raw)

    def test_does_not_mutate_input(self) -> None:
        raw = pd.DataFrame([_raw_row()])
        clean_observations(raw)
        assert raw["Date"].iloc[0] == "15-06-2020"
        assert "Season" not in raw.columns


class TestRestoreCleanedDtypes:
    """Test reading the cleaned table back from CSV."""

    def test_csv_round_trip(self, observations: pd.DataFrame, tmp_path: Path) -> None:
        path = tmp_path / "cleaned.csv"
        observations.to_csv(path, index=False)
        restored = restore_cleaned_dtypes(pd.read_csv(path))
        assert restored["Date"].iloc[0] == pd.Timestamp(2020, 4, 15)
        assert restored["Month_num"].dtype == int
        assert restored["Elevation_m"].tolist() == observations["Elevation_m"].tolist()

    def test_blank_name_stays_text(self, tmp_path: Path) -> None:
        raw = pd.DataFrame([_raw_row(EnglishName="")])
        path = tmp_path / "cleaned.csv"
        clean_observations(raw).to_csv(path, index=False)

        table = pd.read_csv(path, keep_default_na=False, na_values=[""])
        restored = restore_cleaned_dtypes(table)
        assert restored["EnglishName"].iloc[0] == ""
        assert restored["ScientificName"].iloc[0] == "Papilio machaon"
