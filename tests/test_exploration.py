"""Tests for whole-survey summaries."""

from __future__ import annotations

from datetime import date

import pandas as pd

from butterfly_survey.analysis.exploration import (
    family_summary,
    monthly_observations,
    species_accumulation,
    species_summary,
    survey_overview,
)


class TestSurveyOverview:
    """Test headline numbers."""

    def test_counts(self, observations: pd.DataFrame) -> None:
        overview = survey_overview(observations)
        assert overview.total_observations == 8
        assert overview.unique_species == 6

    def test_period_and_elevation(self, observations: pd.DataFrame) -> None:
        overview = survey_overview(observations)
        assert overview.first_date == date(2020, 4, 15)
        assert overview.last_date == date(2021, 10, 12)
        assert overview.min_elevation_m == 2105
        assert overview.max_elevation_m == 2571
        assert overview.elevation_gradient_m == 466

    def test_empty(self, observations: pd.DataFrame) -> None:
        overview = survey_overview(observations.iloc[0:0])
        assert overview.total_observations == 0
        assert overview.first_date is None
        assert overview.elevation_gradient_m == 0.0


class TestSpeciesSummary:
    """Test per-species summary."""

    def test_one_row_per_species(self, observations: pd.DataFrame) -> None:
        summary = species_summary(observations)
        assert len(summary) == 6
        assert summary["ScientificName"].is_unique

    def test_sorted_by_family_then_name(self, observations: pd.DataFrame) -> None:
        summary = species_summary(observations)
        keys = list(zip(summary["Family"], summary["ScientificName"], strict=True))
        assert keys == sorted(keys)

    def test_swallowtail_stats(self, observations: pd.DataFrame) -> None:
        summary = species_summary(observations).set_index("ScientificName")
        row = summary.loc["Papilio machaon"]
        assert row["Observations"] == 2
        assert row["First_seen"] == pd.Timestamp(2020, 4, 15)
        assert row["Last_seen"] == pd.Timestamp(2020, 6, 20)
        assert row["Min_elevation"] <= row["Mean_elevation"] <= row["Max_elevation"]
        assert row["Mean_elevation"] == 2338


class TestFamilySummary:
    """Test per-family summary."""

    def test_richest_first_ties_by_name(self, observations: pd.DataFrame) -> None:
        summary = family_summary(observations)
        assert summary["Family"].tolist() == [
            "Nymphalidae",
            "Pieridae",
            "Lycaenidae",
            "Papilionidae",
        ]
        assert summary["Species"].tolist() == [2, 2, 1, 1]

    def test_observation_counts_cover_survey(self, observations: pd.DataFrame) -> None:
        summary = family_summary(observations)
        assert summary["Observations"].sum() == len(observations)


class TestMonthlyObservations:
    """Test the monthly histogram table."""

    def test_calendar_order(self, observations: pd.DataFrame) -> None:
        monthly = monthly_observations(observations)
        assert monthly["Month"].tolist() == ["Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct"]
        assert monthly["Month_num"].is_monotonic_increasing

    def test_counts_merge_years(self, observations: pd.DataFrame) -> None:
        monthly = monthly_observations(observations).set_index("Month")
        assert monthly.loc["Jul", "Observations"] == 2
        assert monthly["Observations"].sum() == 8


class TestSpeciesAccumulation:
    """Test the species accumulation curve."""

    def test_monotonic_and_ends_at_richness(self, observations: pd.DataFrame) -> None:
        curve = species_accumulation(observations)
        assert len(curve) == 8
        assert curve["Cumulative_species"].is_monotonic_increasing
        assert curve["Cumulative_species"].iloc[-1] == 6

    def test_repeat_sighting_does_not_count(self, observations: pd.DataFrame) -> None:
        curve = species_accumulation(observations)
        assert curve["Cumulative_species"].tolist() == [1, 2, 2, 3, 4, 5, 6, 6]
        assert curve["Date"].is_monotonic_increasing
