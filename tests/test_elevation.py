"""Tests for elevation statistics."""

from __future__ import annotations

import math

import pandas as pd
import pytest

from butterfly_survey.analysis.elevation import (
    elevation_by_species,
    elevation_gradient,
    monthly_elevation,
)


class TestElevationBySpecies:
    """Test per-species elevation ranges."""

    def test_min_mean_max_order(self, observations: pd.DataFrame) -> None:
        table = elevation_by_species(observations)
        assert (table["Min_elevation"] <= table["Mean_elevation"]).all()
        assert (table["Mean_elevation"] <= table["Max_elevation"]).all()

    def test_range_is_max_minus_min(self, observations: pd.DataFrame) -> None:
        table = elevation_by_species(observations).set_index("ScientificName")
        row = table.loc["Papilio machaon"]
        assert row["Min_elevation"] == 2105
        assert row["Max_elevation"] == 2571
        assert row["Elevation_range"] == 466
        assert row["Observations"] == 2

    def test_highest_mean_first_ties_by_name(self, observations: pd.DataFrame) -> None:
        table = elevation_by_species(observations)
        assert table["ScientificName"].tolist() == [
            "Polyommatus icarus",
            "Lasiommata menava",
            "Papilio machaon",
            "Colias erate",
            "Pieris brassicae",
            "Aglais caschmirensis",
        ]

    def test_three_sightings(self) -> None:
        obs = pd.DataFrame(
            {
                "ScientificName": ["Aporia leucodice"] * 3,
                "EnglishName": ["Himalayan Blackvein"] * 3,
                "Family": ["Pieridae"] * 3,
                "Elevation_m": [2105.0, 2400.0, 2571.0],
            }
        )
        row = elevation_by_species(obs).iloc[0]
        assert row["Min_elevation"] == 2105
        assert row["Max_elevation"] == 2571
        assert row["Mean_elevation"] == pytest.approx(2358.667, abs=1e-3)
        assert row["Elevation_range"] == 466


class TestMonthlyElevation:
    """Test per-month elevation statistics."""

    def test_calendar_order_with_season(self, observations: pd.DataFrame) -> None:
        table = monthly_elevation(observations)
        assert table["Month"].tolist() == ["Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct"]
        assert table["Season"].tolist() == [
            "Spring",
            "Spring",
            "Summer",
            "Summer",
            "Summer",
            "Autumn",
            "Autumn",
        ]

    def test_mean_and_sd(self, observations: pd.DataFrame) -> None:
        july = monthly_elevation(observations).set_index("Month").loc["Jul"]
        assert july["Mean_elevation"] == 2375
        assert july["SD_elevation"] == pytest.approx(106.066, abs=1e-3)
        assert july["Observations"] == 2

    def test_single_observation_sd_is_nan(self, observations: pd.DataFrame) -> None:
        april = monthly_elevation(observations).set_index("Month").loc["Apr"]
        assert math.isnan(april["SD_elevation"])


class TestElevationGradient:
    """Test whole-survey elevation gradient."""

    def test_gradient(self, observations: pd.DataFrame) -> None:
        assert elevation_gradient(observations) == 466

    def test_empty(self, observations: pd.DataFrame) -> None:
        assert elevation_gradient(observations.iloc[0:0]) == 0.0
