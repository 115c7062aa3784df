"""Shared fixtures: a small two-season survey around Booni."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from butterfly_survey.survey.ingest import clean_observations, load_raw_observations

if TYPE_CHECKING:
    from pathlib import Path

    import pandas as pd

RAW_SURVEY = """\
ScientificName,EnglishName,Family,Date,Latitude,Longitude,Elevation_m
Papilio machaon,Common Swallowtail,Papilionidae,15-04-2020,35.8200,71.8300,2105
Pieris brassicae,Large Cabbage White,Pieridae,02-05-2020,35.8210,71.8310,2400
Papilio machaon,Common Swallowtail,Papilionidae,20-06-2020,35.8250,71.8400,2571
Colias erate,Eastern Pale Clouded Yellow,Pieridae,10-07-2020,35.8300,71.8350,2300
Aglais caschmirensis,Indian Tortoiseshell,Nymphalidae,05-09-2021,35.8200,71.8300,2150
Lasiommata menava,Dark Wall,Nymphalidae,15-07-2021,35.8275,71.8425,2450
Pieris brassicae,Large Cabbage White,Pieridae,12-10-2021,35.8210,71.8310,2200
Polyommatus icarus,Chitral Common Blue,Lycaenidae,18-08-2021,35.8260,71.8380,2500
"""


@pytest.fixture
def raw_survey_text() -> str:
    """Raw survey file contents (8 observations, 6 species, 4 families)."""
    return RAW_SURVEY


@pytest.fixture
def raw_survey_file(tmp_path: Path) -> Path:
    """The raw survey written where the clean stage looks for it."""
    path = tmp_path / "data" / "raw" / "booni_butterfly_csv.txt"
    path.parent.mkdir(parents=True)
    path.write_text(RAW_SURVEY)
    return path


@pytest.fixture
def observations(raw_survey_file: Path) -> pd.DataFrame:
    """The sample survey after cleaning."""
    return clean_observations(load_raw_observations(raw_survey_file))
