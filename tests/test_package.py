"""Tests for package metadata."""

from __future__ import annotations

import tomllib
from pathlib import Path

import butterfly_survey

PYPROJECT = Path(__file__).resolve().parents[1] / "pyproject.toml"


def _project_table() -> dict:
    with PYPROJECT.open("rb") as f:
        return tomllib.load(f)["project"]


class TestPackageMetadata:
    """Module attributes agree with pyproject.toml."""

    def test_version_matches(self) -> None:
        assert butterfly_survey.__version__ == _project_table()["version"]

    def test_author_matches(self) -> None:
        authors = [a["name"] for a in _project_table()["authors"]]
        assert butterfly_survey.__author__ in authors
