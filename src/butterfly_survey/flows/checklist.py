"""
Prefect flow for stage 3: species checklist and phenology.

Reads the cleaned table and writes the one-row-per-species checklist and
every listing derived from it: annotated list, family breakdown, phenology
and the photo naming guide.

Run locally:
    python -m butterfly_survey.flows.checklist
"""

from __future__ import annotations

from typing import Any

import pandas as pd
from prefect import flow, task

from butterfly_survey.analysis.checklist import (
    annotated_species_list,
    family_breakdown,
    notable_elevations,
    photo_naming_guide,
    regional_species,
    species_by_family,
    species_checklist,
)
from butterfly_survey.analysis.phenology import (
    EARLY_SEASON_MONTHS,
    PEAK_SEASON_MONTHS,
    species_first_seen_in,
    species_phenology,
)
from butterfly_survey.config import get_settings
from butterfly_survey.flows.paths import (
    ANNOTATED_PATH,
    CHECKLIST_PATH,
    FAMILY_BREAKDOWN_PATH,
    PHENOLOGY_PATH,
    PHOTO_GUIDE_PATH,
    SPECIES_BY_FAMILY_PATH,
    read_cleaned,
)
from butterfly_survey.store import SurveyStore

settings = get_settings()
store = SurveyStore(settings.project_dir)


def _bullets(names: list[str]) -> str:
    return "\n".join(f"  - {name}" for name in names) if names else "  (none)"


@task(name="load-cleaned")
def load_cleaned() -> pd.DataFrame:
    """Load the cleaned observation table."""
    return read_cleaned(store)


@task(name="build-checklist")
def build_checklist(observations: pd.DataFrame) -> pd.DataFrame:
    """Write the species checklist and its annotated and by-family views."""
    checklist = species_checklist(observations)
    store.write_table(CHECKLIST_PATH, checklist, source="build-checklist")

    annotated = annotated_species_list(checklist)
    store.write_table(ANNOTATED_PATH, annotated, source="build-checklist")
    print(annotated.to_string(index=False))

    by_family = species_by_family(checklist)
    store.write_table(SPECIES_BY_FAMILY_PATH, by_family, source="build-checklist")
    return checklist


@task(name="summarize-families")
def summarize_families(checklist: pd.DataFrame) -> pd.DataFrame:
    """Write the per-family species counts and percentages."""
    breakdown = family_breakdown(checklist)
    store.write_table(FAMILY_BREAKDOWN_PATH, breakdown, source="summarize-families")
    return breakdown


@task(name="summarize-phenology")
def summarize_phenology(observations: pd.DataFrame) -> pd.DataFrame:
    """Write first/last month and active months per species."""
    phenology = species_phenology(observations)
    store.write_table(PHENOLOGY_PATH, phenology, source="summarize-phenology")
    return phenology


@task(name="write-photo-guide")
def write_photo_guide(checklist: pd.DataFrame) -> pd.DataFrame:
    """Write the photo renaming guide."""
    guide = photo_naming_guide(checklist)
    store.write_table(PHOTO_GUIDE_PATH, guide, source="write-photo-guide")
    return guide


@flow(name="species-checklist", log_prints=True)
def checklist_all() -> dict[str, Any]:
    """
    Build the checklist, phenology and photo guide from the cleaned table.
    """
    print("Loading cleaned observations...")
    observations = load_cleaned()

    print("Building species checklist...")
    checklist = build_checklist(observations)
    print(f"Species checklist created with {len(checklist)} species")

    breakdown = summarize_families(checklist)
    print("=== FAMILY DIVERSITY ===")
    print(breakdown.to_string(index=False))

    notable = notable_elevations(checklist)
    regional = regional_species(checklist, settings.regional_pattern)
    print("=== NOTABLE SPECIES ===")
    if notable["highest"] and notable["lowest"]:
        highest, lowest = notable["highest"], notable["lowest"]
        print(f"Highest elevation: {highest['EnglishName']} at {highest['Elevation_m']:.0f} m")
        print(f"Lowest elevation: {lowest['EnglishName']} at {lowest['Elevation_m']:.0f} m")
    print(f"Regional endemic species: {len(regional)}")
    print(_bullets(regional["EnglishName"].tolist()))

    phenology = summarize_phenology(observations)
    print("=== PHENOLOGY PATTERNS ===")
    print("Early season species (April-May):")
    print(_bullets(species_first_seen_in(phenology, EARLY_SEASON_MONTHS)))
    print("Peak season species (June-July):")
    print(_bullets(species_first_seen_in(phenology, PEAK_SEASON_MONTHS)))

    guide = write_photo_guide(checklist)
    print("=== PHOTO ORGANIZATION GUIDE ===")
    print(guide.to_string(index=False))

    return {
        "species": len(checklist),
        "families": len(breakdown),
        "regional_species": len(regional),
        "output": str(store.base / CHECKLIST_PATH),
    }


if __name__ == "__main__":
    result = checklist_all()
    print(f"Flow complete: {result}")
