"""Butterfly Survey - reports from a single-site butterfly field survey.

Architecture::

    survey/        Raw file ingest and cleaning (dates, numbers, calendar fields)
    store.py       Tiered files (data/raw → data/cleaned → outputs/*)
    analysis/      Pure table → table summaries (exploration, elevation, spatial,
                   checklist, phenology)
    renderers/     Pure data → figures and HTML (charts, map, report)
    flows/         Prefect orchestration (clean → spatial, checklist → report)

Data flow: data/raw → clean → data/cleaned → analysis → renderers → outputs/

Extension points - see each package's docstring for step-by-step guides:
  - New summary:       analysis/__init__.py
  - New chart or page: renderers/__init__.py
"""

__version__ = "0.1.0"
__author__ = "Syed Inzimam Ali Shah"

from butterfly_survey.config import Settings
from butterfly_survey.schemas import SpatialSummary, SurveyOverview

__all__ = ["Settings", "SpatialSummary", "SurveyOverview", "__version__"]
