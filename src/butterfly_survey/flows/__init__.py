"""
Prefect flows for the survey pipeline.

Flows:
- clean: Parse the raw sightings file into the cleaned table, plus overview charts
- spatial: Elevation ranges, hotspots, survey extent, interactive map
- checklist: Species checklist, family breakdown, phenology, photo guide
- report: Narrative HTML report over everything above

The spatial and checklist flows only need the cleaned table and can run in
either order. The report reads whatever the other stages left behind.

Usage (local):
    python -m butterfly_survey.flows.clean
    python -m butterfly_survey.flows.spatial
    python -m butterfly_survey.flows.checklist
    python -m butterfly_survey.flows.report

Usage (CLI):
    butterfly-survey run
"""
