"""Table-to-table summaries of the cleaned observation table.

Every function here is a pure transform: it takes the cleaned observation
DataFrame (or a table derived from it) and returns a new DataFrame or a
pydantic summary. Nothing reads or writes files, renders HTML or touches
Prefect.

Modules:
  - exploration: survey overview, species/family summaries, monthly counts,
    species accumulation curve
  - elevation: per-species elevation ranges, per-month elevation stats
  - spatial: convex hull + geodesic area, location hotspots
  - checklist: one-row-per-species checklist, photo names, family breakdown
  - phenology: first/last month and active months per species

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function::

       import pandas as pd

       def summarize_something(observations: pd.DataFrame) -> pd.DataFrame:
           ...

2. Rules:
   - Accept the cleaned table (see ``survey.ingest.clean_observations``).
   - No I/O, no HTML, no Prefect decorators.
   - Return a new DataFrame; never mutate the input.
   - An empty input must give an empty (or zero) result, not an error.

3. Wire into the stage flow that owns it (``flows/spatial.py`` etc.) and
   save the result with ``store.write_table``.

4. Add tests in ``tests/test_{name}.py``.
"""
