"""Rendering: summary tables -> HTML documents and chart figures.

All renderers follow the same pattern:
  - Input: DataFrames and pydantic summaries (from analysis/ or the store)
  - Output: str (HTML) or a matplotlib ``Figure``
  - No side effects, no file I/O, no Prefect decorators

Used by the stage flows in flows/, which write the results via the store.

Public API:
  - survey_map: MapMarker, build_map_markers, build_survey_map_html
  - family_palette: build_family_palette
  - charts: one ``*_figure`` function per static chart
  - report: build_report_html
  - date_utils: format_survey_date, survey_period_label

Adding a renderer
-----------------
1. Create ``renderers/{name}.py`` with a build function::

       from butterfly_survey.renderers import render_template

       def build_mywidget_html(table: pd.DataFrame) -> str:
           rows = table.to_dict("records")
           return render_template("mywidget.html.j2", rows=rows)

2. Create a Jinja2 template in ``templates/{name}.html.j2``.

3. Call it from the owning flow and write the output with
   ``store.write_text``.

4. Add tests: call the build function with a small table and assert the
   returned HTML contains the expected content.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import jinja2

# Shared Jinja2 environment for all renderers
_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=True,
)


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)
