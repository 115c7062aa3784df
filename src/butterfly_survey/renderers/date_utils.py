"""Shared date-formatting helpers for renderers."""

from __future__ import annotations

from datetime import date, datetime


def format_survey_date(value: date | datetime | None) -> str:
    """Field-notebook style date, e.g. ``15 Jun 2020``; empty for None."""
    if value is None:
        return ""
    return value.strftime("%d %b %Y")


def survey_period_label(first: date | None, last: date | None) -> str:
    """Human-readable survey period, e.g. ``Apr 2020\u2013Oct 2021``.

    Collapses to a single month when both ends fall in the same month.
    """
    if first is None or last is None:
        return "no observations"
    start = first.strftime("%b %Y")
    end = last.strftime("%b %Y")
    if start == end:
        return start
    return f"{start}\u2013{end}"
