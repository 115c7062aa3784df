"""Family colors shared by the map and the charts.

Families get evenly spaced viridis colors in alphabetical order, so the
same family keeps the same color across every output of a run.
"""

from __future__ import annotations

from collections.abc import Iterable

from matplotlib import colormaps
from matplotlib.colors import to_hex

FALLBACK_COLOR = "#888888"


def build_family_palette(families: Iterable[str]) -> dict[str, str]:
    """Assign a hex color to each distinct family name."""
    names = sorted({str(f) for f in families})
    if not names:
        return {}
    cmap = colormaps["viridis"].resampled(len(names))
    return {name: to_hex(cmap(i)) for i, name in enumerate(names)}
