"""Static survey charts.

Each function takes a summary table and returns a matplotlib ``Figure``
built with the object-oriented API (no pyplot global state), so nothing
needs a display. The flows save them with ``store.write_figure``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from matplotlib.figure import Figure

from butterfly_survey.renderers.family_palette import FALLBACK_COLOR, build_family_palette

if TYPE_CHECKING:
    import pandas as pd
    from matplotlib.axes import Axes

ELEVATION_BIN_WIDTH_M = 50


def _style(ax: Axes, title: str, xlabel: str, ylabel: str, subtitle: str = "") -> None:
    """Minimal theme: no top/right spines, light grid, optional subtitle."""
    ax.set_title(f"{title}\n{subtitle}" if subtitle else title, loc="left")
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.spines[["top", "right"]].set_visible(False)
    ax.grid(alpha=0.3)
    ax.set_axisbelow(True)


def family_diversity_figure(family_summary: pd.DataFrame) -> Figure:
    """Horizontal bars of species per family, richest at the top."""
    fig = Figure(figsize=(8, 6))
    ax = fig.subplots()
    ordered = family_summary.sort_values("Species")
    palette = build_family_palette(ordered["Family"])
    colors = [palette.get(f, FALLBACK_COLOR) for f in ordered["Family"]]
    bars = ax.barh(ordered["Family"], ordered["Species"], color=colors)
    ax.bar_label(bars, padding=3)
    _style(ax, "Butterfly Family Diversity in Booni", "Number of Species", "Family")
    return fig


def temporal_distribution_figure(monthly: pd.DataFrame, site_label: str = "") -> Figure:
    """Observations per month, calendar order."""
    fig = Figure(figsize=(8, 6))
    ax = fig.subplots()
    bars = ax.bar(monthly["Month"], monthly["Observations"], color="steelblue")
    ax.bar_label(bars, padding=3)
    _style(
        ax,
        "Butterfly Observations by Month",
        "Month",
        "Number of Observations",
        subtitle=site_label,
    )
    return fig


def elevation_distribution_figure(observations: pd.DataFrame) -> Figure:
    """Histogram of observation elevations in fixed-width bins."""
    fig = Figure(figsize=(8, 6))
    ax = fig.subplots()
    elevations = observations["Elevation_m"]
    if not elevations.empty:
        low = (elevations.min() // ELEVATION_BIN_WIDTH_M) * ELEVATION_BIN_WIDTH_M
        high = elevations.max() + ELEVATION_BIN_WIDTH_M
        bins = list(range(int(low), int(high) + 1, ELEVATION_BIN_WIDTH_M))
        ax.hist(elevations, bins=bins, color="forestgreen", alpha=0.7)
    _style(
        ax,
        "Distribution of Observations by Elevation",
        "Elevation (meters)",
        "Number of Observations",
    )
    return fig


def species_accumulation_figure(accumulation: pd.DataFrame) -> Figure:
    """Cumulative distinct species over the survey period."""
    fig = Figure(figsize=(8, 6))
    ax = fig.subplots()
    ax.plot(
        accumulation["Date"],
        accumulation["Cumulative_species"],
        color="darkred",
        linewidth=1.5,
        marker="o",
        markersize=4,
    )
    fig.autofmt_xdate()
    _style(
        ax,
        "Species Accumulation Curve",
        "Date",
        "Cumulative Number of Species",
        subtitle="New species discovered over time",
    )
    return fig


def elevation_ranges_figure(elevation_by_species: pd.DataFrame) -> Figure:
    """Min-max elevation segment and mean dot per species, sorted by mean."""
    height = max(4.0, 0.3 * len(elevation_by_species) + 2)
    fig = Figure(figsize=(10, height))
    ax = fig.subplots()
    ordered = elevation_by_species.sort_values("Mean_elevation")
    positions = range(len(ordered))
    ax.hlines(
        positions,
        ordered["Min_elevation"],
        ordered["Max_elevation"],
        color="steelblue",
        linewidth=2.5,
    )
    ax.scatter(ordered["Mean_elevation"], positions, color="darkred", s=30, zorder=3)
    ax.set_yticks(list(positions), labels=list(ordered["EnglishName"]), fontsize=9)
    _style(
        ax,
        "Elevation Ranges of Butterfly Species",
        "Elevation (meters)",
        "",
        subtitle="Lines show min-max range; dots show mean elevation",
    )
    return fig


def elevation_by_family_figure(observations: pd.DataFrame) -> Figure:
    """Box plot of observation elevations per family with jittered points."""
    fig = Figure(figsize=(8, 6))
    ax = fig.subplots()
    families = sorted(observations["Family"].unique())
    palette = build_family_palette(families)
    groups = [observations.loc[observations["Family"] == f, "Elevation_m"] for f in families]
    if families:
        boxes = ax.boxplot(groups, patch_artist=True, showfliers=False)
        ax.set_xticks(range(1, len(families) + 1), labels=families)
        for patch, family in zip(boxes["boxes"], families, strict=True):
            patch.set_facecolor(palette[family])
            patch.set_alpha(0.7)
        # Deterministic jitter so reruns produce identical images
        for i, values in enumerate(groups, start=1):
            offsets = [((j % 5) - 2) * 0.08 for j in range(len(values))]
            ax.scatter([i + o for o in offsets], values, color="black", alpha=0.5, s=12)
        for label in ax.get_xticklabels():
            label.set_rotation(45)
            label.set_horizontalalignment("right")
    _style(ax, "Elevation Distribution by Family", "Family", "Elevation (meters)")
    return fig


def seasonal_elevation_figure(monthly_elevation: pd.DataFrame) -> Figure:
    """Monthly mean elevation with SD error bars, point size by observations."""
    fig = Figure(figsize=(10, 6))
    ax = fig.subplots()
    months = list(monthly_elevation["Month"])
    means = monthly_elevation["Mean_elevation"]
    ax.plot(months, means, color="darkblue", linewidth=1.5)
    ax.errorbar(
        months,
        means,
        yerr=monthly_elevation["SD_elevation"].fillna(0),
        fmt="none",
        ecolor="gray",
        alpha=0.5,
        capsize=4,
    )
    ax.scatter(
        months,
        means,
        s=monthly_elevation["Observations"] * 20,
        color="darkred",
        alpha=0.7,
        zorder=3,
    )
    _style(
        ax,
        "Seasonal Variation in Observation Elevation",
        "Month",
        "Mean Elevation (meters)",
        subtitle="Error bars show standard deviation",
    )
    return fig
