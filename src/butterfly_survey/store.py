"""Tiered file store for survey inputs and outputs.

Files are organized into tiers by role in the pipeline:
  - data/raw/:         Hand-collected observation file (input, never written)
  - data/cleaned/:     Cleaned observation table (stage 1 → stages 2, 3, report)
  - outputs/tables/:   Derived CSV tables and JSON summaries
  - outputs/figures/:  Static PNG charts
  - outputs/maps/:     Interactive map document
  - outputs/reports/:  Rendered narrative report

Every derived file is regenerated on each run. CSV tables, figures and HTML
documents get a sidecar ``.meta.json`` recording where they came from;
JSON summaries carry the same metadata inline in an envelope.
"""

from __future__ import annotations

import json
from datetime import UTC, datetime
from pathlib import Path  # noqa: TC003
from typing import TYPE_CHECKING, Any

import pandas as pd

if TYPE_CHECKING:
    from matplotlib.figure import Figure


class SurveyStore:
    """Reads and writes pipeline files under a single project directory."""

    def __init__(self, base_dir: Path) -> None:
        self.base = base_dir
        self.raw = base_dir / "data" / "raw"
        self.cleaned = base_dir / "data" / "cleaned"
        self.tables = base_dir / "outputs" / "tables"
        self.figures = base_dir / "outputs" / "figures"
        self.maps = base_dir / "outputs" / "maps"
        self.reports = base_dir / "outputs" / "reports"

    # -------------------------------------------------------------------------
    # Tables
    # -------------------------------------------------------------------------

    def read_table(self, path: Path, **read_kwargs: Any) -> pd.DataFrame | None:
        """Read a CSV table, or None if the file doesn't exist.

        Extra keyword arguments go to ``pandas.read_csv``.
        """
        full = self._resolve(path)
        if not full.exists():
            return None
        return pd.read_csv(full, **read_kwargs)

    def write_table(self, path: Path, table: pd.DataFrame, source: str, **params: Any) -> Path:
        """Write a DataFrame as CSV with a sidecar metadata file.

        Args:
            path: Relative path under base_dir (e.g. ``outputs/tables/x.csv``).
            table: Table to write. The index is not written.
            source: Identifier of the step that produced the table.
            **params: Extra metadata fields.

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        table.to_csv(full, index=False)
        self._write_sidecar(full, source, rows=len(table), columns=list(table.columns), **params)
        return full

    # -------------------------------------------------------------------------
    # JSON summaries
    # -------------------------------------------------------------------------

    def read(self, path: Path) -> dict[str, Any] | None:
        """Read data payload from a metadata-enveloped JSON file.

        Returns the ``data`` field, or None if the file doesn't exist.
        """
        envelope = self.read_raw(path)
        if envelope is None:
            return None
        return envelope.get("data", envelope)

    def read_raw(self, path: Path) -> dict[str, Any] | None:
        """Read the full envelope (meta + data) from a JSON file."""
        full = self._resolve(path)
        if not full.exists():
            return None
        with full.open() as f:
            result: dict[str, Any] = json.load(f)
        return result

    def write(self, path: Path, data: Any, source: str, **params: Any) -> Path:
        """Write data wrapped in a metadata envelope.

        Returns:
            Absolute path of the written file.
        """
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)

        envelope = {"meta": self._meta(source, **params), "data": data}
        with full.open("w") as f:
            json.dump(envelope, f, indent=2, default=str)

        return full

    # -------------------------------------------------------------------------
    # Documents and figures
    # -------------------------------------------------------------------------

    def write_text(self, path: Path, text: str, source: str, **params: Any) -> Path:
        """Write a text document (HTML map, report) with sidecar metadata."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        full.write_text(text, encoding="utf-8")
        self._write_sidecar(full, source, **params)
        return full

    def write_figure(self, path: Path, figure: Figure, source: str, dpi: int = 300) -> Path:
        """Save a matplotlib figure with sidecar metadata."""
        full = self._resolve(path)
        full.parent.mkdir(parents=True, exist_ok=True)
        figure.savefig(full, dpi=dpi, bbox_inches="tight")
        self._write_sidecar(full, source, dpi=dpi)
        return full

    def file_path(self, path: Path) -> Path | None:
        """Return the absolute path of a stored file, or None if missing."""
        full = self._resolve(path)
        return full if full.exists() else None

    def read_meta(self, path: Path) -> dict[str, Any]:
        """Read metadata from either a sidecar .meta.json or a JSON envelope."""
        full = self._resolve(path)
        sidecar = full.with_suffix(full.suffix + ".meta.json")
        if sidecar.exists():
            with sidecar.open() as f:
                result: dict[str, Any] = json.load(f)
            return result.get("meta", {})

        if full.suffix == ".json" and full.exists():
            envelope = self.read_raw(path) or {}
            return envelope.get("meta", {})

        return {}

    def _meta(self, source: str, **params: Any) -> dict[str, Any]:
        meta: dict[str, Any] = {
            "source": source,
            "generated_at": datetime.now(UTC).isoformat(),
        }
        if params:
            meta.update(params)
        return meta

    def _write_sidecar(self, full: Path, source: str, **params: Any) -> None:
        meta_path = full.with_suffix(full.suffix + ".meta.json")
        with meta_path.open("w") as f:
            json.dump({"meta": self._meta(source, **params)}, f, indent=2, default=str)

    def _resolve(self, path: Path) -> Path:
        full = self.base / path if not path.is_absolute() else path
        try:
            full.resolve().relative_to(self.base.resolve())
        except ValueError:
            msg = f"Path escapes store base directory: {path}"
            raise ValueError(msg) from None
        return full
