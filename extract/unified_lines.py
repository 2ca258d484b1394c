# extract/unified_lines.py
from __future__ import annotations

from dataclasses import asdict
from typing import Any, Iterable, List, Sequence

import pandas as pd

from classes import DEFAULT_SETTINGS, GlyphRun

"""
Goal
----
Turn positioned glyph runs into the logical rows a reader sees:
- PDF content streams do not guarantee reading order
- runs whose y lies within `row_tolerance` of the row's first (top-most) run share the row
- rows go top -> bottom, runs inside a row go left -> right, joined by one space

Pages are reconstructed independently and their text is concatenated in page order.
"""


def _as_run(r: Any) -> GlyphRun:
    if isinstance(r, GlyphRun):
        return r
    if isinstance(r, dict):
        return GlyphRun(str(r.get("text") or ""), float(r.get("x", 0)), float(r.get("y", 0)))
    text, x, y = r
    return GlyphRun(str(text or ""), float(x), float(y))


def _runs_frame(runs: Iterable[Any]) -> pd.DataFrame:
    df = pd.DataFrame([asdict(_as_run(r)) for r in runs or []], columns=["text", "x", "y"])
    if df.empty:
        return df
    df = df[df["text"].str.strip() != ""].copy()
    # top of page first (y grows upwards), then left to right
    return df.sort_values(["y", "x"], ascending=[False, True], kind="mergesort")


def page_runs_to_lines(runs: Sequence[Any], row_tolerance: float | None = None) -> List[str]:
    """Reconstruct one page into its logical lines."""
    tol = DEFAULT_SETTINGS.row_tolerance if row_tolerance is None else float(row_tolerance)
    df = _runs_frame(runs)
    if df.empty:
        return []

    rows: list[list[tuple[float, str]]] = []
    ref_y: float | None = None
    for run in df.itertuples(index=False):
        if ref_y is None or abs(ref_y - run.y) > tol:
            rows.append([])
            ref_y = run.y
        rows[-1].append((run.x, run.text))

    out: List[str] = []
    for row in rows:
        row.sort(key=lambda t: t[0])
        line = " ".join(text for _, text in row).strip()
        if line:
            out.append(line)
    return out


def runs_to_text(runs: Sequence[Any], row_tolerance: float | None = None) -> str:
    """Newline-terminated text of one page ('' for an empty page)."""
    return "".join(line + "\n" for line in page_runs_to_lines(runs, row_tolerance))


def pages_to_text(pages: Iterable[Sequence[Any]], row_tolerance: float | None = None) -> str:
    return "".join(runs_to_text(p, row_tolerance) for p in pages or [])
