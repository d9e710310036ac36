from __future__ import annotations

import csv
import io
import json
from pathlib import Path

from .labels import SeatGrid
from .render import render_svg

CSV_HEADER = ["row", "col", "category", "label"]


def seats_to_csv(grid: SeatGrid) -> str:
    out = io.StringIO()
    w = csv.writer(out, lineterminator="\n")
    w.writerow(CSV_HEADER)
    for r, row in enumerate(grid):
        for c, seat in enumerate(row):
            w.writerow([r, c, seat.category, seat.label])
    return out.getvalue()


def _write_text(path: str | Path, text: str) -> Path:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.write_text(text, encoding="utf-8")
    return p


def write_csv(grid: SeatGrid, path: str | Path) -> Path:
    return _write_text(path, seats_to_csv(grid))


def write_json(grid: SeatGrid, path: str | Path) -> Path:
    return _write_text(path, json.dumps(grid.to_dict(), indent=2, sort_keys=True) + "\n")


def write_svg(grid: SeatGrid, path: str | Path) -> Path:
    return _write_text(path, render_svg(grid))
