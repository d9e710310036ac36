from __future__ import annotations

import zlib
from html import escape

from .labels import Seat, SeatGrid

PALETTE: dict[str, str] = {
    "CSE": "#8ecae6",
    "ECE": "#ffb703",
    "IT": "#90be6d",
    "MECH": "#f28482",
    "CIVIL": "#cdb4db",
}

SEAT_W = 96
SEAT_H = 48
GAP = 8
LEGEND_H = 32


def color_for(category: str) -> str:
    if category in PALETTE:
        return PALETTE[category]
    # stable across processes, unlike hash()
    h = zlib.crc32(category.encode("utf-8"))
    r = 80 + (h & 0x7F)
    g = 80 + ((h >> 8) & 0x7F)
    b = 80 + ((h >> 16) & 0x7F)
    return f"#{r:02x}{g:02x}{b:02x}"


def _cell(seat: Seat, width: int) -> str:
    t = seat.label
    if len(t) > width:
        t = t[: max(0, width - 1)] + "…"
    return t.center(width)


def render_legend(grid: SeatGrid) -> str:
    counts = grid.counts()
    return "  ".join(f"{c}: {counts[c]}" for c in grid.categories())


def render_ascii(grid: SeatGrid, *, cell_width: int = 10) -> str:
    cell_width = max(3, int(cell_width))

    header = " " * (cell_width + 2) + " ".join(f"C{c}".center(cell_width) for c in range(grid.cols))
    lines = [header]
    for r, row in enumerate(grid):
        row_cells = " ".join(_cell(seat, cell_width) for seat in row)
        lines.append(f"R{r}".ljust(cell_width + 2) + row_cells)
    lines.append("")
    lines.append(render_legend(grid))
    return "\n".join(lines)


def render_svg(grid: SeatGrid) -> str:
    """Draw the plan as colored seats with labels, followed by a legend row."""
    width = grid.cols * (SEAT_W + GAP) + GAP
    body_h = grid.rows * (SEAT_H + GAP) + GAP
    height = body_h + LEGEND_H

    parts: list[str] = []
    for r, row in enumerate(grid):
        for c, seat in enumerate(row):
            x = GAP + c * (SEAT_W + GAP)
            y = GAP + r * (SEAT_H + GAP)
            parts.append(
                f'<rect x="{x}" y="{y}" width="{SEAT_W}" height="{SEAT_H}" rx="4" '
                f'fill="{color_for(seat.category)}" stroke="#333" stroke-width="1"/>'
                f'<text x="{x + SEAT_W // 2}" y="{y + 20}" font-size="13" text-anchor="middle">{escape(seat.label)}</text>'
                f'<text x="{x + SEAT_W // 2}" y="{y + 38}" font-size="10" text-anchor="middle">{escape(seat.category)}</text>'
            )

    x = GAP
    for category in grid.categories():
        parts.append(
            f'<rect x="{x}" y="{body_h + 7}" width="18" height="18" rx="4" fill="{color_for(category)}"/>'
            f'<text x="{x + 24}" y="{body_h + 21}" font-size="12">{escape(category)}</text>'
        )
        x += 32 + 8 * len(category)

    return (
        f'<svg xmlns="http://www.w3.org/2000/svg" width="{width}" height="{height}" '
        f'viewBox="0 0 {width} {height}">'
        f'<rect width="{width}" height="{height}" fill="white"/>'
        f'{"".join(parts)}</svg>'
    )
