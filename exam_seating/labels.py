from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional

from .grid import CategoryGrid, Cell, InvalidGridError, iter_cells

LABEL_DIGITS = 3


def format_label(category: str, counter: int) -> str:
    return f"{category}-{counter:0{LABEL_DIGITS}d}"


@dataclass(frozen=True)
class Seat:
    category: str
    label: str


class SeatGrid:
    """
    The labelled seating plan handed back to callers.

    Seats are stored row-major; the grid is read-only once built.
    """

    def __init__(self, rows: int, cols: int, seats: list[list[Seat]]):
        if rows <= 0 or cols <= 0:
            raise InvalidGridError("rows and cols must be positive integers")
        if len(seats) != rows or any(len(r) != cols for r in seats):
            raise InvalidGridError("seat dimensions do not match rows/cols")
        self.rows = rows
        self.cols = cols
        self._seats: tuple[tuple[Seat, ...], ...] = tuple(tuple(r) for r in seats)

    def get(self, row: int, col: int) -> Seat:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise InvalidGridError(f"seat out of bounds: row={row}, col={col}")
        return self._seats[row][col]

    def find(self, label: str) -> Optional[Cell]:
        for cell in iter_cells(self.rows, self.cols):
            if self._seats[cell.row][cell.col].label == label:
                return cell
        return None

    def categories(self) -> list[str]:
        # first-seen order
        seen: dict[str, None] = {}
        for r in self._seats:
            for s in r:
                seen.setdefault(s.category, None)
        return list(seen)

    def counts(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for r in self._seats:
            for s in r:
                out[s.category] = out.get(s.category, 0) + 1
        return out

    def __iter__(self) -> Iterator[tuple[Seat, ...]]:
        return iter(self._seats)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SeatGrid):
            return NotImplemented
        return self._seats == other._seats

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "counts": self.counts(),
            "seats": [[{"category": s.category, "label": s.label} for s in r] for r in self._seats],
        }


def assign_labels(grid: CategoryGrid) -> SeatGrid:
    """
    Give every cell a per-category sequential label, e.g. ``CSE-003``.

    Cells are visited top-to-bottom, left-to-right, so the same category grid
    always yields the same labels regardless of how it was produced.
    """
    if grid.rows <= 0 or grid.cols <= 0:
        raise InvalidGridError("cannot label an empty grid")
    if not grid.is_complete():
        raise InvalidGridError("cannot label a grid with unassigned cells")

    counters: dict[str, int] = {}
    seats: list[list[Seat]] = [[] for _ in range(grid.rows)]
    for cell in iter_cells(grid.rows, grid.cols):
        category = grid.get(cell.row, cell.col)
        counters[category] = counters.get(category, 0) + 1
        seats[cell.row].append(Seat(category, format_label(category, counters[category])))
    return SeatGrid(grid.rows, grid.cols, seats)
