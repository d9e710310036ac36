from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Optional


class SeatingError(Exception):
    kind = "seating_error"


class InvalidGridError(SeatingError):
    kind = "invalid_grid"


@dataclass(frozen=True)
class Cell:
    row: int
    col: int


def iter_cells(rows: int, cols: int) -> Iterator[Cell]:
    """Yield every cell in row-major order (top-to-bottom, left-to-right)."""
    for r in range(rows):
        for c in range(cols):
            yield Cell(r, c)


def neighbors(row: int, col: int, rows: int, cols: int) -> list[Cell]:
    # up, down, left, right; no wraparound
    out: list[Cell] = []
    if row > 0:
        out.append(Cell(row - 1, col))
    if row < rows - 1:
        out.append(Cell(row + 1, col))
    if col > 0:
        out.append(Cell(row, col - 1))
    if col < cols - 1:
        out.append(Cell(row, col + 1))
    return out


class CategoryGrid:
    """
    A row/column grid storing one category per cell, or None while unassigned.

    The solver mutates a grid cell by cell and freezes it once every cell holds
    a category with no edge-adjacent duplicates.
    """

    def __init__(self, rows: int, cols: int, cells: Optional[list[list[Optional[str]]]] = None):
        if rows <= 0 or cols <= 0:
            raise InvalidGridError("rows and cols must be positive integers")
        self.rows = rows
        self.cols = cols
        self._frozen = False

        if cells is None:
            self._cells: list[list[Optional[str]]] = [[None for _ in range(cols)] for _ in range(rows)]
        else:
            if len(cells) != rows or any(len(r) != cols for r in cells):
                raise InvalidGridError("grid dimensions do not match rows/cols")
            self._cells = [list(r) for r in cells]

    @classmethod
    def from_rows(cls, rows: list[list[Optional[str]]]) -> "CategoryGrid":
        if not rows or not rows[0]:
            raise InvalidGridError("grid must have at least one row and one column")
        return cls(len(rows), len(rows[0]), rows)

    @property
    def frozen(self) -> bool:
        return self._frozen

    def _validate_cell(self, row: int, col: int) -> None:
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise InvalidGridError(f"cell out of bounds: row={row}, col={col}")

    def _check_mutable(self) -> None:
        if self._frozen:
            raise InvalidGridError("grid is solved and can no longer be modified")

    def get(self, row: int, col: int) -> Optional[str]:
        self._validate_cell(row, col)
        return self._cells[row][col]

    def is_assigned(self, row: int, col: int) -> bool:
        return self.get(row, col) is not None

    def can_place(self, row: int, col: int, category: str) -> bool:
        for n in neighbors(row, col, self.rows, self.cols):
            if self._cells[n.row][n.col] == category:
                return False
        return True

    def place(self, row: int, col: int, category: str) -> None:
        self._validate_cell(row, col)
        self._check_mutable()
        self._cells[row][col] = category

    def clear(self, row: int, col: int) -> None:
        self._validate_cell(row, col)
        self._check_mutable()
        self._cells[row][col] = None

    def freeze(self) -> "CategoryGrid":
        self._frozen = True
        return self

    def is_complete(self) -> bool:
        return all(v is not None for r in self._cells for v in r)

    def counts(self) -> dict[str, int]:
        out: dict[str, int] = {}
        for r in self._cells:
            for v in r:
                if v is not None:
                    out[v] = out.get(v, 0) + 1
        return out

    def conflicts(self) -> list[tuple[Cell, Cell]]:
        """Return every pair of adjacent cells holding the same category."""
        out: list[tuple[Cell, Cell]] = []
        for cell in iter_cells(self.rows, self.cols):
            v = self._cells[cell.row][cell.col]
            if v is None:
                continue
            # only look right and down so each pair is reported once
            for n in (Cell(cell.row, cell.col + 1), Cell(cell.row + 1, cell.col)):
                if n.row < self.rows and n.col < self.cols and self._cells[n.row][n.col] == v:
                    out.append((cell, n))
        return out

    def to_rows(self) -> list[list[Optional[str]]]:
        return [list(r) for r in self._cells]

    def to_dict(self) -> dict:
        return {
            "rows": self.rows,
            "cols": self.cols,
            "cells": self.to_rows(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CategoryGrid":
        try:
            rows = int(data["rows"])
            cols = int(data["cols"])
            cells = data["cells"]
        except Exception as e:  # noqa: BLE001 - keep errors readable
            raise InvalidGridError(f"invalid category grid data: {e}") from e
        return cls(rows=rows, cols=cols, cells=cells)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoryGrid):
            return NotImplemented
        return self.rows == other.rows and self.cols == other.cols and self._cells == other._cells

    def __repr__(self) -> str:
        return f"CategoryGrid(rows={self.rows}, cols={self.cols}, cells={self._cells!r})"
