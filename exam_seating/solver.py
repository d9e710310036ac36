from __future__ import annotations

import logging
import random
from dataclasses import dataclass, field
from typing import Iterator, Mapping, Optional

from .config import SolverSettings
from .grid import CategoryGrid, Cell, InvalidGridError, SeatingError, iter_cells
from .labels import SeatGrid, assign_labels

logger = logging.getLogger(__name__)

# Chance, per cell, of replacing the greedy candidate order with a full shuffle.
SHUFFLE_PROBABILITY = 0.3


class CountMismatchError(SeatingError):
    kind = "count_mismatch"

    def __init__(self, message: str, *, expected: int, actual: int):
        super().__init__(message)
        self.expected = expected
        self.actual = actual


class SearchExhaustedError(SeatingError):
    kind = "search_exhausted"

    def __init__(self, message: str, *, runs: int, attempts: int):
        super().__init__(message)
        self.runs = runs
        self.attempts = attempts


@dataclass
class _Frame:
    index: int
    candidates: Iterator[str]
    placed: Optional[str] = None


@dataclass
class _Run:
    """Mutable state of one randomized search run."""

    grid: CategoryGrid
    counts_left: dict[str, int]
    attempts: int = 0
    stack: list[_Frame] = field(default_factory=list)


class GridSolver:
    """
    Randomized depth-first backtracking over a rows x cols grid.

    Cells are filled in fixed row-major order. At each cell the categories
    still in supply are tried most-plentiful first (occasionally in a random
    order) and placed only if no up/down/left/right neighbor already holds the
    same category. Every step counts against ``attempt_limit``; a run that hits
    the limit or runs out of candidates is thrown away and the next run starts
    from scratch, up to ``max_retries`` runs.

    Failure after all runs means no arrangement was found, not that none exists.
    """

    def __init__(
        self,
        rows: int,
        cols: int,
        counts: Mapping[str, int],
        *,
        attempt_limit: Optional[int] = None,
        max_retries: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ):
        if attempt_limit is None or max_retries is None:
            settings = SolverSettings.from_env()
            if attempt_limit is None:
                attempt_limit = settings.attempt_limit
            if max_retries is None:
                max_retries = settings.max_retries
        if attempt_limit <= 0:
            raise ValueError("attempt_limit must be a positive integer")
        if max_retries < 0:
            raise ValueError("max_retries must be a non-negative integer")

        self.rows = rows
        self.cols = cols
        self.counts: dict[str, int] = dict(counts)
        self.attempt_limit = attempt_limit
        self.max_retries = max_retries
        self.rng = rng if rng is not None else random.Random()

        self.runs = 0
        self.attempts = 0

    @property
    def total_cells(self) -> int:
        return self.rows * self.cols

    def _check_counts(self) -> None:
        negative = sorted(k for k, v in self.counts.items() if v < 0)
        if negative:
            raise CountMismatchError(
                f"counts must be non-negative: {', '.join(negative)}",
                expected=self.total_cells,
                actual=sum(self.counts.values()),
            )
        total = sum(self.counts.values())
        if total != self.total_cells:
            raise CountMismatchError(
                f"Total seats ({self.total_cells}) and total students ({total}) do not match",
                expected=self.total_cells,
                actual=total,
            )

    def solve(self) -> CategoryGrid:
        # totals describe this call only
        self.runs = 0
        self.attempts = 0
        if self.rows <= 0 or self.cols <= 0:
            raise InvalidGridError("rows and cols must be positive integers")
        self._check_counts()

        for run_no in range(1, self.max_retries + 1):
            self.runs += 1
            logger.debug("search run %d/%d on %dx%d grid", run_no, self.max_retries, self.rows, self.cols)
            grid, attempts = self._run_search()
            self.attempts += attempts
            if grid is not None:
                logger.info(
                    "arranged %dx%d grid in run %d after %d attempts",
                    self.rows,
                    self.cols,
                    run_no,
                    self.attempts,
                )
                return grid.freeze()
            logger.debug("search run %d failed after %d attempts", run_no, attempts)

        logger.warning(
            "no arrangement found for %dx%d grid (%d runs, %d attempts)",
            self.rows,
            self.cols,
            self.runs,
            self.attempts,
        )
        raise SearchExhaustedError(
            f"could not find an arrangement after {self.runs} runs ({self.attempts} attempts)",
            runs=self.runs,
            attempts=self.attempts,
        )

    def _shuffled_pool(self) -> list[str]:
        pool = [category for category, n in self.counts.items() for _ in range(n)]
        self.rng.shuffle(pool)
        return pool

    def _candidates(self, counts_left: Mapping[str, int]) -> list[str]:
        cand = [c for c, n in counts_left.items() if n > 0]
        cand.sort(key=lambda c: counts_left[c], reverse=True)
        if len(cand) > 1 and self.rng.random() < SHUFFLE_PROBABILITY:
            self.rng.shuffle(cand)
        return cand

    def _run_search(self) -> tuple[Optional[CategoryGrid], int]:
        """Run one search; return (grid or None, attempts used)."""
        # Only consumed for its effect on the random stream; cells are still
        # visited in row-major order.
        self._shuffled_pool()

        cells: list[Cell] = list(iter_cells(self.rows, self.cols))
        run = _Run(grid=CategoryGrid(self.rows, self.cols), counts_left=dict(self.counts))
        index = 0
        descending = True

        while True:
            if descending:
                run.attempts += 1
                if run.attempts > self.attempt_limit:
                    return None, run.attempts - 1
                if index == len(cells):
                    return run.grid, run.attempts
                run.stack.append(_Frame(index, iter(self._candidates(run.counts_left))))

            frame = run.stack[-1]
            cell = cells[frame.index]
            if frame.placed is not None:
                # undo the choice whose subtree just failed
                run.grid.clear(cell.row, cell.col)
                run.counts_left[frame.placed] += 1
                frame.placed = None

            for category in frame.candidates:
                if not run.grid.can_place(cell.row, cell.col, category):
                    continue
                run.grid.place(cell.row, cell.col, category)
                run.counts_left[category] -= 1
                frame.placed = category
                index = frame.index + 1
                descending = True
                break
            else:
                run.stack.pop()
                if not run.stack:
                    return None, run.attempts
                descending = False


def arrange(
    rows: int,
    cols: int,
    counts: Mapping[str, int],
    *,
    attempt_limit: Optional[int] = None,
    max_retries: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> CategoryGrid:
    solver = GridSolver(rows, cols, counts, attempt_limit=attempt_limit, max_retries=max_retries, rng=rng)
    return solver.solve()


def generate_seating(
    rows: int,
    cols: int,
    counts: Mapping[str, int],
    *,
    attempt_limit: Optional[int] = None,
    max_retries: Optional[int] = None,
    rng: Optional[random.Random] = None,
) -> SeatGrid:
    """Solve the grid and label every seat; raises SeatingError subclasses on failure."""
    grid = arrange(rows, cols, counts, attempt_limit=attempt_limit, max_retries=max_retries, rng=rng)
    return assign_labels(grid)
