from __future__ import annotations

import argparse
import logging
import random
from typing import Optional

from .config import DEFAULT_COLS, DEFAULT_COUNTS, DEFAULT_ROWS, DEPARTMENTS, SolverSettings, log_level
from .export import write_csv, write_json, write_svg
from .grid import SeatingError
from .render import render_ascii
from .solver import generate_seating


def parse_count(value: str) -> tuple[str, int]:
    name, sep, raw = value.partition("=")
    name = name.strip()
    if not sep or not name:
        raise argparse.ArgumentTypeError(f"expected DEPT=N, got {value!r}")
    try:
        n = int(raw)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"count for {name} must be an integer, got {raw!r}") from e
    if n < 0:
        raise argparse.ArgumentTypeError(f"count for {name} must be non-negative, got {n}")
    return name, n


def _positive_int(value: str) -> int:
    try:
        n = int(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from e
    if n <= 0:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {n}")
    return n


def _counts_from_args(pairs: Optional[list[tuple[str, int]]]) -> dict[str, int]:
    if not pairs:
        return dict(DEFAULT_COUNTS)
    counts: dict[str, int] = {}
    for name, n in pairs:
        counts[name] = counts.get(name, 0) + n
    return counts


def cmd_generate(args: argparse.Namespace) -> int:
    counts = _counts_from_args(args.count)
    rng = random.Random(args.seed) if args.seed is not None else None
    grid = generate_seating(
        args.rows,
        args.cols,
        counts,
        attempt_limit=args.attempt_limit,
        max_retries=args.max_retries,
        rng=rng,
    )
    print(render_ascii(grid, cell_width=args.width))
    if args.csv:
        print(f"Exported seats to {write_csv(grid, args.csv)}")
    if args.json:
        print(f"Exported seats to {write_json(grid, args.json)}")
    if args.svg:
        print(f"Exported drawing to {write_svg(grid, args.svg)}")
    return 0


def cmd_defaults(args: argparse.Namespace) -> int:
    settings = SolverSettings.from_env()
    print(f"Grid: {DEFAULT_ROWS} rows x {DEFAULT_COLS} cols")
    for d in DEPARTMENTS:
        print(f"{d}: {DEFAULT_COUNTS[d]}")
    print(f"Attempt limit per run: {settings.attempt_limit}")
    print(f"Runs: {settings.max_retries}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="exam_seating",
        description="Exam seating planner: no two neighbouring seats share a department.",
    )
    p.add_argument("--verbose", "-v", action="store_true", help="Log solver progress")
    sub = p.add_subparsers(dest="cmd", required=True)

    p_gen = sub.add_parser("generate", help="Generate a seating arrangement")
    p_gen.add_argument("--rows", type=_positive_int, default=DEFAULT_ROWS)
    p_gen.add_argument("--cols", type=_positive_int, default=DEFAULT_COLS)
    p_gen.add_argument(
        "--count",
        type=parse_count,
        action="append",
        metavar="DEPT=N",
        help="Students per department (repeatable; default: the built-in departments)",
    )
    p_gen.add_argument("--seed", type=int, help="Seed for a reproducible arrangement")
    p_gen.add_argument("--attempt-limit", type=_positive_int, help="Placement attempts per search run")
    p_gen.add_argument("--max-retries", type=int, help="Number of independent search runs")
    p_gen.add_argument("--width", type=int, default=10, help="Cell width for display")
    p_gen.add_argument("--csv", help="Write seats to this CSV file")
    p_gen.add_argument("--json", help="Write seats to this JSON file")
    p_gen.add_argument("--svg", help="Write a drawing of the plan to this SVG file")
    p_gen.set_defaults(func=cmd_generate)

    p_def = sub.add_parser("defaults", help="Show the default form values")
    p_def.set_defaults(func=cmd_defaults)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    p = build_parser()
    args = p.parse_args(argv)
    try:
        logging.basicConfig(
            level=logging.DEBUG if args.verbose else log_level(),
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
        return int(args.func(args))
    except (SeatingError, ValueError) as e:
        print(f"Error: {e}")
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
