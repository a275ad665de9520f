"""CLI entrypoint for the nonogram solver."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Any, Dict

from nonogram.core.constants import Backend, Cell
from nonogram.core.exceptions import NonogramError, SolverBackendError
from nonogram.engine.solver import NonogramSolver, SolverConfig
from nonogram.io.puzzle_file import load_puzzle
from nonogram.io.visualizer import TerminalVisualizer
from nonogram.utils.logger import configure_logging
from nonogram.utils.pretty import pretty_print_grid, print_solve_stats


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Solve nonogram (picross) puzzles",
    )
    parser.add_argument("puzzle", type=Path, help="Path to the puzzle file (.txt or .json)")
    parser.add_argument(
        "--sync",
        action="store_true",
        help="Redraw the grid after every deduction and row decision",
    )
    parser.add_argument(
        "--delay",
        type=float,
        default=0.0,
        help="Seconds to pause after each redraw (only with --sync)",
    )
    parser.add_argument(
        "--backend",
        type=str,
        choices=[b.value for b in Backend],
        default=Backend.BACKTRACKING.value,
        help="Solving strategy",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=30.0,
        help="CP-SAT time limit in seconds",
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=4,
        help="CP-SAT search workers",
    )
    parser.add_argument(
        "--no-cache",
        action="store_true",
        help="Regenerate line candidates on demand instead of caching them",
    )
    parser.add_argument("--stats", action="store_true", help="Print solver statistics")
    parser.add_argument("--output", type=Path, help="Optional path to JSON output")
    parser.add_argument(
        "--log-level",
        type=str,
        default="WARNING",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.WARNING)
    configure_logging(level)

    if args.delay and not args.sync:
        parser.error("--delay only applies together with --sync")
    if args.delay < 0:
        parser.error("--delay must not be negative")
    if args.workers < 1:
        parser.error("--workers must be at least 1")

    try:
        grid = load_puzzle(args.puzzle)
    except NonogramError as exc:
        parser.error(str(exc))

    config = SolverConfig(
        backend=args.backend,
        use_cache=not args.no_cache,
        validate=True,
        timeout=args.timeout,
        workers=args.workers,
    )
    visualizer = TerminalVisualizer(delay=args.delay) if args.sync else None
    solver = NonogramSolver(config, on_update=visualizer)
    try:
        result = solver.solve(grid)
    except SolverBackendError as exc:
        parser.exit(1, f"{parser.prog}: {exc}\n")

    if result.solved:
        pretty_print_grid(grid)
    else:
        print("No solution found")
    if args.stats:
        print_solve_stats(result)

    if args.output:
        payload: Dict[str, Any] = {
            "puzzle": str(args.puzzle),
            "solved": result.solved,
            "backend": result.backend,
            "grid": grid.to_jsonable(),
            "rows": ["".join("1" if cell is Cell.FILLED else "0" for cell in row) for row in grid.cells]
            if result.solved
            else [],
            "stats": result.stats.to_jsonable(),
        }
        args.output.write_text(json.dumps(payload, indent=2), encoding="utf-8")

    return 0 if result.solved else 1


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
