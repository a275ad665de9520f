"""Pretty-print helpers for nonogram grids."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING, List

from ..core.constants import SYMBOLS, Backend

if TYPE_CHECKING:
    from ..core.models import SolveResult
    from ..engine.grid import NonogramGrid


def format_grid(grid: NonogramGrid) -> str:
    """Render the grid as text, row specs on the left and column specs on top."""

    row_labels = [" ".join(str(block) for block in spec) or "0" for spec in grid.row_spec]
    label_width = max(len(label) for label in row_labels)
    cell_width = max([2] + [len(str(block)) + 1 for spec in grid.col_spec for block in spec])

    lines: List[str] = []
    depth = max(len(spec) for spec in grid.col_spec) or 1
    for level in range(depth):
        header = []
        for spec in grid.col_spec:
            blocks = list(spec) or [0]
            offset = level - (depth - len(blocks))
            header.append(f"{blocks[offset]:>{cell_width}}" if offset >= 0 else " " * cell_width)
        lines.append(" " * label_width + " |" + "".join(header))
    lines.append("-" * label_width + "-+" + "-" * (cell_width * grid.length))

    for index, row in enumerate(grid.cells):
        rendered = "".join(f"{SYMBOLS[cell]:>{cell_width}}" for cell in row)
        lines.append(f"{row_labels[index]:>{label_width}} |{rendered}")
    return "\n".join(lines)


def pretty_print_grid(grid: NonogramGrid, *, label: str | None = None, stream=None) -> None:
    """Print the grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_solve_stats(result: SolveResult, *, stream=None) -> None:
    stream = stream or sys.stdout
    stats = result.stats
    print(file=stream)
    print("--- Solve ---", file=stream)
    print(f"  Backend:       {result.backend}", file=stream)
    print(f"  Solved:        {'yes' if result.solved else 'no'}", file=stream)
    print(f"  Time:          {stats.elapsed_seconds:.3f}s", file=stream)
    if result.backend == Backend.BACKTRACKING.value:
        print(f"  Passes:        {stats.propagation_passes}", file=stream)
        print(f"  Reductions:    {stats.line_reductions}", file=stream)
        print(f"  Deduced cells: {stats.cells_deduced}", file=stream)
        print(f"  Search nodes:  {stats.search_nodes}", file=stream)
        print(f"  Backtracks:    {stats.backtracks}", file=stream)
    if result.validation_messages:
        print(file=stream)
        print("--- Validation ---", file=stream)
        for msg in result.validation_messages:
            print(f"  {msg}", file=stream)
