"""Feasibility checks for partially resolved lines.

The scan stops at the first unknown cell, so a ``True`` answer for a partial
line only means no contradiction is visible yet. That is enough to prune the
row-by-row search, where every column is resolved from the top down.
"""

from __future__ import annotations

from typing import Sequence

from ..core.constants import Cell
from .grid import NonogramGrid


def is_line_consistent(cells: Sequence[Cell], spec: Sequence[int]) -> bool:
    """Return whether ``cells`` can still be reconciled with ``spec``."""

    run = 0
    closed = 0
    for cell in cells:
        if cell is Cell.FILLED:
            run += 1
        elif cell is Cell.EMPTY:
            if run:
                if closed >= len(spec) or spec[closed] != run:
                    return False
                closed += 1
                run = 0
        else:
            if run and (closed >= len(spec) or run > spec[closed]):
                return False
            return closed <= len(spec)

    if run:
        if closed >= len(spec) or spec[closed] != run:
            return False
        closed += 1
    return closed == len(spec)


def is_column_consistent(grid: NonogramGrid, col: int) -> bool:
    return is_line_consistent(grid.column(col), grid.col_spec[col])


def is_row_consistent(grid: NonogramGrid, row: int) -> bool:
    return is_line_consistent(grid.row(row), grid.row_spec[row])


def columns_consistent(grid: NonogramGrid) -> bool:
    return all(is_column_consistent(grid, col) for col in range(grid.length))
