"""Shared constants and enumerations for the nonogram solver."""

from __future__ import annotations

from enum import Enum
from typing import Dict


class Cell(str, Enum):
    """State of a single grid cell."""

    UNKNOWN = "UNKNOWN"
    FILLED = "FILLED"
    EMPTY = "EMPTY"


class LineKind(str, Enum):
    """Orientation of a line within the grid."""

    ROW = "ROW"
    COLUMN = "COLUMN"


class Backend(str, Enum):
    """Solving strategies available to :class:`NonogramSolver`."""

    BACKTRACKING = "backtracking"
    CPSAT = "cpsat"


SYMBOLS: Dict[Cell, str] = {
    Cell.UNKNOWN: "?",
    Cell.FILLED: "#",
    Cell.EMPTY: ".",
}
