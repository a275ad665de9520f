"""Data models supporting the nonogram solver."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from .constants import SYMBOLS, Cell, LineKind

Line = Tuple[Cell, ...]
BlockSpec = Tuple[int, ...]


@dataclass(frozen=True)
class LineRef:
    """Identifies a row or column of the grid."""

    kind: LineKind
    index: int

    def __str__(self) -> str:
        return f"{self.kind.value.lower()} {self.index}"


@dataclass
class SolveStats:
    """Counters collected while solving a single grid."""

    propagation_passes: int = 0
    line_reductions: int = 0
    cells_deduced: int = 0
    search_nodes: int = 0
    backtracks: int = 0
    elapsed_seconds: float = 0.0

    def to_jsonable(self) -> dict:
        return {
            "propagation_passes": self.propagation_passes,
            "line_reductions": self.line_reductions,
            "cells_deduced": self.cells_deduced,
            "search_nodes": self.search_nodes,
            "backtracks": self.backtracks,
            "elapsed_seconds": round(self.elapsed_seconds, 6),
        }


@dataclass
class SolveResult:
    solved: bool
    backend: str
    stats: SolveStats = field(default_factory=SolveStats)
    validation_messages: List[str] = field(default_factory=list)


def line_to_text(line: Line) -> str:
    """Compact ``#``/``.``/``?`` rendering, handy in log messages."""

    return "".join(SYMBOLS[cell] for cell in line)
