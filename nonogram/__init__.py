"""Nonogram (picross) solver package.

This package exposes the public API surface via:

- ``nonogram.engine.solver.solve`` / ``NonogramSolver``: propagate then backtrack.
- ``nonogram.engine.grid.NonogramGrid``: the grid and its row/column specs.
- ``nonogram.io.puzzle_file.load_puzzle``: builds a grid from a puzzle file.
"""

from .engine.grid import NonogramGrid
from .engine.solver import NonogramSolver, SolverConfig, solve
from .io.puzzle_file import load_puzzle

__all__ = [
    "NonogramGrid",
    "NonogramSolver",
    "SolverConfig",
    "solve",
    "load_puzzle",
]

__version__ = "0.1.0"
