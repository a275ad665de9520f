"""Solver orchestration.

Two phases:
  1. Propagation: line-solve every row and column to a fixed point.
  2. Search: backtrack row by row over whatever propagation left unknown.

The CP-SAT backend replaces both phases with a single OR-Tools model and is
mostly useful to cross-check the line solver.
"""

from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Optional

from ..core.constants import Backend
from ..core.exceptions import LineContradictionError, SolverBackendError
from ..core.models import SolveResult, SolveStats
from ..utils.logger import get_logger
from .cpsat import solve_with_cpsat
from .grid import NonogramGrid
from .lines import CandidateCache
from .propagator import GridPropagator, RedrawCallback
from .search import BacktrackingSearch
from .validator import GridValidator


LOGGER = get_logger(__name__)


@dataclass
class SolverConfig:
    backend: str = Backend.BACKTRACKING.value
    use_cache: bool = True
    validate: bool = True
    timeout: float = 30.0
    workers: int = 4

    def resolved_backend(self) -> Backend:
        try:
            return Backend(self.backend)
        except ValueError as exc:
            raise SolverBackendError(f"Unknown backend {self.backend!r}") from exc


class NonogramSolver:
    """Finds the first colouring consistent with every row and column spec."""

    def __init__(
        self,
        config: Optional[SolverConfig] = None,
        on_update: Optional[RedrawCallback] = None,
    ) -> None:
        self.config = config or SolverConfig()
        self.on_update = on_update
        self.cache = CandidateCache(enabled=self.config.use_cache)
        self.validator = GridValidator()

    def solve(self, grid: NonogramGrid) -> SolveResult:
        """Solve ``grid`` in place.

        On failure the grid is restored to exactly the state it was passed in.
        With ``config.validate`` set, a solution that fails validation raises
        :class:`~nonogram.core.exceptions.ValidationError`.
        """

        backend = self.config.resolved_backend()
        stats = SolveStats()
        snapshot = grid.snapshot()
        started = time.perf_counter()
        LOGGER.info("Solving %dx%d grid with %s backend", grid.height, grid.length, backend.value)

        if backend == Backend.CPSAT:
            solved = solve_with_cpsat(grid, timeout=self.config.timeout, workers=self.config.workers)
        else:
            solved = self._solve_lines(grid, stats)

        stats.elapsed_seconds = time.perf_counter() - started
        result = SolveResult(solved=solved, backend=backend.value, stats=stats)
        if not solved:
            grid.restore(snapshot)
            LOGGER.warning("No solution found after %.3fs", stats.elapsed_seconds)
            return result

        LOGGER.info(
            "Solved in %.3fs (%d passes, %d search nodes, %d backtracks)",
            stats.elapsed_seconds,
            stats.propagation_passes,
            stats.search_nodes,
            stats.backtracks,
        )
        if self.config.validate:
            self.validator.enforce(grid)
        else:
            result.validation_messages = self.validator.validate(grid).messages
        return result

    def _solve_lines(self, grid: NonogramGrid, stats: SolveStats) -> bool:
        propagator = GridPropagator(self.cache, stats=stats, on_update=self.on_update)
        try:
            propagator.propagate(grid)
        except LineContradictionError as exc:
            LOGGER.warning("Puzzle is contradictory: %s", exc)
            return False

        remaining = grid.unknown_count()
        LOGGER.info(
            "Propagation settled after %d passes, %d cells left unknown",
            stats.propagation_passes,
            remaining,
        )
        if not remaining:
            return True

        search = BacktrackingSearch(self.cache, stats=stats, on_update=self.on_update)
        return search.run(grid)


def solve(
    grid: NonogramGrid,
    on_update: Optional[RedrawCallback] = None,
    config: Optional[SolverConfig] = None,
) -> bool:
    """Solve ``grid`` in place and return whether a solution was found."""

    return NonogramSolver(config, on_update=on_update).solve(grid).solved
