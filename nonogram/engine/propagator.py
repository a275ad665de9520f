"""Fixed-point line propagation over the whole grid."""

from __future__ import annotations

from typing import Callable, Optional

from ..core.constants import Cell, LineKind
from ..core.exceptions import LineContradictionError
from ..core.models import LineRef, SolveStats, line_to_text
from ..utils.logger import get_logger
from .grid import NonogramGrid
from .lines import CandidateCache, reduce_line


LOGGER = get_logger(__name__)

RedrawCallback = Callable[[NonogramGrid], None]


class GridPropagator:
    """Reduce every row, then every column, until a pass deduces nothing new.

    Cell knowledge only grows between passes, so the loop ends after at most
    one pass per grid cell plus a final quiet pass.
    """

    def __init__(
        self,
        cache: CandidateCache,
        *,
        stats: Optional[SolveStats] = None,
        on_update: Optional[RedrawCallback] = None,
    ) -> None:
        self.cache = cache
        self.stats = stats if stats is not None else SolveStats()
        self.on_update = on_update

    def propagate(self, grid: NonogramGrid) -> int:
        """Run passes to a fixed point and return how many passes were made."""

        passes = 0
        while True:
            passes += 1
            dirty_rows = self._pass(grid, LineKind.ROW)
            dirty_cols = self._pass(grid, LineKind.COLUMN)
            LOGGER.debug(
                "Pass %d: %d rows and %d columns changed, %d cells unknown",
                passes,
                dirty_rows,
                dirty_cols,
                grid.unknown_count(),
            )
            if not dirty_rows and not dirty_cols:
                break
        self.stats.propagation_passes += passes
        return passes

    def reduce(self, grid: NonogramGrid, ref: LineRef) -> bool:
        """Reduce a single line in place; return whether it changed."""

        known = grid.line(ref)
        candidates = self.cache.get(grid.line_length(ref), grid.spec(ref))
        try:
            reduced, dirty = reduce_line(known, candidates)
        except LineContradictionError as exc:
            raise LineContradictionError(
                f"No arrangement of {list(grid.spec(ref))} fits {ref} ({line_to_text(known)})",
                line=ref,
            ) from exc
        self.stats.line_reductions += 1
        if dirty:
            self.stats.cells_deduced += sum(
                1 for before, after in zip(known, reduced) if before is Cell.UNKNOWN and after is not Cell.UNKNOWN
            )
            grid.set_line(ref, reduced)
            if self.on_update is not None:
                self.on_update(grid)
        return dirty

    def _pass(self, grid: NonogramGrid, kind: LineKind) -> int:
        dirty = 0
        for ref in grid.line_refs(kind):
            if self.reduce(grid, ref):
                dirty += 1
        return dirty
