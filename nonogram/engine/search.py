"""Depth-first row-by-row backtracking search.

Recursion is replaced by an explicit stack of frames so that tall grids do not
run into the interpreter's recursion limit. Each frame owns the row it is
trying: it remembers the row as it was before the first attempt and restores
it once its candidates run out, so frames undo their writes in LIFO order.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterator, List, Optional

from ..core.constants import Cell
from ..core.models import Line, SolveStats, line_to_text
from ..utils.logger import get_logger
from .consistency import columns_consistent
from .grid import NonogramGrid
from .lines import CandidateCache, is_compatible


LOGGER = get_logger(__name__)


@dataclass
class SearchFrame:
    row: int
    saved: Line
    remaining: Iterator[Line]


class BacktrackingSearch:
    """Assign rows top to bottom, pruning with the column consistency check."""

    def __init__(
        self,
        cache: CandidateCache,
        *,
        stats: Optional[SolveStats] = None,
        on_update: Optional[Callable[[NonogramGrid], None]] = None,
    ) -> None:
        self.cache = cache
        self.stats = stats if stats is not None else SolveStats()
        self.on_update = on_update

    def run(self, grid: NonogramGrid) -> bool:
        """Search for the first full assignment; ``grid`` is restored on failure."""

        frames: List[SearchFrame] = []
        row = 0
        while row < grid.height:
            saved = grid.row(row)
            if Cell.UNKNOWN not in saved:
                frames.append(SearchFrame(row, saved, iter(())))
                row += 1
                continue
            candidates = self.cache.get(grid.length, grid.row_spec[row])
            frames.append(SearchFrame(row, saved, iter(candidates)))
            row = self._advance(grid, frames)
            if row < 0:
                LOGGER.debug("Search exhausted after %d nodes", self.stats.search_nodes)
                return False
        return True

    def _advance(self, grid: NonogramGrid, frames: List[SearchFrame]) -> int:
        """Place the next viable candidate of the top frame, unwinding as needed.

        Returns the row to continue from, or ``-1`` once every frame is spent.
        """

        while frames:
            frame = frames[-1]
            for candidate in frame.remaining:
                if not is_compatible(frame.saved, candidate):
                    continue
                self.stats.search_nodes += 1
                grid.set_row(frame.row, candidate)
                if columns_consistent(grid):
                    if self.on_update is not None:
                        self.on_update(grid)
                    return frame.row + 1
            grid.set_row(frame.row, frame.saved)
            frames.pop()
            if Cell.UNKNOWN in frame.saved:
                self.stats.backtracks += 1
                LOGGER.debug("Row %d exhausted, restored %s", frame.row, line_to_text(frame.saved))
        return -1
