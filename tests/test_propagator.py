import unittest

from nonogram.core.constants import Cell, LineKind
from nonogram.core.exceptions import LineContradictionError
from nonogram.core.models import LineRef, SolveStats
from nonogram.engine.grid import NonogramGrid
from nonogram.engine.lines import CandidateCache
from nonogram.engine.propagator import GridPropagator

from helpers import HEART, HEART_COLS, HEART_ROWS, render_line


class GridPropagatorTests(unittest.TestCase):
    def test_single_row_resolves_without_search(self) -> None:
        grid = NonogramGrid([[3]], [[1], [1], [1]])
        stats = SolveStats()
        passes = GridPropagator(CandidateCache(), stats=stats).propagate(grid)
        self.assertTrue(all(cell is Cell.FILLED for cell in grid.row(0)))
        self.assertEqual(passes, 2)
        self.assertEqual(stats.propagation_passes, 2)
        self.assertEqual(stats.cells_deduced, 3)

    def test_heart_is_line_solvable(self) -> None:
        grid = NonogramGrid(HEART_ROWS, HEART_COLS)
        GridPropagator(CandidateCache()).propagate(grid)
        self.assertEqual([render_line(grid.row(r)) for r in range(grid.height)], HEART)

    def test_second_run_changes_nothing(self) -> None:
        grid = NonogramGrid([[1], [1], [2]], [[1], [2], [1]])
        propagator = GridPropagator(CandidateCache())
        propagator.propagate(grid)
        before = grid.snapshot().cells
        self.assertEqual(propagator.propagate(grid), 1)
        self.assertEqual(grid.cells, before)

    def test_ambiguous_puzzle_keeps_unknowns(self) -> None:
        grid = NonogramGrid([[1], [1]], [[1], [1]])
        GridPropagator(CandidateCache()).propagate(grid)
        self.assertEqual(grid.unknown_count(), 4)

    def test_contradiction_names_the_line(self) -> None:
        grid = NonogramGrid([[3]], [[1], [0], [1]])
        with self.assertRaises(LineContradictionError) as ctx:
            GridPropagator(CandidateCache()).propagate(grid)
        self.assertEqual(ctx.exception.line, LineRef(LineKind.COLUMN, 1))

    def test_redraw_callback_runs_for_dirty_lines(self) -> None:
        calls = []
        grid = NonogramGrid([[3]], [[1], [1], [1]])
        GridPropagator(CandidateCache(), on_update=lambda g: calls.append(g.unknown_count())).propagate(grid)
        self.assertEqual(calls, [0])


if __name__ == "__main__":
    unittest.main()
