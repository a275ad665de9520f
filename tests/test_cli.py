import io
import json
import tempfile
import unittest
from contextlib import redirect_stderr, redirect_stdout
from pathlib import Path

import main
from nonogram.core.constants import Cell
from nonogram.engine.grid import NonogramGrid
from nonogram.io.visualizer import TerminalVisualizer
from nonogram.utils.pretty import format_grid

PUZZLES = Path(__file__).resolve().parent.parent / "puzzles"


class CliTests(unittest.TestCase):
    def run_cli(self, *argv: str):
        out = io.StringIO()
        with redirect_stdout(out):
            code = main.main(list(argv))
        return code, out.getvalue()

    def test_solves_and_prints_grid(self) -> None:
        code, output = self.run_cli(str(PUZZLES / "heart.txt"))
        self.assertEqual(code, 0)
        self.assertIn("| # # # # #", output)

    def test_unsolvable_puzzle_exits_with_one(self) -> None:
        code, output = self.run_cli(str(PUZZLES / "contradiction.txt"))
        self.assertEqual(code, 1)
        self.assertIn("No solution found", output)

    def test_cpsat_backend_and_json_output(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "out.json"
            code, _ = self.run_cli(
                str(PUZZLES / "heart.json"), "--backend", "cpsat", "--output", str(target)
            )
            self.assertEqual(code, 0)
            payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertTrue(payload["solved"])
        self.assertEqual(payload["backend"], "cpsat")
        self.assertEqual(payload["rows"][0], "01010")

    def test_no_cache_gives_same_grid(self) -> None:
        _, cached = self.run_cli(str(PUZZLES / "heart.txt"))
        code, uncached = self.run_cli(str(PUZZLES / "heart.txt"), "--no-cache")
        self.assertEqual(code, 0)
        self.assertEqual(uncached, cached)

    def test_unsolved_json_output_keeps_unknown_grid(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            target = Path(tmpdir) / "out.json"
            code, _ = self.run_cli(str(PUZZLES / "contradiction.txt"), "--output", str(target))
            self.assertEqual(code, 1)
            payload = json.loads(target.read_text(encoding="utf-8"))
        self.assertFalse(payload["solved"])
        self.assertEqual(payload["rows"], [])
        self.assertEqual(payload["grid"]["cells"], [["UNKNOWN", "UNKNOWN"], ["UNKNOWN", "UNKNOWN"]])

    def test_cpsat_workers_flag(self) -> None:
        code, output = self.run_cli(str(PUZZLES / "heart.txt"), "--backend", "cpsat", "--workers", "1")
        self.assertEqual(code, 0)
        self.assertIn("| # # # # #", output)

    def test_workers_must_be_positive(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main.main([str(PUZZLES / "heart.txt"), "--workers", "0"])
        self.assertEqual(ctx.exception.code, 2)

    def test_sync_mode_redraws(self) -> None:
        code, output = self.run_cli(str(PUZZLES / "heart.txt"), "--sync", "--stats")
        self.assertEqual(code, 0)
        self.assertIn("[1]", output)
        self.assertIn("--- Solve ---", output)

    def test_malformed_puzzle_is_a_usage_error(self) -> None:
        with tempfile.TemporaryDirectory() as tmpdir:
            path = Path(tmpdir) / "bad.txt"
            path.write_text("rows\n4\ncolumns\n1\n", encoding="utf-8")
            with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
                main.main([str(path)])
        self.assertEqual(ctx.exception.code, 2)

    def test_delay_requires_sync(self) -> None:
        with redirect_stderr(io.StringIO()), self.assertRaises(SystemExit) as ctx:
            main.main([str(PUZZLES / "heart.txt"), "--delay", "0.1"])
        self.assertEqual(ctx.exception.code, 2)


class RenderingTests(unittest.TestCase):
    def test_format_grid_shows_specs_and_cells(self) -> None:
        grid = NonogramGrid([[1], [2]], [[1], [2]])
        grid.set_row(1, (Cell.FILLED, Cell.FILLED))
        lines = format_grid(grid).splitlines()
        self.assertEqual(lines, ["  | 1 2", "--+----", "1 | ? ?", "2 | # #"])

    def test_format_grid_labels_empty_specs_with_zero(self) -> None:
        grid = NonogramGrid([[1], [0]], [[1], [0]])
        lines = format_grid(grid).splitlines()
        self.assertEqual(lines, ["  | 1 0", "--+----", "1 | ? ?", "0 | ? ?"])

    def test_visualizer_counts_frames(self) -> None:
        stream = io.StringIO()
        visualizer = TerminalVisualizer(stream=stream)
        grid = NonogramGrid([[1]], [[1]])
        visualizer(grid)
        grid.set_cell(0, 0, Cell.FILLED)
        visualizer(grid)
        self.assertEqual(visualizer.frames, 2)
        output = stream.getvalue()
        self.assertIn("[1] 1 unknown", output)
        self.assertIn("[2] 0 unknown", output)
        self.assertNotIn("\x1b[2J", output)


if __name__ == "__main__":
    unittest.main()
