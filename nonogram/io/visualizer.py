"""Terminal redraw hook for watching the solver work."""

from __future__ import annotations

import sys
import time
from typing import TextIO

from ..utils.pretty import format_grid
from ..engine.grid import NonogramGrid

CLEAR_SCREEN = "\x1b[2J\x1b[H"


class TerminalVisualizer:
    """Callable passed to the solver as ``on_update``; redraws the grid per call.

    On a TTY each frame replaces the previous one; otherwise frames are written
    one after another, separated by a blank line. ``delay`` pauses after every
    frame so the progress stays readable.
    """

    def __init__(self, stream: TextIO | None = None, delay: float = 0.0) -> None:
        self.stream = stream or sys.stdout
        self.delay = delay
        self.frames = 0
        isatty = getattr(self.stream, "isatty", None)
        self.clear = bool(isatty and isatty())

    def __call__(self, grid: NonogramGrid) -> None:
        self.frames += 1
        if self.clear:
            self.stream.write(CLEAR_SCREEN)
        elif self.frames > 1:
            self.stream.write("\n")
        self.stream.write(f"[{self.frames}] {grid.unknown_count()} unknown\n")
        self.stream.write(format_grid(grid) + "\n")
        self.stream.flush()
        if self.delay > 0:
            time.sleep(self.delay)
