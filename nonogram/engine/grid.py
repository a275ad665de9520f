"""Grid representation and helper utilities."""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Iterator, List, Sequence

from ..core.constants import Cell, LineKind
from ..core.exceptions import MalformedSpecError
from ..core.models import BlockSpec, Line, LineRef
from ..utils.logger import get_logger
from .lines import spec_fits


LOGGER = get_logger(__name__)


@dataclass
class GridSnapshot:
    cells: List[List[Cell]]


def normalize_spec(spec: Sequence[int]) -> BlockSpec:
    """Turn a raw block list into a spec tuple; a lone ``0`` means an empty line."""

    blocks = tuple(spec)
    if blocks == (0,):
        return ()
    for block in blocks:
        if isinstance(block, bool) or not isinstance(block, int) or block <= 0:
            raise MalformedSpecError(f"Block lengths must be positive integers, got {list(blocks)}")
    return blocks


class NonogramGrid:
    """Rectangular grid of cells with one block spec per row and per column.

    Dimensions and specs are fixed at construction; only cell values change
    while solving.
    """

    def __init__(self, row_spec: Sequence[Sequence[int]], col_spec: Sequence[Sequence[int]]) -> None:
        self.row_spec: List[BlockSpec] = [normalize_spec(spec) for spec in row_spec]
        self.col_spec: List[BlockSpec] = [normalize_spec(spec) for spec in col_spec]
        self.height = len(self.row_spec)
        self.length = len(self.col_spec)
        if self.height == 0 or self.length == 0:
            raise MalformedSpecError("Grid needs at least one row and one column")
        self._check_specs()
        self.cells: List[List[Cell]] = [
            [Cell.UNKNOWN for _ in range(self.length)] for _ in range(self.height)
        ]
        LOGGER.debug("Created %dx%d grid", self.height, self.length)

    def _check_specs(self) -> None:
        for index, spec in enumerate(self.row_spec):
            if not spec_fits(self.length, spec):
                raise MalformedSpecError(
                    f"Row {index} spec {list(spec)} does not fit in {self.length} cells"
                )
        for index, spec in enumerate(self.col_spec):
            if not spec_fits(self.height, spec):
                raise MalformedSpecError(
                    f"Column {index} spec {list(spec)} does not fit in {self.height} cells"
                )

    # ------------------------------------------------------------------
    # Cell access
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def set_cell(self, row: int, col: int, value: Cell) -> None:
        self.cells[row][col] = value

    def row(self, index: int) -> Line:
        return tuple(self.cells[index])

    def set_row(self, index: int, line: Sequence[Cell]) -> None:
        if len(line) != self.length:
            raise ValueError(f"Row {index} expects {self.length} cells, got {len(line)}")
        self.cells[index] = list(line)

    def column(self, index: int) -> Line:
        return tuple(row[index] for row in self.cells)

    def set_column(self, index: int, line: Sequence[Cell]) -> None:
        if len(line) != self.height:
            raise ValueError(f"Column {index} expects {self.height} cells, got {len(line)}")
        for row, value in zip(self.cells, line):
            row[index] = value

    # ------------------------------------------------------------------
    # Uniform line access
    # ------------------------------------------------------------------
    def line(self, ref: LineRef) -> Line:
        return self.row(ref.index) if ref.kind == LineKind.ROW else self.column(ref.index)

    def set_line(self, ref: LineRef, line: Sequence[Cell]) -> None:
        if ref.kind == LineKind.ROW:
            self.set_row(ref.index, line)
        else:
            self.set_column(ref.index, line)

    def line_length(self, ref: LineRef) -> int:
        return self.length if ref.kind == LineKind.ROW else self.height

    def spec(self, ref: LineRef) -> BlockSpec:
        return self.row_spec[ref.index] if ref.kind == LineKind.ROW else self.col_spec[ref.index]

    def line_refs(self, kind: LineKind) -> Iterator[LineRef]:
        count = self.height if kind == LineKind.ROW else self.length
        for index in range(count):
            yield LineRef(kind, index)

    # ------------------------------------------------------------------
    # State
    # ------------------------------------------------------------------
    def unknown_count(self) -> int:
        return sum(1 for row in self.cells for cell in row if cell is Cell.UNKNOWN)

    def is_resolved(self) -> bool:
        return all(cell is not Cell.UNKNOWN for row in self.cells for cell in row)

    def snapshot(self) -> GridSnapshot:
        return GridSnapshot(cells=copy.deepcopy(self.cells))

    def restore(self, snapshot: GridSnapshot) -> None:
        self.cells = copy.deepcopy(snapshot.cells)

    def to_jsonable(self) -> dict:
        return {
            "height": self.height,
            "length": self.length,
            "row_spec": [list(spec) for spec in self.row_spec],
            "col_spec": [list(spec) for spec in self.col_spec],
            "cells": [[cell.value for cell in row] for row in self.cells],
        }
