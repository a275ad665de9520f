"""Puzzle file loading.

Two formats are understood.

Text (any extension other than ``.json``)::

    # comments and blank lines are ignored
    rows
    1 2
    3
    0
    columns
    1
    1, 1
    ...

One spec per line, blocks separated by spaces or commas; ``0`` is an empty
line. JSON documents carry ``rows`` and ``columns`` arrays of block lists
(``row_clues`` / ``col_clues`` are accepted as aliases).
"""

from __future__ import annotations

import json
import re
from pathlib import Path
from typing import Any, Dict, List, Optional

from ..core.exceptions import PuzzleFormatError
from ..engine.grid import NonogramGrid
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)

SECTION_NAMES = {
    "rows": "rows",
    "row": "rows",
    "columns": "columns",
    "column": "columns",
    "cols": "columns",
}
BLOCK_SEPARATOR = re.compile(r"[\s,]+")


def parse_spec_line(text: str) -> List[int]:
    tokens = [token for token in BLOCK_SEPARATOR.split(text.strip()) if token]
    try:
        return [int(token) for token in tokens]
    except ValueError as exc:
        raise PuzzleFormatError(f"Invalid block list {text!r}") from exc


def parse_text(text: str) -> Dict[str, List[List[int]]]:
    sections: Dict[str, List[List[int]]] = {"rows": [], "columns": []}
    current: Optional[str] = None
    for lineno, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        header = SECTION_NAMES.get(line.rstrip(":").lower())
        if header is not None:
            current = header
            continue
        if current is None:
            raise PuzzleFormatError(f"Line {lineno}: block list before any 'rows' or 'columns' header")
        sections[current].append(parse_spec_line(line))
    return sections


def parse_json(text: str) -> Dict[str, List[List[int]]]:
    try:
        data: Any = json.loads(text)
    except json.JSONDecodeError as exc:
        raise PuzzleFormatError(f"Invalid JSON puzzle: {exc}") from exc
    if not isinstance(data, dict):
        raise PuzzleFormatError("JSON puzzle must be an object")

    rows = data.get("rows", data.get("row_clues"))
    columns = data.get("columns", data.get("col_clues"))
    if rows is None or columns is None:
        raise PuzzleFormatError("JSON puzzle needs 'rows' and 'columns' arrays")
    sections: Dict[str, List[List[int]]] = {}
    for name, specs in (("rows", rows), ("columns", columns)):
        if not isinstance(specs, list) or not all(isinstance(spec, list) for spec in specs):
            raise PuzzleFormatError(f"'{name}' must be a list of block lists")
        sections[name] = [list(spec) for spec in specs]
    return sections


def build_grid(sections: Dict[str, List[List[int]]]) -> NonogramGrid:
    rows, columns = sections["rows"], sections["columns"]
    if not rows or not columns:
        raise PuzzleFormatError("Puzzle needs at least one row and one column spec")
    return NonogramGrid(rows, columns)


def load_puzzle(path: Path | str) -> NonogramGrid:
    """Read a puzzle file and return a fresh grid with every cell unknown."""

    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise PuzzleFormatError(f"Cannot read puzzle file {path}: {exc}") from exc

    sections = parse_json(text) if path.suffix.lower() == ".json" else parse_text(text)
    grid = build_grid(sections)
    LOGGER.info("Loaded %dx%d puzzle from %s", grid.height, grid.length, path)
    return grid
