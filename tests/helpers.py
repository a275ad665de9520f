"""Shared fixtures for the nonogram tests."""

from __future__ import annotations

from typing import List, Sequence

from nonogram.core.constants import Cell

HEART = [
    ".#.#.",
    "#####",
    "#####",
    ".###.",
    "..#..",
]
HEART_ROWS = [[1, 1], [5], [5], [3], [1]]
HEART_COLS = [[2], [4], [4], [4], [2]]


def parse_line(text: str) -> tuple:
    mapping = {"#": Cell.FILLED, ".": Cell.EMPTY, "?": Cell.UNKNOWN}
    return tuple(mapping[ch] for ch in text)


def render_line(line: Sequence[Cell]) -> str:
    mapping = {Cell.FILLED: "#", Cell.EMPTY: ".", Cell.UNKNOWN: "?"}
    return "".join(mapping[cell] for cell in line)


def blocks_of(line: Sequence[Cell]) -> List[int]:
    blocks: List[int] = []
    run = 0
    for cell in line:
        if cell is Cell.FILLED:
            run += 1
        elif run:
            blocks.append(run)
            run = 0
    if run:
        blocks.append(run)
    return blocks


def specs_from_picture(picture: Sequence[str]) -> tuple:
    rows = [blocks_of(parse_line(row)) for row in picture]
    columns = [
        blocks_of(parse_line("".join(row[c] for row in picture)))
        for c in range(len(picture[0]))
    ]
    return rows, columns
