"""Line-level primitives: candidate generation, compatibility and reduction.

A *candidate* is a fully resolved line that satisfies a block spec exactly.
Candidates are indexed by strictly increasing series of block slots: with
``M = length + 1 - sum(spec)`` slots available, block ``i`` sits at slot
``s_i`` and every slot between two blocks stands for one extra empty cell.
Walking the series in lexicographic order therefore walks the candidates in
lexicographic order of their block start positions.
"""

from __future__ import annotations

from math import comb
from typing import Dict, Iterable, Iterator, List, Sequence, Tuple

from ..core.constants import Cell
from ..core.exceptions import LineContradictionError
from ..core.models import BlockSpec, Line
from ..utils.logger import get_logger


LOGGER = get_logger(__name__)


def slot_count(length: int, spec: Sequence[int]) -> int:
    return length + 1 - sum(spec)


def spec_fits(length: int, spec: Sequence[int]) -> bool:
    """Return whether the blocks plus their mandatory gaps fit in ``length``."""

    if not spec:
        return length >= 0
    return sum(spec) + len(spec) - 1 <= length


def count_candidates(length: int, spec: Sequence[int]) -> int:
    """Number of lines of ``length`` satisfying ``spec``, without enumerating them."""

    if not spec_fits(length, spec):
        return 0
    return comb(slot_count(length, spec), len(spec))


def increasing_series(n: int, size: int) -> Iterator[Tuple[int, ...]]:
    """Yield every strictly increasing ``n``-tuple drawn from ``range(size)``.

    Series come out in lexicographic order, starting at ``(0, 1, ..., n-1)``.
    ``increasing_series(2, 3)`` yields ``(0, 1)``, ``(0, 2)`` then ``(1, 2)``.
    """

    if n > size:
        return
    series = list(range(n))
    yield tuple(series)
    if n == 0:
        return
    while True:
        index = n - 1
        while series[index] >= (size if index == n - 1 else series[index + 1]) - 1:
            if index == 0:
                return
            index -= 1
        series[index] += 1
        for follower in range(index + 1, n):
            series[follower] = series[follower - 1] + 1
        yield tuple(series)


def series_to_line(series: Sequence[int], spec: Sequence[int], length: int) -> Line:
    """Lay the blocks of ``spec`` out at the slots given by ``series``."""

    cells: List[Cell] = []
    cursor = 0
    for block, slot in zip(spec, series):
        cells.extend([Cell.EMPTY] * (slot - cursor))
        cursor = slot + 1
        cells.extend([Cell.FILLED] * block)
        if len(cells) != length:
            cells.append(Cell.EMPTY)
    cells.extend([Cell.EMPTY] * (length - len(cells)))
    return tuple(cells)


def generate_candidates(length: int, spec: Sequence[int]) -> Iterator[Line]:
    """Lazily yield every line of ``length`` satisfying ``spec`` exactly.

    Each call returns a fresh iterator, so the production can be restarted
    from the same ``(length, spec)`` pair at any time. Nothing is yielded when
    ``spec`` cannot fit.
    """

    if not spec_fits(length, spec):
        return
    for series in increasing_series(len(spec), slot_count(length, spec)):
        yield series_to_line(series, spec, length)


def is_compatible(known: Sequence[Cell], candidate: Sequence[Cell]) -> bool:
    """Return whether ``candidate`` agrees with every resolved cell of ``known``."""

    for known_cell, candidate_cell in zip(known, candidate):
        if known_cell is not Cell.UNKNOWN and known_cell is not candidate_cell:
            return False
    return True


def reduce_line(known: Sequence[Cell], candidates: Iterable[Sequence[Cell]]) -> Tuple[Line, bool]:
    """Intersect every candidate compatible with ``known``.

    Returns the most specific line implied by the compatible candidates and a
    flag telling whether it differs from ``known``. Raises
    :class:`LineContradictionError` when no candidate is compatible.
    """

    reduced: List[Cell] | None = None
    for candidate in candidates:
        if not is_compatible(known, candidate):
            continue
        if reduced is None:
            reduced = list(candidate)
            continue
        for position, cell in enumerate(candidate):
            if reduced[position] is not cell:
                reduced[position] = Cell.UNKNOWN

    if reduced is None:
        raise LineContradictionError("No candidate is compatible with the known cells")

    result = tuple(reduced)
    return result, result != tuple(known)


class CandidateCache:
    """Read-only store of candidate sets keyed by ``(length, spec)``.

    Entries are materialized on first request and never mutated afterwards,
    so one cache can serve every row, column and search branch of a solve.
    With ``enabled=False`` every request regenerates the candidates lazily.
    """

    def __init__(self, enabled: bool = True) -> None:
        self.enabled = enabled
        self._entries: Dict[Tuple[int, BlockSpec], Tuple[Line, ...]] = {}

    def get(self, length: int, spec: Sequence[int]) -> Iterable[Line]:
        if not self.enabled:
            return generate_candidates(length, spec)
        key = (length, tuple(spec))
        entry = self._entries.get(key)
        if entry is None:
            entry = tuple(generate_candidates(length, spec))
            self._entries[key] = entry
            LOGGER.debug("Cached %d candidates for length=%d spec=%s", len(entry), length, list(spec))
        return entry

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
