"""Deterministic rule validation for solved grids."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List

from ..core.constants import LineKind
from ..core.exceptions import ValidationError
from ..core.models import line_to_text
from ..utils.logger import get_logger
from .consistency import is_line_consistent
from .grid import NonogramGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class GridValidator:
    """Checks that a grid is fully resolved and matches every block spec."""

    def validate(self, grid: NonogramGrid) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_resolved(grid)
            self._check_lines(grid, LineKind.ROW)
            self._check_lines(grid, LineKind.COLUMN)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def enforce(self, grid: NonogramGrid) -> None:
        """Raise :class:`ValidationError` unless ``grid`` is a valid solution."""

        result = self.validate(grid)
        if not result.ok:
            raise ValidationError("; ".join(result.messages))

    def _check_resolved(self, grid: NonogramGrid) -> None:
        unknown = grid.unknown_count()
        if unknown:
            raise ValidationError(f"{unknown} cells are still unknown")

    def _check_lines(self, grid: NonogramGrid, kind: LineKind) -> None:
        for ref in grid.line_refs(kind):
            line = grid.line(ref)
            spec = grid.spec(ref)
            if not is_line_consistent(line, spec):
                raise ValidationError(
                    f"{str(ref).capitalize()} {line_to_text(line)} does not match spec {list(spec)}"
                )
