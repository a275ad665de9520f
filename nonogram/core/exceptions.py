"""Custom exception hierarchy for nonogram solving."""

from __future__ import annotations

from typing import Optional

from .models import LineRef


class NonogramError(Exception):
    """Base exception for solver failures."""


class PuzzleFormatError(NonogramError):
    """Raised when a puzzle file cannot be read or parsed."""


class MalformedSpecError(NonogramError):
    """Raised when a block spec cannot fit its line or dimensions disagree."""


class LineContradictionError(NonogramError):
    """Raised when no candidate of a line agrees with what is already known."""

    def __init__(self, message: str, line: Optional[LineRef] = None) -> None:
        super().__init__(message)
        self.line = line


class SolverBackendError(NonogramError):
    """Raised when a solving backend is unknown or gives up without an answer."""


class ValidationError(NonogramError):
    """Raised when a solved grid fails the final integrity checks."""
