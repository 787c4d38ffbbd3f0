"""Source positions and half-open ranges inside a stylesheet."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, order=True)
class SourcePosition:
    """A 0-based (line, column) position."""

    line: int
    column: int

    def __str__(self) -> str:
        return f"{self.line + 1}:{self.column + 1}"


@dataclass(frozen=True)
class SourceRange:
    """A half-open span ``[start, end)``."""

    start: SourcePosition
    end: SourcePosition

    @classmethod
    def of(cls, start_line: int, start_column: int, end_line: int, end_column: int) -> SourceRange:
        return cls(SourcePosition(start_line, start_column), SourcePosition(end_line, end_column))

    @property
    def is_empty(self) -> bool:
        return self.start == self.end

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"
