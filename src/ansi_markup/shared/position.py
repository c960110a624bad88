"""Source positions and spans shared by tokens, nodes and errors."""

from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class Position:
    """Location of a character in the source text.

    ``offset`` is 0-based; ``line`` and ``column`` are 1-based for
    user-facing messages.
    """

    offset: int
    line: int
    column: int

    def __post_init__(self) -> None:
        """Validate position values."""
        if self.offset < 0:
            raise ValueError("Offset must be >= 0")
        if self.line < 1:
            raise ValueError("Line number must be >= 1")
        if self.column < 1:
            raise ValueError("Column number must be >= 1")

    def to_dict(self) -> Dict[str, int]:
        """Convert position to dictionary representation."""
        return {"offset": self.offset, "line": self.line, "column": self.column}


START_POSITION = Position(0, 1, 1)


@dataclass(frozen=True)
class Span:
    """Half-open source range ``[start, end)``."""

    start: Position
    end: Position

    def __post_init__(self) -> None:
        """Validate span ordering."""
        if self.end.offset < self.start.offset:
            raise ValueError("Span end must not precede span start")

    @property
    def length(self) -> int:
        """Number of source characters covered."""
        return self.end.offset - self.start.offset

    def contains(self, other: "Span") -> bool:
        """Check whether ``other`` lies entirely within this span."""
        return (
            self.start.offset <= other.start.offset
            and other.end.offset <= self.end.offset
        )

    def overlaps(self, other: "Span") -> bool:
        """Check whether the two spans share at least one character."""
        return (
            self.start.offset < other.end.offset
            and other.start.offset < self.end.offset
        )

    def slice(self, source: str) -> str:
        """Return the literal source text this span covers."""
        return source[self.start.offset:self.end.offset]

    def to_dict(self) -> Dict[str, Dict[str, int]]:
        """Convert span to dictionary representation."""
        return {"start": self.start.to_dict(), "end": self.end.to_dict()}
