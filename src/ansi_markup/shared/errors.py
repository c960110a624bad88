"""Structured parse errors for the markup parser.

Every failure of the core parser is described by a :class:`ParseError` value
and travels as a :class:`MarkupParseError` exception until the API layer
turns it into a failed result.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .position import Position


class ErrorKind(Enum):
    """Kinds of parse failure; no others exist at the parser layer."""

    MALFORMED_TAG = "MalformedTag"
    UNKNOWN_TAG_NAME = "UnknownTagName"
    UNCLOSED_TAG = "UnclosedTag"
    MISMATCHED_CLOSING_TAG = "MismatchedClosingTag"
    DEPTH_LIMIT_EXCEEDED = "DepthLimitExceeded"


@dataclass(frozen=True)
class ParseError:
    """A single positioned parse failure."""

    kind: ErrorKind
    position: Position
    expected: Optional[str] = None
    found: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to dictionary representation."""
        return {
            "kind": self.kind.value,
            "position": self.position.to_dict(),
            "expected": self.expected,
            "found": self.found,
        }


class MarkupParseError(ValueError):
    """Raised by the tokenizer and tree builder when input is rejected."""

    def __init__(self, error: ParseError) -> None:
        self.error = error
        super().__init__(error)

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def position(self) -> Position:
        return self.error.position

    def __str__(self) -> str:
        # Imported here: the reporter depends on this module.
        from .reporter import format_error

        return format_error(self.error)
