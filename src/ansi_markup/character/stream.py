"""Position-tracking cursor over markup source text.

The tokenizer and the entity decoder both consume characters through one
:class:`SourceCursor`, so offset, line and column always advance together.
"""

from typing import Optional

from ansi_markup.shared.position import Position


class SourceCursor:
    """Forward-only cursor over a source string.

    A newline advances the line and resets the column to 1; every other
    character, tabs and carriage returns included, advances the column by 1.
    """

    __slots__ = ("source", "offset", "line", "column")

    def __init__(self, source: str) -> None:
        self.source = source
        self.offset = 0
        self.line = 1
        self.column = 1

    @property
    def position(self) -> Position:
        """Snapshot of the current position."""
        return Position(self.offset, self.line, self.column)

    @property
    def at_end(self) -> bool:
        return self.offset >= len(self.source)

    def peek(self, ahead: int = 0) -> Optional[str]:
        """Return the character ``ahead`` places from the cursor, or None."""
        index = self.offset + ahead
        if index < len(self.source):
            return self.source[index]
        return None

    def startswith(self, prefix: str) -> bool:
        return self.source.startswith(prefix, self.offset)

    def advance(self, count: int = 1) -> str:
        """Consume up to ``count`` characters and return them."""
        consumed = self.source[self.offset:self.offset + count]
        newlines = consumed.count("\n")
        if newlines:
            self.line += newlines
            self.column = len(consumed) - consumed.rfind("\n")
        else:
            self.column += len(consumed)
        self.offset += len(consumed)
        return consumed

    def find(self, char: str) -> int:
        """Offset of the next ``char`` at or after the cursor, or -1."""
        return self.source.find(char, self.offset)
