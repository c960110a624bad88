"""Markup tokenizer.

Scans source text into a flat list of tokens in one linear pass. Only the
lexical shape of tags is checked here; whether a tag name is registered, and
whether tags nest properly, is decided by the tree builder.
"""

import string
import time
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional

from ansi_markup.character import SourceCursor, read_entity
from ansi_markup.shared import (
    ErrorKind,
    MarkupParseError,
    ParseError,
    Position,
    Span,
    get_logger,
)

TAG_NAME_CHARS = frozenset(string.ascii_letters)

# Expected values reported in MalformedTag errors
EXPECTED_TAG_NAME = "tag name"
EXPECTED_TAG_END = ">"


class TokenType(Enum):
    """Markup token types."""

    TEXT = auto()           # Decoded character content between tags
    OPEN_TAG = auto()       # <name>
    CLOSE_TAG = auto()      # </name>
    END_OF_INPUT = auto()   # Zero-width marker after the last character


@dataclass(frozen=True)
class Token:
    """A single token with its source span.

    ``value`` is the decoded text for TEXT tokens, the literal tag name for
    tag tokens, and empty for END_OF_INPUT.
    """

    type: TokenType
    value: str
    span: Span

    @property
    def position(self) -> Position:
        """Start position of the token."""
        return self.span.start

    @property
    def is_tag(self) -> bool:
        return self.type in (TokenType.OPEN_TAG, TokenType.CLOSE_TAG)


@dataclass
class TokenizationResult:
    """Tokens produced from one input together with scan statistics."""

    tokens: List[Token] = field(default_factory=list)
    character_count: int = 0
    processing_time_ms: float = 0.0

    @property
    def token_count(self) -> int:
        """Get the total number of tokens, END_OF_INPUT included."""
        return len(self.tokens)

    @property
    def tag_count(self) -> int:
        return sum(1 for token in self.tokens if token.is_tag)


def _malformed(position: Position, expected: str, found: Optional[str]) -> MarkupParseError:
    return MarkupParseError(
        ParseError(ErrorKind.MALFORMED_TAG, position, expected=expected, found=found)
    )


class MarkupTokenizer:
    """Tokenizer converting markup text into tokens.

    An instance keeps scratch state for the call in progress only, so it can
    be reused for many inputs but must not be shared between threads.
    """

    def __init__(self, correlation_id: Optional[str] = None) -> None:
        """Initialize the tokenizer.

        Args:
            correlation_id: Optional correlation ID for tracking requests
        """
        self.correlation_id = correlation_id
        self.logger = get_logger(__name__, correlation_id, "markup_tokenizer")
        self._cursor = SourceCursor("")
        self._tokens: List[Token] = []

    def tokenize(self, text: str) -> TokenizationResult:
        """Tokenize ``text``.

        Args:
            text: Markup source

        Returns:
            TokenizationResult whose last token is END_OF_INPUT

        Raises:
            MarkupParseError: With kind MALFORMED_TAG at the offending character
        """
        start_time = time.perf_counter()
        self._cursor = SourceCursor(text)
        self._tokens = []

        self.logger.debug("Starting tokenization", extra={"char_count": len(text)})

        cursor = self._cursor
        while not cursor.at_end:
            if cursor.peek() == "<":
                self._scan_tag()
            else:
                self._scan_text()

        end = cursor.position
        self._tokens.append(Token(TokenType.END_OF_INPUT, "", Span(end, end)))

        result = TokenizationResult(
            tokens=self._tokens,
            character_count=len(text),
            processing_time_ms=(time.perf_counter() - start_time) * 1000,
        )
        self.logger.debug(
            "Tokenization completed",
            extra={
                "token_count": result.token_count,
                "processing_time_ms": result.processing_time_ms,
            },
        )
        return result

    def _scan_text(self) -> None:
        """Accumulate a maximal text run up to the next ``<`` or end of input."""
        cursor = self._cursor
        source = cursor.source
        start = cursor.position
        parts: List[str] = []

        # Entities never contain "<", so the run ends at the same place
        # whether or not they are decoded.
        run_end = cursor.find("<")
        if run_end == -1:
            run_end = len(source)

        while cursor.offset < run_end:
            if cursor.peek() == "&":
                parts.append(read_entity(cursor))
                continue
            amp = source.find("&", cursor.offset, run_end)
            stop = run_end if amp == -1 else amp
            parts.append(cursor.advance(stop - cursor.offset))

        self._tokens.append(
            Token(TokenType.TEXT, "".join(parts), Span(start, cursor.position))
        )

    def _scan_tag(self) -> None:
        """Scan ``<name>`` or ``</name>`` starting at a ``<``."""
        cursor = self._cursor
        start = cursor.position
        cursor.advance()

        token_type = TokenType.OPEN_TAG
        if cursor.peek() == "/":
            cursor.advance()
            token_type = TokenType.CLOSE_TAG

        name_start = cursor.offset
        while cursor.peek() in TAG_NAME_CHARS:
            cursor.advance()
        name = cursor.source[name_start:cursor.offset]

        char = cursor.peek()
        if not name:
            raise _malformed(cursor.position, EXPECTED_TAG_NAME, char)
        if char != ">":
            raise _malformed(cursor.position, EXPECTED_TAG_END, char)
        cursor.advance()

        self._tokens.append(Token(token_type, name, Span(start, cursor.position)))


def tokenize(text: str, correlation_id: Optional[str] = None) -> List[Token]:
    """Tokenize ``text`` and return the token list.

    Raises:
        MarkupParseError: If a tag is lexically malformed
    """
    return MarkupTokenizer(correlation_id).tokenize(text).tokens
