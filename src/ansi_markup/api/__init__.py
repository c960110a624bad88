"""Public parsing API."""

from .parser import MarkupParser, ParseResult, parse, parse_document, parse_file

__all__ = [
    "MarkupParser",
    "ParseResult",
    "parse",
    "parse_document",
    "parse_file",
]
