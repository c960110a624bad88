"""ansi-markup.

Parses a small tag markup for terminal colors and styles into a validated,
immutable tree, or reports a single positioned error, and renders trees as
ANSI escape sequences.

Progressive API Disclosure:
- Level 1: Simple functions - parse(), parse_document(), parse_file()
- Level 2: Configured parser - MarkupParser class with ParserConfig
- Level 3: Components - MarkupTokenizer, TreeBuilder, AnsiRenderer
"""

__version__ = "0.1.0"
__author__ = "ansi-markup developers"

from .api import MarkupParser, ParseResult, parse, parse_document, parse_file
from .render import AnsiRenderer, render_markup
from .shared import (
    ErrorKind,
    MarkupParseError,
    ParseError,
    ParserConfig,
    Position,
    Span,
    format_error,
)
from .tree import Document, Element, Text, to_markup

__all__ = [
    # Version and metadata
    "__author__",
    "__version__",

    # Level 1: Simple parsing functions
    "parse",
    "parse_document",
    "parse_file",
    "render_markup",

    # Level 2: Configured parser
    "MarkupParser",
    "ParserConfig",

    # Results, trees and errors
    "ParseResult",
    "Document",
    "Element",
    "Text",
    "Position",
    "Span",
    "ErrorKind",
    "ParseError",
    "MarkupParseError",
    "format_error",
    "to_markup",

    # Rendering
    "AnsiRenderer",
]
