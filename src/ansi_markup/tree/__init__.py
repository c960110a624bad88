"""Tree building engine for markup parsing.

Key Components:
    TreeBuilder: Stack-based nesting validator producing a Document
    Document: Immutable ordered sequence of top-level nodes
    Element: Styled element with a registered tag name and child nodes
    Text: Decoded text node
    OutputFormatter: Serializes documents to markup, text, dict or JSON
"""

from .builder import (
    Document,
    Element,
    Node,
    Text,
    TreeBuilder,
    build,
)
from .formatter import (
    OutputFormat,
    OutputFormatter,
    element,
    to_dict,
    to_json,
    to_markup,
    to_plain_text,
)

__all__ = [
    "Document",
    "Element",
    "Node",
    "Text",
    "TreeBuilder",
    "build",
    "OutputFormat",
    "OutputFormatter",
    "element",
    "to_dict",
    "to_json",
    "to_markup",
    "to_plain_text",
]
